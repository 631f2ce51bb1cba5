"""
LanguageTool Client
===================
Wraps language_tool_python for grammar checking and autocorrection.

Features:
- One LanguageTool instance per language, started lazily
- Optional remote server (no local Java needed)
- Rule and category filtering from configuration
- Auto-correction support

Requires: pip install language-tool-python
Note: Local mode needs Java and downloads the LanguageTool server on first use
"""

from typing import Any, Callable, Dict, Iterable, List, Optional
from dataclasses import dataclass, field
import threading

from ..base import IntegrationBase, Range
from ..logging_utils import get_logger

logger = get_logger('textcheck.languagetool')

# LanguageTool's issue type for dictionary misses
MISSPELLING = 'misspelling'


@dataclass
class LanguageToolIssue:
    """One problem reported by LanguageTool."""
    message: str
    offset: int
    length: int
    replacements: List[str] = field(default_factory=list)
    rule_id: str = ""
    category: str = ""
    issue_type: str = ""

    @property
    def range(self) -> Range:
        return Range(self.offset, self.length)

    @property
    def is_spelling(self) -> bool:
        return self.issue_type == MISSPELLING


def to_languagetool_code(tag: str) -> str:
    """Enchant-style tag (en_US) to LanguageTool code (en-US)."""
    return tag.replace('_', '-')


class LanguageToolClient(IntegrationBase):
    """
    LanguageTool integration for grammar checking.

    Runs a local Java server unless ``remote_server`` is given.
    """

    INTEGRATION_NAME = "LanguageTool"
    INTEGRATION_VERSION = "1.0.0"

    def __init__(
        self,
        remote_server: Optional[str] = None,
        disabled_rules: Iterable[str] = (),
        disabled_categories: Iterable[str] = ()
    ):
        """
        Initialize LanguageTool client.

        Args:
            remote_server: URL of a LanguageTool server, or None for local
            disabled_rules: Rule ids to switch off
            disabled_categories: Category ids to switch off
        """
        super().__init__()
        self.remote_server = remote_server
        self.disabled_rules = set(disabled_rules)
        self.disabled_categories = set(disabled_categories)

        self._lt_module = None
        self._tools: Dict[str, Any] = {}
        self._failed: Dict[str, str] = {}
        self._lock = threading.Lock()
        self._init_module()

    def _init_module(self):
        try:
            import language_tool_python
            self._lt_module = language_tool_python
            self._available = True

        except ImportError as e:
            self._error = f"language-tool-python not installed: {e}"
            self._available = False

    def _get_tool(self, language: str):
        """LanguageTool instance for ``language``, or None if it can't start."""
        code = to_languagetool_code(language)
        with self._lock:
            if code in self._tools:
                return self._tools[code]
            if code in self._failed or not self.is_available:
                return None

            try:
                tool = self._lt_module.LanguageTool(code, remote_server=self.remote_server)
            except Exception as e:
                # Unsupported language, missing Java, server unreachable
                self._failed[code] = str(e)
                self._error = f"LanguageTool failed for {code}: {e}"
                logger.warning(self._error, language=code)
                return None

            tool.disabled_rules.update(self.disabled_rules)
            tool.disabled_categories.update(self.disabled_categories)
            self._tools[code] = tool
            return tool

    def get_status(self) -> Dict[str, Any]:
        """Get detailed status of the LanguageTool integration."""
        return {
            'available': self.is_available,
            'error': self._error,
            'remote_server': self.remote_server,
            'languages_started': sorted(self._tools),
            'languages_failed': dict(self._failed),
        }

    def supports(self, language: str) -> bool:
        return self._get_tool(language) is not None

    def _run_check(self, tool, text: str, language: str) -> Optional[list]:
        """Raw LanguageTool matches, or None if the server call fails."""
        try:
            return tool.check(text)
        except Exception as e:
            self._error = f"Check failed: {e}"
            logger.warning(self._error, language=to_languagetool_code(language))
            return None

    def check(self, text: str, language: str) -> List[LanguageToolIssue]:
        """
        Check text for grammar (and spelling) issues.

        Args:
            text: Text to check
            language: Language tag, enchant or LanguageTool style

        Returns:
            List of LanguageToolIssue objects, ordered by offset
        """
        tool = self._get_tool(language)
        if tool is None or not text:
            return []

        matches = self._run_check(tool, text, language)
        if matches is None:
            return []

        issues = []
        for match in matches:
            issues.append(LanguageToolIssue(
                message=match.message,
                offset=match.offset,
                length=match.errorLength,
                replacements=list(match.replacements or []),
                rule_id=match.ruleId,
                category=getattr(match, 'category', '') or '',
                issue_type=getattr(match, 'ruleIssueType', '') or '',
            ))
        issues.sort(key=lambda i: (i.offset, i.length))
        return issues

    def correct(self, text: str, language: str,
                keep: Optional[Callable[[str], bool]] = None) -> Optional[str]:
        """
        Auto-correct text using LanguageTool's first suggestions.

        Args:
            text: Text to correct
            language: Language tag
            keep: Predicate on flagged text; matches it accepts are left alone

        Returns:
            Corrected text, or None if LanguageTool is unavailable for
            ``language`` or the check fails
        """
        tool = self._get_tool(language)
        if tool is None:
            return None

        found = self._run_check(tool, text, language)
        if found is None:
            return None

        matches = [
            m for m in found
            if keep is None or not keep(text[m.offset:m.offset + m.errorLength])
        ]
        return self._lt_module.utils.correct(text, matches)

    def close(self):
        """Shut down every LanguageTool server started by this client."""
        with self._lock:
            tools, self._tools = self._tools, {}
        for code, tool in tools.items():
            try:
                tool.close()
            except Exception as e:
                logger.warning(f"Failed to close LanguageTool for {code}: {e}")
