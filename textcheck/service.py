"""
Spell Checking Service
======================
Unified interface for spelling, grammar, unified checks, autocorrection
and the learned-word dictionary, layered over a LinguisticEngine.

Every checking call is synchronous and independent. Calls that scope an
ignore list open their own spell-document session and always close it
before returning. Empty text short-circuits without touching the engine.

Usage:
    service = SpellCheckingService()
    service.check_spelling("Helllo, how's goign")          # [(0, 6), (14, 5)]
    service.check_spelling_with_guess("Helllo, how's goign", ["helllo"])
"""

from typing import Any, Dict, Iterable, Iterator, List, Optional

from .base import GrammarMatch, GuessedMatch, Range, UnifiedMatch
from .config import TextCheckConfig, get_config
from .engine.base import LanguageIdentifier, LinguisticEngine
from .errors import NoLanguageDetected
from .language import resolve_language_tag
from .logging_utils import get_logger
from .scanner import RangeScanner
from .session import normalize_ignore_words, spell_document

__version__ = "1.0.0"

logger = get_logger('textcheck.service')


class SpellCheckingService:
    """
    Checking orchestrator.

    Args:
        engine: LinguisticEngine to delegate to (default: shared EnchantEngine)
        identifier: LanguageIdentifier used by ``correct`` (default: the
            engine's identifier, or a shared LangDetectIdentifier)
        config: Configuration used to build the defaults
    """

    def __init__(
        self,
        engine: Optional[LinguisticEngine] = None,
        identifier: Optional[LanguageIdentifier] = None,
        config: Optional[TextCheckConfig] = None
    ):
        self.config = config or get_config()

        if engine is None:
            from .engine import get_default_engine
            engine = get_default_engine(self.config)
        self.engine = engine

        if identifier is None:
            identifier = getattr(engine, 'identifier', None)
        if identifier is None:
            from .engine import get_default_identifier
            identifier = get_default_identifier(self.config)
        self.identifier = identifier

        self.scanner = RangeScanner(engine)

    def count_words(self, text: str) -> int:
        if not text:
            return 0
        return self.engine.count_words(text)

    # Spelling

    def check_spelling(self, text: str, ignore_words: Iterable[str] = ()) -> List[Range]:
        """
        Find every misspelled range in ``text``.

        Args:
            text: Text to check
            ignore_words: Words to treat as correct for this call only

        Returns:
            Ranges sorted by location; empty if nothing is misspelled
        """
        if not text:
            return []

        words = normalize_ignore_words(ignore_words)
        with logger.log_operation('check_spelling', chars=len(text), ignored=len(words)):
            if not words:
                return self.scanner.spelling_ranges(text)
            with spell_document(self.engine, words) as session:
                return self.scanner.spelling_ranges(text, session)

    def iter_spelling(self, text: str, ignore_words: Iterable[str] = ()) -> Iterator[Range]:
        """
        Lazy version of check_spelling.

        The session stays open while the generator is alive and is closed
        when it is exhausted, closed early or garbage collected.
        """
        if not text:
            return

        words = normalize_ignore_words(ignore_words)
        if not words:
            yield from self.scanner.iter_spelling(text)
            return
        with spell_document(self.engine, words) as session:
            yield from self.scanner.iter_spelling(text, session)

    def check_spelling_with_guess(self, text: str,
                                  ignore_words: Iterable[str] = ()) -> List[GuessedMatch]:
        """
        Find misspelled ranges together with ranked replacement guesses.

        Returns:
            GuessedMatch entries; ``guesses`` is empty for words the engine
            has no suggestion for
        """
        if not text:
            return []

        words = normalize_ignore_words(ignore_words)
        with logger.log_operation('check_spelling_with_guess', chars=len(text), ignored=len(words)):
            with spell_document(self.engine, words) as session:
                results = []
                for found in self.scanner.iter_spelling(text, session):
                    guesses = self.engine.guesses(found, text, session) or []
                    results.append(GuessedMatch(found, list(guesses)))
                return results

    # Grammar

    def check_grammar(self, text: str, ignore_words: Iterable[str] = ()) -> List[GrammarMatch]:
        """Find grammar problems; each match carries the engine's details."""
        if not text:
            return []

        words = normalize_ignore_words(ignore_words)
        with logger.log_operation('check_grammar', chars=len(text), ignored=len(words)):
            with spell_document(self.engine, words) as session:
                return self.scanner.grammar_matches(text, session)

    # Unified

    def check(self, text: str, ignore_words: Iterable[str] = ()) -> List[UnifiedMatch]:
        """
        Run every check type in one engine call.

        Results come back in the engine's order, overlaps included.
        """
        if not text:
            return []

        words = normalize_ignore_words(ignore_words)
        with logger.log_operation('check', chars=len(text), ignored=len(words)):
            with spell_document(self.engine, words) as session:
                return list(self.engine.unified_check(text, Range(0, len(text)), session))

    # Autocorrection

    def resolve_language(self, text: str) -> str:
        """
        Pick the engine language tag to correct ``text`` under.

        Raises:
            NoLanguageDetected: if the text has no dominant language
            UnsupportedLanguage: if no engine tag matches the detected one
        """
        detected = self.identifier.dominant_language(text)
        if not detected:
            raise NoLanguageDetected(chars=len(text))
        return resolve_language_tag(detected, self.engine.supported_language_tags())

    def correct(self, text: str, ignore_words: Iterable[str] = ()) -> Optional[str]:
        """
        Request one correction for the whole text.

        Returns:
            The corrected text, or None when the engine has nothing better.
            Empty text is returned unchanged.

        Raises:
            NoLanguageDetected, UnsupportedLanguage
        """
        if not text:
            return text

        words = normalize_ignore_words(ignore_words)
        with logger.log_operation('correct', chars=len(text), ignored=len(words)):
            language = self.resolve_language(text)
            with spell_document(self.engine, words) as session:
                return self.engine.correction(Range(0, len(text)), text, language, session)

    # Vocabulary

    def learn_word(self, word: str):
        """Add ``word`` to the engine's persistent dictionary."""
        self.engine.learn_word(word)

    def unlearn_word(self, word: str):
        self.engine.unlearn_word(word)

    def has_learned_word(self, word: str) -> bool:
        return self.engine.has_learned_word(word)

    def learn_words(self, words: Iterable[str]):
        for word in words:
            self.learn_word(word)

    def unlearn_words(self, words: Iterable[str]):
        for word in words:
            self.unlearn_word(word)

    def get_status(self) -> Dict[str, Any]:
        """Availability of the engine and language identifier."""
        status = {'version': __version__}
        for name, part in (('engine', self.engine), ('identifier', self.identifier)):
            if hasattr(part, 'get_status'):
                status[name] = part.get_status()
            else:
                status[name] = {'available': True, 'type': type(part).__name__}
        return status
