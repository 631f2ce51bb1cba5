"""
Linguistic Engines for textcheck
================================
Backends behind the checking orchestrator.

Features:
- PyEnchant: dictionaries, sessions, learned words
- LanguageTool: grammar checking and autocorrection
- langdetect: dominant-language identification

Requires: pip install pyenchant language-tool-python langdetect
"""

import threading
from typing import Any, Dict, Optional

from ..config import TextCheckConfig, get_config

__version__ = "1.0.0"

# Lazy shared instances
_engine = None
_identifier = None
_lock = threading.Lock()


def get_default_identifier(config: Optional[TextCheckConfig] = None):
    """Get the shared LangDetectIdentifier instance (lazy loaded)."""
    global _identifier
    with _lock:
        if _identifier is None:
            from .langdetect import LangDetectIdentifier
            config = config or get_config()
            _identifier = LangDetectIdentifier(
                min_probability=config.language_id.min_probability,
                seed=config.language_id.seed,
            )
        return _identifier


def get_default_engine(config: Optional[TextCheckConfig] = None):
    """Get the shared EnchantEngine instance (lazy loaded)."""
    global _engine
    config = config or get_config()
    identifier = None
    if config.spelling.automatically_identifies_languages:
        identifier = get_default_identifier(config)

    with _lock:
        if _engine is None:
            from .enchant import EnchantEngine
            grammar = None
            if config.grammar.enabled:
                from .languagetool import LanguageToolClient
                grammar = LanguageToolClient(
                    remote_server=config.grammar.remote_server,
                    disabled_rules=config.grammar.disabled_rules,
                    disabled_categories=config.grammar.disabled_categories,
                )
            _engine = EnchantEngine(
                language=config.spelling.language,
                personal_word_list=config.spelling.personal_word_list,
                automatically_identifies_languages=config.spelling.automatically_identifies_languages,
                identifier=identifier,
                grammar=grammar,
            )
        return _engine


def reset_defaults():
    """Drop the shared instances, shutting down any LanguageTool servers."""
    global _engine, _identifier
    with _lock:
        engine, _engine, _identifier = _engine, None, None
    if engine is not None:
        engine.close()


def get_status() -> Dict[str, Any]:
    """Get engine integration status."""
    status: Dict[str, Any] = {'available': False}

    try:
        engine = get_default_engine()
        status['enchant'] = engine.get_status()
        status['available'] = engine.is_available
    except Exception as e:
        status['enchant'] = {'available': False, 'error': str(e)}

    try:
        status['langdetect'] = get_default_identifier().get_status()
    except Exception as e:
        status['langdetect'] = {'available': False, 'error': str(e)}

    return status
