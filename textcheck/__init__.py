"""
textcheck
=========
Version: 1.0.0

Spelling, grammar and unified text checking with correction suggestions
and a persistent learned-word dictionary, orchestrated over pluggable
linguistic engines:
- PyEnchant: dictionaries, guesses, learned words
- LanguageTool: grammar checking and autocorrection
- langdetect: dominant-language identification

Uses lazy loading - engine backends only import when accessed.
"""

__version__ = "1.0.0"

from .base import (  # noqa: E402
    NOT_FOUND,
    CheckingType,
    GrammarDetail,
    GrammarMatch,
    GuessedMatch,
    Orthography,
    Range,
    UnifiedMatch,
)
from .errors import (  # noqa: E402
    ConfigError,
    EngineUnavailableError,
    NoLanguageDetected,
    SessionError,
    TextCheckError,
    UnsupportedLanguage,
)
from .service import SpellCheckingService  # noqa: E402

__all__ = [
    'NOT_FOUND',
    'CheckingType',
    'ConfigError',
    'EngineUnavailableError',
    'GrammarDetail',
    'GrammarMatch',
    'GuessedMatch',
    'NoLanguageDetected',
    'Orthography',
    'Range',
    'SessionError',
    'SpellCheckingService',
    'TextCheckError',
    'UnifiedMatch',
    'UnsupportedLanguage',
    'get_status',
]


def get_status():
    """
    Get status of the engine integrations.

    Returns dict with availability and error info for each backend.
    """
    from . import engine
    return {
        'version': __version__,
        **engine.get_status(),
    }
