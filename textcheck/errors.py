"""
Text Check Errors
=================
Exceptions raised by the checking orchestrator and its engines.

Finding nothing is never an error: scans, guesses and corrections report
absence with empty lists or None.
"""

from typing import Any, Dict, Iterable, Optional


class TextCheckError(Exception):
    """Base exception for textcheck."""

    def __init__(self, message: str, code: str = "UNKNOWN_ERROR",
                 details: Optional[Dict] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a serialisable error dict."""
        return {
            'success': False,
            'error': {
                'code': self.code,
                'message': self.message,
                'details': self.details
            }
        }


class NoLanguageDetected(TextCheckError):
    """Language identification found no dominant language in the text."""
    def __init__(self, message: str = "No dominant language detected", **kwargs):
        super().__init__(message, code="NO_LANGUAGE_DETECTED", details=kwargs)


class UnsupportedLanguage(TextCheckError):
    """The detected language matches none of the engine's language tags."""
    def __init__(self, language: str, supported: Iterable[str] = (), **kwargs):
        self.language = language
        self.supported = list(supported)
        super().__init__(
            f"Language '{language}' is not supported by the engine",
            code="UNSUPPORTED_LANGUAGE",
            details={'language': language, 'supported': self.supported, **kwargs}
        )


class SessionError(TextCheckError):
    """A spell-document session could not be opened, used or closed."""
    def __init__(self, message: str, session: Optional[int] = None, **kwargs):
        self.session = session
        super().__init__(message, code="SESSION_ERROR",
                         details={'session': session, **kwargs})


class EngineUnavailableError(TextCheckError):
    """A required linguistic backend or dictionary could not be loaded."""
    def __init__(self, message: str, engine: Optional[str] = None, **kwargs):
        super().__init__(message, code="ENGINE_UNAVAILABLE",
                         details={'engine': engine, **kwargs})


class ConfigError(TextCheckError):
    """Unknown configuration section or key."""
    def __init__(self, message: str, key: Optional[str] = None, **kwargs):
        super().__init__(message, code="CONFIG_ERROR",
                         details={'key': key, **kwargs})
