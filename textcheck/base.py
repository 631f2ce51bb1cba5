"""
Text Check Base Types
=====================
Ranges, result types and the base class shared by every engine integration.

Ranges are (location, length) pairs over the characters of a Python ``str``
(code points), the same unit every engine in this package reports in.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, NamedTuple, Optional, Tuple

__version__ = "1.0.0"


class Range(NamedTuple):
    """A (location, length) span over a text."""
    location: int
    length: int

    @property
    def end(self) -> int:
        return self.location + self.length

    def is_valid_for(self, text: str) -> bool:
        """True when the range lies inside ``text``."""
        return (
            0 <= self.location < len(text)
            and self.length >= 0
            and self.end <= len(text)
        )

    def overlaps(self, other: 'Range') -> bool:
        if self.length == 0 or other.length == 0:
            return self.location == other.location
        return self.location < other.end and other.location < self.end

    def slice(self, text: str) -> str:
        return text[self.location:self.end]

    def to_dict(self) -> Dict[str, int]:
        return {'location': self.location, 'length': self.length}


# Sentinel returned by engines when a scan reaches the end without a match.
NOT_FOUND = Range(-1, 0)


def is_found(range_: Optional[Range]) -> bool:
    """Check whether an engine result is a real match rather than NOT_FOUND."""
    return range_ is not None and range_.location != NOT_FOUND.location


class CheckingType(Enum):
    """Kinds of result a unified check can report."""
    ORTHOGRAPHY = "orthography"
    SPELLING = "spelling"
    GRAMMAR = "grammar"
    DATE = "date"


@dataclass(frozen=True)
class GrammarDetail:
    """One grammar problem reported inside a flagged range."""
    message: str
    rule_id: str = ""
    category: str = ""
    replacements: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            'message': self.message,
            'rule_id': self.rule_id,
            'category': self.category,
            'replacements': list(self.replacements),
        }


class GrammarMatch(NamedTuple):
    """A grammar range plus whatever details the engine attached to it."""
    range: Range
    details: Tuple[GrammarDetail, ...] = ()


class GuessedMatch(NamedTuple):
    """A misspelled range plus ranked replacement guesses (possibly none)."""
    range: Range
    guesses: List[str]


@dataclass(frozen=True)
class Orthography:
    """Dominant script (ISO 15924) and language of a checked text."""
    dominant_script: str
    language: Optional[str] = None


@dataclass
class UnifiedMatch:
    """
    One result from a unified check.

    ``payload`` depends on ``kind``: an Orthography for ORTHOGRAPHY, a tuple of
    GrammarDetail for GRAMMAR, a ``datetime.date`` for DATE and None for
    SPELLING.
    """
    kind: CheckingType
    range: Range
    payload: Any = None

    def to_dict(self) -> Dict[str, Any]:
        payload = self.payload
        if isinstance(payload, Orthography):
            payload = {
                'dominant_script': payload.dominant_script,
                'language': payload.language,
            }
        elif isinstance(payload, (list, tuple)):
            payload = [p.to_dict() if hasattr(p, 'to_dict') else p for p in payload]
        elif hasattr(payload, 'isoformat'):
            payload = payload.isoformat()
        return {
            'kind': self.kind.value,
            'range': self.range.to_dict(),
            'payload': payload,
        }


class IntegrationBase(ABC):
    """
    Abstract base class for wrappers around external linguistic libraries.

    Subclasses record whether their backend could be loaded instead of
    failing at import time.
    """

    INTEGRATION_NAME: str = "Integration"
    INTEGRATION_VERSION: str = "1.0.0"

    def __init__(self):
        self._available = False
        self._error: Optional[str] = None

    @property
    def is_available(self) -> bool:
        """Check if the integration is available and working."""
        return self._available

    @property
    def error(self) -> Optional[str]:
        """Get initialization error if any."""
        return self._error

    @abstractmethod
    def get_status(self) -> Dict[str, Any]:
        """Get detailed status of the integration."""
        pass
