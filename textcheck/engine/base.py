"""
Engine Capability Interfaces
============================
The contracts the orchestrator depends on. Anything implementing them can
stand in for the bundled pyenchant / LanguageTool / langdetect backends.

Engines report one match per call; the orchestrator drives the loop.
"""

from abc import ABC, abstractmethod
from typing import FrozenSet, List, Optional, Sequence, Tuple

from ..base import GrammarDetail, Range, UnifiedMatch

SessionId = int


class LinguisticEngine(ABC):
    """Dictionary, grammar and vocabulary backend."""

    @abstractmethod
    def count_words(self, text: str) -> int:
        pass

    # Sessions ("spell documents")

    @abstractmethod
    def open_session(self) -> SessionId:
        """Allocate a fresh session id. Ids are never reused."""

    @abstractmethod
    def close_session(self, session: SessionId) -> None:
        pass

    @abstractmethod
    def set_ignored_words(self, session: SessionId, words: FrozenSet[str]) -> None:
        """Install the transient ignore list for ``session``."""

    # Single-match queries

    @abstractmethod
    def next_spelling_match(self, text: str, from_offset: int,
                            session: Optional[SessionId] = None) -> Range:
        """
        First misspelled range starting at or after ``from_offset``.

        Never wraps. Returns NOT_FOUND when the rest of the text is clean.
        """

    @abstractmethod
    def next_grammar_match(self, text: str, from_offset: int,
                           session: SessionId) -> Tuple[Range, List[GrammarDetail]]:
        """
        First grammar range starting at or after ``from_offset``.

        Wraps once: with nothing left before the end of the text, the first
        match before ``from_offset`` is returned instead. Returns
        ``(NOT_FOUND, [])`` when the text has no grammar problems.
        """

    @abstractmethod
    def guesses(self, range_: Range, text: str, session: SessionId) -> List[str]:
        """Ranked replacements for the word at ``range_``; may be empty."""

    @abstractmethod
    def correction(self, range_: Range, text: str, language: str,
                   session: SessionId) -> Optional[str]:
        """Corrected text for ``range_``, or None when nothing is better."""

    @abstractmethod
    def unified_check(self, text: str, full_range: Range,
                      session: SessionId) -> List[UnifiedMatch]:
        pass

    # Persistent vocabulary

    @abstractmethod
    def learn_word(self, word: str) -> None:
        pass

    @abstractmethod
    def unlearn_word(self, word: str) -> None:
        pass

    @abstractmethod
    def has_learned_word(self, word: str) -> bool:
        pass

    @abstractmethod
    def supported_language_tags(self) -> Sequence[str]:
        pass


class LanguageIdentifier(ABC):
    """Natural-language identification."""

    @abstractmethod
    def dominant_language(self, text: str) -> Optional[str]:
        """Language tag of the dominant language, or None if there is none."""
