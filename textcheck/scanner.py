"""
Range Scanner
=============
Enumerates every match in a text by repeatedly asking an engine for the
next single match after a moving cursor.

Spelling scans never wrap. Grammar scans let the engine wrap around once;
a wrapped match is kept only if it is new and does not overlap anything
already reported, and it always ends the scan.
"""

from typing import Callable, Iterator, List, Optional, Tuple

from .base import NOT_FOUND, GrammarMatch, Range, is_found
from .engine.base import LinguisticEngine, SessionId

# (range, details) for the first match at or after a cursor
FindNext = Callable[[int], Tuple[Range, tuple]]


def _normalize(found: Optional[Range], text: str) -> Range:
    """Coerce engine output into a Range inside ``text`` or NOT_FOUND."""
    if not is_found(found):
        return NOT_FOUND
    found = Range(*found)
    if not 0 <= found.location < len(text):
        return NOT_FOUND
    length = max(0, min(found.length, len(text) - found.location))
    return Range(found.location, length)


def scan(text: str, find_next: FindNext, wrap: bool = False) -> Iterator[Tuple[Range, tuple]]:
    """
    Lazily yield (range, details) pairs, earliest first.

    Args:
        text: Text being scanned
        find_next: Callable returning the engine's next match from a cursor
        wrap: Whether the engine may return a match before the cursor

    Yields:
        (Range, details) tuples; details is an empty tuple for spelling
    """
    if not text:
        return

    emitted: List[Range] = []
    cursor = 0
    while cursor < len(text):
        raw, details = find_next(cursor)
        found = _normalize(raw, text)
        if found is NOT_FOUND:
            break

        if found.location < cursor:
            # Only a wrapping engine may go backwards, and it does so once.
            if wrap and found not in emitted and not any(found.overlaps(r) for r in emitted):
                yield found, tuple(details or ())
            break

        emitted.append(found)
        yield found, tuple(details or ())
        # Zero-length matches still have to move the cursor.
        cursor = found.location + max(found.length, 1)


class RangeScanner:
    """Spelling and grammar scans over one engine."""

    def __init__(self, engine: LinguisticEngine):
        self.engine = engine

    def iter_spelling(self, text: str, session: Optional[SessionId] = None) -> Iterator[Range]:
        def find_next(cursor):
            return self.engine.next_spelling_match(text, cursor, session), ()

        for found, _ in scan(text, find_next, wrap=False):
            yield found

    def iter_grammar(self, text: str, session: SessionId) -> Iterator[GrammarMatch]:
        def find_next(cursor):
            return self.engine.next_grammar_match(text, cursor, session)

        for found, details in scan(text, find_next, wrap=True):
            yield GrammarMatch(found, details)

    def spelling_ranges(self, text: str, session: Optional[SessionId] = None) -> List[Range]:
        return list(self.iter_spelling(text, session))

    def grammar_matches(self, text: str, session: SessionId) -> List[GrammarMatch]:
        """All grammar matches, sorted by location (a wrapped match may come last)."""
        return sorted(self.iter_grammar(text, session), key=lambda m: m.range.location)
