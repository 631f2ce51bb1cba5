"""
Language tag resolution.

Maps a detected language tag onto one of the tags an engine supports:
an exact match first, then the first supported tag containing the detected
tag case-insensitively (``en`` -> ``en_US``).
"""

from typing import Optional, Sequence

from .errors import UnsupportedLanguage


def match_language_tag(detected: str, supported: Sequence[str]) -> Optional[str]:
    """Best supported tag for ``detected``, or None."""
    if not detected:
        return None

    for tag in supported:
        if tag == detected:
            return tag

    needle = detected.casefold()
    for tag in supported:
        if needle in tag.casefold():
            return tag

    return None


def resolve_language_tag(detected: str, supported: Sequence[str]) -> str:
    """Like match_language_tag but raises UnsupportedLanguage on no match."""
    supported = list(supported)
    tag = match_language_tag(detected, supported)
    if tag is None:
        raise UnsupportedLanguage(detected, supported)
    return tag
