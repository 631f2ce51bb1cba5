"""
Spell-document sessions.

A session scopes an ignore list (and any engine-side caching) to a single
top-level call. ``spell_document`` opens one, installs the ignore words and
closes it on every exit path, including generator close and exceptions.
"""

from contextlib import contextmanager
from typing import Iterable, Iterator

from .engine.base import LinguisticEngine, SessionId
from .errors import SessionError, TextCheckError
from .logging_utils import get_logger

logger = get_logger('textcheck.session')


def normalize_ignore_words(words: Iterable[str]) -> frozenset:
    """Drop empty entries; a plain string counts as a single word."""
    if isinstance(words, str):
        words = [words]
    return frozenset(w for w in (words or ()) if w)


@contextmanager
def spell_document(engine: LinguisticEngine,
                   ignore_words: Iterable[str] = ()) -> Iterator[SessionId]:
    """
    Open a session on ``engine`` for the duration of the ``with`` block.

    Args:
        engine: LinguisticEngine to allocate the session from
        ignore_words: Words to accept as correctly spelled inside the session

    Yields:
        The engine's session id

    Raises:
        SessionError: if the session cannot be opened or closed
    """
    words = normalize_ignore_words(ignore_words)

    try:
        session = engine.open_session()
    except TextCheckError:
        raise
    except Exception as e:
        raise SessionError(f"Could not open spell document: {e}") from e

    logger.debug("Spell document opened", session=session, ignored=len(words))
    try:
        if words:
            engine.set_ignored_words(session, words)
        yield session
    finally:
        try:
            engine.close_session(session)
        except TextCheckError:
            raise
        except Exception as e:
            raise SessionError(f"Could not close spell document {session}: {e}",
                               session=session) from e
        logger.debug("Spell document closed", session=session)
