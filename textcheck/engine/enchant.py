"""
Enchant Linguistic Engine
=========================
LinguisticEngine implementation on top of PyEnchant, with grammar and
autocorrection delegated to LanguageTool.

Features:
- Hunspell/Aspell/Nuspell dictionaries through Enchant
- Spell-document sessions with transient ignore lists
- Persistent learned-word list (plain text, one word per line)
- Automatic language identification (optional)
- Unified checks: orthography, spelling, grammar and dates

Requires: pip install pyenchant
Note: macOS may need: brew install enchant
"""

from collections import OrderedDict
from dataclasses import dataclass, field
from itertools import count
from pathlib import Path
from typing import Any, Dict, FrozenSet, List, Optional, Sequence, Tuple
import threading

from ..base import (
    NOT_FOUND,
    CheckingType,
    GrammarDetail,
    IntegrationBase,
    Orthography,
    Range,
    UnifiedMatch,
)
from ..errors import EngineUnavailableError, SessionError
from ..language import match_language_tag
from ..logging_utils import get_logger
from .base import LanguageIdentifier, LinguisticEngine, SessionId
from .languagetool import LanguageToolClient
from .patterns import dominant_script, find_dates

logger = get_logger('textcheck.enchant')

GrammarEntry = Tuple[Range, List[GrammarDetail]]

LANGUAGE_CACHE_SIZE = 128


@dataclass
class SpellDocument:
    """Engine-side state owned by one session."""
    ignored: FrozenSet[str] = frozenset()
    languages: Dict[str, str] = field(default_factory=dict)
    grammar: Dict[Tuple[str, str], List[GrammarEntry]] = field(default_factory=dict)


def _has_letters(word: str) -> bool:
    return any(ch.isalpha() for ch in word)


class EnchantEngine(IntegrationBase, LinguisticEngine):
    """
    PyEnchant-backed linguistic engine.

    Offsets are ``str`` indices, as produced by Enchant's tokenizers.
    """

    INTEGRATION_NAME = "PyEnchant"
    INTEGRATION_VERSION = "1.0.0"

    def __init__(
        self,
        language: str = 'en_US',
        personal_word_list: Optional[str] = None,
        automatically_identifies_languages: bool = True,
        identifier: Optional[LanguageIdentifier] = None,
        grammar: Optional[LanguageToolClient] = None
    ):
        """
        Initialize the engine.

        Args:
            language: Default dictionary tag (default: en_US)
            personal_word_list: File holding learned words; None keeps them
                in memory only
            automatically_identifies_languages: Pick the dictionary per text
                with ``identifier`` instead of always using ``language``
            identifier: LanguageIdentifier for automatic identification
            grammar: LanguageToolClient for grammar checks and corrections;
                None disables grammar
        """
        super().__init__()
        self.language = language
        self.personal_word_list = personal_word_list
        self.automatically_identifies_languages = automatically_identifies_languages
        self.identifier = identifier
        self.grammar = grammar

        self._enchant = None
        self._get_tokenizer = None
        self._learned = None
        self._dicts: Dict[str, Any] = {}
        self._sessions: Dict[SessionId, SpellDocument] = {}
        self._session_ids = count(1)
        self._language_cache: 'OrderedDict[str, str]' = OrderedDict()
        self._grammar_warned = False
        self._lock = threading.RLock()

        self._initialize()

    def _initialize(self):
        """Initialize PyEnchant and load the learned-word list."""
        try:
            import enchant
            from enchant.pypwl import PyPWL
            from enchant.tokenize import get_tokenizer
            self._enchant = enchant
            self._get_tokenizer = get_tokenizer

            if self.personal_word_list:
                path = Path(self.personal_word_list).expanduser()
                path.parent.mkdir(parents=True, exist_ok=True)
                path.touch(exist_ok=True)
                self._learned = PyPWL(str(path))
            else:
                self._learned = PyPWL()

            self._available = True

        except ImportError as e:
            self._error = f"pyenchant not installed: {e}"
            self._available = False

        except OSError as e:
            self._error = f"Could not open word list {self.personal_word_list}: {e}"
            self._available = False

    def _require(self):
        if not self.is_available:
            raise EngineUnavailableError(self._error or "PyEnchant unavailable",
                                         engine=self.INTEGRATION_NAME)

    def get_status(self) -> Dict[str, Any]:
        """Get detailed status of the PyEnchant integration."""
        status = {
            'available': self.is_available,
            'error': self._error,
            'language': self.language,
            'automatically_identifies_languages': self.automatically_identifies_languages,
            'personal_word_list': self.personal_word_list,
            'open_sessions': len(self._sessions),
            'grammar': self.grammar.get_status() if self.grammar else {'available': False},
        }

        if self.is_available:
            status['available_languages'] = list(self.supported_language_tags())

        return status

    # Dictionaries and language

    def _get_dict(self, tag: str):
        with self._lock:
            dictionary = self._dicts.get(tag)
            if dictionary is None:
                try:
                    dictionary = self._enchant.Dict(tag)
                except self._enchant.errors.DictNotFoundError as e:
                    raise EngineUnavailableError(
                        f"No dictionary for '{tag}': {e}",
                        engine=self.INTEGRATION_NAME, language=tag
                    ) from e
                self._dicts[tag] = dictionary
            return dictionary

    def _tokenize(self, text: str, tag: str):
        try:
            tokenizer = self._get_tokenizer(tag)
        except self._enchant.errors.TokenizerNotFoundError:
            # Enchant only ships an English tokenizer; it splits on
            # Unicode word characters, which suits most alphabets.
            tokenizer = self._get_tokenizer('en_US')
        return tokenizer(text)

    def _identify(self, text: str) -> Optional[str]:
        if not self.automatically_identifies_languages or self.identifier is None:
            return None
        detected = self.identifier.dominant_language(text)
        if not detected:
            return None
        return match_language_tag(detected, self.supported_language_tags())

    def _language_for(self, text: str, doc: SpellDocument) -> str:
        """Dictionary tag to check ``text`` with."""
        if not self.automatically_identifies_languages or self.identifier is None:
            return self.language

        if text in doc.languages:
            return doc.languages[text]

        with self._lock:
            tag = self._language_cache.get(text)
            if tag is not None:
                self._language_cache.move_to_end(text)

        if tag is None:
            tag = self._identify(text) or self.language
            with self._lock:
                self._language_cache[text] = tag
                while len(self._language_cache) > LANGUAGE_CACHE_SIZE:
                    self._language_cache.popitem(last=False)

        doc.languages[text] = tag
        return tag

    def supported_language_tags(self) -> Sequence[str]:
        self._require()
        return self._enchant.list_languages()

    def count_words(self, text: str) -> int:
        self._require()
        return sum(1 for _ in self._tokenize(text, self.language))

    # Sessions

    def open_session(self) -> SessionId:
        self._require()
        with self._lock:
            session = next(self._session_ids)
            self._sessions[session] = SpellDocument()
        return session

    def close_session(self, session: SessionId) -> None:
        with self._lock:
            if self._sessions.pop(session, None) is None:
                raise SessionError(f"Unknown spell document {session}", session=session)

    def set_ignored_words(self, session: SessionId, words: FrozenSet[str]) -> None:
        doc = self._document(session)
        doc.ignored = frozenset(w.casefold() for w in words)
        doc.grammar.clear()

    def _document(self, session: Optional[SessionId]) -> SpellDocument:
        if session is None:
            return SpellDocument()
        with self._lock:
            doc = self._sessions.get(session)
        if doc is None:
            raise SessionError(f"Unknown spell document {session}", session=session)
        return doc

    # Spelling

    def _is_accepted(self, word: str, doc: SpellDocument) -> bool:
        """Ignored or learned words are never reported."""
        return word.casefold() in doc.ignored or self._is_learned(word)

    def _is_misspelled(self, word: str, dictionary, doc: SpellDocument) -> bool:
        if not _has_letters(word) or self._is_accepted(word, doc):
            return False
        return not dictionary.check(word)

    def next_spelling_match(self, text: str, from_offset: int,
                            session: Optional[SessionId] = None) -> Range:
        self._require()
        doc = self._document(session)
        tag = self._language_for(text, doc)
        dictionary = self._get_dict(tag)

        tokens = self._tokenize(text, tag)
        if from_offset:
            # Scans resume at the end of the previous match, never mid-word
            tokens.set_offset(from_offset)
        for word, pos in tokens:
            if self._is_misspelled(word, dictionary, doc):
                return Range(pos, len(word))
        return NOT_FOUND

    def guesses(self, range_: Range, text: str, session: SessionId) -> List[str]:
        self._require()
        word = range_.slice(text)
        if not word.strip():
            return []
        doc = self._document(session)
        dictionary = self._get_dict(self._language_for(text, doc))

        seen = set()
        ranked = []
        for guess in dictionary.suggest(word):
            if guess not in seen:
                seen.add(guess)
                ranked.append(guess)
        return ranked

    # Grammar

    def _grammar_entries(self, text: str, doc: SpellDocument) -> List[GrammarEntry]:
        """Grammar ranges for ``text``, grouped by range and cached per session."""
        if self.grammar is None or not self.grammar.is_available:
            if not self._grammar_warned:
                self._grammar_warned = True
                reason = self.grammar.error if self.grammar else "grammar checking disabled"
                logger.warning(f"Grammar checks find nothing: {reason}")
            return []

        tag = self._language_for(text, doc)
        key = (text, tag)
        if key in doc.grammar:
            return doc.grammar[key]

        grouped: Dict[Range, List[GrammarDetail]] = {}
        for issue in self.grammar.check(text, tag):
            if issue.is_spelling:
                continue
            if not issue.range.is_valid_for(text):
                continue
            if issue.length and self._is_accepted(issue.range.slice(text), doc):
                continue
            grouped.setdefault(issue.range, []).append(GrammarDetail(
                message=issue.message,
                rule_id=issue.rule_id,
                category=issue.category,
                replacements=tuple(issue.replacements),
            ))

        entries = sorted(grouped.items(), key=lambda item: (item[0].location, item[0].length))
        doc.grammar[key] = entries
        return entries

    def next_grammar_match(self, text: str, from_offset: int,
                           session: SessionId) -> Tuple[Range, List[GrammarDetail]]:
        self._require()
        entries = self._grammar_entries(text, self._document(session))
        for found, details in entries:
            if found.location >= from_offset:
                return found, details
        if entries:
            # Wrap around once to the first match in the text
            return entries[0]
        return NOT_FOUND, []

    # Correction

    def correction(self, range_: Range, text: str, language: str,
                   session: SessionId) -> Optional[str]:
        self._require()
        doc = self._document(session)
        original = range_.slice(text)
        if not original.strip():
            return None

        corrected = None
        if self.grammar is not None and self.grammar.is_available:
            corrected = self.grammar.correct(
                original, language, keep=lambda flagged: self._is_accepted(flagged, doc)
            )
        if corrected is None:
            corrected = self._correct_with_guesses(original, language, doc)

        if corrected == original:
            return None
        return corrected

    def _correct_with_guesses(self, text: str, language: str, doc: SpellDocument) -> str:
        """Replace each misspelled word with its top guess."""
        dictionary = self._get_dict(language)
        pieces = []
        last = 0
        for word, pos in self._tokenize(text, language):
            if not self._is_misspelled(word, dictionary, doc):
                continue
            suggestions = dictionary.suggest(word)
            if suggestions:
                pieces.append(text[last:pos])
                pieces.append(suggestions[0])
                last = pos + len(word)
        pieces.append(text[last:])
        return ''.join(pieces)

    # Unified checking

    def unified_check(self, text: str, full_range: Range,
                      session: SessionId) -> List[UnifiedMatch]:
        self._require()
        doc = self._document(session)
        segment = full_range.slice(text)
        if not segment:
            return []
        base = full_range.location
        tag = self._language_for(segment, doc)
        dictionary = self._get_dict(tag)

        found = []
        for word, pos in self._tokenize(segment, tag):
            if self._is_misspelled(word, dictionary, doc):
                found.append((pos, 0, UnifiedMatch(
                    CheckingType.SPELLING, Range(base + pos, len(word))
                )))

        for rng, details in self._grammar_entries(segment, doc):
            found.append((rng.location, 1, UnifiedMatch(
                CheckingType.GRAMMAR, Range(base + rng.location, rng.length), tuple(details)
            )))

        for rng, value in find_dates(segment):
            found.append((rng.location, 2, UnifiedMatch(
                CheckingType.DATE, Range(base + rng.location, rng.length), value
            )))

        found.sort(key=lambda item: (item[0], item[1]))

        orthography = UnifiedMatch(
            CheckingType.ORTHOGRAPHY, full_range,
            Orthography(dominant_script=dominant_script(segment), language=tag)
        )
        return [orthography] + [match for _, _, match in found]

    # Learned words

    def _is_learned(self, word: str) -> bool:
        with self._lock:
            return self._learned.check(word) or (
                word != word.lower() and self._learned.check(word.lower())
            )

    def learn_word(self, word: str) -> None:
        self._require()
        word = word.strip()
        if not word:
            return
        with self._lock:
            if not self._learned.check(word):
                self._learned.add(word)
        logger.debug("Learned word", word=word)

    def unlearn_word(self, word: str) -> None:
        self._require()
        word = word.strip()
        with self._lock:
            if word and self._learned.check(word):
                self._learned.remove(word)
        logger.debug("Unlearned word", word=word)

    def has_learned_word(self, word: str) -> bool:
        self._require()
        word = word.strip()
        if not word:
            return False
        with self._lock:
            return bool(self._learned.check(word))

    def close(self):
        """Release LanguageTool servers started on behalf of this engine."""
        if self.grammar is not None:
            self.grammar.close()
