"""
Tests for SpellCheckingService
==============================
Orchestration behaviour against a deterministic in-memory engine.
"""

import pytest

from textcheck import (
    CheckingType,
    GrammarMatch,
    GuessedMatch,
    NoLanguageDetected,
    Range,
    SessionError,
    SpellCheckingService,
    UnsupportedLanguage,
)

from tests.fakes import GRAMMAR_SAMPLE, SAMPLE, FakeEngine, FakeIdentifier


class TestCheckSpelling:
    """Tests for check_spelling / iter_spelling."""

    def test_finds_every_misspelling(self, service, engine):
        assert service.check_spelling(SAMPLE) == [Range(0, 6), Range(14, 5)]

    def test_no_session_without_ignore_words(self, service, engine):
        service.check_spelling(SAMPLE)
        assert engine.opened == []

    def test_ignore_words_suppress_matches(self, service, engine):
        assert service.check_spelling(SAMPLE, ["helllo"]) == [Range(14, 5)]

    def test_ignore_words_are_case_insensitive(self, service):
        assert service.check_spelling(SAMPLE, ["HELLLO", "Goign"]) == []

    def test_ignore_words_session_is_closed(self, service, engine):
        service.check_spelling(SAMPLE, ["helllo"])
        assert len(engine.opened) == 1
        assert engine.closed == engine.opened
        assert engine.sessions == {}

    def test_single_string_counts_as_one_word(self, service):
        assert service.check_spelling(SAMPLE, "helllo") == [Range(14, 5)]

    def test_clean_text(self, service):
        assert service.check_spelling("this is a test sentence") == []

    def test_empty_text_skips_engine(self, service, engine):
        assert service.check_spelling("") == []
        assert service.check_spelling("", ["helllo"]) == []
        assert engine.calls == []

    def test_ignore_words_do_not_leak_between_calls(self, service):
        service.check_spelling(SAMPLE, ["helllo"])
        assert service.check_spelling(SAMPLE) == [Range(0, 6), Range(14, 5)]

    def test_session_closed_on_engine_error(self, service, engine):
        engine.fail_on_scan = True
        with pytest.raises(RuntimeError):
            service.check_spelling(SAMPLE, ["helllo"])
        assert engine.opened == [1]
        assert engine.closed == [1]

    def test_iter_spelling_is_lazy(self, service, engine):
        results = service.iter_spelling(SAMPLE)
        assert engine.calls == []
        assert next(results) == Range(0, 6)

    def test_iter_spelling_closes_session_early(self, service, engine):
        results = service.iter_spelling(SAMPLE, ["unrelated"])
        assert next(results) == Range(0, 6)
        assert engine.closed == []
        results.close()
        assert engine.closed == engine.opened == [1]

    def test_iter_spelling_exhausted(self, service, engine):
        assert list(service.iter_spelling(SAMPLE, ["helllo"])) == [Range(14, 5)]
        assert engine.closed == [1]


class TestCheckSpellingWithGuess:
    """Tests for check_spelling_with_guess."""

    def test_guesses_for_remaining_words(self, service):
        results = service.check_spelling_with_guess(SAMPLE, ["helllo"])
        assert results == [GuessedMatch(Range(14, 5), ["going", "goings", "coign"])]

    def test_guesses_for_all_words(self, service):
        results = service.check_spelling_with_guess(SAMPLE)
        assert [r.range for r in results] == [Range(0, 6), Range(14, 5)]
        assert results[0].guesses[0] == "hello"

    def test_word_without_guesses(self, service):
        results = service.check_spelling_with_guess("we went zzxq")
        assert results == [GuessedMatch(Range(8, 4), [])]

    def test_always_uses_a_session(self, service, engine):
        service.check_spelling_with_guess(SAMPLE)
        assert engine.opened == [1]
        assert engine.closed == [1]

    def test_empty_text(self, service, engine):
        assert service.check_spelling_with_guess("") == []
        assert engine.calls == []


class TestCheckGrammar:
    """Tests for check_grammar."""

    def test_flags_agreement_error(self, service):
        results = service.check_grammar(GRAMMAR_SAMPLE)
        assert len(results) == 1
        assert isinstance(results[0], GrammarMatch)
        assert results[0].range == Range(0, 14)
        assert results[0].details[0].rule_id == "HE_VERB_AGR"

    def test_wrapped_duplicate_is_dropped(self, service, engine):
        text = "We went. Me and him was fine."
        results = service.check_grammar(text)
        assert [m.range for m in results] == [Range(9, 14)]
        # Second lookup wrapped back onto the same range
        offsets = [c[1] for c in engine.calls if c[0] == 'next_grammar_match']
        assert offsets == [0, 23]

    def test_two_matches_in_order(self, service):
        text = "Me and him was fine. me and him was fine."
        results = service.check_grammar(text)
        assert [m.range for m in results] == [Range(0, 14), Range(21, 14)]

    def test_clean_text(self, service, engine):
        assert service.check_grammar("this is a test sentence") == []
        assert engine.closed == engine.opened == [1]

    def test_empty_text(self, service, engine):
        assert service.check_grammar("") == []
        assert engine.calls == []


class TestUnifiedCheck:
    """Tests for check."""

    def test_orthography_first(self, service):
        results = service.check(GRAMMAR_SAMPLE)
        assert results[0].kind == CheckingType.ORTHOGRAPHY
        assert results[0].range == Range(0, len(GRAMMAR_SAMPLE))

    def test_reports_grammar_and_spelling(self, service):
        results = service.check("Me and him was goign")
        kinds = [(r.kind, r.range) for r in results[1:]]
        assert kinds == [
            (CheckingType.GRAMMAR, Range(0, 14)),
            (CheckingType.SPELLING, Range(15, 5)),
        ]

    def test_passes_full_range_and_session(self, service, engine):
        service.check(SAMPLE)
        assert ('unified_check', Range(0, len(SAMPLE)), 1) in engine.calls
        assert engine.closed == [1]

    def test_ignore_words(self, service):
        results = service.check(SAMPLE, ["helllo", "goign"])
        assert [r.kind for r in results] == [CheckingType.ORTHOGRAPHY]

    def test_empty_text(self, service, engine):
        assert service.check("") == []
        assert engine.calls == []


class TestCorrect:
    """Tests for correct and language resolution."""

    def test_corrects_with_resolved_language(self, service, engine):
        assert service.correct(SAMPLE) == "hello, how's going"
        correction = [c for c in engine.calls if c[0] == 'correction'][0]
        assert correction[2] == "en_US"

    def test_nothing_to_correct(self, service):
        assert service.correct("this is a test sentence") is None

    def test_ignore_words_respected(self, service):
        assert service.correct(SAMPLE, ["helllo"]) == "Helllo, how's going"

    def test_empty_text_returned_unchanged(self, service, engine, identifier):
        assert service.correct("") == ""
        assert engine.calls == []
        assert identifier.calls == 0

    def test_exact_tag_preferred(self, engine):
        service = SpellCheckingService(engine=engine, identifier=FakeIdentifier("en_GB"))
        assert service.resolve_language(SAMPLE) == "en_GB"

    def test_no_language_detected(self, engine):
        service = SpellCheckingService(engine=engine, identifier=FakeIdentifier(None))
        with pytest.raises(NoLanguageDetected) as exc_info:
            service.correct(SAMPLE)
        assert exc_info.value.code == "NO_LANGUAGE_DETECTED"
        assert engine.opened == []

    def test_unsupported_language(self, engine):
        service = SpellCheckingService(engine=engine, identifier=FakeIdentifier("fr"))
        with pytest.raises(UnsupportedLanguage) as exc_info:
            service.correct(SAMPLE)
        assert exc_info.value.language == "fr"
        assert exc_info.value.supported == ["de_DE", "en_US", "en_GB"]
        assert engine.opened == []

    def test_identifier_taken_from_engine(self):
        engine = FakeEngine()
        engine.identifier = FakeIdentifier("de")
        service = SpellCheckingService(engine=engine)
        assert service.resolve_language("Guten Tag") == "de_DE"


class TestVocabulary:
    """Tests for learn/unlearn/has_learned."""

    def test_learn_then_check(self, service):
        service.learn_word("goign")
        assert service.has_learned_word("goign")
        assert service.check_spelling(SAMPLE) == [Range(0, 6)]

    def test_unlearn(self, service):
        service.learn_word("goign")
        service.unlearn_word("goign")
        assert not service.has_learned_word("goign")
        assert service.check_spelling(SAMPLE) == [Range(0, 6), Range(14, 5)]

    def test_learn_is_idempotent(self, service):
        service.learn_word("goign")
        service.learn_word("goign")
        service.unlearn_word("goign")
        assert not service.has_learned_word("goign")

    def test_unlearn_unknown_word(self, service):
        service.unlearn_word("never-learned")
        assert not service.has_learned_word("never-learned")

    def test_batch_helpers(self, service):
        service.learn_words(["helllo", "goign"])
        assert service.check_spelling(SAMPLE) == []
        service.unlearn_words(["helllo"])
        assert service.check_spelling(SAMPLE) == [Range(0, 6)]


class TestMisc:
    """count_words, status and session failures."""

    def test_count_words(self, service):
        assert service.count_words(SAMPLE) == 3
        assert service.count_words("") == 0

    def test_status(self, service):
        status = service.get_status()
        assert status['version'] == "1.0.0"
        assert status['engine'] == {'available': True, 'type': 'FakeEngine'}
        assert status['identifier']['type'] == 'FakeIdentifier'

    def test_open_failure_becomes_session_error(self, service, engine, monkeypatch):
        def broken():
            raise OSError("no more sessions")
        monkeypatch.setattr(engine, 'open_session', broken)
        with pytest.raises(SessionError):
            service.check_grammar(GRAMMAR_SAMPLE)
