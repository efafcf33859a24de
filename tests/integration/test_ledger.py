"""Integration tests for the CorrectionLedger public surface."""

import io
from unittest.mock import patch

import pytest
from loguru import logger

from typoledger.core import ActivationTier, Config, InvalidCorrectionError
from typoledger.ledger import CorrectionLedger


class FakeOracle:
    def __init__(self, *words: str) -> None:
        self.words = set(words)

    def is_valid_word(self, word: str) -> bool:
        return word in self.words


class Veto:
    """Eligibility predicate that rejects one position."""

    def __init__(self, blocked) -> None:
        self.blocked = blocked

    def is_autocorrect_eligible(self, position) -> bool:
        return position != self.blocked


@pytest.fixture
def config(tmp_path) -> Config:
    return Config(record_file=str(tmp_path / "corrections"))


@pytest.fixture
def ledger(config) -> CorrectionLedger:
    return CorrectionLedger.open(config, oracle=FakeOracle("the", "and"))


class TestRecordCorrection:
    """Tests for recording manual corrections."""

    def test_three_corrections_activate_permanently(self, ledger) -> None:
        for _ in range(3):
            ledger.record_correction("teh", "the")
        assert ledger.tier_of("teh") == ActivationTier.PERSISTENT

    def test_appends_bare_line(self, ledger, config) -> None:
        ledger.record_correction("teh", "the")
        assert config.record_path.read_text(encoding="utf-8") == "teh the\n"

    def test_appends_qualified_line_for_numeric_correction(self, ledger, config) -> None:
        ledger.record_correction("fourty", "40")
        assert config.record_path.read_text(encoding="utf-8") == "fourty 1 0 40\n"

    def test_folds_sentence_initial_correction(self, ledger) -> None:
        ledger.record_correction("Teh", "The")
        assert ledger.store.snapshot() == {"teh": {"the": (1, 0)}}

    def test_preserves_proper_noun(self, ledger) -> None:
        ledger.record_correction("Bayex", "Bayeux")
        assert ledger.store.snapshot() == {"Bayex": {"Bayeux": (1, 0)}}

    def test_case_folding_can_be_disabled(self, tmp_path) -> None:
        config = Config(record_file=str(tmp_path / "corrections"), case_folding=False)
        ledger = CorrectionLedger.open(config, oracle=FakeOracle("the"))
        ledger.record_correction("Teh", "The")
        assert "Teh" in ledger.store

    def test_strips_surrounding_whitespace(self, ledger) -> None:
        ledger.record_correction(" teh ", " the\n")
        assert ledger.store.snapshot() == {"teh": {"the": (1, 0)}}

    def test_multi_word_correction(self, ledger) -> None:
        ledger.record_correction("alot", "a lot")
        assert ledger.store.snapshot() == {"alot": {"a lot": (1, 0)}}

    @pytest.mark.parametrize(
        "misspelling, corrected",
        [("", "the"), ("teh", ""), ("   ", "the"), ("two words", "the"), ("teh", "teh"), ("teh", "a\nb")],
    )
    def test_rejects_invalid_input(self, ledger, misspelling, corrected) -> None:
        with pytest.raises(InvalidCorrectionError):
            ledger.record_correction(misspelling, corrected)

    def test_invalid_input_leaves_record_untouched(self, ledger, config) -> None:
        with pytest.raises(InvalidCorrectionError):
            ledger.record_correction("teh", "")
        assert config.record_path.read_text(encoding="utf-8") == ""

    def test_failed_append_leaves_store_untouched(self, ledger) -> None:
        with patch.object(ledger.sync, "append", side_effect=OSError("disk full")):
            with pytest.raises(OSError):
                ledger.record_correction("teh", "the")
        assert len(ledger.store) == 0


class TestIgnoreAndRemove:
    """Tests for ignoring words and removing corrections."""

    def test_ignore_blocks_activation(self, ledger) -> None:
        for _ in range(3):
            ledger.record_correction("teh", "the")
        ledger.ignore_word("teh")
        assert ledger.tier_of("teh") == ActivationTier.INACTIVE

    def test_ignore_appends_ignore_line(self, ledger, config) -> None:
        ledger.ignore_word("colour")
        assert config.record_path.read_text(encoding="utf-8") == "colour 0 0\n"

    def test_remove_missing_pair_is_noop(self, ledger) -> None:
        assert ledger.remove_correction("teh", "the") is False

    def test_remove_reactivates_remaining_candidate(self, ledger) -> None:
        for _ in range(3):
            ledger.record_correction("adn", "and")
        ledger.record_correction("adn", "an")
        ledger.remove_correction("adn", "an")
        assert ledger.tier_of("adn") == ActivationTier.PERSISTENT

    def test_remove_persists_immediately(self, ledger, config) -> None:
        ledger.record_correction("teh", "the")
        ledger.record_correction("adn", "and")
        ledger.remove_correction("teh", "the")
        assert config.record_path.read_text(encoding="utf-8") == "adn 1 0 and\n"

    def test_remove_folds_like_record(self, ledger) -> None:
        ledger.record_correction("Teh", "The")
        ledger.remove_correction("Teh", "The")
        assert "teh" not in ledger.store

    def test_remove_strips_whitespace(self, ledger) -> None:
        ledger.record_correction("teh", "the")
        assert ledger.remove_correction(" teh ", "the\n") is True

    def test_remove_empty_correction_clears_ignore_flag(self, ledger) -> None:
        ledger.ignore_word("colour")
        ledger.remove_correction("colour", "")
        assert "colour" not in ledger.store

    def test_remove_rejects_invalid_input(self, ledger) -> None:
        with pytest.raises(InvalidCorrectionError):
            ledger.remove_correction("two words", "the")

    def test_failed_rewrite_keeps_pair_in_store(self, ledger) -> None:
        ledger.add_correction("teh", "the")
        with patch("typoledger.sync.session.os.replace", side_effect=OSError("disk full")):
            with pytest.raises(OSError):
                ledger.remove_correction("teh", "the")
        assert ledger.tier_of("teh") == ActivationTier.PERSISTENT

    def test_failed_rewrite_keeps_record(self, ledger, config) -> None:
        ledger.add_correction("teh", "the")
        with patch("typoledger.sync.session.os.replace", side_effect=OSError("disk full")):
            with pytest.raises(OSError):
                ledger.remove_correction("teh", "the")
        assert config.record_path.read_text(encoding="utf-8") == "teh 3 0 the\n"


class TestAddCorrection:
    """Tests for pre-seeded corrections."""

    def test_is_active_immediately(self, ledger) -> None:
        active = ledger.add_correction("recieve", "receive")
        assert active.tier == ActivationTier.PERSISTENT

    def test_appends_seeded_counts(self, ledger, config) -> None:
        ledger.add_correction("recieve", "receive")
        assert config.record_path.read_text(encoding="utf-8") == "recieve 3 0 receive\n"

    def test_stays_inactive_when_ambiguous(self, ledger) -> None:
        ledger.record_correction("adn", "an")
        assert ledger.add_correction("adn", "and") is None


class TestAutocorrect:
    """Tests for applying active corrections."""

    def test_returns_none_for_inactive_word(self, ledger) -> None:
        ledger.record_correction("teh", "the")
        assert ledger.autocorrect("teh") is None

    def test_applies_active_correction(self, ledger) -> None:
        ledger.add_correction("teh", "the")
        assert ledger.autocorrect("teh") == "the"

    def test_propagates_case_for_folded_rule(self, ledger) -> None:
        ledger.add_correction("teh", "the")
        assert ledger.autocorrect("Teh") == "The"

    def test_increments_auto_count_only(self, ledger) -> None:
        ledger.add_correction("teh", "the")
        ledger.autocorrect("teh")
        ledger.autocorrect("teh")
        assert ledger.store.snapshot() == {"teh": {"the": (3, 2)}}

    def test_auto_count_is_persisted(self, ledger, config) -> None:
        ledger.add_correction("teh", "the")
        ledger.autocorrect("teh")
        other = CorrectionLedger.open(config)
        assert other.store.snapshot() == {"teh": {"the": (3, 1)}}

    def test_predicate_veto_blocks_correction(self, config) -> None:
        ledger = CorrectionLedger.open(config, predicates=[Veto(blocked=5), Veto(blocked=9)])
        ledger.add_correction("teh", "the")
        assert ledger.autocorrect("teh", position=9) is None

    def test_applies_when_all_predicates_agree(self, config) -> None:
        ledger = CorrectionLedger.open(config, predicates=[Veto(blocked=5), Veto(blocked=9)])
        ledger.add_correction("teh", "the")
        assert ledger.autocorrect("teh", position=1) == "the"

    def test_hook_receives_single_token_corrections(self, config) -> None:
        applied: list[tuple[str, str]] = []
        ledger = CorrectionLedger.open(config, on_correction_applied=lambda o, c: applied.append((o, c)))
        ledger.add_correction("teh", "the")
        ledger.autocorrect("Teh")
        assert applied == [("Teh", "The")]

    def test_hook_skipped_for_multi_word_corrections(self, config) -> None:
        applied: list[tuple[str, str]] = []
        ledger = CorrectionLedger.open(config, on_correction_applied=lambda o, c: applied.append((o, c)))
        ledger.add_correction("alot", "a lot")
        ledger.autocorrect("alot")
        assert applied == []


class TestListEntries:
    """Tests for listing metadata."""

    def test_reports_tier_and_flags(self, ledger) -> None:
        ledger.add_correction("teh", "the")
        ledger.record_correction("adn", "and")
        ledger.record_correction("adn", "an")
        ledger.ignore_word("colour")

        listing = {entry.misspelling: entry for entry in ledger.list_entries()}

        assert (
            listing["teh"].tier,
            listing["adn"].ambiguous,
            listing["colour"].ignored,
        ) == (ActivationTier.PERSISTENT, True, True)

    def test_sorted_by_misspelling(self, ledger) -> None:
        ledger.record_correction("teh", "the")
        ledger.record_correction("adn", "and")
        assert [entry.misspelling for entry in ledger.list_entries()] == ["adn", "teh"]


class TestContextManager:
    """Tests for save-on-exit."""

    def test_saves_on_exit(self, config) -> None:
        with CorrectionLedger.open(config) as ledger:
            ledger.record_correction("teh", "the")
            ledger.record_correction("teh", "the")
        assert config.record_path.read_text(encoding="utf-8") == "teh 2 0 the\n"


class TestLogging:
    """Tests for log output."""

    def test_logs_activation(self, ledger) -> None:
        log_capture = io.StringIO()
        handler_id = logger.add(log_capture, level="INFO", format="{message}")
        try:
            ledger.add_correction("teh", "the")
            ledger.record_correction("teh", "the")
        finally:
            logger.remove(handler_id)
        assert "'teh -> the' is active (persistent)" in log_capture.getvalue()

    def test_logs_skipped_lines_at_debug(self, config) -> None:
        config.record_path.write_text("teh 3\n", encoding="utf-8")
        log_capture = io.StringIO()
        handler_id = logger.add(log_capture, level="DEBUG", format="{message}")
        try:
            CorrectionLedger.open(config)
        finally:
            logger.remove(handler_id)
        assert "skipping malformed line 'teh 3'" in log_capture.getvalue()
