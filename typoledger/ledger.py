"""The correction ledger: the surface exposed to editor integrations."""

from collections.abc import Iterable, Iterator
from typing import Any

from loguru import logger

from typoledger.capabilities import (
    AutocorrectPredicate,
    CorrectionAppliedHook,
    SpellingOracle,
    all_predicates_agree,
)
from typoledger.core.config import Config
from typoledger.core.errors import InvalidCorrectionError
from typoledger.core.types import ActivationTier, ActiveCorrection, EntryListing, PromotionEvent
from typoledger.record.formatting import format_live_line, format_record_line
from typoledger.store.case_folding import CaseNormalizer, apply_case_pattern, is_case_foldable
from typoledger.store.correction_store import CorrectionStore
from typoledger.store.promotion import PromotionEngine
from typoledger.sync.session import SessionSynchronizer
from typoledger.utils.constants import Constants
from typoledger.utils.helpers import is_single_token


def _clean_misspelling(misspelling: str) -> str:
    """Validate a misspelling and return it without surrounding whitespace."""
    if not isinstance(misspelling, str):
        raise InvalidCorrectionError(f"misspelling must be a string, got {type(misspelling).__name__}")
    cleaned = misspelling.strip()
    if not cleaned:
        raise InvalidCorrectionError("misspelling must not be empty")
    if not is_single_token(cleaned):
        raise InvalidCorrectionError(f"misspelling must be a single word, got {misspelling!r}")
    return cleaned


def _clean_correction(misspelling: str, corrected: str) -> str:
    """Validate corrected text for misspelling and return it stripped."""
    if not isinstance(corrected, str):
        raise InvalidCorrectionError(f"correction must be a string, got {type(corrected).__name__}")
    cleaned = corrected.strip()
    if not cleaned:
        raise InvalidCorrectionError(f"correction for {misspelling!r} must not be empty")
    if "\n" in cleaned or "\r" in cleaned:
        raise InvalidCorrectionError(f"correction for {misspelling!r} must fit on one line")
    if cleaned == misspelling:
        raise InvalidCorrectionError(f"{misspelling!r} cannot be corrected to itself")
    return cleaned


class CorrectionLedger:
    """Record corrections, promote repeated ones and apply active rules.

    Every mutation appends one line to the shared record before touching
    memory, so a failed write leaves the in-memory store unchanged.
    Removals are the exception: they need a full rewrite and are persisted
    immediately through a reload and save.

    Use as a context manager to save on exit::

        with CorrectionLedger.open(config, oracle=WordfreqOracle()) as ledger:
            ledger.record_correction("teh", "the")
    """

    def __init__(
        self,
        config: Config,
        oracle: SpellingOracle | None = None,
        predicates: Iterable[AutocorrectPredicate] = (),
        on_correction_applied: CorrectionAppliedHook | None = None,
    ) -> None:
        self.config = config
        self.engine = PromotionEngine(config.all_time_threshold, config.session_threshold)
        self.store = CorrectionStore(self.engine)
        self.sync = SessionSynchronizer(config.record_path, self.store)
        self.normalizer = CaseNormalizer(oracle if config.case_folding else None)
        self.predicates: list[AutocorrectPredicate] = list(predicates)
        self.on_correction_applied = on_correction_applied

    @classmethod
    def open(
        cls,
        config: Config,
        oracle: SpellingOracle | None = None,
        predicates: Iterable[AutocorrectPredicate] = (),
        on_correction_applied: CorrectionAppliedHook | None = None,
    ) -> "CorrectionLedger":
        """Create a ledger and load the record, creating it if missing."""
        ledger = cls(config, oracle, predicates, on_correction_applied)
        ledger.reload(force=True)
        return ledger

    def __enter__(self) -> "CorrectionLedger":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.save()

    def record_correction(self, misspelling: str, corrected: str) -> ActiveCorrection | None:
        """Record one manual correction.

        Args:
            misspelling: What the user typed
            corrected: What the user corrected it to

        Returns:
            The misspelling's active correction afterwards, or None

        Raises:
            InvalidCorrectionError: If either string is unusable
        """
        misspelling = _clean_misspelling(misspelling)
        corrected = _clean_correction(misspelling, corrected)
        misspelling, corrected = self.normalizer.normalize(misspelling, corrected)

        self.sync.append(format_live_line(misspelling, corrected))
        active = self.store.record(misspelling, corrected)

        if active is not None:
            logger.info(f"'{misspelling} -> {corrected}' is active ({active.tier.value})")
        else:
            logger.debug(f"Recorded '{misspelling} -> {corrected}'")
        return active

    def ignore_word(self, word: str) -> None:
        """Never autocorrect word."""
        word = _clean_misspelling(word)
        self.sync.append(format_record_line(word, "", 0, 0))
        self.store.ignore(word)
        logger.info(f"Ignoring '{word}'")

    def add_correction(self, misspelling: str, corrected: str) -> ActiveCorrection | None:
        """Create a correction pre-seeded at the all-time threshold.

        The correction becomes active immediately unless the misspelling
        already has competing candidates or is ignored.
        """
        misspelling = _clean_misspelling(misspelling)
        corrected = _clean_correction(misspelling, corrected)
        seed = self.config.all_time_threshold

        self.sync.append(format_record_line(misspelling, corrected, seed, 0))
        active = self.store.record(misspelling, corrected, seed, 0)

        if active is None:
            logger.warning(
                f"'{misspelling} -> {corrected}' was added but is not active (ambiguous or ignored)"
            )
        return active

    def remove_correction(self, misspelling: str, corrected: str) -> bool:
        """Remove one (misspelling, correction) pair from the ledger.

        The pair is folded the same way record_correction folds it. Pass an
        empty correction to remove an ignore flag. If the rewrite fails, the
        store is reloaded from the untouched record before the error
        propagates.

        Returns:
            True if the pair existed; removing a missing pair is a no-op

        Raises:
            InvalidCorrectionError: If either string is unusable
        """
        misspelling = _clean_misspelling(misspelling)
        if corrected != Constants.IGNORE_MARKER:
            corrected = _clean_correction(misspelling, corrected)
            misspelling, corrected = self.normalizer.normalize(misspelling, corrected)

        self.sync.reload()
        if not self.store.remove(misspelling, corrected):
            logger.debug(f"Nothing to remove for '{misspelling} -> {corrected}'")
            return False

        try:
            self.sync.save(reload=False)
        except OSError:
            self.sync.reload(force=True)
            raise
        logger.info(f"Removed '{misspelling} -> {corrected}'")
        return True

    def _lookup(self, word: str) -> tuple[str, ActiveCorrection] | None:
        """Find the active correction for a typed word.

        Falls back to the lowercase key for Capitalized/UPPERCASE words,
        since folded corrections are stored in lowercase.
        """
        active = self.engine.get(word)
        if active is not None:
            return word, active
        if is_case_foldable(word) and word.lower() != word:
            active = self.engine.get(word.lower())
            if active is not None:
                return word.lower(), active
        return None

    def autocorrect(self, word: str, position: Any = None) -> str | None:
        """Apply the active correction for word, if allowed at position.

        Increments the correction's auto count. The applied-correction hook
        only fires for single-token replacements, since a multi-word
        replacement cannot be mapped back to its trigger.

        Args:
            word: The word just typed
            position: Opaque location handed to eligibility predicates

        Returns:
            The replacement text, or None if nothing was applied
        """
        found = self._lookup(word)
        if found is None:
            return None
        key, active = found

        if not all_predicates_agree(self.predicates, position):
            logger.debug(f"Autocorrection of '{word}' vetoed at {position!r}")
            return None

        replacement = active.corrected if key == word else apply_case_pattern(word, active.corrected)

        self.sync.append(format_record_line(key, active.corrected, 0, 1))
        self.store.record(key, active.corrected, 0, 1)

        if self.on_correction_applied is not None and is_single_token(replacement):
            self.on_correction_applied(word, replacement)
        return replacement

    def tier_of(self, misspelling: str) -> ActivationTier:
        """Return the activation tier of misspelling."""
        active = self.engine.get(misspelling)
        return active.tier if active is not None else ActivationTier.INACTIVE

    def active_corrections(self) -> list[ActiveCorrection]:
        """Return every active correction, sorted by misspelling."""
        return self.engine.active_corrections()

    def list_entries(self) -> Iterator[EntryListing]:
        """Yield display metadata for every entry, sorted by misspelling."""
        for misspelling, candidates in sorted(self.store.entries(), key=lambda entry: entry[0]):
            active = self.engine.get(misspelling)
            real = [c for c in candidates if not c.is_ignore]
            yield EntryListing(
                misspelling=misspelling,
                corrections=[c.corrected for c in candidates],
                manual_counts=[c.manual_count for c in candidates],
                auto_counts=[c.auto_count for c in candidates],
                tier=active.tier if active is not None else ActivationTier.INACTIVE,
                active_correction=active.corrected if active is not None else None,
                ambiguous=len(real) > 1,
                ignored=len(real) != len(candidates),
            )

    def reload(self, force: bool = False) -> list[PromotionEvent] | None:
        """Pick up records appended by other processes.

        Returns:
            Changes to the active set, or None if the record was unchanged
        """
        return self.sync.reload(force=force)

    def save(self) -> None:
        """Reload, then compact the record into one line per candidate."""
        self.sync.save()
