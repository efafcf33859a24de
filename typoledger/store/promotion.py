"""Promotion of recorded corrections into auto-apply rules."""

from collections.abc import Iterable

from loguru import logger

from typoledger.core.types import ActivationTier, ActiveCorrection, Candidate, PromotionEvent
from typoledger.utils.constants import Constants


class PromotionEngine:
    """Derive active corrections from store contents and thresholds.

    The engine owns the externally visible active set: a mapping from
    misspelling to its ActiveCorrection. It is never persisted; it is rebuilt
    from the entries on every mutation and on reload.

    Attributes:
        all_time_threshold: Manual count for PERSISTENT activation
        session_threshold: Manual count for SESSION activation
    """

    def __init__(
        self,
        all_time_threshold: int = Constants.DEFAULT_ALL_TIME_THRESHOLD,
        session_threshold: int = Constants.DEFAULT_SESSION_THRESHOLD,
    ) -> None:
        self.all_time_threshold = all_time_threshold
        self.session_threshold = session_threshold
        self._active: dict[str, ActiveCorrection] = {}

    def tier_for(self, manual_count: int) -> ActivationTier:
        """Map a manual count onto an activation tier."""
        if manual_count >= self.all_time_threshold:
            return ActivationTier.PERSISTENT
        if manual_count >= self.session_threshold:
            return ActivationTier.SESSION
        return ActivationTier.INACTIVE

    def evaluate(self, misspelling: str, candidates: list[Candidate] | None) -> ActiveCorrection | None:
        """Compute the active correction for one entry without changing state.

        Only a single, non-ignore candidate can be promoted. Two or more
        candidates make the misspelling ambiguous, and an ignore candidate
        blocks it outright.

        Args:
            misspelling: The entry key
            candidates: The entry's candidates, or None if there is no entry

        Returns:
            The ActiveCorrection, or None if the entry is INACTIVE
        """
        if not candidates or len(candidates) != 1:
            return None

        candidate = candidates[0]
        if candidate.is_ignore:
            return None

        tier = self.tier_for(candidate.manual_count)
        if tier == ActivationTier.INACTIVE:
            return None

        return ActiveCorrection(
            misspelling=misspelling,
            corrected=candidate.corrected,
            tier=tier,
            manual_count=candidate.manual_count,
            auto_count=candidate.auto_count,
        )

    def reevaluate(self, misspelling: str, candidates: list[Candidate] | None) -> ActiveCorrection | None:
        """Re-evaluate one misspelling and update the active set."""
        active = self.evaluate(misspelling, candidates)
        self._apply(misspelling, active)
        return active

    def deactivate(self, misspelling: str) -> None:
        """Drop any active correction for misspelling."""
        if self._active.pop(misspelling, None) is not None:
            logger.debug(f"Deactivated '{misspelling}'")

    def synchronize(self, entries: Iterable[tuple[str, list[Candidate]]]) -> list[PromotionEvent]:
        """Reconcile the active set with the full contents of the store.

        Misspellings that no longer qualify, or no longer exist, are demoted;
        newly qualifying ones are promoted; tier changes are reported as
        "retiered". Running it twice without an intervening mutation yields
        no events the second time.

        Args:
            entries: Every (misspelling, candidates) pair in the store

        Returns:
            Events describing how the active set changed
        """
        events: list[PromotionEvent] = []
        seen: set[str] = set()

        for misspelling, candidates in entries:
            seen.add(misspelling)
            event = self._apply(misspelling, self.evaluate(misspelling, candidates))
            if event is not None:
                events.append(event)

        for misspelling in [m for m in self._active if m not in seen]:
            event = self._apply(misspelling, None)
            if event is not None:
                events.append(event)

        if events:
            logger.info(f"Active corrections updated: {len(events)} change(s), {len(self._active)} active")
        return events

    def _apply(self, misspelling: str, active: ActiveCorrection | None) -> PromotionEvent | None:
        """Store the new state for misspelling and describe the change, if any."""
        previous = self._active.get(misspelling)

        if active is None:
            if previous is None:
                return None
            del self._active[misspelling]
            logger.debug(f"Demoted '{misspelling} -> {previous.corrected}'")
            return PromotionEvent(
                misspelling=misspelling,
                corrected=previous.corrected,
                action="demoted",
                tier=ActivationTier.INACTIVE,
            )

        self._active[misspelling] = active
        if previous is None or previous.corrected != active.corrected:
            logger.debug(f"Promoted '{misspelling} -> {active.corrected}' ({active.tier.value})")
            action = "promoted"
        elif previous.tier != active.tier:
            action = "retiered"
        else:
            return None

        return PromotionEvent(
            misspelling=misspelling, corrected=active.corrected, action=action, tier=active.tier
        )

    def get(self, misspelling: str) -> ActiveCorrection | None:
        """Return the active correction for misspelling, if any."""
        return self._active.get(misspelling)

    def active_corrections(self) -> list[ActiveCorrection]:
        """Return the active set sorted by misspelling."""
        return [self._active[m] for m in sorted(self._active)]

    def __contains__(self, misspelling: str) -> bool:
        return misspelling in self._active

    def __len__(self) -> int:
        return len(self._active)
