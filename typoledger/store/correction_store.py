"""In-memory table of misspellings and their candidate corrections."""

from collections.abc import Iterable, Iterator
from dataclasses import replace

from typoledger.core.types import ActiveCorrection, Candidate, ParsedRecord
from typoledger.store.promotion import PromotionEngine
from typoledger.utils.constants import Constants


def _copy_candidates(candidates: list[Candidate]) -> list[Candidate]:
    return [replace(c) for c in candidates]


def _add_counts(
    table: dict[str, list[Candidate]],
    misspelling: str,
    corrected: str,
    manual_delta: int,
    auto_delta: int,
) -> list[Candidate]:
    """Upsert a candidate in table and return the misspelling's candidates."""
    if manual_delta < 0 or auto_delta < 0:
        raise ValueError("count deltas must be non-negative")

    candidates = table.setdefault(misspelling, [])
    candidate = next((c for c in candidates if c.corrected == corrected), None)
    if candidate is None:
        candidate = Candidate(corrected=corrected)
        candidates.append(candidate)

    # The ignore flag carries no counts
    if not candidate.is_ignore:
        candidate.manual_count += manual_delta
        candidate.auto_count += auto_delta
    return candidates


class EntryView:
    """Lazy, restartable view of (misspelling, candidates) pairs.

    Each iteration walks the store as it is at that moment. Candidates are
    copies, so read-only consumers cannot mutate the store through them.
    """

    def __init__(self, table: dict[str, list[Candidate]]) -> None:
        self._table = table

    def __iter__(self) -> Iterator[tuple[str, list[Candidate]]]:
        for misspelling, candidates in list(self._table.items()):
            yield misspelling, _copy_candidates(candidates)

    def __len__(self) -> int:
        return len(self._table)


class CorrectionStore:
    """Mapping of misspellings to candidate corrections with counts.

    Every mutation re-evaluates the promotion state of the affected
    misspelling through the injected PromotionEngine.

    Merging is additive: counts from two sources of the same correction are
    summed. That makes merge commutative and associative, which is what lets
    several processes share one record without locking.
    """

    def __init__(self, engine: PromotionEngine | None = None) -> None:
        self.engine = engine if engine is not None else PromotionEngine()
        self._table: dict[str, list[Candidate]] = {}

    def record(
        self,
        misspelling: str,
        corrected: str,
        manual_delta: int = 1,
        auto_delta: int = 0,
    ) -> ActiveCorrection | None:
        """Upsert a candidate and add the deltas to its counts.

        Args:
            misspelling: The typed word
            corrected: The correction ("" marks an ignore flag)
            manual_delta: Amount added to the manual count
            auto_delta: Amount added to the auto count

        Returns:
            The misspelling's active correction after re-evaluation
        """
        candidates = _add_counts(self._table, misspelling, corrected, manual_delta, auto_delta)
        return self.engine.reevaluate(misspelling, candidates)

    def ignore(self, misspelling: str) -> None:
        """Flag misspelling as never to be autocorrected."""
        self.record(misspelling, Constants.IGNORE_MARKER, 0, 0)
        self.engine.deactivate(misspelling)

    def remove(self, misspelling: str, corrected: str) -> bool:
        """Delete one candidate; delete the entry with its last candidate.

        Returns:
            True if a candidate was removed, False if the pair did not exist
        """
        candidates = self._table.get(misspelling, [])
        candidate = next((c for c in candidates if c.corrected == corrected), None)
        if candidate is None:
            return False

        candidates.remove(candidate)
        if not candidates:
            del self._table[misspelling]
            self.engine.deactivate(misspelling)
        else:
            self.engine.reevaluate(misspelling, candidates)
        return True

    def merge(self, records: Iterable[ParsedRecord]) -> int:
        """Add parsed records to the store, summing counts.

        Args:
            records: (misspelling, corrected, manual_count, auto_count) tuples

        Returns:
            Number of records merged
        """
        merged = 0
        for misspelling, corrected, manual_count, auto_count in records:
            self.record(misspelling, corrected, manual_count, auto_count)
            merged += 1
        return merged

    def rebuild(self, records: Iterable[ParsedRecord]) -> int:
        """Replace the whole table with the merge of records.

        The engine is left untouched, so a following
        ``engine.synchronize(store.entries())`` reports the difference
        between the old and new active sets. If reading records fails, the
        store keeps its previous contents.

        Returns:
            Number of records merged
        """
        table: dict[str, list[Candidate]] = {}
        merged = 0
        for misspelling, corrected, manual_count, auto_count in records:
            _add_counts(table, misspelling, corrected, manual_count, auto_count)
            merged += 1
        self._table.clear()
        self._table.update(table)
        return merged

    def entries(self) -> EntryView:
        """Return a restartable view of every entry; no ordering is promised."""
        return EntryView(self._table)

    def get(self, misspelling: str) -> list[Candidate] | None:
        """Return a copy of the candidates for misspelling, or None."""
        candidates = self._table.get(misspelling)
        return _copy_candidates(candidates) if candidates is not None else None

    def clear(self) -> None:
        """Drop every entry and the derived active set."""
        for misspelling in list(self._table):
            self.engine.deactivate(misspelling)
        self._table.clear()

    def snapshot(self) -> dict[str, dict[str, tuple[int, int]]]:
        """Return the counts as plain data, independent of candidate order."""
        return {
            misspelling: {c.corrected: (c.manual_count, c.auto_count) for c in candidates}
            for misspelling, candidates in self._table.items()
        }

    def __contains__(self, misspelling: str) -> bool:
        return misspelling in self._table

    def __len__(self) -> int:
        return len(self._table)
