"""Type definitions for TypoLedger."""

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel

# Type alias for parsed record lines: (misspelling, corrected, manual_count, auto_count)
ParsedRecord = tuple[str, str, int, int]


class ActivationTier(Enum):
    """Whether, and for how long, a correction is applied automatically."""

    INACTIVE = "inactive"  # No auto-apply rule
    SESSION = "session"  # Auto-applied for the current run only
    PERSISTENT = "persistent"  # Backed by counts that meet the all-time threshold


@dataclass
class Candidate:
    """One proposed correction for a misspelling."""

    corrected: str
    manual_count: int = 0
    auto_count: int = 0

    @property
    def is_ignore(self) -> bool:
        """True if this candidate is the 'never autocorrect' flag."""
        return self.corrected == ""


@dataclass(frozen=True)
class ActiveCorrection:
    """An auto-apply rule derived from a single unambiguous candidate."""

    misspelling: str
    corrected: str
    tier: ActivationTier
    manual_count: int
    auto_count: int


class PromotionEvent(BaseModel):
    """A change to the active-correction set made by a synchronization pass."""

    misspelling: str
    corrected: str
    action: str  # "promoted", "demoted", "retiered"
    tier: ActivationTier


class EntryListing(BaseModel):
    """Display metadata for one misspelling, as shown by listing front ends."""

    misspelling: str
    corrections: list[str]
    manual_counts: list[int]
    auto_counts: list[int]
    tier: ActivationTier
    active_correction: str | None = None
    ambiguous: bool = False
    ignored: bool = False
