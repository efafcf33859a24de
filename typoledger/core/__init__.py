"""Core types and configuration for TypoLedger."""

from .config import Config, load_config
from .errors import InvalidCorrectionError
from .types import (
    ActivationTier,
    ActiveCorrection,
    Candidate,
    EntryListing,
    ParsedRecord,
    PromotionEvent,
)

__all__ = [
    "ActivationTier",
    "ActiveCorrection",
    "Candidate",
    "Config",
    "EntryListing",
    "InvalidCorrectionError",
    "ParsedRecord",
    "PromotionEvent",
    "load_config",
]
