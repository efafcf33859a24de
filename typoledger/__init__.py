"""TypoLedger - learn autocorrect rules from the corrections you make.

Track recurring spelling corrections in a shared, append-friendly record and
promote the ones you keep repeating into automatically applied rules.
"""

from .capabilities import AutocorrectPredicate, SpellingOracle, WordfreqOracle
from .core import (
    ActivationTier,
    ActiveCorrection,
    Candidate,
    Config,
    InvalidCorrectionError,
    load_config,
)
from .ledger import CorrectionLedger
from .store import CaseNormalizer, CorrectionStore, PromotionEngine
from .sync import SessionSynchronizer

__version__ = "0.1.0"
__all__ = [
    "ActivationTier",
    "ActiveCorrection",
    "AutocorrectPredicate",
    "Candidate",
    "CaseNormalizer",
    "Config",
    "CorrectionLedger",
    "CorrectionStore",
    "InvalidCorrectionError",
    "PromotionEngine",
    "SessionSynchronizer",
    "SpellingOracle",
    "WordfreqOracle",
    "load_config",
]
