"""Correction store, case folding and promotion."""

from typoledger.store.case_folding import CaseNormalizer, apply_case_pattern, is_case_foldable
from typoledger.store.correction_store import CorrectionStore, EntryView
from typoledger.store.promotion import PromotionEngine

__all__ = [
    "CaseNormalizer",
    "CorrectionStore",
    "EntryView",
    "PromotionEngine",
    "apply_case_pattern",
    "is_case_foldable",
]
