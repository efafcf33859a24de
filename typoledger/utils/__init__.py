"""Utility functions for TypoLedger."""

from typoledger.utils.constants import Constants
from typoledger.utils.helpers import cached_word_frequency, expand_file_path, is_single_token
from typoledger.utils.logging import setup_logger

__all__ = [
    "Constants",
    "cached_word_frequency",
    "expand_file_path",
    "is_single_token",
    "setup_logger",
]
