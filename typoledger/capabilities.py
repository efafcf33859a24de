"""Interfaces consumed from editor-side collaborators."""

from collections.abc import Callable
from typing import Any, Protocol

from typoledger.utils.helpers import cached_word_frequency

# Called as hook(original, corrected) after an automatic single-token correction
CorrectionAppliedHook = Callable[[str, str], None]


class SpellingOracle(Protocol):
    """Answers whether a word is spelled correctly."""

    def is_valid_word(self, word: str) -> bool:
        """Return True if word is a correctly spelled word."""


class AutocorrectPredicate(Protocol):
    """Decides whether an automatic correction may fire at a position."""

    def is_autocorrect_eligible(self, position: Any) -> bool:
        """Return True if a correction may be applied at position."""


def all_predicates_agree(predicates: list[AutocorrectPredicate], position: Any) -> bool:
    """Return True if every registered predicate accepts position.

    With no predicates registered, every position is eligible.
    """
    verdicts = [predicate.is_autocorrect_eligible(position) for predicate in predicates]
    return all(verdicts)


class WordfreqOracle:
    """Spelling oracle backed by wordfreq frequency lists.

    A word counts as valid when its frequency is above min_frequency.
    """

    def __init__(self, lang: str = "en", min_frequency: float = 0.0) -> None:
        self.lang = lang
        self.min_frequency = min_frequency

    def is_valid_word(self, word: str) -> bool:
        return cached_word_frequency(word, self.lang) > self.min_frequency
