"""Case folding for recorded corrections.

A correction typed at the start of a sentence ("Teh" -> "The") should be
stored as the generic "teh" -> "the", while a proper noun ("Bayex" ->
"Bayeux") must keep its capital. The spelling oracle tells the two apart: if
the lowercase form of the correction is a valid word, the capital came from
sentence position.
"""

from typing import TYPE_CHECKING

from loguru import logger

if TYPE_CHECKING:
    from typoledger.capabilities import SpellingOracle


def is_case_foldable(word: str) -> bool:
    """Return True for "Capitalized" and "UPPERCASE" shaped words.

    The first character must be uppercase and the rest must be entirely
    lowercase or entirely uppercase. A single uppercase letter qualifies.
    """
    if not word or not word[0].isupper():
        return False
    rest = word[1:]
    return rest == rest.lower() or rest == rest.upper()


def apply_case_pattern(source: str, replacement: str) -> str:
    """Give replacement the same capitalization shape as source.

    "Teh" -> "The", "TEH" -> "THE"; anything else leaves replacement as is.
    """
    if not is_case_foldable(source) or not replacement:
        return replacement
    if len(source) > 1 and source == source.upper():
        return replacement.upper()
    return replacement[0].upper() + replacement[1:]


class CaseNormalizer:
    """Decide whether an observed correction is stored in lowercase."""

    def __init__(self, oracle: "SpellingOracle | None" = None) -> None:
        self.oracle = oracle

    def should_fold(self, misspelling: str, corrected: str) -> bool:
        """Return True if both strings should be lowercased before storage."""
        if self.oracle is None:
            return False
        if not (is_case_foldable(misspelling) and is_case_foldable(corrected)):
            return False
        return bool(self.oracle.is_valid_word(corrected.lower()))

    def normalize(self, misspelling: str, corrected: str) -> tuple[str, str]:
        """Return the (misspelling, corrected) pair as it should be recorded."""
        if self.should_fold(misspelling, corrected):
            folded = misspelling.lower(), corrected.lower()
            logger.debug(f"Folding '{misspelling} -> {corrected}' to '{folded[0]} -> {folded[1]}'")
            return folded
        return misspelling, corrected
