"""Constants used throughout the TypoLedger codebase."""


class Constants:
    """Centralized constants to avoid magic numbers and strings."""

    # Promotion thresholds
    DEFAULT_ALL_TIME_THRESHOLD = 3
    """Manual count at which a correction is active across sessions."""

    DEFAULT_SESSION_THRESHOLD = 2
    """Manual count at which a correction is active for the current run only."""

    # Durable record
    DEFAULT_RECORD_FILE = "~/.config/typoledger/corrections"
    """Default location of the shared correction record."""

    RECORD_ENCODING = "utf-8"
    """Encoding of the durable record."""

    IGNORE_MARKER = ""
    """Corrected text reserved for 'never autocorrect this misspelling'."""

    # Counts assumed for a bare "misspelling corrected" line
    BARE_LINE_MANUAL_COUNT = 1
    BARE_LINE_AUTO_COUNT = 0
