"""Exceptions raised by the public ledger operations."""


class InvalidCorrectionError(ValueError):
    """A user-facing mutation was called with unusable arguments.

    Raised before the store or the durable record is touched.
    """
