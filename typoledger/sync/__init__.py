"""Synchronization of the in-memory store with the shared record."""

from typoledger.sync.session import SessionSynchronizer

__all__ = ["SessionSynchronizer"]
