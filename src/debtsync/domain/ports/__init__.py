"""Domain port definitions for adapters."""

from __future__ import annotations

from .ledger import LedgerReadError, LedgerStore, LedgerStoreError, LedgerWriteError

__all__ = [
    "LedgerReadError",
    "LedgerStore",
    "LedgerStoreError",
    "LedgerWriteError",
]
