"""Ports for reading and rewriting a ledger of debt records."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from debtsync.domain.model import Record


class LedgerStoreError(RuntimeError):
    """Base class for ledger I/O failures."""

    def __init__(self, message: str, *, location: str) -> None:
        self.location = location
        super().__init__(message)


class LedgerReadError(LedgerStoreError):
    """Raised when a ledger's backing storage cannot be opened or read."""


class LedgerWriteError(LedgerStoreError):
    """Raised when rewriting a ledger fails; the stored ledger is left as it was."""


@runtime_checkable
class LedgerStore(Protocol):
    """Whole-ledger persistence contract.

    ``read`` returns every parsable record in stored order. ``write`` replaces the
    complete ledger with ``records`` in one step: either all records are committed
    or the previous content stays in place.
    """

    @property
    def location(self) -> str: ...

    def read(self) -> list[Record]: ...

    def write(self, records: Sequence[Record]) -> None: ...
