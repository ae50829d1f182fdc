"""Identity index used to correlate records across ledgers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, TypeAlias

from debtsync.domain.model import record_identity

if TYPE_CHECKING:
    from collections.abc import Iterable

    from debtsync.domain.model import Record

IdentityIndex: TypeAlias = "dict[str, Record]"


class BuildIdentityIndex(Protocol):
    """Build the identity lookup for one ledger."""

    def __call__(self, records: Iterable[Record], *, identity_field: str) -> IdentityIndex: ...


def build_identity_index(records: Iterable[Record], *, identity_field: str) -> IdentityIndex:
    """Map each identity to the last record carrying it.

    Records without a usable identity are left out and cannot be correlated.
    """

    index: IdentityIndex = {}
    for record in records:
        identity = record_identity(record, identity_field)
        if identity is None:
            continue
        index[identity] = record
    return index
