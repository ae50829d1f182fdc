"""Apply stage: write a change set into target records in memory.

Responsibilities of this stage:
- set each listed field to its new value on the record it was computed for
- leave every other field, every other record and the record order alone
- avoid any persistence; committing is the engine's decision
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from debtsync.domain.model import record_identity

if TYPE_CHECKING:
    from collections.abc import Sequence

    from debtsync.domain.model import Record

    from .diff import ChangeSet, FieldChange


@dataclass(slots=True)
class ApplyResult:
    """Summary of in-memory mutations performed by the applier."""

    fields_updated: int = 0
    records_updated: int = 0


class StaleChangeSetError(ValueError):
    """Raised when a change set does not belong to the records it is applied to."""

    def __init__(self, change: FieldChange, *, reason: str) -> None:
        self.change = change
        super().__init__(
            f"Cannot apply change to {change.field!r} of record {change.identity!r} "
            f"at position {change.position}: {reason}"
        )


class ApplyChangeSet(Protocol):
    """Apply a change set to the records it was computed from."""

    def __call__(
        self,
        target_records: Sequence[Record],
        change_set: ChangeSet,
        *,
        identity_field: str,
    ) -> ApplyResult: ...


def apply_change_set(
    target_records: Sequence[Record],
    change_set: ChangeSet,
    *,
    identity_field: str,
) -> ApplyResult:
    """Mutate ``target_records`` in place according to ``change_set``."""

    for change in change_set:
        _check_applicable(target_records, change, identity_field=identity_field)

    for change in change_set:
        target_records[change.position][change.field] = change.new

    return ApplyResult(
        fields_updated=change_set.total,
        records_updated=len(change_set.positions()),
    )


def _check_applicable(
    target_records: Sequence[Record],
    change: FieldChange,
    *,
    identity_field: str,
) -> None:
    if not 0 <= change.position < len(target_records):
        raise StaleChangeSetError(change, reason="position out of range")
    if record_identity(target_records[change.position], identity_field) != change.identity:
        raise StaleChangeSetError(change, reason="identity mismatch")
