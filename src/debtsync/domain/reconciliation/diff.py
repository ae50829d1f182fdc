"""Diff stage: detect field drift between correlated records.

Responsibilities of this stage:
- walk target records in stored order
- look each one up in the authoritative identity index
- compare every propagating field under strict JSON equality

The diff never mutates records. Its output is the only input the apply stage
needs, which keeps preview and apply runs on the exact same change set.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, cast

from debtsync.domain.model import MISSING, field_value, record_identity

from .fields import DEFAULT_FIELD_RULES

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Sequence

    from debtsync.domain.model import Record

    from .fields import FieldRule
    from .index import IdentityIndex

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True, kw_only=True)
class FieldChange:
    """One pending field update on one target record.

    ``position`` is the record's index in the target sequence the diff ran over.
    ``old`` is ``MISSING`` when the target record did not define the field.
    """

    position: int
    identity: str
    field: str
    old: object
    new: object


@dataclass(slots=True)
class ChangeSet:
    """Ordered field changes plus the correlation count they were derived from."""

    changes: list[FieldChange] = field(default_factory=list["FieldChange"])
    shared_count: int = 0

    def __iter__(self) -> Iterator[FieldChange]:
        return iter(self.changes)

    def __len__(self) -> int:
        return len(self.changes)

    def __bool__(self) -> bool:
        return bool(self.changes)

    @property
    def total(self) -> int:
        return len(self.changes)

    def by_field(self) -> Counter[str]:
        return Counter(change.field for change in self.changes)

    def count_for(self, field_name: str) -> int:
        return sum(1 for change in self.changes if change.field == field_name)

    def positions(self) -> set[int]:
        return {change.position for change in self.changes}


class DiffRecords(Protocol):
    """Compute the change set for target records against an authoritative index."""

    def __call__(
        self,
        target_records: Sequence[Record],
        authoritative_index: IdentityIndex,
        *,
        identity_field: str,
        rules: Iterable[FieldRule] = ...,
    ) -> ChangeSet: ...


def values_equal(left: object, right: object) -> bool:
    """Compare raw JSON values without type coercion (``1``, ``1.0`` and ``True`` differ)."""

    if type(left) is not type(right):
        return False
    if isinstance(left, list):
        other_list = cast("list[object]", right)
        return len(left) == len(other_list) and all(
            values_equal(a, b) for a, b in zip(left, other_list, strict=True)
        )
    if isinstance(left, dict):
        other_dict = cast("dict[str, object]", right)
        return left.keys() == other_dict.keys() and all(
            values_equal(value, other_dict[key]) for key, value in left.items()
        )
    return left == right


def diff_records(
    target_records: Sequence[Record],
    authoritative_index: IdentityIndex,
    *,
    identity_field: str,
    rules: Iterable[FieldRule] = DEFAULT_FIELD_RULES,
) -> ChangeSet:
    """Return the changes that bring ``target_records`` in line with the index."""

    propagating = tuple(rule for rule in rules if rule.propagates)
    change_set = ChangeSet()

    for position, target in enumerate(target_records):
        identity = record_identity(target, identity_field)
        if identity is None:
            continue
        source = authoritative_index.get(identity)
        if source is None:
            continue
        change_set.shared_count += 1

        for rule in propagating:
            new = field_value(source, rule.field)
            if new is MISSING:
                continue
            old = field_value(target, rule.field)
            if old is not MISSING and values_equal(old, new):
                continue
            if not rule.recognizes(new):
                log.debug(
                    "Propagating %r for %s of %s: not a known %s value",
                    new,
                    rule.field,
                    identity,
                    rule.field,
                )
            change_set.changes.append(
                FieldChange(
                    position=position,
                    identity=identity,
                    field=rule.field,
                    old=old,
                    new=new,
                )
            )

    return change_set
