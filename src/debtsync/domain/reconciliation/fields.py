"""Declarative precedence table for the fields kept in sync between ledgers.

Each row names one mutable field and which side wins when the two ledgers
disagree. The diff and apply stages only iterate this table, so syncing an
additional field is a matter of adding a row.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from debtsync.domain.model import Precedence, Severity, Status

if TYPE_CHECKING:
    from collections.abc import Iterable


@dataclass(frozen=True, slots=True)
class FieldRule:
    field: str
    precedence: Precedence = Precedence.AUTHORITATIVE
    vocabulary: frozenset[str] | None = None

    @property
    def propagates(self) -> bool:
        return self.precedence is Precedence.AUTHORITATIVE

    def recognizes(self, value: object) -> bool:
        """Whether ``value`` is in the known vocabulary; always true without one."""

        return self.vocabulary is None or (isinstance(value, str) and value in self.vocabulary)


DEFAULT_FIELD_RULES: Final[tuple[FieldRule, ...]] = (
    FieldRule("severity", vocabulary=frozenset(member.value for member in Severity)),
    FieldRule("status", vocabulary=frozenset(member.value for member in Status)),
)


def validate_field_rules(
    rules: Iterable[FieldRule],
    *,
    identity_field: str,
) -> tuple[FieldRule, ...]:
    """Return ``rules`` as a tuple after checking the table is usable."""

    table = tuple(rules)
    seen: set[str] = set()
    for rule in table:
        if not rule.field:
            raise ValueError("Field rule must name a field")
        if rule.field == identity_field:
            raise ValueError(f"Identity field {identity_field!r} cannot be a synced field")
        if rule.field in seen:
            raise ValueError(f"Duplicate field rule for {rule.field!r}")
        seen.add(rule.field)
    return table
