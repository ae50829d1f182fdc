"""Orchestrator for the ledger reconciliation subsystem.

The engine composes the index/diff/apply stages around two explicit ledger
stores. It never reads a path on its own: whichever stores the caller passes in
are the whole world the run can see or touch.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from debtsync.domain.model import DEFAULT_IDENTITY_FIELD

from .apply import apply_change_set
from .diff import diff_records
from .fields import DEFAULT_FIELD_RULES, validate_field_rules
from .index import build_identity_index

if TYPE_CHECKING:
    from debtsync.domain.ports import LedgerStore

    from .apply import ApplyChangeSet, ApplyResult
    from .diff import ChangeSet, DiffRecords
    from .fields import FieldRule
    from .index import BuildIdentityIndex

log = logging.getLogger(__name__)


class SyncMode(StrEnum):
    """Whether a run may write the target ledger."""

    PREVIEW = "preview"
    APPLY = "apply"


@dataclass(slots=True, kw_only=True)
class SyncOutcome:
    """Everything a report needs to describe one reconciliation run."""

    mode: SyncMode
    authoritative_count: int
    target_count: int
    change_set: ChangeSet
    apply_result: ApplyResult | None = None
    applied: bool = False

    @property
    def shared_count(self) -> int:
        return self.change_set.shared_count

    @property
    def total_changes(self) -> int:
        return self.change_set.total

    @property
    def pending(self) -> bool:
        """Drift exists and was not written."""

        return bool(self.change_set) and not self.applied


@dataclass(slots=True)
class ReconciliationEngine:
    """Propagate synced fields from the authoritative ledger into the target ledger."""

    authoritative: LedgerStore
    target: LedgerStore
    identity_field: str = DEFAULT_IDENTITY_FIELD
    rules: tuple[FieldRule, ...] = DEFAULT_FIELD_RULES
    index: BuildIdentityIndex = build_identity_index
    diff: DiffRecords = diff_records
    apply: ApplyChangeSet = apply_change_set

    def __post_init__(self) -> None:
        self.rules = validate_field_rules(self.rules, identity_field=self.identity_field)

    def reconcile(self, mode: SyncMode = SyncMode.PREVIEW) -> SyncOutcome:
        """Run one reconciliation pass.

        Raises ``LedgerReadError`` before any processing if either ledger cannot be
        read, and ``LedgerWriteError`` if committing the target ledger fails.
        """

        mode = SyncMode(mode)
        authoritative_records = self.authoritative.read()
        target_records = self.target.read()

        authoritative_index = self.index(
            authoritative_records,
            identity_field=self.identity_field,
        )
        change_set = self.diff(
            target_records,
            authoritative_index,
            identity_field=self.identity_field,
            rules=self.rules,
        )
        log.debug(
            "Diffed %s target records against %s authoritative identities: %s changes",
            len(target_records),
            len(authoritative_index),
            change_set.total,
        )

        outcome = SyncOutcome(
            mode=mode,
            authoritative_count=len(authoritative_records),
            target_count=len(target_records),
            change_set=change_set,
        )
        if mode is SyncMode.PREVIEW or not change_set:
            return outcome

        outcome.apply_result = self.apply(
            target_records,
            change_set,
            identity_field=self.identity_field,
        )
        self.target.write(target_records)
        outcome.applied = True
        return outcome
