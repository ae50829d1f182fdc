"""Rendering of sync outcomes and the process exit-status contract."""

from __future__ import annotations

from enum import IntEnum
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field, JsonValue
from pydantic.alias_generators import to_camel

from debtsync.domain.model import DEFAULT_IDENTITY_FIELD, MISSING

if TYPE_CHECKING:
    from debtsync.domain.reconciliation import FieldChange, SyncOutcome


class ExitStatus(IntEnum):
    OK = 0
    DRIFT = 1
    ERROR = 2


def exit_status_for(outcome: SyncOutcome) -> ExitStatus:
    """Exit 1 only for drift that a preview left on the table."""

    return ExitStatus.DRIFT if outcome.pending else ExitStatus.OK


class ReportModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class ChangeEntry(ReportModel):
    identity: str
    field: str
    old: JsonValue = None
    new: JsonValue = None
    old_missing: bool = False

    @classmethod
    def from_change(cls, change: FieldChange) -> ChangeEntry:
        missing = change.old is MISSING
        return cls(
            identity=change.identity,
            field=change.field,
            old=None if missing else change.old,
            new=change.new,
            old_missing=missing,
        )


class SyncReport(ReportModel):
    """Counts describing one run; identical for the text and JSON encodings."""

    authoritative_count: int = Field(serialization_alias="masterCount")
    target_count: int = Field(serialization_alias="dedupedCount")
    shared_count: int
    severity_changes: int
    status_changes: int
    total_changes: int
    applied: bool
    changes_by_field: dict[str, int] = Field(default_factory=dict[str, int])
    changes: list[ChangeEntry] | None = None

    @classmethod
    def from_outcome(cls, outcome: SyncOutcome, *, include_changes: bool = False) -> SyncReport:
        change_set = outcome.change_set
        return cls(
            authoritative_count=outcome.authoritative_count,
            target_count=outcome.target_count,
            shared_count=outcome.shared_count,
            severity_changes=change_set.count_for("severity"),
            status_changes=change_set.count_for("status"),
            total_changes=change_set.total,
            applied=outcome.applied,
            changes_by_field=dict(change_set.by_field()),
            changes=(
                [ChangeEntry.from_change(change) for change in change_set]
                if include_changes
                else None
            ),
        )


class ErrorReport(ReportModel):
    error: str


def render_json(report: SyncReport) -> str:
    exclude = {"changes"} if report.changes is None else None
    return report.model_dump_json(by_alias=True, exclude=exclude)


def render_error_json(message: str) -> str:
    return ErrorReport(error=message).model_dump_json(by_alias=True)


def render_text(report: SyncReport, *, identity_field: str = DEFAULT_IDENTITY_FIELD) -> str:
    """Human-readable summary of ``report``; records are correlated by ``identity_field``."""

    lines = [
        "TDMS Deduped Sync",
        f"  MASTER: {report.authoritative_count} items | deduped: {report.target_count} items",
        f"  Shared (by {identity_field}): {report.shared_count} items",
        "",
        "  Changes needed:",
        f"    Severity: {report.severity_changes} items differ",
        f"    Status: {report.status_changes} items differ",
    ]
    other = {
        name: count
        for name, count in report.changes_by_field.items()
        if name not in {"severity", "status"}
    }
    lines.extend(f"    {name}: {count} items differ" for name, count in sorted(other.items()))

    if report.changes:
        lines.append("")
        lines.extend(
            f"    {entry.identity} {entry.field}: {_format_old(entry)} -> {entry.new!r}"
            for entry in report.changes
        )

    lines.append("")
    if report.applied:
        lines.append(f"  [--apply] Wrote {report.total_changes} changes to the deduped ledger")
    elif report.total_changes:
        lines.append("  [--dry-run] Run with --apply to write changes.")
    else:
        lines.append("  No changes needed.")
    return "\n".join(lines)


def _format_old(entry: ChangeEntry) -> str:
    return "<missing>" if entry.old_missing else repr(entry.old)
