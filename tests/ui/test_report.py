from __future__ import annotations

import json

from debtsync.domain.model import MISSING
from debtsync.domain.reconciliation import ChangeSet, FieldChange, SyncMode, SyncOutcome
from debtsync.ui.report import (
    ExitStatus,
    SyncReport,
    exit_status_for,
    render_error_json,
    render_json,
    render_text,
)


def _outcome(*, mode: SyncMode, applied: bool, changes: list[FieldChange]) -> SyncOutcome:
    return SyncOutcome(
        mode=mode,
        authoritative_count=5,
        target_count=4,
        change_set=ChangeSet(changes=changes, shared_count=3),
        applied=applied,
    )


CHANGES = [
    FieldChange(position=0, identity="h1", field="severity", old="S1", new="S0"),
    FieldChange(position=0, identity="h1", field="status", old=MISSING, new="NEW"),
    FieldChange(position=2, identity="h3", field="status", old="NEW", new=None),
]


def test_exit_status_contract() -> None:
    assert exit_status_for(_outcome(mode=SyncMode.PREVIEW, applied=False, changes=[])) == 0
    assert exit_status_for(_outcome(mode=SyncMode.APPLY, applied=False, changes=[])) == 0
    assert exit_status_for(_outcome(mode=SyncMode.PREVIEW, applied=False, changes=CHANGES)) == 1
    assert exit_status_for(_outcome(mode=SyncMode.APPLY, applied=True, changes=CHANGES)) == 0
    assert ExitStatus.ERROR == 2


def test_json_report_is_single_camel_case_object() -> None:
    report = SyncReport.from_outcome(
        _outcome(mode=SyncMode.PREVIEW, applied=False, changes=CHANGES)
    )

    rendered = render_json(report)

    assert "\n" not in rendered
    assert json.loads(rendered) == {
        "masterCount": 5,
        "dedupedCount": 4,
        "sharedCount": 3,
        "severityChanges": 1,
        "statusChanges": 2,
        "totalChanges": 3,
        "applied": False,
        "changesByField": {"severity": 1, "status": 2},
    }


def test_verbose_json_lists_changes() -> None:
    report = SyncReport.from_outcome(
        _outcome(mode=SyncMode.PREVIEW, applied=False, changes=CHANGES),
        include_changes=True,
    )

    payload = json.loads(render_json(report))

    assert payload["changes"] == [
        {"identity": "h1", "field": "severity", "old": "S1", "new": "S0", "oldMissing": False},
        {"identity": "h1", "field": "status", "old": None, "new": "NEW", "oldMissing": True},
        {"identity": "h3", "field": "status", "old": "NEW", "new": None, "oldMissing": False},
    ]


def test_text_report_matches_json_counts() -> None:
    report = SyncReport.from_outcome(
        _outcome(mode=SyncMode.PREVIEW, applied=False, changes=CHANGES)
    )

    text = render_text(report)

    assert "MASTER: 5 items | deduped: 4 items" in text
    assert "Shared (by content_hash): 3 items" in text
    assert "Severity: 1 items differ" in text
    assert "Status: 2 items differ" in text
    assert text.endswith("[--dry-run] Run with --apply to write changes.")


def test_text_report_for_apply_and_noop() -> None:
    applied = render_text(
        SyncReport.from_outcome(_outcome(mode=SyncMode.APPLY, applied=True, changes=CHANGES))
    )
    noop = render_text(
        SyncReport.from_outcome(_outcome(mode=SyncMode.APPLY, applied=False, changes=[]))
    )

    assert applied.endswith("[--apply] Wrote 3 changes to the deduped ledger")
    assert noop.endswith("No changes needed.")


def test_text_report_lists_extra_fields_and_changes() -> None:
    changes = [FieldChange(position=1, identity="h2", field="effort", old=MISSING, new="E1")]
    report = SyncReport.from_outcome(
        _outcome(mode=SyncMode.PREVIEW, applied=False, changes=changes),
        include_changes=True,
    )

    text = render_text(report)

    assert "effort: 1 items differ" in text
    assert "h2 effort: <missing> -> 'E1'" in text


def test_error_json() -> None:
    assert json.loads(render_error_json("Failed to read MASTER_DEBT.jsonl")) == {
        "error": "Failed to read MASTER_DEBT.jsonl"
    }
