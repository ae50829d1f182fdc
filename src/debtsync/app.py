"""Application orchestration entry points."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from debtsync.adapters.jsonl import JsonlLedgerStore
from debtsync.config import get_ledger_config
from debtsync.domain.reconciliation import (
    DEFAULT_FIELD_RULES,
    ReconciliationEngine,
    SyncMode,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from debtsync.config import LedgerConfig
    from debtsync.domain.ports import LedgerStore
    from debtsync.domain.reconciliation import FieldRule, SyncOutcome


log = getLogger(__name__)


def sync_deduped_ledger(
    *,
    config: LedgerConfig | None = None,
    mode: SyncMode = SyncMode.PREVIEW,
    authoritative: LedgerStore | None = None,
    target: LedgerStore | None = None,
    rules: Iterable[FieldRule] = DEFAULT_FIELD_RULES,
) -> SyncOutcome:
    """Propagate master-ledger field values into the deduped ledger.

    Stores default to JSONL files at the configured paths; tests and other
    pipeline stages may hand in their own ``LedgerStore`` implementations.
    """

    effective_config = config or get_ledger_config()
    effective_authoritative = authoritative or JsonlLedgerStore(effective_config.authoritative_path)
    effective_target = target or JsonlLedgerStore(effective_config.target_path)
    log.info(
        "Starting ledger sync: mode=%s, authoritative=%s, target=%s",
        mode,
        effective_authoritative.location,
        effective_target.location,
    )

    engine = ReconciliationEngine(
        authoritative=effective_authoritative,
        target=effective_target,
        identity_field=effective_config.identity_field,
        rules=tuple(rules),
    )
    outcome = engine.reconcile(mode)

    log.info(
        f"Finished ledger sync: shared={outcome.shared_count}, "
        f"changes={outcome.total_changes}, applied={outcome.applied}"
    )

    return outcome
