"""Reconciliation core for keeping the deduped ledger in line with the master ledger.

Layered flow of one run:
1) read both ledgers through their stores
2) index authoritative records by identity
3) diff target records against the index, field rule by field rule
4) in apply mode, write the change set into the target records
5) persist the target ledger once, and only when something changed
"""

from __future__ import annotations

from .apply import ApplyResult, StaleChangeSetError, apply_change_set
from .diff import ChangeSet, FieldChange, diff_records, values_equal
from .engine import ReconciliationEngine, SyncMode, SyncOutcome
from .fields import DEFAULT_FIELD_RULES, FieldRule, validate_field_rules
from .index import IdentityIndex, build_identity_index

__all__ = [
    "DEFAULT_FIELD_RULES",
    "ApplyResult",
    "ChangeSet",
    "FieldChange",
    "FieldRule",
    "IdentityIndex",
    "ReconciliationEngine",
    "StaleChangeSetError",
    "SyncMode",
    "SyncOutcome",
    "apply_change_set",
    "build_identity_index",
    "diff_records",
    "validate_field_rules",
    "values_equal",
]
