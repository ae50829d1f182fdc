from __future__ import annotations

from .enums import Precedence, Severity, Status
from .record import DEFAULT_IDENTITY_FIELD, MISSING, Record, field_value, record_identity

__all__ = [
    "DEFAULT_IDENTITY_FIELD",
    "MISSING",
    "Precedence",
    "Record",
    "Severity",
    "Status",
    "field_value",
    "record_identity",
]
