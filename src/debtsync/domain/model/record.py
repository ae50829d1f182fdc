"""Record representation shared by the ledger port and the reconciliation stages.

Records stay plain JSON objects. Only the identity and the synced fields are ever
looked at; every other key is opaque payload that must survive a rewrite untouched.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Final, TypeAlias

Record: TypeAlias = dict[str, object]

DEFAULT_IDENTITY_FIELD: Final[str] = "content_hash"


class _Missing:
    """Sentinel for a field that is absent from a record (as opposed to JSON null)."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Final = _Missing()


def record_identity(record: Mapping[str, object], identity_field: str) -> str | None:
    """Return the record's identity, or ``None`` when it cannot be correlated."""

    value = record.get(identity_field)
    if isinstance(value, str) and value:
        return value
    return None


def field_value(record: Mapping[str, object], field: str) -> object:
    """Return the raw value of ``field`` or ``MISSING`` when the key is absent."""

    return record.get(field, MISSING)
