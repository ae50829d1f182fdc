"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class Severity(StrEnum):
    """Urgency levels used by the debt ledgers, most urgent first."""

    S0 = "S0"
    S1 = "S1"
    S2 = "S2"
    S3 = "S3"


class Status(StrEnum):
    """Lifecycle states of a debt record."""

    NEW = "NEW"
    VERIFIED = "VERIFIED"
    FALSE_POSITIVE = "FALSE_POSITIVE"
    IN_PROGRESS = "IN_PROGRESS"
    RESOLVED = "RESOLVED"


class Precedence(StrEnum):
    """Which ledger's value wins for a synced field."""

    AUTHORITATIVE = "authoritative"
    TARGET = "target"
