"""JSON Lines adapter for debt ledgers."""

from __future__ import annotations

from .store import (
    JsonlLedgerStore,
    MalformedLineError,
    decode_line,
    dump_record,
    parse_line,
    parse_lines,
)

__all__ = [
    "JsonlLedgerStore",
    "MalformedLineError",
    "decode_line",
    "dump_record",
    "parse_line",
    "parse_lines",
]
