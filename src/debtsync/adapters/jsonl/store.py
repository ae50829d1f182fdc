"""Line-delimited JSON ledger store."""

from __future__ import annotations

import json
import logging
import os
import shutil
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from debtsync.domain.ports import LedgerReadError, LedgerWriteError

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from pathlib import Path

    from debtsync.domain.model import Record

log = logging.getLogger(__name__)

ENCODING: Final[str] = "utf-8"


class MalformedLineError(ValueError):
    """Raised for a ledger line that is not a JSON object."""


def _reject_constant(name: str) -> object:
    raise MalformedLineError(f"Non-standard JSON constant {name}")


def decode_line(raw: bytes | str) -> str:
    """Decode one raw ledger line; undecodable bytes make the line malformed."""

    if isinstance(raw, str):
        return raw
    try:
        return raw.decode(ENCODING)
    except UnicodeDecodeError as exc:
        raise MalformedLineError(f"Invalid {ENCODING} at byte {exc.start}") from exc


def parse_line(line: str) -> Record:
    """Parse one ledger line into a record.

    Only strict JSON objects are accepted: ``NaN``/``Infinity`` and non-object
    documents raise ``MalformedLineError``.
    """

    try:
        value = json.loads(line, parse_constant=_reject_constant)
    except json.JSONDecodeError as exc:
        raise MalformedLineError(str(exc)) from exc
    if not isinstance(value, dict):
        raise MalformedLineError(f"Expected a JSON object, got {type(value).__name__}")
    return value


def dump_record(record: Record) -> str:
    return json.dumps(record, ensure_ascii=False, separators=(",", ":"))


def parse_lines(lines: Iterable[bytes | str], *, source: str = "<ledger>") -> list[Record]:
    """Parse ledger lines, skipping blank and malformed ones."""

    records: list[Record] = []
    for line_number, raw in enumerate(lines, start=1):
        try:
            stripped = decode_line(raw).strip()
            if not stripped:
                continue
            records.append(parse_line(stripped))
        except MalformedLineError as exc:
            log.debug("Skipping malformed line %s in %s: %s", line_number, source, exc)
    return records


@dataclass(frozen=True, slots=True)
class JsonlLedgerStore:
    """Ledger persisted as one JSON object per line.

    Rewrites go through a hidden temporary file next to the ledger that replaces
    the original in a single ``os.replace``; a failed write leaves the ledger as
    it was. A symlinked ledger is rewritten at the file it points to, and the
    file keeps its permission bits.
    """

    path: Path

    @property
    def location(self) -> str:
        return str(self.path)

    def read(self) -> list[Record]:
        try:
            data = self.path.read_bytes()
        except OSError as exc:
            raise LedgerReadError(
                f"Failed to read {self.path.name}: {exc}",
                location=self.location,
            ) from exc
        return parse_lines(data.split(b"\n"), source=self.path.name)

    def write(self, records: Sequence[Record]) -> None:
        content = "".join(f"{dump_record(record)}\n" for record in records)
        destination = self.path.resolve()
        temp_path = destination.with_name(f".{destination.name}.tmp-{os.getpid()}")
        try:
            temp_path.write_text(content, encoding=ENCODING, newline="\n")
            if destination.exists():
                shutil.copymode(destination, temp_path)
            os.replace(temp_path, destination)
        except OSError as exc:
            raise LedgerWriteError(
                f"Failed to write {self.path.name}: {exc}",
                location=self.location,
            ) from exc
        finally:
            temp_path.unlink(missing_ok=True)
        log.info("Wrote %s records to %s", len(records), destination)
