from __future__ import annotations

import copy
import json
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, TypeAlias

import pytest

from debtsync.domain.ports import LedgerWriteError

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from pathlib import Path

    from debtsync.domain.model import Record


@dataclass
class MemoryLedgerStore:
    """In-memory ``LedgerStore`` that records every write."""

    records: list[Record]
    location: str = "memory"
    fail_writes: bool = False
    writes: list[list[Record]] = field(default_factory=list["list[Record]"])
    reads: int = 0

    def read(self) -> list[Record]:
        self.reads += 1
        return copy.deepcopy(self.records)

    def write(self, records: Sequence[Record]) -> None:
        if self.fail_writes:
            raise LedgerWriteError(f"Failed to write {self.location}", location=self.location)
        self.records = copy.deepcopy(list(records))
        self.writes.append(copy.deepcopy(self.records))


StoreFactory: TypeAlias = "Callable[..., MemoryLedgerStore]"
LedgerWriter: TypeAlias = "Callable[[Path, Sequence[Record]], Path]"


@pytest.fixture
def memory_store() -> StoreFactory:
    def factory(
        records: Sequence[Record],
        *,
        location: str = "memory",
        fail_writes: bool = False,
    ) -> MemoryLedgerStore:
        return MemoryLedgerStore(
            records=copy.deepcopy(list(records)),
            location=location,
            fail_writes=fail_writes,
        )

    return factory


@pytest.fixture
def write_ledger() -> LedgerWriter:
    def writer(path: Path, records: Sequence[Record]) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            "".join(json.dumps(record, separators=(",", ":")) + "\n" for record in records),
            encoding="utf-8",
        )
        return path

    return writer


@pytest.fixture
def ledger_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "docs" / "technical-debt"
    (directory / "raw").mkdir(parents=True)
    return directory


@pytest.fixture(autouse=True)
def _isolate_ledger_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "DEBTSYNC_LEDGER_DIR",
        "DEBTSYNC_AUTHORITATIVE_PATH",
        "DEBTSYNC_TARGET_PATH",
        "DEBTSYNC_IDENTITY_FIELD",
    ):
        monkeypatch.delenv(name, raising=False)
