"""Ledger location configuration."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Final

from debtsync.domain.model import DEFAULT_IDENTITY_FIELD

from .env import optional_env_var
from .errors import ConfigurationError

DEFAULT_LEDGER_DIR: Final[Path] = Path("docs") / "technical-debt"
AUTHORITATIVE_FILENAME: Final[str] = "MASTER_DEBT.jsonl"
TARGET_FILENAME: Final[Path] = Path("raw") / "deduped.jsonl"

LEDGER_DIR_ENV: Final[str] = "DEBTSYNC_LEDGER_DIR"
AUTHORITATIVE_PATH_ENV: Final[str] = "DEBTSYNC_AUTHORITATIVE_PATH"
TARGET_PATH_ENV: Final[str] = "DEBTSYNC_TARGET_PATH"
IDENTITY_FIELD_ENV: Final[str] = "DEBTSYNC_IDENTITY_FIELD"


@dataclass(frozen=True, slots=True)
class LedgerConfig:
    """Locations of the two ledgers and the field that correlates their records.

    ``authoritative_path`` points at the master ledger whose values win,
    ``target_path`` at the deduped ledger that gets rewritten.
    """

    authoritative_path: Path
    target_path: Path
    identity_field: str = DEFAULT_IDENTITY_FIELD

    def __post_init__(self) -> None:
        if not self.identity_field.strip():
            raise ConfigurationError("Identity field name must not be blank")
        authoritative = self.authoritative_path.expanduser().resolve()
        if authoritative == self.target_path.expanduser().resolve():
            raise ConfigurationError(
                f"Authoritative and target ledger are the same file: {self.target_path}"
            )


def get_ledger_config(
    *,
    authoritative_path: Path | None = None,
    target_path: Path | None = None,
    identity_field: str | None = None,
) -> LedgerConfig:
    """Build the ledger configuration; explicit arguments win over the environment."""

    env_dir = optional_env_var(LEDGER_DIR_ENV)
    ledger_dir = Path(env_dir) if env_dir else DEFAULT_LEDGER_DIR

    if authoritative_path is None:
        env_path = optional_env_var(AUTHORITATIVE_PATH_ENV)
        authoritative_path = Path(env_path) if env_path else ledger_dir / AUTHORITATIVE_FILENAME
    if target_path is None:
        env_path = optional_env_var(TARGET_PATH_ENV)
        target_path = Path(env_path) if env_path else ledger_dir / TARGET_FILENAME
    if identity_field is None:
        identity_field = optional_env_var(IDENTITY_FIELD_ENV) or DEFAULT_IDENTITY_FIELD

    return LedgerConfig(
        authoritative_path=authoritative_path.expanduser(),
        target_path=target_path.expanduser(),
        identity_field=identity_field,
    )
