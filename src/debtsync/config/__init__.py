"""Application configuration helpers."""

from __future__ import annotations

from .env import optional_env_var
from .errors import ConfigurationError
from .ledgers import (
    DEFAULT_IDENTITY_FIELD,
    DEFAULT_LEDGER_DIR,
    LedgerConfig,
    get_ledger_config,
)
from .logging import configure_logging

__all__ = [
    "DEFAULT_IDENTITY_FIELD",
    "DEFAULT_LEDGER_DIR",
    "ConfigurationError",
    "LedgerConfig",
    "configure_logging",
    "get_ledger_config",
    "optional_env_var",
]
