"""Logging setup for the ledger sync entry points."""

from __future__ import annotations

import logging
import sys
from typing import Final

LOG_FORMAT: Final[str] = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
QUIET_LEVEL: Final[int] = logging.WARNING
VERBOSE_LEVEL: Final[int] = logging.DEBUG


def log_level_for(*, verbose: bool) -> int:
    return VERBOSE_LEVEL if verbose else QUIET_LEVEL


def configure_logging(*, verbose: bool = False, force: bool = False) -> None:
    """Send log records to stderr, keeping stdout for the sync report.

    Only warnings and errors are shown unless ``verbose`` is set, in which case
    skipped ledger lines and per-run diff details appear as DEBUG records.
    """

    logging.basicConfig(
        level=log_level_for(verbose=verbose),
        format=LOG_FORMAT,
        datefmt="%H:%M:%S",
        stream=sys.stderr,
        force=force,
    )
