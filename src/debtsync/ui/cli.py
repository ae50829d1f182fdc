# ruff: noqa: T201

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING, Any, NoReturn

from dotenv import find_dotenv, load_dotenv

from debtsync.app import sync_deduped_ledger
from debtsync.config import ConfigurationError, configure_logging, get_ledger_config
from debtsync.domain.ports import LedgerStoreError
from debtsync.domain.reconciliation import SyncMode
from debtsync.ui.report import (
    ExitStatus,
    SyncReport,
    exit_status_for,
    render_error_json,
    render_json,
    render_text,
)

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


class _LedgerArgumentParser(argparse.ArgumentParser):
    """Argument parser that reports usage errors as JSON when ``--json`` was given."""

    def __init__(self, *args: Any, json_errors: bool = False, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.json_errors = json_errors

    def error(self, message: str) -> NoReturn:
        if not self.json_errors:
            super().error(message)
        print(render_error_json(message))
        sys.exit(ExitStatus.ERROR)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = _LedgerArgumentParser(
        json_errors="--json" in argv,
        prog="debtsync",
        description=(
            "Propagate severity and status changes from the master debt ledger into the "
            "deduped ledger without adding or removing items"
        ),
        epilog="Exit codes: 0 = synced or no changes, 1 = changes pending, 2 = error",
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--dry-run",
        dest="mode",
        action="store_const",
        const=SyncMode.PREVIEW,
        help="Preview changes without writing (default)",
    )
    mode.add_argument(
        "--apply",
        dest="mode",
        action="store_const",
        const=SyncMode.APPLY,
        help="Write changes to the deduped ledger",
    )
    parser.set_defaults(mode=SyncMode.PREVIEW)
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output machine-readable JSON instead of human-readable text",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="List every field change and enable debug logging",
    )
    parser.add_argument(
        "--authoritative",
        type=Path,
        help="Path to the master ledger (defaults to config)",
    )
    parser.add_argument(
        "--target",
        type=Path,
        help="Path to the deduped ledger (defaults to config)",
    )
    parser.add_argument(
        "--identity-field",
        type=str,
        help="Record field holding the content hash (defaults to config)",
    )
    return parser.parse_args(list(argv))


def _report_error(message: str, *, as_json: bool) -> None:
    if as_json:
        print(render_error_json(message))
    else:
        print(f"Error: {message}", file=sys.stderr)


def main(argv: Sequence[str] | None = None) -> NoReturn:
    """Main application entry point; always exits with the sync status code."""

    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(verbose=parsed_args.verbose)

    try:
        config = get_ledger_config(
            authoritative_path=parsed_args.authoritative,
            target_path=parsed_args.target,
            identity_field=parsed_args.identity_field,
        )
        outcome = sync_deduped_ledger(config=config, mode=parsed_args.mode)
    except (ConfigurationError, LedgerStoreError) as exc:
        log.debug("Ledger sync aborted", exc_info=True)
        _report_error(str(exc), as_json=parsed_args.json)
        sys.exit(ExitStatus.ERROR)
    except Exception as exc:
        log.exception("Fatal error during ledger sync")
        _report_error(str(exc), as_json=parsed_args.json)
        sys.exit(ExitStatus.ERROR)

    report = SyncReport.from_outcome(outcome, include_changes=parsed_args.verbose)
    if parsed_args.json:
        print(render_json(report))
    else:
        print(render_text(report, identity_field=config.identity_field))
    sys.exit(exit_status_for(outcome))


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(ExitStatus.ERROR)


def run() -> None:
    """Console-script entry point."""

    load_dotenv(find_dotenv(usecwd=True))
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
