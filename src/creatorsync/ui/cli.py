from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from signal import SIGINT, getsignal, signal
from typing import TYPE_CHECKING

from creatorsync.adapters.catalog import CatalogError
from creatorsync.app import (
    sync_catalog,
    sync_group_file,
    update_catalog_indexes,
    update_master_index,
)
from creatorsync.config import ConfigurationError, configure_logging, load_environment
from creatorsync.domain.reconciliation import EXIT_FAILURES, EXIT_INTERRUPTED, EXIT_OK

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)

EXIT_USAGE = 2


class StopRequest:
    """SIGINT handler: the first interrupt asks the run to stop, the second aborts."""

    def __init__(self) -> None:
        self.requested = False

    def __call__(self) -> bool:
        return self.requested

    def handle(self, _signal_received: int, _frame: FrameType | None) -> None:
        if self.requested:
            log.warning("Interrupted again, aborting")
            raise KeyboardInterrupt
        self.requested = True
        log.warning("Stop requested; finishing the current record (Ctrl+C again to abort)")


def _non_negative_float(value: str) -> float:
    try:
        parsed = float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Invalid number: {value}") from exc
    if parsed < 0:
        raise argparse.ArgumentTypeError("Delay must be non-negative")
    return parsed


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Synchronise the creator catalog")
    parser.add_argument(
        "--env",
        choices=("development", "production"),
        help="Environment whose .env file is loaded (defaults to $CREATORSYNC_ENV)",
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        help="Catalog root directory (defaults to $CATALOG_DATA_DIR or ./data)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    sync = subparsers.add_parser("sync", help="Reconcile every catalog group")
    sync.add_argument(
        "--delay",
        type=_non_negative_float,
        help="Seconds to wait after each record (defaults to config)",
    )

    sync_file = subparsers.add_parser("sync-file", help="Reconcile a single members.json")
    sync_file.add_argument("path", type=Path, help="Path to a members.json file")
    sync_file.add_argument(
        "--delay",
        type=_non_negative_float,
        help="Seconds to wait after each record (defaults to config)",
    )

    subparsers.add_parser("index", help="Regenerate jobs.json and groups.json files")
    subparsers.add_parser("master", help="Regenerate master.json")

    return parser.parse_args(list(argv))


def _run_command(args: argparse.Namespace, stop: StopRequest) -> int:
    if args.command == "sync":
        report = sync_catalog(
            catalog_dir=args.data_dir,
            delay_seconds=args.delay,
            should_stop=stop,
        )
        return report.exit_code
    if args.command == "sync-file":
        report = sync_group_file(args.path, delay_seconds=args.delay, should_stop=stop)
        return report.exit_code
    if args.command == "index":
        update_catalog_indexes(catalog_dir=args.data_dir)
        return EXIT_OK
    if args.command == "master":
        update_master_index(catalog_dir=args.data_dir)
        return EXIT_OK
    raise ValueError(f"Unsupported command: {args.command}")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    stop = StopRequest()
    previous_handler = getsignal(SIGINT)
    signal(SIGINT, stop.handle)
    try:
        load_environment(parsed_args.env)
        code = _run_command(parsed_args, stop)
    except ConfigurationError:
        log.exception("Configuration error")
        code = EXIT_USAGE
    except CatalogError:
        log.exception("Catalog error")
        code = EXIT_FAILURES
    except KeyboardInterrupt:
        log.warning("Closed by user (Ctrl+C)")
        code = EXIT_INTERRUPTED
    except Exception:
        log.exception("Fatal error during %s", parsed_args.command)
        code = EXIT_FAILURES
    finally:
        if previous_handler is not None:
            signal(SIGINT, previous_handler)

    if code != EXIT_OK:
        sys.exit(code)


if __name__ == "__main__":
    main()
