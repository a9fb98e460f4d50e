from __future__ import annotations

import argparse
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from transit_topo.app import import_gtfs_lines
from transit_topo.config import ConfigurationError, configure_logging, get_wikibase_config
from transit_topo.domain.errors import NotFoundError
from transit_topo.domain.line_import import RouteOutcome

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="import-gtfs",
        description="Import the lines of a GTFS feed into a Wikibase",
    )
    parser.add_argument(
        "-p",
        "--producer",
        required=True,
        help="Producer item id (Qxxx); anything else is searched by name",
    )
    parser.add_argument(
        "-i",
        "--input-gtfs",
        required=True,
        help="GTFS zip archive (or unpacked directory) to import the lines from",
    )
    parser.add_argument(
        "-c",
        "--config",
        help="TOML configuration file (defaults to $TRANSIT_TOPO_CONFIG)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Only check which lines exist, do not create any item",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug messages",
    )
    return parser.parse_args(list(argv))


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO, force=True)

    try:
        config = get_wikibase_config(parsed_args.config)
    except ConfigurationError:
        log.exception("Configuration error")
        sys.exit(2)

    try:
        result = import_gtfs_lines(
            gtfs_path=parsed_args.input_gtfs,
            producer_ref=parsed_args.producer,
            config=config,
            dry_run=parsed_args.dry_run,
        )
    except NotFoundError as exc:
        log.error("Cannot import without a producer: %s", exc)  # noqa: TRY400
        sys.exit(1)
    except Exception:
        log.exception("Fatal error during import")
        sys.exit(1)

    counts = result.counts
    log.info(
        "Import finished for “%s”: %s routes, inserted=%s, failed=%s, existing=%s, "
        "ambiguous=%s, would_insert=%s",
        result.producer.label,
        len(result.routes),
        counts[RouteOutcome.INSERTED],
        counts[RouteOutcome.INSERT_FAILED],
        counts[RouteOutcome.SKIPPED_EXISTING],
        counts[RouteOutcome.SKIPPED_AMBIGUOUS],
        counts[RouteOutcome.WOULD_INSERT],
    )


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
