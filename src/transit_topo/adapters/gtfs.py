"""Read the routes of a GTFS feed (zip archive or unpacked directory)."""

from __future__ import annotations

import csv
import io
import zipfile
from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING, Final

from transit_topo.domain.model import Route, RouteType

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

log = getLogger(__name__)

ROUTES_FILE: Final[str] = "routes.txt"
REQUIRED_COLUMNS: Final[frozenset[str]] = frozenset({"route_id", "route_type"})


class GtfsFeedError(ValueError):
    """Raised when the feed is unreadable or its routes.txt is malformed."""


def read_routes(path: str | Path) -> list[Route]:
    """Return the routes of the feed at ``path`` in file order."""

    feed_path = Path(path).expanduser()
    if feed_path.is_dir():
        routes_path = feed_path / ROUTES_FILE
        if not routes_path.is_file():
            raise GtfsFeedError(f"No {ROUTES_FILE} in {feed_path}")
        with routes_path.open(encoding="utf-8-sig", newline="") as handle:
            routes = list(parse_routes(handle))
    else:
        routes = _read_zipped_routes(feed_path)

    log.info("Read %s routes from %s", len(routes), feed_path)
    return routes


def _read_zipped_routes(feed_path: Path) -> list[Route]:
    try:
        with zipfile.ZipFile(feed_path) as archive:
            member = _find_routes_member(archive)
            with archive.open(member) as raw:
                handle = io.TextIOWrapper(raw, encoding="utf-8-sig", newline="")
                return list(parse_routes(handle))
    except FileNotFoundError as exc:
        raise GtfsFeedError(f"GTFS feed not found: {feed_path}") from exc
    except zipfile.BadZipFile as exc:
        raise GtfsFeedError(f"Not a GTFS zip archive: {feed_path}") from exc


def _find_routes_member(archive: zipfile.ZipFile) -> str:
    names = archive.namelist()
    if ROUTES_FILE in names:
        return ROUTES_FILE
    # some producers zip the feed inside a top-level folder
    nested = sorted(name for name in names if name.endswith(f"/{ROUTES_FILE}"))
    if not nested:
        raise GtfsFeedError(f"No {ROUTES_FILE} in archive")
    return nested[0]


def parse_routes(lines: Iterable[str]) -> Iterator[Route]:
    reader = csv.DictReader(lines)
    columns = {name.strip() for name in reader.fieldnames or ()}
    missing = REQUIRED_COLUMNS - columns
    if missing:
        raise GtfsFeedError(f"{ROUTES_FILE} lacks columns: {', '.join(sorted(missing))}")

    for line_number, row in enumerate(reader, start=2):
        record = {key.strip(): (value or "").strip() for key, value in row.items() if key}
        route_id = record.get("route_id", "")
        if not route_id:
            raise GtfsFeedError(f"{ROUTES_FILE}:{line_number}: empty route_id")
        raw_type = record.get("route_type", "")
        try:
            code = int(raw_type)
        except ValueError as exc:
            raise GtfsFeedError(
                f"{ROUTES_FILE}:{line_number}: invalid route_type {raw_type!r}"
            ) from exc
        yield Route(
            id=route_id,
            short_name=record.get("route_short_name", ""),
            long_name=record.get("route_long_name", ""),
            route_type=RouteType.from_gtfs(code),
            gtfs_route_type=code,
        )
