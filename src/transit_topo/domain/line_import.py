"""Reconcile feed routes against the knowledge base and create the missing lines."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from enum import StrEnum
from logging import getLogger
from typing import TYPE_CHECKING

from .errors import ApiError, NotFoundError, TransportError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .model import Producer, Route
    from .ports import LineResolver, LineWriter

log = getLogger(__name__)


class RouteOutcome(StrEnum):
    INSERTED = "inserted"
    INSERT_FAILED = "insert_failed"
    SKIPPED_EXISTING = "skipped_existing"
    SKIPPED_AMBIGUOUS = "skipped_ambiguous"
    WOULD_INSERT = "would_insert"


@dataclass(slots=True, frozen=True)
class RouteResult:
    route: Route
    outcome: RouteOutcome
    entity_ids: tuple[str, ...] = ()
    error: str | None = None


@dataclass(slots=True)
class ImportLinesResult:
    """Outcome of an import run, one entry per route in feed order."""

    producer: Producer
    routes: list[RouteResult] = field(default_factory=list["RouteResult"])

    @property
    def counts(self) -> Counter[RouteOutcome]:
        return Counter(result.outcome for result in self.routes)

    def count(self, outcome: RouteOutcome) -> int:
        return self.counts[outcome]


def resolve_producer(resolver: LineResolver, producer_ref: str) -> Producer:
    """Resolve the producer or raise :class:`NotFoundError`."""

    log.info("Searching the producer %s", producer_ref)
    producer = resolver.resolve_producer(producer_ref)
    if producer is None:
        raise NotFoundError(f"No producer found for {producer_ref!r}")
    log.info("Found the producer “%s” (%s)", producer.label, producer.id)
    return producer


def import_lines(
    routes: Iterable[Route],
    *,
    producer_ref: str,
    resolver: LineResolver,
    writer: LineWriter,
    dry_run: bool = False,
) -> ImportLinesResult:
    """Import every route of a feed as a line of the given producer.

    The producer and the write token are resolved up front; failing either aborts
    the run before any line is checked. Afterwards each route is reconciled on its
    own: a rejected or failed write is recorded and the run moves on, while a failed
    duplicate check propagates, since writing without it could create duplicates.
    With ``dry_run`` the write path is never touched.
    """

    producer = resolve_producer(resolver, producer_ref)
    if not dry_run:
        writer.get_write_token()

    log.info("Starting the importation of lines")
    result = ImportLinesResult(producer=producer)
    for route in routes:
        route_result = _import_route(
            route,
            producer=producer,
            resolver=resolver,
            writer=writer,
            dry_run=dry_run,
        )
        result.routes.append(route_result)

    counts = result.counts
    log.info(
        "Finished line import for %s: inserted=%s, failed=%s, existing=%s, ambiguous=%s",
        producer.id,
        counts[RouteOutcome.INSERTED],
        counts[RouteOutcome.INSERT_FAILED],
        counts[RouteOutcome.SKIPPED_EXISTING],
        counts[RouteOutcome.SKIPPED_AMBIGUOUS],
    )
    return result


def _import_route(
    route: Route,
    *,
    producer: Producer,
    resolver: LineResolver,
    writer: LineWriter,
    dry_run: bool,
) -> RouteResult:
    matches = resolver.find_matching_line(producer.id, route.id)

    if len(matches) == 1:
        log.info("Line %s already exists with id %s, skipping", route.display_name, matches[0])
        return RouteResult(route, RouteOutcome.SKIPPED_EXISTING, entity_ids=(matches[0],))

    if len(matches) > 1:
        log.warning(
            "Line %s exists %s times (%s). Something is not right",
            route.display_name,
            len(matches),
            ", ".join(matches),
        )
        return RouteResult(route, RouteOutcome.SKIPPED_AMBIGUOUS, entity_ids=tuple(matches))

    if dry_run:
        log.info("Line %s does not exist, would insert", route.display_name)
        return RouteResult(route, RouteOutcome.WOULD_INSERT)

    log.info("Line %s does not exist, inserting", route.display_name)
    try:
        entity_id = writer.insert_route(producer.id, producer.label, route)
    except ApiError as exc:
        log.error("Insertion of line %s failed: %s", route.display_name, exc.describe())
        return RouteResult(route, RouteOutcome.INSERT_FAILED, error=exc.describe())
    except TransportError as exc:
        log.error("Insertion of line %s failed: %s", route.display_name, exc)
        return RouteResult(route, RouteOutcome.INSERT_FAILED, error=str(exc))

    log.info("Ok, new item id: %s", entity_id)
    return RouteResult(route, RouteOutcome.INSERTED, entity_ids=(entity_id,))
