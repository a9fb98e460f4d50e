"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable
from logging import getLogger
from typing import TYPE_CHECKING

from transit_topo.adapters.gtfs import read_routes
from transit_topo.adapters.http_client import HttpClient
from transit_topo.adapters.wikibase import (
    SparqlClient,
    WikibaseApiClient,
    WikibaseResolver,
    WikibaseWriter,
)
from transit_topo.domain.line_import import ImportLinesResult, import_lines

if TYPE_CHECKING:
    from pathlib import Path

    from transit_topo.config.http import HttpConfig
    from transit_topo.config.wikibase import WikibaseConfig

HttpClientFactory = Callable[["HttpConfig"], HttpClient]

log = getLogger(__name__)


def import_gtfs_lines(
    *,
    gtfs_path: str | Path,
    producer_ref: str,
    config: WikibaseConfig,
    dry_run: bool = False,
    client_factory: HttpClientFactory = HttpClient,
) -> ImportLinesResult:
    """Import the lines of a GTFS feed into the configured Wikibase."""

    routes = read_routes(gtfs_path)
    log.info(
        "Starting GTFS line import: feed=%s, producer=%s, api=%s, dry_run=%s",
        gtfs_path,
        producer_ref,
        config.api_endpoint,
        dry_run,
    )

    with (
        client_factory(config.api_http_config()) as api_http,
        client_factory(config.sparql_http_config()) as sparql_http,
    ):
        api = WikibaseApiClient(http=api_http)
        resolver = WikibaseResolver(config=config, sparql=SparqlClient(http=sparql_http), api=api)
        writer = WikibaseWriter(config=config, api=api)
        return import_lines(
            routes,
            producer_ref=producer_ref,
            resolver=resolver,
            writer=writer,
            dry_run=dry_run,
        )
