"""SPARQL query service client and the queries the resolver runs."""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx

from transit_topo.config.wikibase import item_id
from transit_topo.domain.errors import SchemaError, TransportError

from .schema import SparqlResponse, is_item_id, parse_payload

if TYPE_CHECKING:
    from transit_topo.adapters.http_client import HttpClient
    from transit_topo.config.wikibase import WikibaseConfig

RDFS_PREFIX = "http://www.w3.org/2000/01/rdf-schema#"

_LITERAL_ESCAPES = str.maketrans(
    {
        "\\": "\\\\",
        '"': '\\"',
        "\n": "\\n",
        "\r": "\\r",
        "\t": "\\t",
    }
)


class SparqlClient:
    def __init__(self, *, http: HttpClient) -> None:
        self._http = http

    def select(self, query: str) -> list[dict[str, str]]:
        """Run a SELECT query and return each binding as ``{variable: value}``."""

        try:
            response = self._http.get(params={"query": query, "format": "json"})
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise TransportError(f"SPARQL query failed: {exc}") from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise SchemaError("SPARQL endpoint did not return JSON") from exc
        return parse_payload(SparqlResponse, payload).rows()


def escape_literal(value: str) -> str:
    return value.translate(_LITERAL_ESCAPES)


def local_id(iri: str) -> str:
    """``http://example.org/entity/Q999`` -> ``Q999``."""

    return iri.rstrip("/").rsplit("/", 1)[-1]


def _require_item_id(value: str) -> str:
    if not is_item_id(value):
        raise ValueError(f"Not an item identifier: {value!r}")
    return value


def producer_label_query(config: WikibaseConfig, producer_id: str) -> str:
    """Label of ``producer_id``, only if it is an instance of the producer class."""

    producer = _require_item_id(producer_id)
    producer_class = item_id(config.items.producer)
    return f"""PREFIX wd: <{config.entity_prefix}>
PREFIX wdt: <{config.property_prefix}>
PREFIX rdfs: <{RDFS_PREFIX}>
SELECT ?label WHERE {{
  wd:{producer} wdt:{config.properties.instance_of} wd:{producer_class} ;
      rdfs:label ?label .
  FILTER(LANG(?label) = "{escape_literal(config.label_language)}")
}}
LIMIT 1"""


def matching_line_query(config: WikibaseConfig, producer_id: str, external_line_id: str) -> str:
    properties = config.properties
    return f"""PREFIX wd: <{config.entity_prefix}>
PREFIX wdt: <{config.property_prefix}>
SELECT ?line WHERE {{
  ?line wdt:{properties.instance_of} wd:{item_id(config.items.line)} ;
        wdt:{properties.produced_by} wd:{_require_item_id(producer_id)} ;
        wdt:{properties.gtfs_id} "{escape_literal(external_line_id)}" .
}}"""
