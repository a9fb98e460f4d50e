"""Test doubles for the Wikibase endpoints and the import ports."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING
from urllib.parse import parse_qs

import httpx

from transit_topo.adapters.http_client import HttpClient
from transit_topo.domain.model import Producer

if TYPE_CHECKING:
    from transit_topo.config.http import HttpConfig
    from transit_topo.domain.model import Route

Handler = Callable[[httpx.Request], httpx.Response]


def make_http_client(config: HttpConfig, handler: Handler) -> HttpClient:
    return HttpClient(config, transport=httpx.MockTransport(handler))


def request_fields(request: httpx.Request) -> dict[str, str]:
    """Return query parameters, or form fields for POST requests."""

    if request.method == "POST":
        parsed = parse_qs(request.content.decode("utf-8"), keep_blank_values=True)
        return {key: values[0] for key, values in parsed.items()}
    return dict(request.url.params)


@dataclass(slots=True)
class InsertCall:
    producer_ref: str
    producer_label: str
    route: Route


@dataclass(slots=True)
class FakeKnowledgeBase:
    """In-memory stand-in implementing both the resolver and the writer ports.

    Inserted lines become visible to later duplicate checks, like in a real
    Wikibase once the query service has caught up.
    """

    producers: dict[str, Producer] = field(default_factory=dict)
    lines: dict[tuple[str, str], list[str]] = field(default_factory=dict)
    rejected_routes: dict[str, Exception] = field(default_factory=dict)
    token_error: Exception | None = None
    next_id: int = 999
    insert_calls: list[InsertCall] = field(default_factory=list)
    match_queries: list[tuple[str, str]] = field(default_factory=list)
    token_requests: int = 0

    def resolve_producer(self, producer_ref: str) -> Producer | None:
        if producer_ref in self.producers:
            return self.producers[producer_ref]
        for producer in self.producers.values():
            if producer.label == producer_ref:
                return producer
        return None

    def find_matching_line(self, producer_ref: str, external_line_id: str) -> list[str]:
        self.match_queries.append((producer_ref, external_line_id))
        return list(self.lines.get((producer_ref, external_line_id), []))

    def get_write_token(self) -> str:
        self.token_requests += 1
        if self.token_error is not None:
            raise self.token_error
        return "token+\\"

    def insert_route(self, producer_ref: str, producer_label: str, route: Route) -> str:
        self.insert_calls.append(InsertCall(producer_ref, producer_label, route))
        error = self.rejected_routes.get(route.id)
        if error is not None:
            raise error
        entity_id = f"Q{self.next_id}"
        self.next_id += 1
        self.lines.setdefault((producer_ref, route.id), []).append(entity_id)
        return entity_id
