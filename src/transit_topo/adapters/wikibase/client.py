"""HTTP client for the Wikibase action API (``api.php``)."""

from __future__ import annotations

import json
from logging import getLogger
from typing import TYPE_CHECKING

import httpx

from transit_topo.domain.errors import ApiError, ApiMessage, SchemaError, TransportError

from .schema import (
    EditEntityResponse,
    EntityResponse,
    ErrorResponse,
    SearchResponse,
    TokenResponse,
    parse_payload,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from transit_topo.adapters.http_client import HttpClient

    from .schema import ApiErrorPayload

log = getLogger(__name__)

DEFAULT_SEARCH_LIMIT = 7


def to_api_error(payload: ApiErrorPayload) -> ApiError:
    messages = tuple(
        ApiMessage(name=message.name, parameters=tuple(message.parameters))
        for message in payload.messages
    )
    return ApiError(payload.code, payload.info, messages)


class WikibaseApiClient:
    """Low-level client for the token, search, fetch and edit actions."""

    def __init__(self, *, http: HttpClient) -> None:
        self._http = http

    def fetch_csrf_token(self) -> str:
        payload = self._perform_request(
            "GET",
            {"action": "query", "meta": "tokens", "type": "csrf"},
        )
        self._raise_for_error(payload)
        return parse_payload(TokenResponse, payload).query.tokens.csrftoken

    def search_entities(
        self,
        query: str,
        *,
        language: str,
        entity_type: str = "item",
        limit: int = DEFAULT_SEARCH_LIMIT,
    ) -> SearchResponse:
        payload = self._perform_request(
            "GET",
            {
                "action": "wbsearchentities",
                "search": query,
                "language": language,
                "uselang": language,
                "type": entity_type,
                "limit": str(limit),
            },
        )
        self._raise_for_error(payload)
        return parse_payload(SearchResponse, payload)

    def get_entities(
        self,
        ids: Iterable[str],
        *,
        props: tuple[str, ...] = ("labels",),
    ) -> EntityResponse:
        payload = self._perform_request(
            "GET",
            {"action": "wbgetentities", "ids": "|".join(ids), "props": "|".join(props)},
        )
        self._raise_for_error(payload)
        return parse_payload(EntityResponse, payload)

    def edit_entity(
        self,
        *,
        data: Mapping[str, object],
        token: str,
        new: str = "item",
        summary: str | None = None,
    ) -> EditEntityResponse:
        """Create an entity; an error payload is returned, not raised."""

        form = {
            "action": "wbeditentity",
            "new": new,
            "data": json.dumps(data, ensure_ascii=False),
            "token": token,
        }
        if summary:
            form["summary"] = summary
        payload = self._perform_request("POST", form)
        return parse_payload(EditEntityResponse, payload)

    def _perform_request(self, method: str, fields: dict[str, str]) -> dict[str, object]:
        action = fields["action"]
        fields = {**fields, "format": "json"}
        try:
            if method == "GET":
                response = self._http.get(params=fields)
            else:
                response = self._http.post(data=fields)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise TransportError(f"Wikibase API call {action!r} failed: {exc}") from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise SchemaError(f"Wikibase API call {action!r} did not return JSON") from exc
        if not isinstance(payload, dict):
            raise SchemaError(f"Unexpected Wikibase API payload for {action!r}")
        return payload

    @staticmethod
    def _raise_for_error(payload: dict[str, object]) -> None:
        if "error" not in payload:
            return
        error = parse_payload(ErrorResponse, payload).error
        log.debug(f"Wikibase API error {error.code}: {error.info}")
        raise to_api_error(error)
