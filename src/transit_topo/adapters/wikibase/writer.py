"""Write path: token handling and line creation."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, cast

from .client import to_api_error
from .translator import build_line_entity

if TYPE_CHECKING:
    from transit_topo.config.wikibase import WikibaseConfig
    from transit_topo.domain.model import Route

    from .client import WikibaseApiClient
    from .schema import ApiErrorPayload

log = getLogger(__name__)


class WikibaseWriter:
    def __init__(self, *, config: WikibaseConfig, api: WikibaseApiClient) -> None:
        self._config = config
        self._api = api
        self._token: str | None = None

    def get_write_token(self) -> str:
        """Return the CSRF token, fetching it on first use only."""

        if self._token is None:
            self._token = self._api.fetch_csrf_token()
            log.debug("Obtained a write token")
        return self._token

    def insert_route(self, producer_ref: str, producer_label: str, route: Route) -> str:
        """Create the line item for ``route`` and return its id.

        Raises :class:`ApiError` when the API refuses the edit. There is a single
        attempt per route.
        """

        data = build_line_entity(self._config, producer_ref, producer_label, route)
        response = self._api.edit_entity(
            data=data,
            token=self.get_write_token(),
            summary=f"Import of GTFS route {route.id}",
        )
        if response.entity is not None:
            return response.entity.id
        # the response model guarantees an error when there is no entity
        raise to_api_error(cast("ApiErrorPayload", response.error))
