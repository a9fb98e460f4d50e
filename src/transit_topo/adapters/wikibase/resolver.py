"""Read path: producer lookup and duplicate-line detection."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from transit_topo.config.wikibase import item_id
from transit_topo.domain.errors import ApiError, SchemaError
from transit_topo.domain.model import Producer

from .schema import is_item_id
from .sparql import local_id, matching_line_query, producer_label_query

if TYPE_CHECKING:
    from transit_topo.config.wikibase import WikibaseConfig

    from .client import WikibaseApiClient
    from .sparql import SparqlClient

log = getLogger(__name__)

NO_SUCH_ENTITY = "no-such-entity"


class WikibaseResolver:
    def __init__(
        self,
        *,
        config: WikibaseConfig,
        sparql: SparqlClient,
        api: WikibaseApiClient,
    ) -> None:
        self._config = config
        self._sparql = sparql
        self._api = api

    def resolve_producer(self, producer_ref: str) -> Producer | None:
        """Resolve an item id (``Q123``) or a free-text name to a producer.

        Only instances of the configured producer class are accepted. Names are
        searched and the first result that is a producer wins.
        """

        reference = producer_ref.strip()
        if is_item_id(reference):
            label = self._label_by_id(reference)
            return Producer(id=reference, label=label) if label is not None else None

        results = self._api.search_entities(reference, language=self._config.label_language)
        if not results.search:
            log.info("No item found searching for %r", reference)
            return None
        for candidate in results.search:
            label = self._label_by_id(candidate.id)
            if label is None:
                log.debug("Search hit %s is not a producer, skipping", candidate.id)
                continue
            if len(results.search) > 1:
                log.info(
                    "Search for %r returned %s items, using the first producer (%s)",
                    reference,
                    len(results.search),
                    candidate.id,
                )
            return Producer(id=candidate.id, label=label)
        log.info("None of the %s items found for %r is a producer", len(results.search), reference)
        return None

    def resolve_producer_label(self, producer_ref: str) -> str | None:
        producer = self.resolve_producer(producer_ref)
        return producer.label if producer is not None else None

    def find_matching_line(self, producer_ref: str, external_line_id: str) -> list[str]:
        """Return the ids of the lines of ``producer_ref`` with this GTFS id."""

        rows = self._sparql.select(
            matching_line_query(self._config, producer_ref, external_line_id)
        )
        return [local_id(_binding(row, "line")) for row in rows]

    def _label_by_id(self, producer_id: str) -> str | None:
        rows = self._sparql.select(producer_label_query(self._config, producer_id))
        if rows:
            return _binding(rows[0], "label")

        # the query service lags behind the wiki; ask the API before giving up
        log.debug("No label for %s in the query service, fetching the entity", producer_id)
        try:
            response = self._api.get_entities([producer_id], props=("labels", "claims"))
        except ApiError as exc:
            if exc.code == NO_SUCH_ENTITY:
                return None
            raise
        entity = response.entities.get(producer_id)
        if entity is None or entity.is_missing:
            return None
        if item_id(self._config.items.producer) not in entity.item_values(
            self._config.properties.instance_of
        ):
            return None
        return entity.any_label(self._config.label_language)


def _binding(row: dict[str, str], name: str) -> str:
    try:
        return row[name]
    except KeyError as exc:
        raise SchemaError(f"SPARQL result row lacks the {name!r} binding") from exc
