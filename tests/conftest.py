from __future__ import annotations

import pytest

from transit_topo.config.wikibase import Items, Properties, WikibaseConfig
from transit_topo.domain.model import Producer, Route, RouteType

PRODUCER_ID = "Q42"
PRODUCER_LABEL = "Réseau Exemple"


@pytest.fixture
def wikibase_config() -> WikibaseConfig:
    return WikibaseConfig(
        api_endpoint="https://wiki.example.org/w/api.php",
        sparql_endpoint="https://query.example.org/sparql",
        properties=Properties(
            produced_by="P1",
            instance_of="P2",
            physical_mode="P3",
            gtfs_short_name="P4",
            gtfs_long_name="P5",
            gtfs_id="P6",
        ),
        items=Items(line=10, producer=16, bus=7),
        entity_prefix="https://wiki.example.org/entity/",
        property_prefix="https://wiki.example.org/prop/direct/",
        label_language="fr",
    )


@pytest.fixture
def producer() -> Producer:
    return Producer(id=PRODUCER_ID, label=PRODUCER_LABEL)


@pytest.fixture
def bus_route() -> Route:
    return Route(
        id="R1",
        short_name="12",
        long_name="Downtown Loop",
        route_type=RouteType.BUS,
        gtfs_route_type=3,
    )


@pytest.fixture
def tram_route() -> Route:
    return Route(
        id="T1",
        short_name="A",
        long_name="Gare - Université",
        route_type=RouteType.TRAMWAY,
        gtfs_route_type=0,
    )

