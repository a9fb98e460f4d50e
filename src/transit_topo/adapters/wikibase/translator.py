"""Translate feed routes into Wikibase entity JSON."""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from transit_topo.domain.model import RouteType

from .schema import Claim, ItemValue, StringValue

if TYPE_CHECKING:
    from transit_topo.config.wikibase import WikibaseConfig
    from transit_topo.domain.model import Route

# physical mode item for every route type without a dedicated item
FALLBACK_PHYSICAL_MODE_ITEM: Final[int] = 6


def physical_mode_item(config: WikibaseConfig, route: Route) -> int:
    if route.route_type is RouteType.BUS:
        return config.items.bus
    return FALLBACK_PHYSICAL_MODE_ITEM


def build_line_claims(config: WikibaseConfig, producer_ref: str, route: Route) -> list[Claim]:
    properties = config.properties
    claims = [
        Claim.with_value(properties.instance_of, ItemValue.for_item(config.items.line)),
        Claim.with_value(properties.produced_by, ItemValue.for_entity_id(producer_ref)),
        Claim.with_value(
            properties.physical_mode, ItemValue.for_item(physical_mode_item(config, route))
        ),
    ]
    # the write API rejects empty strings
    literals = (
        (properties.gtfs_short_name, route.short_name),
        (properties.gtfs_long_name, route.long_name),
        (properties.gtfs_id, route.id),
    )
    claims.extend(
        Claim.with_value(property_id, StringValue(value=value))
        for property_id, value in literals
        if value
    )
    return claims


def build_line_entity(
    config: WikibaseConfig,
    producer_ref: str,
    producer_label: str,
    route: Route,
) -> dict[str, object]:
    """Return the ``data`` document of a ``wbeditentity`` call creating the line."""

    language = config.label_language
    data: dict[str, object] = {
        "claims": [
            claim.model_dump(by_alias=True, exclude_none=True)
            for claim in build_line_claims(config, producer_ref, route)
        ],
    }
    label = " ".join(part for part in (route.short_name, route.long_name) if part)
    if label:
        data["labels"] = {language: {"language": language, "value": label}}
        # the wiki rejects a second item with the same label and description
        description = f"{producer_label}, GTFS route {route.id}"
        data["descriptions"] = {language: {"language": language, "value": description}}
    return data
