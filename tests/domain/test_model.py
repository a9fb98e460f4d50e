from __future__ import annotations

import pytest

from transit_topo.domain.errors import ApiError, ApiMessage
from transit_topo.domain.model import Route, RouteType


@pytest.mark.parametrize(
    ("code", "expected"),
    [
        (0, RouteType.TRAMWAY),
        (1, RouteType.SUBWAY),
        (2, RouteType.RAIL),
        (3, RouteType.BUS),
        (4, RouteType.FERRY),
        (5, RouteType.CABLE_CAR),
        (6, RouteType.GONDOLA),
        (7, RouteType.FUNICULAR),
        (109, RouteType.RAIL),
        (202, RouteType.COACH),
        (401, RouteType.OTHER),
        (501, RouteType.SUBWAY),
        (704, RouteType.BUS),
        (900, RouteType.TRAMWAY),
        (1000, RouteType.FERRY),
        (1100, RouteType.AIR),
        (1300, RouteType.GONDOLA),
        (1400, RouteType.FUNICULAR),
        (1500, RouteType.TAXI),
        (11, RouteType.OTHER),
        (1700, RouteType.OTHER),
    ],
)
def test_route_type_from_gtfs(code: int, expected: RouteType) -> None:
    assert RouteType.from_gtfs(code) is expected


def test_route_display_name() -> None:
    route = Route(id="R1", short_name="12", long_name="Downtown Loop", route_type=RouteType.BUS)

    assert route.display_name == "“Downtown Loop” (12)"


def test_api_error_keeps_remote_details() -> None:
    error = ApiError(
        "modification-failed",
        "Label conflict",
        (ApiMessage("wikibase-validator-label-conflict", ("12", "fr")),),
    )

    assert error.code == "modification-failed"
    assert error.info == "Label conflict"
    assert str(error) == "modification-failed: Label conflict"
    assert error.describe() == (
        "modification-failed: Label conflict [wikibase-validator-label-conflict(12, fr)]"
    )


def test_api_error_without_messages() -> None:
    assert ApiError("badtoken", "Invalid CSRF token.").describe() == "badtoken: Invalid CSRF token."
