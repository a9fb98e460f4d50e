"""Domain types for transit routes and their producers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class RouteType(StrEnum):
    """Transport mode of a GTFS route, covering basic and extended route types."""

    TRAMWAY = "tramway"
    SUBWAY = "subway"
    RAIL = "rail"
    BUS = "bus"
    FERRY = "ferry"
    CABLE_CAR = "cable_car"
    GONDOLA = "gondola"
    FUNICULAR = "funicular"
    COACH = "coach"
    AIR = "air"
    TAXI = "taxi"
    OTHER = "other"

    @classmethod
    def from_gtfs(cls, code: int) -> RouteType:
        if code == 0 or 900 <= code <= 999:
            return cls.TRAMWAY
        if code == 1 or 500 <= code <= 599:
            return cls.SUBWAY
        if code == 2 or 100 <= code <= 199:
            return cls.RAIL
        if code == 3 or 700 <= code <= 799:
            return cls.BUS
        if code == 4 or 1000 <= code <= 1099:
            return cls.FERRY
        if code == 5:
            return cls.CABLE_CAR
        if code == 6 or 1300 <= code <= 1399:
            return cls.GONDOLA
        if code == 7 or 1400 <= code <= 1499:
            return cls.FUNICULAR
        if 200 <= code <= 299:
            return cls.COACH
        if 1100 <= code <= 1199:
            return cls.AIR
        if 1500 <= code <= 1599:
            return cls.TAXI
        return cls.OTHER


@dataclass(slots=True, frozen=True)
class Route:
    """A line as described by the feed's ``routes.txt``."""

    id: str
    short_name: str
    long_name: str
    route_type: RouteType
    gtfs_route_type: int | None = None

    @property
    def display_name(self) -> str:
        return f"“{self.long_name}” ({self.short_name})"


@dataclass(slots=True, frozen=True)
class Producer:
    """Knowledge-base item of the organisation publishing the feed."""

    id: str
    label: str
