"""Ports the import orchestrator depends on."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .model import Producer, Route


@runtime_checkable
class LineResolver(Protocol):
    """Read path: producer lookup and duplicate-line detection."""

    def resolve_producer(self, producer_ref: str) -> Producer | None: ...

    def find_matching_line(self, producer_ref: str, external_line_id: str) -> list[str]: ...


@runtime_checkable
class LineWriter(Protocol):
    """Write path: token acquisition and line creation."""

    def get_write_token(self) -> str: ...

    def insert_route(self, producer_ref: str, producer_label: str, route: Route) -> str: ...


__all__ = ["LineResolver", "LineWriter"]
