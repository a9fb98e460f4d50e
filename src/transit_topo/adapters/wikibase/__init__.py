"""Wikibase adapter: action API, SPARQL query service and line import ports."""

from __future__ import annotations

from .client import WikibaseApiClient
from .resolver import WikibaseResolver
from .sparql import SparqlClient
from .translator import build_line_claims, build_line_entity, physical_mode_item
from .writer import WikibaseWriter

__all__ = [
    "SparqlClient",
    "WikibaseApiClient",
    "WikibaseResolver",
    "WikibaseWriter",
    "build_line_claims",
    "build_line_entity",
    "physical_mode_item",
]
