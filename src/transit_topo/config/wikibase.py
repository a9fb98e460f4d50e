"""Wikibase instance configuration: endpoints and the property/item mapping."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, fields
from pathlib import Path
from typing import TYPE_CHECKING, Final

from .env import require_env_var
from .errors import ConfigurationError, MissingConfigurationError
from .http import HttpConfig

if TYPE_CHECKING:
    from collections.abc import Mapping

CONFIG_PATH_ENV_VAR: Final[str] = "TRANSIT_TOPO_CONFIG"
DEFAULT_LABEL_LANGUAGE: Final[str] = "fr"
DEFAULT_USER_AGENT: Final[str] = "transit-topo/0.1 (GTFS line importer)"


@dataclass(frozen=True, slots=True)
class Properties:
    """Property ids (``P...``) used in line statements."""

    produced_by: str
    instance_of: str
    physical_mode: str
    gtfs_short_name: str
    gtfs_long_name: str
    gtfs_id: str


@dataclass(frozen=True, slots=True)
class Items:
    """Numeric ids of the items referenced by line statements."""

    line: int
    producer: int
    bus: int


@dataclass(frozen=True, slots=True)
class WikibaseConfig:
    api_endpoint: str
    sparql_endpoint: str
    properties: Properties
    items: Items
    entity_prefix: str
    property_prefix: str
    label_language: str = DEFAULT_LABEL_LANGUAGE
    user_agent: str = DEFAULT_USER_AGENT

    def api_http_config(self) -> HttpConfig:
        return HttpConfig(
            name="wikibase-api",
            url=self.api_endpoint,
            default_headers={"User-Agent": self.user_agent},
        )

    def sparql_http_config(self) -> HttpConfig:
        return HttpConfig(
            name="wikibase-sparql",
            url=self.sparql_endpoint,
            default_headers={
                "User-Agent": self.user_agent,
                "Accept": "application/sparql-results+json",
            },
        )


def item_id(numeric_id: int) -> str:
    """Return the ``Q`` identifier of a numeric item id."""

    return f"Q{numeric_id}"


def load_wikibase_config(path: str | Path) -> WikibaseConfig:
    """Parse a TOML configuration file into a :class:`WikibaseConfig`."""

    config_path = Path(path).expanduser()
    try:
        with config_path.open("rb") as handle:
            document = tomllib.load(handle)
    except FileNotFoundError as exc:
        raise MissingConfigurationError(f"Configuration file not found: {config_path}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigurationError(f"Invalid TOML in {config_path}: {exc}") from exc

    return parse_wikibase_config(document)


def parse_wikibase_config(document: Mapping[str, object]) -> WikibaseConfig:
    api_endpoint = _require_str(document, "api_endpoint")
    sparql_endpoint = _require_str(document, "sparql_endpoint")
    property_table = _section(document, "properties")
    item_table = _section(document, "items")
    properties = Properties(
        **{f.name: _require_str(property_table, f.name, "properties") for f in fields(Properties)}
    )
    items = Items(**{f.name: _require_int(item_table, f.name, "items") for f in fields(Items)})
    return WikibaseConfig(
        api_endpoint=api_endpoint,
        sparql_endpoint=sparql_endpoint,
        properties=properties,
        items=items,
        entity_prefix=_require_str(document, "entity_prefix"),
        property_prefix=_require_str(document, "property_prefix"),
        label_language=_optional_str(document, "label_language") or DEFAULT_LABEL_LANGUAGE,
        user_agent=_optional_str(document, "user_agent") or DEFAULT_USER_AGENT,
    )


def get_wikibase_config(path: str | Path | None = None) -> WikibaseConfig:
    """Load the configuration from ``path`` or from ``$TRANSIT_TOPO_CONFIG``."""

    return load_wikibase_config(path or require_env_var(CONFIG_PATH_ENV_VAR))


def _section(document: Mapping[str, object], name: str) -> Mapping[str, object]:
    value = document.get(name)
    if value is None:
        raise MissingConfigurationError(f"Missing configuration section: [{name}]")
    if not isinstance(value, dict):
        raise ConfigurationError(f"Configuration entry {name!r} must be a table")
    return value


def _require_str(document: Mapping[str, object], key: str, section: str | None = None) -> str:
    qualified = f"{section}.{key}" if section else key
    value = document.get(key)
    if value is None:
        raise MissingConfigurationError(f"Missing configuration for: {qualified}")
    if not isinstance(value, str) or not value.strip():
        raise ConfigurationError(f"Configuration entry {qualified!r} must be a non-empty string")
    return value.strip()


def _optional_str(document: Mapping[str, object], key: str) -> str | None:
    if document.get(key) is None:
        return None
    return _require_str(document, key)


def _require_int(document: Mapping[str, object], key: str, section: str) -> int:
    qualified = f"{section}.{key}"
    value = document.get(key)
    if value is None:
        raise MissingConfigurationError(f"Missing configuration for: {qualified}")
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ConfigurationError(f"Configuration entry {qualified!r} must be a positive integer")
    return value
