"""Application configuration helpers."""

from __future__ import annotations

from .env import require_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http import HttpConfig
from .logging import configure_logging
from .wikibase import (
    CONFIG_PATH_ENV_VAR,
    Items,
    Properties,
    WikibaseConfig,
    get_wikibase_config,
    item_id,
    load_wikibase_config,
    parse_wikibase_config,
)

__all__ = [
    "CONFIG_PATH_ENV_VAR",
    "ConfigurationError",
    "HttpConfig",
    "Items",
    "MissingConfigurationError",
    "Properties",
    "WikibaseConfig",
    "configure_logging",
    "get_wikibase_config",
    "item_id",
    "load_wikibase_config",
    "parse_wikibase_config",
    "require_env_var",
    "require_env_vars",
]
