from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest

from transit_topo.config import (
    CONFIG_PATH_ENV_VAR,
    ConfigurationError,
    Items,
    MissingConfigurationError,
    Properties,
    get_wikibase_config,
    item_id,
    load_wikibase_config,
    require_env_var,
    require_env_vars,
)

if TYPE_CHECKING:
    from pathlib import Path

CONFIG_TOML = """
api_endpoint = "https://wiki.example.org/w/api.php"
sparql_endpoint = "https://query.example.org/sparql"
entity_prefix = "https://wiki.example.org/entity/"
property_prefix = "https://wiki.example.org/prop/direct/"
label_language = "en"

[properties]
produced_by = "P1"
instance_of = "P2"
physical_mode = "P3"
gtfs_short_name = "P4"
gtfs_long_name = "P5"
gtfs_id = "P6"

[items]
line = 10
producer = 16
bus = 7
"""


def _write_config(tmp_path: Path, content: str = CONFIG_TOML) -> Path:
    path = tmp_path / "config.toml"
    path.write_text(content, encoding="utf-8")
    return path


def test_require_env_vars_returns_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "value")

    result = require_env_vars(["EXAMPLE_VAR"])

    assert result["EXAMPLE_VAR"] == "value"


def test_require_env_vars_raises_when_any_missing(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MISSING_VAR", raising=False)

    with pytest.raises(MissingConfigurationError) as exc:
        require_env_vars(["MISSING_VAR"])

    assert "MISSING_VAR" in str(exc.value)


def test_require_env_var_handles_blank_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "   ")

    with pytest.raises(MissingConfigurationError):
        require_env_var("EXAMPLE_VAR")


def test_load_wikibase_config(tmp_path: Path) -> None:
    config = load_wikibase_config(_write_config(tmp_path))

    assert config.api_endpoint == "https://wiki.example.org/w/api.php"
    assert config.sparql_endpoint == "https://query.example.org/sparql"
    assert config.properties == Properties(
        produced_by="P1",
        instance_of="P2",
        physical_mode="P3",
        gtfs_short_name="P4",
        gtfs_long_name="P5",
        gtfs_id="P6",
    )
    assert config.items == Items(line=10, producer=16, bus=7)
    assert config.label_language == "en"
    assert config.user_agent.startswith("transit-topo")


def test_http_configs_point_at_the_endpoints(tmp_path: Path) -> None:
    config = load_wikibase_config(_write_config(tmp_path))

    assert config.api_http_config().url == config.api_endpoint
    sparql = config.sparql_http_config()
    assert sparql.url == config.sparql_endpoint
    assert sparql.default_headers is not None
    assert sparql.default_headers["Accept"] == "application/sparql-results+json"


def test_config_path_from_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(CONFIG_PATH_ENV_VAR, str(_write_config(tmp_path)))

    assert get_wikibase_config().items.bus == 7


def test_config_path_env_var_missing(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(CONFIG_PATH_ENV_VAR, raising=False)

    with pytest.raises(MissingConfigurationError, match=CONFIG_PATH_ENV_VAR):
        get_wikibase_config()


def test_missing_config_file(tmp_path: Path) -> None:
    with pytest.raises(MissingConfigurationError, match="not found"):
        load_wikibase_config(tmp_path / "nope.toml")


def test_invalid_toml(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="Invalid TOML"):
        load_wikibase_config(_write_config(tmp_path, "api_endpoint = "))


def test_missing_property(tmp_path: Path) -> None:
    content = CONFIG_TOML.replace('gtfs_id = "P6"\n', "")

    with pytest.raises(MissingConfigurationError, match=r"properties\.gtfs_id"):
        load_wikibase_config(_write_config(tmp_path, content))


def test_missing_items_section(tmp_path: Path) -> None:
    content = CONFIG_TOML.split("[items]")[0]

    with pytest.raises(MissingConfigurationError, match=r"\[items\]"):
        load_wikibase_config(_write_config(tmp_path, content))


def test_item_ids_must_be_positive_integers(tmp_path: Path) -> None:
    content = CONFIG_TOML.replace("bus = 7", 'bus = "Q7"')

    with pytest.raises(ConfigurationError, match=r"items\.bus"):
        load_wikibase_config(_write_config(tmp_path, content))


def test_label_language_defaults_to_french(tmp_path: Path) -> None:
    content = CONFIG_TOML.replace('label_language = "en"\n', "")

    assert load_wikibase_config(_write_config(tmp_path, content)).label_language == "fr"


def test_item_id() -> None:
    assert item_id(16) == "Q16"


def test_require_env_vars_restores_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TEMP_VAR", "123")

    assert os.getenv("TEMP_VAR") == "123"
    assert require_env_var("TEMP_VAR") == "123"
