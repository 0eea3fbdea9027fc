from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from relsync.config import (
    DEFAULT_SYSTEM_USERNAME,
    ConfigurationError,
    DatabaseConfig,
    StorageConfig,
    get_database_config,
    get_storage_config,
    get_sync_config,
    optional_env_var,
)
from relsync.domain.model import Source

if TYPE_CHECKING:
    from pathlib import Path


def test_optional_env_var_strips_and_treats_blank_as_unset(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "  padded  ")
    monkeypatch.setenv("BLANK_VAR", "  ")

    assert optional_env_var("EXAMPLE_VAR") == "padded"
    assert optional_env_var("BLANK_VAR") is None


def test_database_uri_takes_precedence(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URI", "postgresql+psycopg://db/relsync")
    monkeypatch.delenv("RELSYNC_ISOLATION_LEVEL", raising=False)

    config = get_database_config()

    assert config == DatabaseConfig(uri="postgresql+psycopg://db/relsync")
    assert config.engine_options() == {}


def test_database_falls_back_to_data_dir(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.delenv("DATABASE_URI", raising=False)
    monkeypatch.delenv("RELSYNC_ISOLATION_LEVEL", raising=False)
    monkeypatch.setenv("RELSYNC_DATA_DIR", str(tmp_path / "data"))

    config = get_database_config()

    assert config.uri == f"sqlite+pysqlite:///{(tmp_path / 'data' / 'relsync.db').resolve()}"
    assert (tmp_path / "data").is_dir()
    assert get_storage_config() == StorageConfig(data_dir=tmp_path / "data")


def test_isolation_level_is_normalised(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RELSYNC_ISOLATION_LEVEL", "read_committed")

    config = get_database_config()

    assert config.engine_options() == {"isolation_level": "READ COMMITTED"}


def test_unknown_isolation_level_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RELSYNC_ISOLATION_LEVEL", "eventually")

    with pytest.raises(ConfigurationError, match="RELSYNC_ISOLATION_LEVEL"):
        get_database_config()


def test_sync_config_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("RELSYNC_SYSTEM_USERNAME", raising=False)
    monkeypatch.delenv("RELSYNC_EVENT_SOURCE", raising=False)

    config = get_sync_config()

    assert config.system_username == DEFAULT_SYSTEM_USERNAME
    assert config.event_source is Source.NOMIS


def test_sync_config_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RELSYNC_SYSTEM_USERNAME", "SYNC_USER")
    monkeypatch.setenv("RELSYNC_EVENT_SOURCE", "dps")

    config = get_sync_config()

    assert config.system_username == "SYNC_USER"
    assert config.event_source is Source.DPS


def test_sync_config_rejects_unknown_source(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RELSYNC_EVENT_SOURCE", "carrier-pigeon")

    with pytest.raises(ConfigurationError, match="DPS, NOMIS"):
        get_sync_config()
