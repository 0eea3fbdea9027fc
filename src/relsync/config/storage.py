"""Data storage configuration helpers."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .env import optional_env_var
from .errors import ConfigurationError

APP_DIR_NAME: Final[str] = "relsync"
DEFAULT_DB_FILENAME: Final[str] = "relsync.db"

ISOLATION_LEVELS: Final[frozenset[str]] = frozenset(
    {
        "AUTOCOMMIT",
        "READ COMMITTED",
        "READ UNCOMMITTED",
        "REPEATABLE READ",
        "SERIALIZABLE",
    }
)


@dataclass(frozen=True, slots=True)
class StorageConfig:
    data_dir: Path
    database_filename: str = DEFAULT_DB_FILENAME

    def resolve_data_dir(self) -> Path:
        return self.data_dir.expanduser().resolve()

    def ensure_data_dir(self) -> Path:
        data_dir = self.resolve_data_dir()
        data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir

    def database_path(self, *, ensure: bool = True) -> Path:
        base = self.ensure_data_dir() if ensure else self.resolve_data_dir()
        return base / self.database_filename

    def database_uri(self) -> str:
        return f"sqlite+pysqlite:///{self.database_path()}"


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    uri: str
    isolation_level: str | None = None

    def engine_options(self) -> dict[str, object]:
        """Keyword arguments for ``create_engine``; empty when the backend default applies."""

        if self.isolation_level is None:
            return {}
        return {"isolation_level": self.isolation_level}


def _default_data_dir() -> Path:
    if os.name == "nt":
        base = os.getenv("LOCALAPPDATA")
        base_path = Path(base) if base else (Path.home() / "AppData" / "Local")
    else:
        base = os.getenv("XDG_DATA_HOME")
        base_path = Path(base) if base else (Path.home() / ".local" / "share")
    return (base_path / APP_DIR_NAME).expanduser().resolve()


def _isolation_level() -> str | None:
    raw = optional_env_var("RELSYNC_ISOLATION_LEVEL")
    if raw is None:
        return None
    level = raw.upper().replace("_", " ")
    if level not in ISOLATION_LEVELS:
        allowed = ", ".join(sorted(ISOLATION_LEVELS))
        raise ConfigurationError(
            f"Unsupported RELSYNC_ISOLATION_LEVEL {raw!r}; expected one of: {allowed}"
        )
    return level


def get_storage_config() -> StorageConfig:
    env_dir = os.getenv("RELSYNC_DATA_DIR")
    data_dir = Path(env_dir) if env_dir else _default_data_dir()
    return StorageConfig(data_dir=data_dir)


def get_database_config(*, storage: StorageConfig | None = None) -> DatabaseConfig:
    isolation_level = _isolation_level()
    env_uri = optional_env_var("DATABASE_URI")
    if env_uri:
        return DatabaseConfig(uri=env_uri, isolation_level=isolation_level)
    storage_config = storage or get_storage_config()
    return DatabaseConfig(uri=storage_config.database_uri(), isolation_level=isolation_level)
