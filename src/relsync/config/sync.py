"""Settings that shape how synchronised changes are recorded and announced."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from relsync.domain.model import DEFAULT_SYSTEM_USERNAME, Source

from .env import optional_env_var
from .errors import ConfigurationError

DEFAULT_EVENT_SOURCE: Final[Source] = Source.NOMIS


@dataclass(frozen=True, slots=True)
class SyncConfig:
    system_username: str = DEFAULT_SYSTEM_USERNAME
    event_source: Source = DEFAULT_EVENT_SOURCE


def get_sync_config() -> SyncConfig:
    username = optional_env_var("RELSYNC_SYSTEM_USERNAME") or DEFAULT_SYSTEM_USERNAME
    raw_source = optional_env_var("RELSYNC_EVENT_SOURCE")
    if raw_source is None:
        return SyncConfig(system_username=username)
    try:
        source = Source(raw_source.upper())
    except ValueError as exc:
        allowed = ", ".join(member.value for member in Source)
        raise ConfigurationError(
            f"Unsupported RELSYNC_EVENT_SOURCE {raw_source!r}; expected one of: {allowed}"
        ) from exc
    return SyncConfig(system_username=username, event_source=source)
