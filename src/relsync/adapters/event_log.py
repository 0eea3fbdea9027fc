"""Event publisher that writes each event to the log as a JSON document."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from relsync.domain.events import DomainEvent

log = logging.getLogger(__name__)


class LoggingEventPublisher:
    """Stand-in transport for deployments without a message broker."""

    def __init__(self, logger: logging.Logger | None = None, *, level: int = logging.INFO) -> None:
        self._logger = logger or log
        self._level = level

    def publish(self, event: DomainEvent) -> None:
        self._logger.log(self._level, "%s", json.dumps(event.as_payload(), sort_keys=True))


if TYPE_CHECKING:
    from relsync.domain.ports.events import EventPublisher

    _publisher_check: EventPublisher = LoggingEventPublisher()
