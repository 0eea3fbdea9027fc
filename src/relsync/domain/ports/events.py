"""Port for handing planned domain events to a transport."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from relsync.domain.events import DomainEvent


@runtime_checkable
class EventPublisher(Protocol):
    """Deliver one event; raising signals that delivery failed."""

    def publish(self, event: DomainEvent) -> None: ...
