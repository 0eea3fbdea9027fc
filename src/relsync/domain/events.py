"""Plan the outbound domain events for a committed change.

Planning is pure: it turns a merge or reset result into an ordered tuple of
events. Delivery happens elsewhere, after the transaction has committed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Any

from relsync.domain.model import ElementType, Source

if TYPE_CHECKING:
    from collections.abc import Iterable

    from relsync.domain.merge.contracts import (
        PrisonerMergeResult,
        RelationshipsChangedResult,
        RestrictionsChangedResult,
        SingleActiveMergeResult,
    )
    from relsync.domain.model import PrisonerContact
    from relsync.domain.ports.events import EventPublisher

log = logging.getLogger(__name__)


class OutboundEvent(StrEnum):
    PRISONER_CONTACT_CREATED = "personal-relationships-api.prisoner-contact.created"
    PRISONER_CONTACT_DELETED = "personal-relationships-api.prisoner-contact.deleted"
    PRISONER_CONTACT_RESTRICTION_CREATED = (
        "personal-relationships-api.prisoner-contact-restriction.created"
    )
    PRISONER_CONTACT_RESTRICTION_DELETED = (
        "personal-relationships-api.prisoner-contact-restriction.deleted"
    )
    PRISONER_RESTRICTION_CREATED = "personal-relationships-api.prisoner-restriction.created"
    PRISONER_RESTRICTION_DELETED = "personal-relationships-api.prisoner-restriction.deleted"
    PRISONER_DOMESTIC_STATUS_CREATED = "personal-relationships-api.domestic-status.created"
    PRISONER_NUMBER_OF_CHILDREN_CREATED = "personal-relationships-api.number-of-children.created"


_CREATED_EVENT_BY_ELEMENT: dict[ElementType, OutboundEvent] = {
    ElementType.PRISONER_DOMESTIC_STATUS: OutboundEvent.PRISONER_DOMESTIC_STATUS_CREATED,
    ElementType.PRISONER_NUMBER_OF_CHILDREN: OutboundEvent.PRISONER_NUMBER_OF_CHILDREN_CREATED,
}


@dataclass(frozen=True, slots=True, kw_only=True)
class DomainEvent:
    event_type: OutboundEvent
    element_type: ElementType
    identifier: int
    prisoner_number: str
    source: Source
    contact_id: int | None = None

    def as_payload(self) -> dict[str, Any]:
        additional: dict[str, Any] = {"identifier": self.identifier, "source": str(self.source)}
        if self.contact_id is not None:
            additional["contactId"] = self.contact_id
        return {
            "eventType": str(self.event_type),
            "additionalInformation": additional,
            "personReference": {"identifiers": [{"type": "NOMS", "value": self.prisoner_number}]},
        }


def events_for_relationships_changed(
    result: RelationshipsChangedResult, *, prisoner_number: str, source: Source
) -> tuple[DomainEvent, ...]:
    """Deletions first (restrictions before their relationship), then creations.

    ``prisoner_number`` owns everything that was created; removed rows carry
    their own prisoner number.
    """

    events: list[DomainEvent] = []
    for removed in result.removed:
        events.extend(
            DomainEvent(
                event_type=OutboundEvent.PRISONER_CONTACT_RESTRICTION_DELETED,
                element_type=ElementType.PRISONER_CONTACT_RESTRICTION,
                identifier=restriction_id,
                prisoner_number=removed.prisoner_number,
                contact_id=removed.contact_id,
                source=source,
            )
            for restriction_id in removed.restriction_ids
        )
        events.append(
            DomainEvent(
                event_type=OutboundEvent.PRISONER_CONTACT_DELETED,
                element_type=ElementType.PRISONER_CONTACT,
                identifier=removed.relationship_id,
                prisoner_number=removed.prisoner_number,
                contact_id=removed.contact_id,
                source=source,
            )
        )
    for created in result.created:
        events.append(
            DomainEvent(
                event_type=OutboundEvent.PRISONER_CONTACT_CREATED,
                element_type=ElementType.PRISONER_CONTACT,
                identifier=created.relationship.new_id,
                prisoner_number=prisoner_number,
                contact_id=created.contact_id,
                source=source,
            )
        )
        events.extend(
            DomainEvent(
                event_type=OutboundEvent.PRISONER_CONTACT_RESTRICTION_CREATED,
                element_type=ElementType.PRISONER_CONTACT_RESTRICTION,
                identifier=pair.new_id,
                prisoner_number=prisoner_number,
                contact_id=created.contact_id,
                source=source,
            )
            for pair in created.restrictions
        )
    return tuple(events)


def events_for_relationship_created(
    relationship: PrisonerContact, *, source: Source
) -> tuple[DomainEvent, ...]:
    return (
        DomainEvent(
            event_type=OutboundEvent.PRISONER_CONTACT_CREATED,
            element_type=ElementType.PRISONER_CONTACT,
            identifier=relationship.require_id(),
            prisoner_number=relationship.prisoner_number,
            contact_id=relationship.contact_id,
            source=source,
        ),
    )


def events_for_restrictions_changed(
    result: RestrictionsChangedResult, *, source: Source
) -> tuple[DomainEvent, ...]:
    events = [
        DomainEvent(
            event_type=OutboundEvent.PRISONER_RESTRICTION_DELETED,
            element_type=ElementType.PRISONER_RESTRICTION,
            identifier=removed.restriction_id,
            prisoner_number=removed.prisoner_number,
            source=source,
        )
        for removed in result.deleted
    ]
    events.extend(
        DomainEvent(
            event_type=OutboundEvent.PRISONER_RESTRICTION_CREATED,
            element_type=ElementType.PRISONER_RESTRICTION,
            identifier=restriction_id,
            prisoner_number=result.prisoner_number,
            source=source,
        )
        for restriction_id in result.created_ids
    )
    return tuple(events)


def events_for_single_active_value(
    element_type: ElementType, record_id: int, *, prisoner_number: str, source: Source
) -> tuple[DomainEvent, ...]:
    event_type = _CREATED_EVENT_BY_ELEMENT.get(element_type)
    if event_type is None:
        raise ValueError(f"{element_type} is not a single-active-value element")
    return (
        DomainEvent(
            event_type=event_type,
            element_type=element_type,
            identifier=record_id,
            prisoner_number=prisoner_number,
            source=source,
        ),
    )


def events_for_single_active_merge(
    result: SingleActiveMergeResult, *, prisoner_number: str
) -> tuple[DomainEvent, ...]:
    """Only a newly active value is announced; a value moved into history is not.

    These merges are always announced with DPS as the source, whatever feed
    triggered them.
    """

    if not result.was_created or result.record_id is None:
        return ()
    return events_for_single_active_value(
        result.element_type, result.record_id, prisoner_number=prisoner_number, source=Source.DPS
    )


def events_for_prisoner_merge(
    result: PrisonerMergeResult, *, prisoner_number: str, source: Source
) -> tuple[DomainEvent, ...]:
    return (
        *events_for_single_active_merge(result.number_of_children, prisoner_number=prisoner_number),
        *events_for_single_active_merge(result.domestic_status, prisoner_number=prisoner_number),
        *events_for_restrictions_changed(result.restrictions, source=source),
    )


@dataclass(slots=True)
class PublishReport:
    """What happened when handing events to a publisher after commit."""

    published: list[DomainEvent] = field(default_factory=list[DomainEvent])
    failed: list[DomainEvent] = field(default_factory=list[DomainEvent])

    @property
    def ok(self) -> bool:
        return not self.failed


def publish_all(events: Iterable[DomainEvent], publisher: EventPublisher) -> PublishReport:
    """Publish every event, continuing past failures.

    The change these events describe is already committed, so a failed
    delivery is logged and reported rather than raised.
    """

    report = PublishReport()
    for event in events:
        try:
            publisher.publish(event)
        except Exception:
            log.exception(
                "Failed to publish %s for %s %s",
                event.event_type,
                event.element_type,
                event.identifier,
            )
            report.failed.append(event)
        else:
            report.published.append(event)
    if report.failed:
        log.warning(
            "%d of %d events could not be published",
            len(report.failed),
            len(report.failed) + len(report.published),
        )
    return report
