from __future__ import annotations

import logging

import pytest

from relsync.domain.events import (
    OutboundEvent,
    events_for_prisoner_merge,
    events_for_relationships_changed,
    events_for_restrictions_changed,
    events_for_single_active_merge,
    events_for_single_active_value,
    publish_all,
)
from relsync.domain.merge import (
    IdPair,
    PrisonerMergeResult,
    RelationshipAndRestrictionIds,
    RelationshipsChangedResult,
    RemovedRelationshipIds,
    RemovedRestriction,
    RestrictionsChangedResult,
    SingleActiveMergeResult,
)
from relsync.domain.model import ElementType, Source
from tests.helpers.events import RecordingPublisher

RELATIONSHIPS_CHANGED = RelationshipsChangedResult(
    created=(
        RelationshipAndRestrictionIds(
            contact_id=10,
            relationship=IdPair(ElementType.PRISONER_CONTACT, 501, 20),
            restrictions=(IdPair(ElementType.PRISONER_CONTACT_RESTRICTION, 901, 30),),
        ),
    ),
    removed=(
        RemovedRelationshipIds(
            prisoner_number="A4444AA", contact_id=10, relationship_id=3, restriction_ids=(7, 8)
        ),
    ),
)


def test_relationship_events_list_deletions_before_creations() -> None:
    events = events_for_relationships_changed(
        RELATIONSHIPS_CHANGED, prisoner_number="A3333AA", source=Source.NOMIS
    )

    assert [(e.event_type, e.identifier, e.prisoner_number) for e in events] == [
        (OutboundEvent.PRISONER_CONTACT_RESTRICTION_DELETED, 7, "A4444AA"),
        (OutboundEvent.PRISONER_CONTACT_RESTRICTION_DELETED, 8, "A4444AA"),
        (OutboundEvent.PRISONER_CONTACT_DELETED, 3, "A4444AA"),
        (OutboundEvent.PRISONER_CONTACT_CREATED, 20, "A3333AA"),
        (OutboundEvent.PRISONER_CONTACT_RESTRICTION_CREATED, 30, "A3333AA"),
    ]
    assert {e.contact_id for e in events} == {10}


def test_event_payload_shape() -> None:
    event = events_for_relationships_changed(
        RELATIONSHIPS_CHANGED, prisoner_number="A3333AA", source=Source.DPS
    )[-1]

    assert event.as_payload() == {
        "eventType": "personal-relationships-api.prisoner-contact-restriction.created",
        "additionalInformation": {"identifier": 30, "source": "DPS", "contactId": 10},
        "personReference": {"identifiers": [{"type": "NOMS", "value": "A3333AA"}]},
    }


def test_restriction_events() -> None:
    result = RestrictionsChangedResult(
        prisoner_number="A1234BC",
        created_ids=(5,),
        deleted=(RemovedRestriction("Z9876YX", 2),),
    )

    events = events_for_restrictions_changed(result, source=Source.NOMIS)

    assert [(e.event_type, e.identifier, e.prisoner_number) for e in events] == [
        (OutboundEvent.PRISONER_RESTRICTION_DELETED, 2, "Z9876YX"),
        (OutboundEvent.PRISONER_RESTRICTION_CREATED, 5, "A1234BC"),
    ]
    assert "contactId" not in events[0].as_payload()["additionalInformation"]


def test_single_active_merge_is_announced_only_when_created() -> None:
    kept = SingleActiveMergeResult(
        element_type=ElementType.PRISONER_DOMESTIC_STATUS, record_id=4, was_created=False
    )
    created = SingleActiveMergeResult(
        element_type=ElementType.PRISONER_NUMBER_OF_CHILDREN, record_id=6, was_created=True
    )

    assert events_for_single_active_merge(kept, prisoner_number="A") == ()
    (event,) = events_for_single_active_merge(created, prisoner_number="A")
    assert event.event_type is OutboundEvent.PRISONER_NUMBER_OF_CHILDREN_CREATED
    assert event.identifier == 6
    assert event.source is Source.DPS


def test_single_active_value_rejects_other_elements() -> None:
    with pytest.raises(ValueError, match="not a single-active-value"):
        events_for_single_active_value(
            ElementType.PRISONER_CONTACT, 1, prisoner_number="A", source=Source.NOMIS
        )


def test_prisoner_merge_events_combine_parts() -> None:
    result = PrisonerMergeResult(
        number_of_children=SingleActiveMergeResult(
            element_type=ElementType.PRISONER_NUMBER_OF_CHILDREN
        ),
        domestic_status=SingleActiveMergeResult(
            element_type=ElementType.PRISONER_DOMESTIC_STATUS, record_id=9, was_created=True
        ),
        restrictions=RestrictionsChangedResult(prisoner_number="A1234BC", created_ids=(11,)),
    )

    events = events_for_prisoner_merge(result, prisoner_number="A1234BC", source=Source.NOMIS)

    assert [e.event_type for e in events] == [
        OutboundEvent.PRISONER_DOMESTIC_STATUS_CREATED,
        OutboundEvent.PRISONER_RESTRICTION_CREATED,
    ]
    assert [e.source for e in events] == [Source.DPS, Source.NOMIS]


def test_publish_all_continues_past_failures(caplog: pytest.LogCaptureFixture) -> None:
    events = events_for_relationships_changed(
        RELATIONSHIPS_CHANGED, prisoner_number="A3333AA", source=Source.NOMIS
    )
    publisher = RecordingPublisher(fail_on={OutboundEvent.PRISONER_CONTACT_DELETED})

    with caplog.at_level(logging.WARNING, logger="relsync.domain.events"):
        report = publish_all(events, publisher)

    assert report.ok is False
    assert [e.event_type for e in report.failed] == [OutboundEvent.PRISONER_CONTACT_DELETED]
    assert len(report.published) == 4
    assert publisher.events == report.published
    assert "1 of 5 events could not be published" in caplog.text


def test_publish_all_reports_success() -> None:
    publisher = RecordingPublisher()

    report = publish_all((), publisher)

    assert report.ok is True
    assert report.published == []
