from __future__ import annotations

from datetime import date
from http import HTTPStatus

import pytest
from pydantic import ValidationError

from relsync.adapters.sync_api import (
    PrisonerMergePayload,
    PrisonerMergeResponse,
    RelationshipsChangedResponse,
    RestrictionsChangedResponse,
    SingleActiveValueResponse,
    snapshot_document,
    status_for,
)
from relsync.domain.errors import (
    DuplicateRelationshipError,
    InvariantViolationError,
    NotFoundError,
    ReferenceDataError,
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
from relsync.domain.model import ElementType
from relsync.domain.reconciliation import (
    ContactRestrictionSnapshot,
    ContactSnapshot,
    PhoneSnapshot,
)
from tests.helpers.prisoner import make_number_of_children


def test_relationships_changed_document_uses_camel_case() -> None:
    result = RelationshipsChangedResult(
        created=(
            RelationshipAndRestrictionIds(
                contact_id=10,
                relationship=IdPair(ElementType.PRISONER_CONTACT, 501, 20),
            ),
        ),
        removed=(
            RemovedRelationshipIds(
                prisoner_number="A4444AA", contact_id=10, relationship_id=3, restriction_ids=(7,)
            ),
        ),
    )

    document = RelationshipsChangedResponse.model_validate(result).to_document()

    assert document == {
        "created": [
            {
                "contactId": 10,
                "relationship": {
                    "elementType": "PRISONER_CONTACT",
                    "sourceId": 501,
                    "newId": 20,
                },
                "restrictions": [],
            }
        ],
        "removed": [
            {
                "prisonerNumber": "A4444AA",
                "contactId": 10,
                "relationshipId": 3,
                "restrictionIds": [7],
            }
        ],
    }


def test_restrictions_document_includes_derived_fields() -> None:
    result = RestrictionsChangedResult(
        prisoner_number="A1234BC", deleted=(RemovedRestriction("A1234BC", 4),)
    )

    document = RestrictionsChangedResponse.model_validate(result).to_document()

    assert document == {
        "prisonerNumber": "A1234BC",
        "createdIds": [],
        "deletedIds": [4],
        "hasChanged": True,
    }


def test_prisoner_merge_document() -> None:
    result = PrisonerMergeResult(
        number_of_children=SingleActiveMergeResult(
            element_type=ElementType.PRISONER_NUMBER_OF_CHILDREN
        ),
        domestic_status=SingleActiveMergeResult(
            element_type=ElementType.PRISONER_DOMESTIC_STATUS, record_id=2, was_created=True
        ),
        restrictions=RestrictionsChangedResult(prisoner_number="A1234BC"),
    )

    document = PrisonerMergeResponse.model_validate(result).to_document()

    assert document["numberOfChildren"] == {
        "elementType": "PRISONER_NUMBER_OF_CHILDREN",
        "recordId": None,
        "wasCreated": False,
    }
    assert document["domesticStatus"]["recordId"] == 2
    assert document["restrictions"]["hasChanged"] is False


def test_single_active_value_document() -> None:
    record = make_number_of_children("A1234BC", "2")
    record.id = 5

    document = SingleActiveValueResponse.model_validate(record).to_document()

    assert document == {"id": 5, "prisonerNumber": "A1234BC", "value": "2", "active": True}


def test_snapshot_document_is_camel_case_json() -> None:
    snapshot = ContactSnapshot(
        contact_id=1,
        title=None,
        last_name="Smith",
        first_name="Jo",
        middle_names=None,
        date_of_birth=date(1980, 4, 2),
        staff_flag=False,
        phones=(PhoneSnapshot(contact_phone_id=3, phone_type="MOB", phone_number="07700"),),
        restrictions=(
            ContactRestrictionSnapshot(
                contact_restriction_id=4,
                restriction_type="BAN",
                start_date=None,
                expiry_date=date(2025, 1, 1),
            ),
        ),
    )

    document = snapshot_document(snapshot)

    assert document["contactId"] == 1
    assert document["dateOfBirth"] == "1980-04-02"
    assert document["phones"] == [
        {"contactPhoneId": 3, "phoneType": "MOB", "phoneNumber": "07700", "extNumber": None}
    ]
    assert document["restrictions"][0]["expiryDate"] == "2025-01-01"
    assert document["relationships"] == []


def test_status_for_maps_errors() -> None:
    with pytest.raises(ValidationError) as excinfo:
        PrisonerMergePayload.model_validate({})
    validation_error = excinfo.value

    assert status_for(NotFoundError("missing")) is HTTPStatus.NOT_FOUND
    assert status_for(ReferenceDataError("bad code")) is HTTPStatus.BAD_REQUEST
    assert status_for(validation_error) is HTTPStatus.BAD_REQUEST
    assert status_for(DuplicateRelationshipError("dup")) is HTTPStatus.CONFLICT
    assert status_for(InvariantViolationError("broken")) is HTTPStatus.INTERNAL_SERVER_ERROR
    assert status_for(RuntimeError("boom")) is HTTPStatus.INTERNAL_SERVER_ERROR
