"""Outbound documents: camelCase JSON for results, snapshots and events."""

from __future__ import annotations

from typing import Any, cast

from pydantic import BaseModel, ConfigDict, TypeAdapter
from pydantic.alias_generators import to_camel

from relsync.domain.model import ElementType  # noqa: TC001


class ResponseModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, from_attributes=True, frozen=True)

    def to_document(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class IdPairResponse(ResponseModel):
    element_type: ElementType
    source_id: int
    new_id: int


class CreatedRelationshipResponse(ResponseModel):
    contact_id: int
    relationship: IdPairResponse
    restrictions: list[IdPairResponse]


class RemovedRelationshipResponse(ResponseModel):
    prisoner_number: str
    contact_id: int
    relationship_id: int
    restriction_ids: list[int]


class RelationshipsChangedResponse(ResponseModel):
    created: list[CreatedRelationshipResponse]
    removed: list[RemovedRelationshipResponse]


class SingleActiveMergeResponse(ResponseModel):
    element_type: ElementType
    record_id: int | None
    was_created: bool


class RestrictionsChangedResponse(ResponseModel):
    prisoner_number: str
    created_ids: list[int]
    deleted_ids: list[int]
    has_changed: bool


class PrisonerMergeResponse(ResponseModel):
    number_of_children: SingleActiveMergeResponse
    domestic_status: SingleActiveMergeResponse
    restrictions: RestrictionsChangedResponse


class HistoryMigrationResponse(ResponseModel):
    element_type: ElementType
    prisoner_number: str
    current_id: int | None
    history_ids: list[int]


class RelationshipResponse(ResponseModel):
    id: int
    contact_id: int
    prisoner_number: str
    relationship_type: str
    relationship_to_prisoner: str
    active: bool
    current_term: bool
    approved_visitor: bool


class SingleActiveValueResponse(ResponseModel):
    id: int
    prisoner_number: str
    value: str | None
    active: bool


_ANY_ADAPTER: TypeAdapter[Any] = TypeAdapter(Any)


def camelize(value: object) -> object:
    """Recursively rename mapping keys from snake_case to camelCase."""

    if isinstance(value, dict):
        mapping = cast(dict[str, object], value)
        return {to_camel(key): camelize(item) for key, item in mapping.items()}
    if isinstance(value, list):
        return [camelize(item) for item in cast(list[object], value)]
    return value


def snapshot_document(snapshot: object) -> dict[str, Any]:
    """Serialise a reconciliation snapshot dataclass to a camelCase JSON document."""

    dumped = _ANY_ADAPTER.dump_python(snapshot, mode="json")
    return cast(dict[str, Any], camelize(dumped))
