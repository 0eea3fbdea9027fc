"""Pydantic models for inbound sync and admin payloads (camelCase JSON)."""

from __future__ import annotations

from datetime import date, datetime  # noqa: TC003

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

PrisonerNumber = str


class SyncBaseModel(BaseModel):
    model_config = ConfigDict(
        extra="ignore",
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


class ProvenancePayload(SyncBaseModel):
    created_by: str | None = None
    created_at: datetime | None = None
    updated_by: str | None = None
    updated_at: datetime | None = None


class RelationshipRestrictionPayload(ProvenancePayload):
    source_id: int
    restriction_type: str = Field(min_length=1)
    comment: str | None = None
    start_date: date | None = None
    expiry_date: date | None = None


class RelationshipPayload(ProvenancePayload):
    source_id: int
    contact_id: int
    prisoner_number: PrisonerNumber = Field(min_length=1)
    relationship_type: str = Field(min_length=1)
    sub_type: str = Field(min_length=1)
    next_of_kin: bool = False
    emergency_contact: bool = False
    active: bool = True
    approved_visitor: bool = False
    current_term: bool = True
    comment: str | None = None
    expiry_date: date | None = None
    restrictions: list[RelationshipRestrictionPayload] = Field(
        default_factory=list["RelationshipRestrictionPayload"]
    )


class MergeRelationshipsPayload(SyncBaseModel):
    retained_prisoner_number: PrisonerNumber = Field(min_length=1)
    removed_prisoner_number: PrisonerNumber = Field(min_length=1)
    relationships: list[RelationshipPayload] = Field(default_factory=list["RelationshipPayload"])


class ResetRelationshipsPayload(SyncBaseModel):
    prisoner_number: PrisonerNumber = Field(min_length=1)
    relationships: list[RelationshipPayload] = Field(default_factory=list["RelationshipPayload"])


class CreateRelationshipPayload(ProvenancePayload):
    contact_id: int
    prisoner_number: PrisonerNumber = Field(min_length=1)
    relationship_type: str = Field(min_length=1)
    sub_type: str = Field(min_length=1)
    next_of_kin: bool = False
    emergency_contact: bool = False
    active: bool = True
    approved_visitor: bool = False
    current_term: bool = True
    comment: str | None = None
    expiry_date: date | None = None


class PrisonerMergePayload(SyncBaseModel):
    retaining_prisoner_number: PrisonerNumber = Field(min_length=1)
    removing_prisoner_number: PrisonerNumber = Field(min_length=1)


class PrisonerRestrictionPayload(ProvenancePayload):
    restriction_type: str = Field(min_length=1)
    effective_date: date
    authorised_username: str = Field(min_length=1)
    expiry_date: date | None = None
    comment_text: str | None = None
    current_term: bool = True


class ResetPrisonerRestrictionsPayload(SyncBaseModel):
    prisoner_number: PrisonerNumber = Field(min_length=1)
    restrictions: list[PrisonerRestrictionPayload] = Field(
        default_factory=list["PrisonerRestrictionPayload"]
    )


class MergePrisonerRestrictionsPayload(SyncBaseModel):
    keeping_prisoner_number: PrisonerNumber = Field(min_length=1)
    removing_prisoner_number: PrisonerNumber = Field(min_length=1)
    restrictions: list[PrisonerRestrictionPayload] = Field(
        default_factory=list["PrisonerRestrictionPayload"]
    )


class SingleActiveValuePayload(SyncBaseModel):
    prisoner_number: PrisonerNumber = Field(min_length=1)
    value: str | None = None
    created_by: str | None = None
    created_at: datetime | None = None


class MigratedValuePayload(SyncBaseModel):
    value: str | None = None
    created_by: str = Field(min_length=1)
    created_at: datetime


class MigrateHistoryPayload(SyncBaseModel):
    prisoner_number: PrisonerNumber = Field(min_length=1)
    current: MigratedValuePayload | None = None
    history: list[MigratedValuePayload] = Field(default_factory=list["MigratedValuePayload"])


class MigratePrisonerRestrictionsPayload(SyncBaseModel):
    prisoner_number: PrisonerNumber = Field(min_length=1)
    restrictions: list[PrisonerRestrictionPayload] = Field(min_length=1)
