"""Translate validated sync payloads into domain requests."""

from __future__ import annotations

from typing import TYPE_CHECKING

from relsync.domain.merge import (
    CreateRelationshipRequest,
    MergePrisonerRestrictionsRequest,
    MergeRelationshipsRequest,
    MigratedValue,
    MigrateHistoryRequest,
    MigratePrisonerRestrictionsRequest,
    PrisonerMergeRequest,
    PrisonerRestrictionDetails,
    ResetPrisonerRestrictionsRequest,
    ResetRelationshipsRequest,
    SingleActiveValueUpdate,
    SyncRelationship,
    SyncRelationshipRestriction,
)

if TYPE_CHECKING:
    from .schema import (
        CreateRelationshipPayload,
        MergePrisonerRestrictionsPayload,
        MergeRelationshipsPayload,
        MigratedValuePayload,
        MigrateHistoryPayload,
        MigratePrisonerRestrictionsPayload,
        PrisonerMergePayload,
        PrisonerRestrictionPayload,
        RelationshipPayload,
        RelationshipRestrictionPayload,
        ResetPrisonerRestrictionsPayload,
        ResetRelationshipsPayload,
        SingleActiveValuePayload,
    )


def translate_merge_relationships(payload: MergeRelationshipsPayload) -> MergeRelationshipsRequest:
    return MergeRelationshipsRequest(
        retained_prisoner_number=payload.retained_prisoner_number,
        removed_prisoner_number=payload.removed_prisoner_number,
        relationships=tuple(_relationship(item) for item in payload.relationships),
    )


def translate_reset_relationships(payload: ResetRelationshipsPayload) -> ResetRelationshipsRequest:
    return ResetRelationshipsRequest(
        prisoner_number=payload.prisoner_number,
        relationships=tuple(_relationship(item) for item in payload.relationships),
    )


def translate_create_relationship(payload: CreateRelationshipPayload) -> CreateRelationshipRequest:
    return CreateRelationshipRequest(
        contact_id=payload.contact_id,
        prisoner_number=payload.prisoner_number,
        relationship_type=payload.relationship_type,
        relationship_to_prisoner=payload.sub_type,
        next_of_kin=payload.next_of_kin,
        emergency_contact=payload.emergency_contact,
        active=payload.active,
        approved_visitor=payload.approved_visitor,
        current_term=payload.current_term,
        comments=payload.comment,
        expiry_date=payload.expiry_date,
        created_by=payload.created_by,
        created_time=payload.created_at,
    )


def translate_prisoner_merge(payload: PrisonerMergePayload) -> PrisonerMergeRequest:
    return PrisonerMergeRequest(
        retaining_prisoner_number=payload.retaining_prisoner_number,
        removing_prisoner_number=payload.removing_prisoner_number,
    )


def translate_reset_prisoner_restrictions(
    payload: ResetPrisonerRestrictionsPayload,
) -> ResetPrisonerRestrictionsRequest:
    return ResetPrisonerRestrictionsRequest(
        prisoner_number=payload.prisoner_number,
        restrictions=tuple(_prisoner_restriction(item) for item in payload.restrictions),
    )


def translate_merge_prisoner_restrictions(
    payload: MergePrisonerRestrictionsPayload,
) -> MergePrisonerRestrictionsRequest:
    return MergePrisonerRestrictionsRequest(
        keeping_prisoner_number=payload.keeping_prisoner_number,
        removing_prisoner_number=payload.removing_prisoner_number,
        restrictions=tuple(_prisoner_restriction(item) for item in payload.restrictions),
    )


def translate_single_active_value(payload: SingleActiveValuePayload) -> SingleActiveValueUpdate:
    return SingleActiveValueUpdate(
        prisoner_number=payload.prisoner_number,
        value=payload.value,
        created_by=payload.created_by,
        created_time=payload.created_at,
    )


def translate_migrate_history(payload: MigrateHistoryPayload) -> MigrateHistoryRequest:
    return MigrateHistoryRequest(
        prisoner_number=payload.prisoner_number,
        current=_migrated_value(payload.current) if payload.current is not None else None,
        history=tuple(_migrated_value(item) for item in payload.history),
    )


def translate_migrate_prisoner_restrictions(
    payload: MigratePrisonerRestrictionsPayload,
) -> MigratePrisonerRestrictionsRequest:
    return MigratePrisonerRestrictionsRequest(
        prisoner_number=payload.prisoner_number,
        restrictions=tuple(_prisoner_restriction(item) for item in payload.restrictions),
    )


def _migrated_value(payload: MigratedValuePayload) -> MigratedValue:
    return MigratedValue(
        value=payload.value, created_by=payload.created_by, created_time=payload.created_at
    )


def _relationship(payload: RelationshipPayload) -> SyncRelationship:
    return SyncRelationship(
        source_id=payload.source_id,
        contact_id=payload.contact_id,
        prisoner_number=payload.prisoner_number,
        relationship_type=payload.relationship_type,
        relationship_to_prisoner=payload.sub_type,
        next_of_kin=payload.next_of_kin,
        emergency_contact=payload.emergency_contact,
        active=payload.active,
        approved_visitor=payload.approved_visitor,
        current_term=payload.current_term,
        comments=payload.comment,
        expiry_date=payload.expiry_date,
        restrictions=tuple(_relationship_restriction(item) for item in payload.restrictions),
        created_by=payload.created_by,
        created_time=payload.created_at,
        updated_by=payload.updated_by,
        updated_time=payload.updated_at,
    )


def _relationship_restriction(
    payload: RelationshipRestrictionPayload,
) -> SyncRelationshipRestriction:
    return SyncRelationshipRestriction(
        source_id=payload.source_id,
        restriction_type=payload.restriction_type,
        start_date=payload.start_date,
        expiry_date=payload.expiry_date,
        comments=payload.comment,
        created_by=payload.created_by,
        created_time=payload.created_at,
        updated_by=payload.updated_by,
        updated_time=payload.updated_at,
    )


def _prisoner_restriction(payload: PrisonerRestrictionPayload) -> PrisonerRestrictionDetails:
    return PrisonerRestrictionDetails(
        restriction_type=payload.restriction_type,
        effective_date=payload.effective_date,
        expiry_date=payload.expiry_date,
        comment_text=payload.comment_text,
        authorised_username=payload.authorised_username,
        current_term=payload.current_term,
        created_by=payload.created_by,
        created_time=payload.created_at,
        updated_by=payload.updated_by,
        updated_time=payload.updated_at,
    )
