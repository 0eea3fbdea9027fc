"""Sync and admin payload adapter package."""

from __future__ import annotations

from .errors import status_for
from .results import (
    HistoryMigrationResponse,
    PrisonerMergeResponse,
    RelationshipResponse,
    RelationshipsChangedResponse,
    RestrictionsChangedResponse,
    SingleActiveMergeResponse,
    SingleActiveValueResponse,
    snapshot_document,
)
from .schema import (
    CreateRelationshipPayload,
    MergePrisonerRestrictionsPayload,
    MergeRelationshipsPayload,
    MigrateHistoryPayload,
    MigratePrisonerRestrictionsPayload,
    PrisonerMergePayload,
    ResetPrisonerRestrictionsPayload,
    ResetRelationshipsPayload,
    SingleActiveValuePayload,
)
from .translator import (
    translate_create_relationship,
    translate_merge_prisoner_restrictions,
    translate_merge_relationships,
    translate_migrate_history,
    translate_migrate_prisoner_restrictions,
    translate_prisoner_merge,
    translate_reset_prisoner_restrictions,
    translate_reset_relationships,
    translate_single_active_value,
)

__all__ = [
    "CreateRelationshipPayload",
    "HistoryMigrationResponse",
    "MergePrisonerRestrictionsPayload",
    "MergeRelationshipsPayload",
    "MigrateHistoryPayload",
    "MigratePrisonerRestrictionsPayload",
    "PrisonerMergePayload",
    "PrisonerMergeResponse",
    "RelationshipResponse",
    "RelationshipsChangedResponse",
    "ResetPrisonerRestrictionsPayload",
    "ResetRelationshipsPayload",
    "RestrictionsChangedResponse",
    "SingleActiveMergeResponse",
    "SingleActiveValuePayload",
    "SingleActiveValueResponse",
    "snapshot_document",
    "status_for",
    "translate_create_relationship",
    "translate_merge_prisoner_restrictions",
    "translate_merge_relationships",
    "translate_migrate_history",
    "translate_migrate_prisoner_restrictions",
    "translate_prisoner_merge",
    "translate_reset_prisoner_restrictions",
    "translate_reset_relationships",
    "translate_single_active_value",
]
