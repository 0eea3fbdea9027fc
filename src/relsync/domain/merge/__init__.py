"""Identity merge and reset engine."""

from __future__ import annotations

from .approval import infer_approval
from .contracts import (
    HistoryMigrationResult,
    IdPair,
    PrisonerMergeResult,
    PriorRelationship,
    Rebuild,
    RelationshipAndRestrictionIds,
    RelationshipsChangedResult,
    RemovedRelationshipIds,
    RemovedRestriction,
    RestrictionsChangedResult,
    SingleActiveMergeResult,
    Wipe,
)
from .migration import HistoryMigrator
from .recency import RecencyMerger
from .relationships import RelationshipConsolidator
from .requests import (
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
from .restrictions import RestrictionSetMerger

__all__ = [
    "CreateRelationshipRequest",
    "HistoryMigrationResult",
    "HistoryMigrator",
    "IdPair",
    "MergePrisonerRestrictionsRequest",
    "MergeRelationshipsRequest",
    "MigratedValue",
    "MigrateHistoryRequest",
    "MigratePrisonerRestrictionsRequest",
    "PrisonerMergeRequest",
    "PrisonerMergeResult",
    "PrisonerRestrictionDetails",
    "PriorRelationship",
    "Rebuild",
    "RecencyMerger",
    "RelationshipAndRestrictionIds",
    "RelationshipConsolidator",
    "RelationshipsChangedResult",
    "RemovedRelationshipIds",
    "RemovedRestriction",
    "ResetPrisonerRestrictionsRequest",
    "ResetRelationshipsRequest",
    "RestrictionSetMerger",
    "RestrictionsChangedResult",
    "SingleActiveMergeResult",
    "SingleActiveValueUpdate",
    "SyncRelationship",
    "SyncRelationshipRestriction",
    "Wipe",
    "infer_approval",
]
