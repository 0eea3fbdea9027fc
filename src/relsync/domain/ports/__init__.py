"""Domain port definitions for adapters."""

from __future__ import annotations

from .events import EventPublisher
from .persistence import (
    ContactOwnedRepository,
    ContactRepository,
    DomesticStatusRepository,
    NumberOfChildrenRepository,
    PrisonerContactRepository,
    PrisonerContactRestrictionRepository,
    PrisonerRestrictionRepository,
    ReferenceCodeRepository,
    Repository,
    SingleActiveRecordRepository,
)
from .unit_of_work import (
    RepositoryCollection,
    SyncRepositories,
    SyncUnitOfWork,
    UnitOfWork,
)

__all__ = [
    "ContactOwnedRepository",
    "ContactRepository",
    "DomesticStatusRepository",
    "EventPublisher",
    "NumberOfChildrenRepository",
    "PrisonerContactRepository",
    "PrisonerContactRestrictionRepository",
    "PrisonerRestrictionRepository",
    "ReferenceCodeRepository",
    "Repository",
    "RepositoryCollection",
    "SingleActiveRecordRepository",
    "SyncRepositories",
    "SyncUnitOfWork",
    "UnitOfWork",
]
