"""SQLAlchemy adapter package for relsync."""

from __future__ import annotations

from .mappings import TABLE_BY_CLASS, create_all_tables, mapper_registry, start_mappers
from .repositories import (
    SqlAlchemyContactOwnedRepository,
    SqlAlchemyContactRepository,
    SqlAlchemyDomesticStatusRepository,
    SqlAlchemyNumberOfChildrenRepository,
    SqlAlchemyPrisonerContactRepository,
    SqlAlchemyPrisonerContactRestrictionRepository,
    SqlAlchemyPrisonerRestrictionRepository,
    SqlAlchemyReferenceCodeRepository,
)

__all__ = [
    "TABLE_BY_CLASS",
    "SqlAlchemyContactOwnedRepository",
    "SqlAlchemyContactRepository",
    "SqlAlchemyDomesticStatusRepository",
    "SqlAlchemyNumberOfChildrenRepository",
    "SqlAlchemyPrisonerContactRepository",
    "SqlAlchemyPrisonerContactRestrictionRepository",
    "SqlAlchemyPrisonerRestrictionRepository",
    "SqlAlchemyReferenceCodeRepository",
    "create_all_tables",
    "mapper_registry",
    "start_mappers",
]
