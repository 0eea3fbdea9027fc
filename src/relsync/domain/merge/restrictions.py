"""Merge and reset prisoner-level restrictions."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from relsync.domain.errors import RequestValidationError
from relsync.domain.merge.contracts import RemovedRestriction, RestrictionsChangedResult
from relsync.domain.model import PrisonerRestriction, ReferenceCodeGroup, utcnow

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from datetime import datetime

    from relsync.domain.merge.requests import PrisonerRestrictionDetails
    from relsync.domain.ports.persistence import PrisonerRestrictionRepository
    from relsync.domain.reference_data import ReferenceCodeValidator

log = logging.getLogger(__name__)


class RestrictionSetMerger:
    """Copy-and-delete or wholesale replacement of a prisoner's restrictions."""

    def __init__(
        self,
        restrictions: PrisonerRestrictionRepository,
        reference_codes: ReferenceCodeValidator,
        *,
        system_username: str,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._restrictions = restrictions
        self._reference_codes = reference_codes
        self._system_username = system_username
        self._clock = clock

    def merge_restrictions(self, retaining: str, removing: str) -> RestrictionsChangedResult:
        """Move every restriction of ``removing`` to ``retaining`` under new ids."""

        _require_distinct(retaining, removing)
        source = self._restrictions.find_by_prisoner_number(removing)
        if not source:
            log.info("No prisoner restrictions to merge from %s", removing)
            return RestrictionsChangedResult(prisoner_number=retaining)

        copies = [restriction.copy_to(retaining) for restriction in source]
        self._restrictions.add_all(copies)
        self._restrictions.flush()
        deleted = self._delete_all(removing, source)

        log.info(
            "Merged %d prisoner restrictions from %s into %s", len(copies), removing, retaining
        )
        return RestrictionsChangedResult(
            prisoner_number=retaining,
            created_ids=tuple(copy.require_id() for copy in copies),
            deleted=deleted,
        )

    def reset_restrictions(
        self, prisoner_number: str, restrictions: Sequence[PrisonerRestrictionDetails]
    ) -> RestrictionsChangedResult:
        """Replace every restriction of ``prisoner_number`` with ``restrictions``."""

        self._validate(restrictions)
        existing = self._restrictions.find_by_prisoner_number(prisoner_number)
        deleted = self._delete_all(prisoner_number, existing)
        created = self._insert(prisoner_number, restrictions)

        log.info(
            "Reset prisoner restrictions for %s: %d removed, %d created",
            prisoner_number,
            len(deleted),
            len(created),
        )
        return RestrictionsChangedResult(
            prisoner_number=prisoner_number,
            created_ids=created,
            deleted=deleted,
        )

    def migrate_restrictions(
        self, prisoner_number: str, restrictions: Sequence[PrisonerRestrictionDetails]
    ) -> RestrictionsChangedResult:
        """Load a prisoner's restrictions from the legacy system, replacing what is stored."""

        if not restrictions:
            raise RequestValidationError(
                f"No restrictions supplied to migrate for prisoner {prisoner_number}"
            )
        result = self.reset_restrictions(prisoner_number, restrictions)
        log.info(
            "Migrated %d prisoner restrictions for %s", len(result.created_ids), prisoner_number
        )
        return result

    def replace_on_merge(
        self,
        keeping: str,
        removing: str,
        restrictions: Sequence[PrisonerRestrictionDetails],
    ) -> RestrictionsChangedResult:
        """Drop both identities' restrictions and store ``restrictions`` under ``keeping``."""

        _require_distinct(keeping, removing)
        self._validate(restrictions)
        deleted = (
            *self._delete_all(keeping, self._restrictions.find_by_prisoner_number(keeping)),
            *self._delete_all(removing, self._restrictions.find_by_prisoner_number(removing)),
        )
        created = self._insert(keeping, restrictions)

        log.info(
            "Replaced prisoner restrictions of %s and %s: %d removed, %d created under %s",
            keeping,
            removing,
            len(deleted),
            len(created),
            keeping,
        )
        return RestrictionsChangedResult(
            prisoner_number=keeping,
            created_ids=created,
            deleted=deleted,
        )

    def _validate(self, restrictions: Sequence[PrisonerRestrictionDetails]) -> None:
        # historic restrictions may use codes that have since been retired
        self._reference_codes.validate_all(
            ReferenceCodeGroup.RESTRICTION,
            (restriction.restriction_type for restriction in restrictions),
            allow_inactive=True,
        )

    def _delete_all(
        self, prisoner_number: str, existing: Sequence[PrisonerRestriction]
    ) -> tuple[RemovedRestriction, ...]:
        if not existing:
            return ()
        deleted = tuple(
            RemovedRestriction(prisoner_number, restriction.require_id())
            for restriction in existing
        )
        self._restrictions.delete_by_prisoner_number(prisoner_number)
        return deleted

    def _insert(
        self, prisoner_number: str, restrictions: Sequence[PrisonerRestrictionDetails]
    ) -> tuple[int, ...]:
        entities = [
            PrisonerRestriction(
                prisoner_number=prisoner_number,
                restriction_type=details.restriction_type,
                effective_date=details.effective_date,
                expiry_date=details.expiry_date,
                comment_text=details.comment_text,
                authorised_username=details.authorised_username,
                current_term=details.current_term,
                created_by=details.created_by or self._system_username,
                created_time=details.created_time or self._clock(),
                updated_by=details.updated_by,
                updated_time=details.updated_time,
            )
            for details in restrictions
        ]
        self._restrictions.add_all(entities)
        self._restrictions.flush()
        return tuple(entity.require_id() for entity in entities)


def _require_distinct(keeping: str, removing: str) -> None:
    if keeping == removing:
        raise RequestValidationError(f"Cannot merge prisoner {keeping} into itself")
