"""Merge one-active-value-with-history records of two prisoner numbers."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from relsync.domain.errors import RequestValidationError
from relsync.domain.merge.contracts import SingleActiveMergeResult

if TYPE_CHECKING:
    from relsync.domain.model import ElementType, SingleActiveRecord
    from relsync.domain.ports.persistence import SingleActiveRecordRepository

log = logging.getLogger(__name__)


class RecencyMerger[TRecord: SingleActiveRecord]:
    """Resolve which of two active values survives a prisoner merge.

    The newer active value (by ``created_time``) stays active under the
    retaining prisoner number; on equal timestamps the retaining value wins.
    All history of the removing identity is re-parented. Nothing is deleted.
    """

    def __init__(self, repository: SingleActiveRecordRepository[TRecord]) -> None:
        self._repository = repository

    @property
    def element_type(self) -> ElementType:
        return self._repository.record_type.ELEMENT_TYPE

    def merge(self, retaining: str, removing: str) -> SingleActiveMergeResult:
        if retaining == removing:
            raise RequestValidationError(f"Cannot merge prisoner {retaining} into itself")
        retaining_active = self._repository.find_active(retaining)
        removing_active = self._repository.find_active(removing)
        if retaining_active is None or removing_active is None:
            log.info(
                "No %s merge between %s and %s: an active value is missing",
                self.element_type,
                retaining,
                removing,
            )
            return SingleActiveMergeResult(element_type=self.element_type)

        for history in self._repository.find_by_prisoner_number(removing):
            if history is not removing_active:
                history.reparent(retaining)

        if removing_active.is_newer_than(retaining_active):
            # the unique active index must never see two active rows
            retaining_active.deactivate()
            self._repository.flush()
            removing_active.reparent(retaining, active=True)
            self._repository.flush()
            log.info(
                "%s from %s supersedes the value held by %s",
                self.element_type,
                removing,
                retaining,
            )
            return SingleActiveMergeResult(
                element_type=self.element_type,
                record_id=removing_active.require_id(),
                was_created=True,
            )

        removing_active.reparent(retaining, active=False)
        self._repository.flush()
        log.info(
            "%s held by %s is kept; %s value moved to history",
            self.element_type,
            retaining,
            removing,
        )
        return SingleActiveMergeResult(
            element_type=self.element_type,
            record_id=retaining_active.require_id(),
            was_created=False,
        )

    def supersede(self, record: TRecord) -> TRecord:
        """Make ``record`` the active value for its prisoner, keeping the old one as history."""

        current = self._repository.find_active(record.prisoner_number)
        if current is not None:
            current.deactivate()
            self._repository.flush()
        record.active = True
        self._repository.add(record)
        self._repository.flush()
        return record
