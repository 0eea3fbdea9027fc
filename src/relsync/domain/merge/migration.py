"""Load a prisoner's single-active history from the legacy system."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from relsync.domain.merge.contracts import HistoryMigrationResult

if TYPE_CHECKING:
    from relsync.domain.merge.requests import MigratedValue, MigrateHistoryRequest
    from relsync.domain.model import SingleActiveRecord
    from relsync.domain.ports.persistence import SingleActiveRecordRepository
    from relsync.domain.reference_data import ReferenceCodeValidator

log = logging.getLogger(__name__)


class HistoryMigrator[TRecord: SingleActiveRecord]:
    """Replace every stored value of a prisoner with the migrated history.

    Coded values are checked against reference data before anything is
    deleted. History rows are stored inactive and the current value, when
    present, is stored active after them.
    """

    def __init__(
        self,
        repository: SingleActiveRecordRepository[TRecord],
        reference_codes: ReferenceCodeValidator,
    ) -> None:
        self._repository = repository
        self._reference_codes = reference_codes

    def migrate(self, request: MigrateHistoryRequest) -> HistoryMigrationResult:
        record_type = self._repository.record_type
        self._validate(request)

        deleted = self._repository.delete_by_prisoner_number(request.prisoner_number)
        self._repository.flush()

        history = [self._build(value, request.prisoner_number, False) for value in request.history]
        current = (
            self._build(request.current, request.prisoner_number, True)
            if request.current is not None
            else None
        )
        records = list(history)
        if current is not None:
            records.append(current)
        for record in records:
            self._repository.add(record)
        self._repository.flush()

        log.info(
            "Migrated %s for %s: %d replaced, %d history, current=%s",
            record_type.ELEMENT_TYPE,
            request.prisoner_number,
            deleted,
            len(history),
            current is not None,
        )
        return HistoryMigrationResult(
            element_type=record_type.ELEMENT_TYPE,
            prisoner_number=request.prisoner_number,
            current_id=current.require_id() if current is not None else None,
            history_ids=tuple(record.require_id() for record in history),
            deleted_count=deleted,
        )

    def _validate(self, request: MigrateHistoryRequest) -> None:
        group = self._repository.record_type.REFERENCE_GROUP
        if group is None:
            return
        values = list(request.history)
        if request.current is not None:
            values.append(request.current)
        # historic values may use codes that have since been retired
        self._reference_codes.validate_all(
            group,
            (value.value for value in values if value.value is not None),
            allow_inactive=True,
        )

    def _build(self, value: MigratedValue, prisoner_number: str, active: bool) -> TRecord:
        return self._repository.record_type.with_value(
            value.value,
            prisoner_number=prisoner_number,
            created_by=value.created_by,
            created_time=value.created_time,
            active=active,
        )
