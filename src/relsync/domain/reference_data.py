"""Validate coded values against reference-data groups."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from relsync.domain.errors import ReferenceDataError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from relsync.domain.model import ReferenceCode, ReferenceCodeGroup
    from relsync.domain.ports.persistence import ReferenceCodeRepository

log = logging.getLogger(__name__)


class ReferenceCodeValidator:
    def __init__(self, repository: ReferenceCodeRepository) -> None:
        self._repository = repository

    def validate(
        self, group: ReferenceCodeGroup, code: str, *, allow_inactive: bool = False
    ) -> ReferenceCode:
        reference = self._repository.get(group, code)
        if reference is None:
            raise ReferenceDataError(f"Unsupported {group.lower().replace('_', ' ')} ({code})")
        if not reference.is_active and not allow_inactive:
            raise ReferenceDataError(
                f"Unsupported {group.lower().replace('_', ' ')} ({code}). "
                "This code is no longer active."
            )
        return reference

    def validate_all(
        self, group: ReferenceCodeGroup, codes: Iterable[str], *, allow_inactive: bool = False
    ) -> None:
        """Validate each distinct code once; the first failure is raised."""

        for code in dict.fromkeys(codes):
            self.validate(group, code, allow_inactive=allow_inactive)
