from __future__ import annotations

from dataclasses import dataclass, field

import pytest

from relsync.domain.errors import ReferenceDataError
from relsync.domain.model import ReferenceCode, ReferenceCodeGroup
from relsync.domain.reference_data import ReferenceCodeValidator
from tests.helpers.prisoner import make_reference_code


@dataclass
class _InMemoryReferenceCodes:
    codes: list[ReferenceCode]
    lookups: list[tuple[str, str]] = field(default_factory=list[tuple[str, str]])

    def get(self, group_code: str, code: str) -> ReferenceCode | None:
        self.lookups.append((group_code, code))
        for reference in self.codes:
            if reference.group_code == group_code and reference.code == code:
                return reference
        return None


@pytest.fixture
def repository() -> _InMemoryReferenceCodes:
    return _InMemoryReferenceCodes(
        [
            make_reference_code("MOB", group=ReferenceCodeGroup.PHONE_TYPE),
            make_reference_code("FAX", group=ReferenceCodeGroup.PHONE_TYPE, is_active=False),
        ]
    )


def test_validate_returns_active_code(repository: _InMemoryReferenceCodes) -> None:
    reference = ReferenceCodeValidator(repository).validate(ReferenceCodeGroup.PHONE_TYPE, "MOB")

    assert reference.code == "MOB"


def test_unknown_code_names_the_group(repository: _InMemoryReferenceCodes) -> None:
    with pytest.raises(ReferenceDataError, match=r"Unsupported phone type \(LAND\)"):
        ReferenceCodeValidator(repository).validate(ReferenceCodeGroup.PHONE_TYPE, "LAND")


def test_inactive_code_rejected_unless_allowed(repository: _InMemoryReferenceCodes) -> None:
    validator = ReferenceCodeValidator(repository)

    with pytest.raises(ReferenceDataError, match="no longer active"):
        validator.validate(ReferenceCodeGroup.PHONE_TYPE, "FAX")

    reference = validator.validate(ReferenceCodeGroup.PHONE_TYPE, "FAX", allow_inactive=True)
    assert reference.code == "FAX"


def test_validate_all_checks_each_code_once(repository: _InMemoryReferenceCodes) -> None:
    ReferenceCodeValidator(repository).validate_all(
        ReferenceCodeGroup.PHONE_TYPE, ["MOB", "MOB", "FAX"], allow_inactive=True
    )

    assert [code for _, code in repository.lookups] == ["MOB", "FAX"]
