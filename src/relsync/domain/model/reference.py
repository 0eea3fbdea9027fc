from __future__ import annotations

from dataclasses import dataclass

from relsync.domain.model.entity import Entity


@dataclass(eq=False, kw_only=True)
class ReferenceCode(Entity):
    group_code: str
    code: str
    description: str
    display_order: int = 0
    is_active: bool = True
