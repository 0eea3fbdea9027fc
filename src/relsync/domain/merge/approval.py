"""Carry visitor approval forward across a relationship rebuild."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from relsync.domain.model import Approval

if TYPE_CHECKING:
    from collections.abc import Iterable

    from relsync.domain.merge.contracts import PriorRelationship
    from relsync.domain.merge.requests import SyncRelationship

_EARLIEST = datetime.min.replace(tzinfo=UTC)


def _same_relationship(prior: PriorRelationship, incoming: SyncRelationship) -> bool:
    return (
        prior.contact_id == incoming.contact_id
        and prior.relationship_type == incoming.relationship_type
        and prior.relationship_to_prisoner == incoming.relationship_to_prisoner
    )


def _recency(prior: PriorRelationship) -> tuple[datetime, int]:
    return (prior.approved_time or _EARLIEST, prior.id)


def infer_approval(
    prior: Iterable[PriorRelationship], incoming: SyncRelationship
) -> Approval | None:
    """Return the approval to stamp on ``incoming``, or None.

    Upstream does not send who approved a visitor, so it is recovered from the
    relationships that existed before the wipe. Candidates must match contact,
    relationship type and sub-type and must have been approved. A candidate on
    ``incoming.prisoner_number`` beats one on another wiped identity; within a
    tier the latest approval time wins, then the highest id.
    """

    if not incoming.approved_visitor:
        return None

    candidates = [
        snapshot
        for snapshot in prior
        if snapshot.approved_visitor
        and snapshot.approved_by is not None
        and _same_relationship(snapshot, incoming)
    ]
    if not candidates:
        return None

    exact = [c for c in candidates if c.prisoner_number == incoming.prisoner_number]
    chosen = max(exact or candidates, key=_recency)
    assert chosen.approved_by is not None  # filtered above
    return Approval(approved_by=chosen.approved_by, approved_time=chosen.approved_time)
