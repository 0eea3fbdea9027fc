"""Domain error hierarchy.

Each class maps to one response category so adapters can translate failures
without inspecting messages.
"""

from __future__ import annotations


class RelsyncError(Exception):
    """Base class for every error raised by the domain layer."""


class NotFoundError(RelsyncError):
    """A referenced entity does not exist."""


class RequestValidationError(RelsyncError):
    """An inbound request is internally inconsistent or references bad data."""


class ReferenceDataError(RequestValidationError):
    """A code is not a member of its reference-data group."""


class DuplicateRelationshipError(RelsyncError):
    """An active current-term relationship already exists for the same contact and prisoner."""


class InvariantViolationError(RelsyncError):
    """Internal state contradicts an invariant; the transaction must abort."""
