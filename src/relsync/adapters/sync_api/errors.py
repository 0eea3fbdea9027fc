"""Map domain and configuration errors onto HTTP-equivalent statuses."""

from __future__ import annotations

from http import HTTPStatus

from pydantic import ValidationError

from relsync.domain.errors import (
    DuplicateRelationshipError,
    NotFoundError,
    RequestValidationError,
)

_STATUS_BY_ERROR: tuple[tuple[type[Exception], HTTPStatus], ...] = (
    (NotFoundError, HTTPStatus.NOT_FOUND),
    (RequestValidationError, HTTPStatus.BAD_REQUEST),
    (ValidationError, HTTPStatus.BAD_REQUEST),
    (DuplicateRelationshipError, HTTPStatus.CONFLICT),
)


def status_for(exc: BaseException) -> HTTPStatus:
    """Return the status a caller should see; anything unrecognised is a server error."""

    for error_type, status in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status
    return HTTPStatus.INTERNAL_SERVER_ERROR

