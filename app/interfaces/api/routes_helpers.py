"""Helper utilities shared across API route handlers."""

from fastapi import HTTPException, status

from app.application.errors import (
    ActivityTrackerError,
    ConflictError,
    DataAccessError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)

_STATUS_BY_ERROR: tuple[tuple[type[ActivityTrackerError], int], ...] = (
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (ConflictError, status.HTTP_409_CONFLICT),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ForbiddenError, status.HTTP_403_FORBIDDEN),
    (DataAccessError, status.HTTP_500_INTERNAL_SERVER_ERROR),
)


def to_http_exception(exc: ActivityTrackerError) -> HTTPException:
    """Return the ``HTTPException`` carrying ``exc`` as a structured body."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    for error_type, code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            status_code = code
            break
    return HTTPException(status_code=status_code, detail=exc.to_payload())


__all__ = ["to_http_exception"]
