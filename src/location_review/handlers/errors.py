"""Mapping of service errors onto HTTP responses."""

import logging

from fastapi import HTTPException, status

from location_review.errors import (
    AlreadyResolvedError,
    EntryNotFoundError,
    LocationReviewError,
    PersistenceError,
    UpstreamError,
)

logger = logging.getLogger(__name__)

STATUS_BY_ERROR: dict[type[LocationReviewError], int] = {
    UpstreamError: status.HTTP_502_BAD_GATEWAY,
    PersistenceError: status.HTTP_503_SERVICE_UNAVAILABLE,
    AlreadyResolvedError: status.HTTP_409_CONFLICT,
    EntryNotFoundError: status.HTTP_404_NOT_FOUND,
}


def to_http_exception(error: LocationReviewError, action: str) -> HTTPException:
    """Log a service error once and convert it to an HTTPException.

    Called from inside the except block, so 5xx logs carry the traceback.
    """
    status_code = STATUS_BY_ERROR.get(type(error), status.HTTP_500_INTERNAL_SERVER_ERROR)
    if status_code >= 500:
        logger.exception("Failed to %s [%s]: %s", action, error.kind, error)
    return HTTPException(status_code=status_code, detail=f"Failed to {action}: {error}")


def timeout_exception(action: str, timeout: float) -> HTTPException:
    logger.exception("Timed out after %.1fs trying to %s", timeout, action)
    return HTTPException(
        status_code=status.HTTP_504_GATEWAY_TIMEOUT,
        detail=f"Timed out trying to {action}",
    )
