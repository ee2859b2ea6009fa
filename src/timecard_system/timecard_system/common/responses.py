"""JSON envelopes shared by the API controllers."""

from __future__ import annotations

from typing import Any

from flask import jsonify

from ..core.exceptions import (
    Conflict,
    ConcurrentModification,
    DomainError,
    MissingTenant,
    NotFound,
    StorageUnavailable,
    TenantMismatch,
    Unauthenticated,
    ValidationError,
)
from ..core.logging import get_logger
from .datetime_utils import epoch_millis, utc_now

log = get_logger(__name__)

BUSY_MESSAGE = "Database is currently locked. Please try again later."


def error_response(message: str, status: int):
    return jsonify({"error": message}), status


def revalidated(data: Any):
    """Envelope used by write endpoints so clients refresh cached views."""
    return jsonify(
        {
            "revalidated": True,
            "now": epoch_millis(utc_now()),
            "cache": "no-store",
            "data": data,
        }
    )


def status_for(error: DomainError) -> int:
    if isinstance(error, (ValidationError, MissingTenant)):
        return 400
    if isinstance(error, Unauthenticated):
        return 401
    if isinstance(error, TenantMismatch):
        return 403
    if isinstance(error, NotFound):
        return 404
    if isinstance(error, (Conflict, ConcurrentModification)):
        return 409
    if isinstance(error, StorageUnavailable) and error.busy:
        return 503
    return 500


def domain_error_response(error: DomainError, *, event: str, fallback: str):
    """Client errors keep their message; server errors are logged and masked."""
    status = status_for(error)
    if status == 503:
        log.warning(event, error=repr(error), exc_info=error)
        return error_response(BUSY_MESSAGE, status)
    if status >= 500:
        log.error(event, error=repr(error), exc_info=error)
        return error_response(fallback, status)
    return error_response(str(error), status)
