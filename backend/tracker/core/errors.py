"""Error types raised by the monitor API and the body they are rendered as."""
from __future__ import annotations

from typing import Any, Dict


class ErrorCodes:
    MISSING_PARAMETER = "MISSING_PARAMETER"
    INVALID_PARAMETER = "INVALID_PARAMETER"
    DATASTORE_FAILURE = "DATASTORE_FAILURE"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class MonitorError(Exception):
    """Base error; carries the HTTP status and a stable error code."""

    status_code: int = 500
    code: str = ErrorCodes.INTERNAL_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MissingParameter(MonitorError):
    status_code = 400
    code = ErrorCodes.MISSING_PARAMETER


class InvalidParameter(MonitorError):
    status_code = 400
    code = ErrorCodes.INVALID_PARAMETER


class DatastoreFailure(MonitorError):
    """A query failed. The message is generic; the cause is chained."""

    status_code = 500
    code = ErrorCodes.DATASTORE_FAILURE


def error_body(code: str, message: str) -> Dict[str, Any]:
    """Return the JSON body for an error response."""
    return {
        "ok": False,
        "error": {
            "code": code,
            "message": message,
        },
    }
