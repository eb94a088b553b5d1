"""
Structured tool results.

Every tool returns a plain dict. Success:
  {"success": True, ...}
Failure:
  {"success": False, "error": "<message>", "error_kind": "<kind>", ...}

Only a missing required argument raises (MissingArgumentError).
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from dna_tools.client import BridgeError, BridgeUnavailable, HostReportedFailure, MalformedResponse

AUTH_REQUIRED_MESSAGE = (
    "Authentication required. Please log in to Model Services first using open_view with view=\"login\" "
    "or click Login under Model Services in the tree view."
)


class ErrorKind(str, Enum):
    BRIDGE_UNAVAILABLE = "bridge_unavailable"
    MALFORMED_RESPONSE = "malformed_response"
    VALIDATION_FAILED = "validation_failed"
    NOT_FOUND = "not_found"
    DUPLICATE_NAME = "duplicate_name"
    AUTH_REQUIRED = "auth_required"
    HOST_FAILURE = "host_failure"


class MissingArgumentError(ValueError):
    """A required tool argument was not supplied."""


_STATUS_KINDS = {
    400: ErrorKind.VALIDATION_FAILED,
    404: ErrorKind.NOT_FOUND,
    409: ErrorKind.DUPLICATE_NAME,
    422: ErrorKind.VALIDATION_FAILED,
}


def ok(**fields: Any) -> dict[str, Any]:
    return {"success": True, **fields}


def fail(kind: ErrorKind, error: str, **fields: Any) -> dict[str, Any]:
    return {"success": False, "error": error, "error_kind": kind.value, **fields}


def validation_failed(errors: list[str], message: str = "Validation failed") -> dict[str, Any]:
    return fail(ErrorKind.VALIDATION_FAILED, message, validationErrors=errors)


def not_found(message: str) -> dict[str, Any]:
    return fail(ErrorKind.NOT_FOUND, message)


def duplicate(message: str) -> dict[str, Any]:
    return fail(ErrorKind.DUPLICATE_NAME, message)


def auth_required() -> dict[str, Any]:
    return fail(ErrorKind.AUTH_REQUIRED, AUTH_REQUIRED_MESSAGE)


def from_bridge_error(error: BridgeError) -> dict[str, Any]:
    """Map a bridge exception to a failure result."""
    if isinstance(error, BridgeUnavailable):
        return fail(ErrorKind.BRIDGE_UNAVAILABLE, str(error))
    if isinstance(error, MalformedResponse):
        return fail(ErrorKind.MALFORMED_RESPONSE, str(error))
    if isinstance(error, HostReportedFailure):
        kind = _host_kind(error)
        extra: dict[str, Any] = {}
        if error.payload.get("validationErrors"):
            extra["validationErrors"] = error.payload["validationErrors"]
        return fail(kind, error.message, **extra)
    return fail(ErrorKind.HOST_FAILURE, str(error))


def require(**arguments: Any) -> None:
    """Raise MissingArgumentError for the first argument that is None or empty."""
    for name, value in arguments.items():
        if value is None or (isinstance(value, str) and not value.strip()):
            raise MissingArgumentError(f"{name} is required")


def _host_kind(error: HostReportedFailure) -> ErrorKind:
    declared = error.payload.get("error_kind")
    if declared in {k.value for k in ErrorKind}:
        return ErrorKind(declared)
    return _STATUS_KINDS.get(error.status_code, ErrorKind.HOST_FAILURE)
