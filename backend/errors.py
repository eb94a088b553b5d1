"""Host-side failures and the JSON shape they are answered with."""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse


class HostError(Exception):
    """A rejected bridge request. Answered as {"success": false, "error": ...}."""

    def __init__(
        self,
        message: str,
        status_code: int = 400,
        error_kind: str = "host_failure",
        validation_errors: list[str] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.error_kind = error_kind
        self.validation_errors = validation_errors or []


def not_found(message: str) -> HostError:
    return HostError(message, 404, "not_found")


def duplicate(message: str) -> HostError:
    return HostError(message, 409, "duplicate_name")


def invalid(errors: list[str], message: str = "Validation failed") -> HostError:
    return HostError(message, 400, "validation_failed", errors)


async def host_error_handler(request: Request, exc: HostError) -> JSONResponse:
    body = {"success": False, "error": exc.message, "error_kind": exc.error_kind}
    if exc.validation_errors:
        body["validationErrors"] = exc.validation_errors
    return JSONResponse(status_code=exc.status_code, content=body)


def install(app: FastAPI) -> None:
    app.add_exception_handler(HostError, host_error_handler)
