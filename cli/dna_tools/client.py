"""HTTP bridge client for the model host."""
from __future__ import annotations

import json
import logging
from collections.abc import Callable
from typing import Any

import httpx

from dna_tools.config import CATALOG_TIMEOUT, MUTATION_TIMEOUT, BridgeConfig, Plane

logger = logging.getLogger(__name__)

ClientFactory = Callable[[Plane, float], httpx.Client]


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class BridgeError(Exception):
    """Any failed exchange with the host."""


class BridgeUnavailable(BridgeError):
    """The host could not be reached."""


class ConnectionRefused(BridgeUnavailable):
    pass


class BridgeTimeout(BridgeUnavailable):
    pass


class MalformedResponse(BridgeError):
    """The host answered with something that is not UTF-8 JSON."""


class HostReportedFailure(BridgeError):
    """The host answered `success: false` or a non-2xx status."""

    def __init__(self, message: str, status_code: int, payload: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload or {}


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------


def _default_factory(plane: Plane, timeout: float) -> httpx.Client:
    return httpx.Client(timeout=timeout)


class BridgeClient:
    """
    One synchronous request/response exchange per call.

    A fresh httpx.Client is opened for every exchange and closed right after,
    so nothing is shared between calls. There is no retry.
    """

    def __init__(self, config: BridgeConfig | None = None, client_factory: ClientFactory | None = None):
        self.config = config or BridgeConfig.load()
        self._client_factory = client_factory or _default_factory

    def exchange(
        self,
        plane: Plane,
        path: str,
        method: str = "GET",
        body: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
        timeout: float = MUTATION_TIMEOUT,
    ) -> Any:
        """Send one request and return the parsed JSON body, or raise BridgeError."""
        url = f"{self.config.base_url(plane)}{path}"
        query = {k: v for k, v in (params or {}).items() if v is not None}
        logger.debug("%s %s", method, url)

        try:
            with self._client_factory(plane, timeout) as client:
                res = client.request(method, url, json=body, params=query or None, timeout=timeout)
        except httpx.ConnectError as e:
            raise ConnectionRefused(f"Model host is not reachable at {url}: {e}") from e
        except httpx.TimeoutException as e:
            raise BridgeTimeout(f"Model host did not answer within {timeout:g}s ({method} {path})") from e
        except httpx.TransportError as e:
            raise BridgeUnavailable(f"Bridge transport error on {method} {path}: {e}") from e

        return _parse(res, method, path)

    def get(self, path: str, params: dict[str, Any] | None = None, timeout: float = CATALOG_TIMEOUT) -> Any:
        """GET on the data plane."""
        return self.exchange(Plane.DATA, path, params=params, timeout=timeout)

    def post(self, path: str, body: dict[str, Any], timeout: float = MUTATION_TIMEOUT) -> Any:
        """POST on the data plane."""
        return self.exchange(Plane.DATA, path, method="POST", body=body, timeout=timeout)

    def command(self, command: str, args: list[Any] | None = None, timeout: float = MUTATION_TIMEOUT) -> Any:
        """Run a host command via the command plane."""
        return self.exchange(
            Plane.COMMAND,
            "/api/execute-command",
            method="POST",
            body={"command": command, "args": args or []},
            timeout=timeout,
        )


def _parse(res: httpx.Response, method: str, path: str) -> Any:
    try:
        data = json.loads(res.content.decode("utf-8"))
    except (UnicodeDecodeError, ValueError) as e:
        if not res.is_success:
            raise HostReportedFailure(
                f"Host returned HTTP {res.status_code} for {method} {path}", res.status_code
            ) from e
        raise MalformedResponse(f"Host returned a body that is not UTF-8 JSON for {method} {path}") from e

    if isinstance(data, dict) and (data.get("success") is False or not res.is_success):
        message = data.get("error") or _detail(data) or f"Host returned HTTP {res.status_code}"
        raise HostReportedFailure(message, res.status_code, data)
    if not res.is_success:
        raise HostReportedFailure(f"Host returned HTTP {res.status_code} for {method} {path}", res.status_code)
    return data


def _detail(data: dict[str, Any]) -> str | None:
    detail = data.get("detail")
    if detail is None:
        return None
    return detail if isinstance(detail, str) else json.dumps(detail)
