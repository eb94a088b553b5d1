"""Login probe for operations that call remote model services."""
from __future__ import annotations

import logging

from dna_tools.client import BridgeClient, BridgeError
from dna_tools.config import AUTH_TIMEOUT, Plane

logger = logging.getLogger(__name__)


class AuthGate:
    """Asks the host whether the user is logged in to model services."""

    def __init__(self, client: BridgeClient):
        self.client = client

    def require_auth(self) -> bool:
        """
        True only when the host answers {success: true, isLoggedIn: true}.

        Never raises: an unreachable host, a timeout or an unexpected body
        all count as not authenticated.
        """
        try:
            status = self.client.exchange(Plane.COMMAND, "/api/auth-status", timeout=AUTH_TIMEOUT)
        except BridgeError as e:
            logger.info("Auth probe failed, treating as logged out: %s", e)
            return False

        if not isinstance(status, dict):
            return False
        return status.get("success") is True and status.get("isLoggedIn") is True
