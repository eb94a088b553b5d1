"""Tests for the model services login check."""

from __future__ import annotations

import httpx

from dna_tools.auth import AuthGate
from dna_tools.client import BridgeClient
from dna_tools.config import BridgeConfig


def _gate(handler) -> AuthGate:
    client = BridgeClient(
        BridgeConfig(),
        client_factory=lambda plane, timeout: httpx.Client(transport=httpx.MockTransport(handler)),
    )
    return AuthGate(client)


class TestAuthGate:
    def test_logged_in(self):
        assert _gate(lambda r: httpx.Response(200, json={"success": True, "isLoggedIn": True})).require_auth()

    def test_logged_out(self):
        assert not _gate(lambda r: httpx.Response(200, json={"success": True, "isLoggedIn": False})).require_auth()

    def test_truthy_strings_are_not_enough(self):
        assert not _gate(lambda r: httpx.Response(200, json={"success": "true", "isLoggedIn": "true"})).require_auth()

    def test_unreachable_host(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        assert not _gate(handler).require_auth()

    def test_status_timeout(self):
        def handler(request):
            raise httpx.ReadTimeout("no answer", request=request)

        assert _gate(handler).require_auth() is False

    def test_unexpected_body(self):
        assert not _gate(lambda r: httpx.Response(200, json=["yes"])).require_auth()

    def test_status_check_hits_command_plane(self, host, bridge):
        assert AuthGate(bridge).require_auth() is True
        assert [p.value for p in host.exchanges] == ["command"]
