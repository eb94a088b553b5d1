"""Tests for structured tool results."""

from __future__ import annotations

import pytest

from dna_tools import results
from dna_tools.client import BridgeTimeout, HostReportedFailure, MalformedResponse


class TestFromBridgeError:
    def test_unavailable(self):
        out = results.from_bridge_error(BridgeTimeout("slow"))
        assert out == {"success": False, "error": "slow", "error_kind": "bridge_unavailable"}

    def test_malformed(self):
        assert results.from_bridge_error(MalformedResponse("bad"))["error_kind"] == "malformed_response"

    def test_declared_kind_wins(self):
        err = HostReportedFailure("nope", 400, {"error_kind": "auth_required"})
        assert results.from_bridge_error(err)["error_kind"] == "auth_required"

    @pytest.mark.parametrize(
        "status,kind",
        [(400, "validation_failed"), (404, "not_found"), (409, "duplicate_name"), (500, "host_failure")],
    )
    def test_status_mapping(self, status, kind):
        assert results.from_bridge_error(HostReportedFailure("x", status))["error_kind"] == kind

    def test_validation_errors_carried(self):
        err = HostReportedFailure("Validation failed", 400, {"validationErrors": ["name: is required"]})
        assert results.from_bridge_error(err)["validationErrors"] == ["name: is required"]


class TestRequire:
    def test_missing(self):
        with pytest.raises(results.MissingArgumentError, match="report_name is required"):
            results.require(report_name=None)

    def test_blank(self):
        with pytest.raises(results.MissingArgumentError):
            results.require(name="   ")

    def test_present(self):
        results.require(name="Customer", new_position=0)
