"""Model services tools: login gate, listings and feature selection."""

from __future__ import annotations

import pytest

from dna_tools.config import Plane
from dna_tools.results import AUTH_REQUIRED_MESSAGE, MissingArgumentError


class TestListings:
    def test_model_features(self, tools, host):
        result = tools.model_services.listing("model_features")
        assert [i["name"] for i in result["items"]] == ["Auditing", "Billing"]
        assert result["recordsTotal"] == 2
        assert result["orderByColumnName"] == "displayName"
        assert result["orderByDescending"] is False
        assert host.exchanges == [Plane.COMMAND, Plane.COMMAND]

    def test_request_queues_default_to_newest_first(self, tools):
        result = tools.model_services.listing("ai_processing_requests")
        assert result["items"] == []
        assert result["orderByDescending"] is True
        assert result["orderByColumnName"] == "modelPrepRequestRequestedUTCDateTime"

    def test_explicit_sort(self, tools):
        result = tools.model_services.listing("model_features", order_by_descending=True, item_count_per_page=1)
        assert [i["name"] for i in result["items"]] == ["Billing"]
        assert result["itemCountPerPage"] == 1

    def test_logged_out(self, tools, store, host):
        store.logged_in = False
        result = tools.model_services.listing("model_features")
        assert result == {"success": False, "error": AUTH_REQUIRED_MESSAGE, "error_kind": "auth_required"}
        assert host.exchanges == [Plane.COMMAND]


class TestFeatures:
    def test_select_and_unselect(self, tools, store):
        assert tools.model_services.select_feature("Auditing", "1.0")["success"] is True
        assert store.selected_features == [{"featureName": "Auditing", "version": "1.0"}]
        assert tools.model_services.unselect_feature("Auditing", "1.0")["success"] is True
        assert store.selected_features == []

    def test_unselect_unknown(self, tools):
        assert tools.model_services.unselect_feature("Auditing", "1.0")["error_kind"] == "not_found"

    def test_version_required(self, tools):
        with pytest.raises(MissingArgumentError):
            tools.model_services.select_feature("Auditing", "")


class TestBlueprints:
    def test_select_and_unselect(self, tools, store):
        result = tools.model_services.select_blueprint("WebApp", "3.0")
        assert result["success"] is True
        assert result["blueprintName"] == "WebApp"
        assert store.root["templateSet"] == [
            {"name": "WebApp", "title": "Web Application", "version": "3.0", "isDisabled": "false"}
        ]
        assert tools.model_services.unselect_blueprint("WebApp", "3.0")["success"] is True
        assert store.root["templateSet"] == []

    def test_unselect_unknown(self, tools):
        assert tools.model_services.unselect_blueprint("WebApp", "3.0")["error_kind"] == "not_found"

    def test_logged_out(self, tools, store, host):
        store.logged_in = False
        result = tools.model_services.select_blueprint("WebApp", "3.0")
        assert result["error_kind"] == "auth_required"
        assert "templateSet" not in store.root
        assert host.exchanges == [Plane.COMMAND]

    def test_name_required(self, tools):
        with pytest.raises(MissingArgumentError):
            tools.model_services.select_blueprint("", "3.0")
