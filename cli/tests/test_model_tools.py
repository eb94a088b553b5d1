"""Model-level tools: save, views and roles."""

from __future__ import annotations

import pytest

from dna_tools.config import Plane
from dna_tools.results import MissingArgumentError
from dna_tools.tools.model import VIEW_COMMANDS, ViewCommand


class TestViewCommand:
    def test_target_args(self):
        assert ViewCommand("x", "target").build_args("Customer", "props") == ["Customer", {"initialTab": "props"}]
        assert ViewCommand("x", "target").build_args("Customer", None) == ["Customer", {}]

    def test_tab_args(self):
        assert ViewCommand("x", "tab").build_args(None, "details") == ["details"]
        assert ViewCommand("x", "tab").build_args(None, None) == []

    def test_every_command_is_namespaced(self):
        assert all(entry.command.startswith("appdna.") for entry in VIEW_COMMANDS.values())


class TestModelTools:
    def test_save(self, tools, store, host):
        store.mark_unsaved()
        result = tools.model.save()
        assert result["success"] is True
        assert store.path.exists()
        assert store.unsaved is False
        assert host.exchanges == [Plane.COMMAND]

    def test_save_failure(self, tools, store):
        store.path = None
        result = tools.model.save()
        assert result["success"] is False
        assert result["error_kind"] == "host_failure"

    def test_close_all_open_views(self, tools, store):
        assert tools.model.close_all_open_views()["success"] is True
        assert store.executed_commands[-1]["command"] == "appdna.closeAllOpenViews"

    def test_open_view_with_target(self, tools, store):
        result = tools.model.open_view("object_details", target_name="Customer", initial_tab="props")
        assert result["command"] == "appdna.mcp.openObjectDetails"
        assert store.executed_commands[-1]["args"] == ["Customer", {"initialTab": "props"}]

    def test_open_view_needs_target(self, tools):
        with pytest.raises(MissingArgumentError):
            tools.model.open_view("report_details")

    def test_unknown_view(self, tools, host):
        result = tools.model.open_view("nonsense")
        assert result["error_kind"] == "validation_failed"
        assert host.exchanges == []

    def test_list_roles(self, tools):
        assert tools.model.list_roles() == {"success": True, "roles": ["Admin", "Manager"], "count": 2}
