"""User story tools against an in-process model host."""

from __future__ import annotations

import pytest

from dna_tools.tools.user_stories import is_valid_story


class TestStoryFormat:
    @pytest.mark.parametrize(
        "text",
        [
            "A Manager wants to view all Orders",
            "As a User, I want to add a task",
            "A [Sales Rep] wants to [update] a [Customer]",
            "a manager   wants to delete an Order",
        ],
    )
    def test_valid(self, text):
        assert is_valid_story(text)

    @pytest.mark.parametrize(
        "text",
        ["Manager adds orders", "A Manager wants to fly a Kite", "A Manager wants to view Orders", ""],
    )
    def test_invalid(self, text):
        assert not is_valid_story(text)


class TestUserStoryTools:
    def test_create(self, tools, store):
        result = tools.user_stories.create("A Manager wants to add a Customer", title="US-2")
        assert result["success"] is True
        story = result["story"]
        assert story["storyNumber"] == "US-2"
        assert story["isIgnored"] == "false"
        assert store.user_stories()[-1]["storyText"] == "A Manager wants to add a Customer"

    def test_invalid_format(self, tools, host):
        result = tools.user_stories.create("Make it nice")
        assert result["error_kind"] == "validation_failed"
        assert host.exchanges == []

    def test_duplicate_text(self, tools):
        result = tools.user_stories.create("A Manager wants to view all Orders")
        assert result["error_kind"] == "duplicate_name"

    def test_list(self, tools):
        result = tools.user_stories.list()
        assert result["stories"] == [
            {"name": "s-1", "title": "US-1", "description": "A Manager wants to view all Orders", "isIgnored": True}
        ]

    def test_schema(self, tools, host):
        result = tools.user_stories.schema()
        assert result["updatable_properties"] == ["isIgnored"]
        assert is_valid_story(result["example"]["storyText"])
        assert host.exchanges == []

    def test_update(self, tools, store):
        result = tools.user_stories.update("s-1", "false")
        assert result["success"] is True
        assert result["story"]["isIgnored"] == "false"
        assert store.user_stories()[0]["isIgnored"] == "false"
        assert store.unsaved is True

    def test_update_accepts_bool(self, tools, store):
        tools.user_stories.update("s-1", False)
        assert store.user_stories()[0]["isIgnored"] == "false"

    def test_update_bad_flag(self, tools, host):
        result = tools.user_stories.update("s-1", "maybe")
        assert result["error_kind"] == "validation_failed"
        assert host.exchanges == []

    def test_update_unknown_story(self, tools, store):
        result = tools.user_stories.update("S-1", "false")
        assert result["error_kind"] == "not_found"
        assert store.user_stories()[0]["isIgnored"] == "true"
