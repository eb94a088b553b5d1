"""User story tools. Stories live in the first namespace's userStory array."""
from __future__ import annotations

import re
import uuid
from typing import Any

from dna_tools import results
from dna_tools.client import BridgeClient, BridgeError
from dna_tools.config import CATALOG_TIMEOUT, MUTATION_TIMEOUT
from engine.kernel.catalogs import USER_STORY_SCHEMA, USER_STORY_UPDATE_SCHEMA
from engine.kernel.types import FALSE, TRUE, is_true
from engine.kernel.validator import validate

_ACTION = r"\[?(View all|view|add|update|delete)\]?"
_NAME = r"\[?\w+(?: \w+)*\]?"

STORY_FORMATS = (
    re.compile(rf"^A\s+{_NAME}\s+wants to\s+{_ACTION}\s+(a|an|all)\s+{_NAME}$", re.IGNORECASE),
    re.compile(rf"^As a\s+{_NAME}\s*,?\s*I want to\s+{_ACTION}\s+(a|an|all)\s+{_NAME}$", re.IGNORECASE),
)

FORMAT_HELP = (
    "Invalid format. Examples of correct formats:\n"
    '- "As a User, I want to add a task"\n'
    '- "A Manager wants to view all reports"'
)


def is_valid_story(text: str) -> bool:
    """'A <Role> wants to <action> <a|an|all> <Object>' or the 'As a <Role>, I want to ...' form."""
    if not isinstance(text, str):
        return False
    collapsed = " ".join(text.split())
    return any(pattern.match(collapsed) for pattern in STORY_FORMATS)


class UserStoryTools:
    def __init__(self, client: BridgeClient):
        self.client = client

    def schema(self) -> dict[str, Any]:
        return results.ok(
            schema=USER_STORY_SCHEMA,
            updatable_properties=sorted(USER_STORY_UPDATE_SCHEMA["properties"]),
            example={"storyNumber": "US-7", "storyText": "A Manager wants to add a Customer", "isIgnored": FALSE},
            note="Stories live in the first namespace's 'userStory' array. Only isIgnored can be changed.",
        )

    def create(self, description: str, title: str | None = None) -> dict[str, Any]:
        results.require(description=description)
        if not is_valid_story(description):
            return results.validation_failed([f"description: {FORMAT_HELP}"], message=FORMAT_HELP)

        try:
            existing = self.client.get("/api/user-stories", timeout=CATALOG_TIMEOUT) or []
        except BridgeError as e:
            return results.from_bridge_error(e)
        if any(story.get("storyText") == description for story in existing):
            return results.duplicate("A user story with this text already exists")

        story = {
            "name": str(uuid.uuid4()),
            "storyNumber": title or "",
            "storyText": description,
            "isIgnored": FALSE,
            "isStoryProcessed": FALSE,
        }
        try:
            self.client.post("/api/user-stories", {"story": story}, timeout=MUTATION_TIMEOUT)
        except BridgeError as e:
            return results.from_bridge_error(e)

        return results.ok(story=story, message="User story created successfully")

    def list(self) -> dict[str, Any]:
        try:
            stories = self.client.get("/api/user-stories", timeout=CATALOG_TIMEOUT) or []
        except BridgeError as e:
            return results.from_bridge_error(e)

        return results.ok(
            stories=[
                {
                    "name": story.get("name") or "",
                    "title": story.get("storyNumber") or "",
                    "description": story.get("storyText") or "",
                    "isIgnored": is_true(story.get("isIgnored")),
                }
                for story in stories
            ]
        )

    def update(self, name: str, is_ignored: str | bool) -> dict[str, Any]:
        """Set a story's isIgnored flag. `name` is the identifier list_user_stories returns."""
        results.require(name=name)
        if isinstance(is_ignored, bool):
            is_ignored = TRUE if is_ignored else FALSE
        updates = {"isIgnored": is_ignored}
        errors = validate(updates, USER_STORY_UPDATE_SCHEMA, partial=True)
        if errors:
            return results.validation_failed(errors)

        try:
            existing = self.client.get("/api/user-stories", timeout=CATALOG_TIMEOUT) or []
        except BridgeError as e:
            return results.from_bridge_error(e)
        if not any(story.get("name") == name for story in existing):
            return results.not_found(f"User story '{name}' not found")

        try:
            response = self.client.post(
                "/api/user-stories/update", {"name": name, "updates": updates}, timeout=MUTATION_TIMEOUT
            )
        except BridgeError as e:
            return results.from_bridge_error(e)

        return results.ok(story=response.get("story"), message="User story updated successfully")
