"""
Workflow (DynaFlow) tools.

Workflows are objectWorkflow records with isDynaFlow == "true". Their tasks
live in the workflow's own dynaFlowTask array.
"""

from __future__ import annotations

from typing import Any

from dna_tools import results
from dna_tools.client import BridgeClient, BridgeError
from dna_tools.config import MUTATION_TIMEOUT
from dna_tools.tools.base import FamilyTools, fetch_index
from engine.kernel.families import WORKFLOW
from engine.kernel.locator import find_duplicate, find_owner
from engine.kernel.projector import to_public
from engine.kernel.types import TRUE, has_page_init_suffix, is_pascal_case


class WorkflowTools(FamilyTools):
    def __init__(self, client: BridgeClient):
        super().__init__(client, WORKFLOW)

    def create(self, owner_object_name: str, name: str, code_description: str | None = None) -> dict[str, Any]:
        results.require(owner_object_name=owner_object_name, name=name)

        errors: list[str] = []
        if not is_pascal_case(name):
            errors.append("name: must be PascalCase (start with an uppercase letter, letters and digits only)")
        if has_page_init_suffix(name):
            errors.append('name: must not end with "InitObjWF" or "InitReport" (those are page init flows)')
        if errors:
            return results.validation_failed(errors)

        try:
            index = fetch_index(self.client)
        except BridgeError as e:
            return results.from_bridge_error(e)

        if find_owner(index, owner_object_name, exact=True) is None:
            return results.not_found(f'Owner object "{owner_object_name}" not found')
        clash = find_duplicate(index, WORKFLOW, name)
        if clash is not None:
            return results.duplicate(f'Workflow with name "{name}" already exists in object "{clash.owner_name}"')

        workflow: dict[str, Any] = {"name": name, "isDynaFlow": TRUE, "dynaFlowTask": []}
        if code_description is not None:
            workflow["codeDescription"] = code_description

        try:
            self.client.post(
                "/api/create-workflow",
                {"owner_object_name": owner_object_name, "workflow": workflow},
                timeout=MUTATION_TIMEOUT,
            )
        except BridgeError as e:
            return results.from_bridge_error(e)

        return results.ok(
            workflow=to_public(workflow, WORKFLOW.view),
            owner_object_name=owner_object_name,
            message=f'Workflow "{name}" created successfully in object "{owner_object_name}"',
            note="The model has unsaved changes. Use save_model to persist to disk.",
        )

    def add_task(self, workflow_name: str, name: str, owner_object_name: str | None = None) -> dict[str, Any]:
        results.require(name=name)
        return self.add_child("task", workflow_name, {"name": name}, owner_object_name)

    def move_task(
        self, workflow_name: str, task_name: str, new_position: int, owner_object_name: str | None = None
    ) -> dict[str, Any]:
        result = self.move_child("task", workflow_name, task_name, new_position, owner_object_name)
        if result["success"]:
            result["task_count"] = len(result["workflow"].get("dynaFlowTask") or [])
        return result
