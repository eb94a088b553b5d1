"""
Model-level tools: save, close views, open views, list roles.

Views are opened by asking the host to run one of its registered commands.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from dna_tools import results
from dna_tools.client import BridgeClient, BridgeError
from dna_tools.config import CATALOG_TIMEOUT, MUTATION_TIMEOUT, SAVE_TIMEOUT

SAVE_COMMAND = "appdna.saveFile"
CLOSE_VIEWS_COMMAND = "appdna.closeAllOpenViews"


@dataclass(frozen=True)
class ViewCommand:
    """
    How to open one view.

    args: "none", "tab" (optional initial tab), "target" (entity name plus
    optional {"initialTab": ...}) or "target_only".
    """

    command: str
    args: str = "none"

    def build_args(self, target_name: str | None, initial_tab: str | None) -> list[Any]:
        if self.args == "tab":
            return [initial_tab] if initial_tab else []
        if self.args == "target":
            return [target_name, {"initialTab": initial_tab} if initial_tab else {}]
        if self.args == "target_only":
            return [target_name]
        return []

    @property
    def needs_target(self) -> bool:
        return self.args in ("target", "target_only")


VIEW_COMMANDS: dict[str, ViewCommand] = {
    "user_stories": ViewCommand("appdna.mcp.openUserStories", "tab"),
    "user_stories_dev": ViewCommand("appdna.mcp.openUserStoriesDev", "tab"),
    "user_stories_qa": ViewCommand("appdna.mcp.openUserStoriesQA", "tab"),
    "user_stories_journey": ViewCommand("appdna.mcp.openUserStoriesJourney"),
    "user_stories_page_mapping": ViewCommand("appdna.mcp.openUserStoriesPageMapping"),
    "user_stories_role_requirements": ViewCommand("appdna.mcp.openUserStoriesRoleRequirements"),
    "object_details": ViewCommand("appdna.mcp.openObjectDetails", "target"),
    "data_objects_list": ViewCommand("appdna.openDataObjectsList"),
    "data_object_usage_analysis": ViewCommand("appdna.openDataObjectUsageAnalysis"),
    "data_object_size_analysis": ViewCommand("appdna.openDataObjectSizeAnalysis"),
    "database_size_forecast": ViewCommand("appdna.openDatabaseSizeForecast"),
    "forms_list": ViewCommand("appdna.openFormsList"),
    "form_details": ViewCommand("appdna.showFormDetails", "target"),
    "pages_list": ViewCommand("appdna.openPagesList"),
    "page_details": ViewCommand("appdna.showPageDetails", "target"),
    "page_preview": ViewCommand("appdna.showPagePreview", "target_only"),
    "page_init_flows_list": ViewCommand("appdna.openPageInitFlowsList"),
    "page_init_flow_details": ViewCommand("appdna.showPageInitDetails", "target"),
    "general_flows_list": ViewCommand("appdna.openGeneralWorkflowsList"),
    "general_flow_details": ViewCommand("appdna.showGeneralFlowDetails", "target"),
    "workflows_list": ViewCommand("appdna.openWorkflowsList"),
    "workflow_details": ViewCommand("appdna.showWorkflowDetails", "target"),
    "workflow_tasks_list": ViewCommand("appdna.openWorkflowTasksList"),
    "workflow_task_details": ViewCommand("appdna.showWorkflowTaskDetails", "target"),
    "reports_list": ViewCommand("appdna.openReportsList"),
    "report_details": ViewCommand("appdna.showReportDetails", "target"),
    "apis_list": ViewCommand("appdna.openAPIsList"),
    "api_details": ViewCommand("appdna.showAPIDetails", "target"),
    "metrics_analysis": ViewCommand("appdna.openMetricsAnalysis"),
    "lexicon": ViewCommand("appdna.openLexicon"),
    "change_requests": ViewCommand("appdna.openChangeRequests"),
    "model_ai_processing": ViewCommand("appdna.openModelAIProcessing"),
    "fabrication_blueprint_catalog": ViewCommand("appdna.openFabricationBlueprintCatalog"),
    "hierarchy_diagram": ViewCommand("appdna.openHierarchyDiagram"),
    "page_flow_diagram": ViewCommand("appdna.openPageFlowDiagram"),
    "project_settings": ViewCommand("appdna.openProjectSettings"),
    "settings": ViewCommand("appdna.mcp.openSettings"),
    "welcome": ViewCommand("appdna.mcp.openWelcome"),
    "help": ViewCommand("appdna.openHelp"),
    "register": ViewCommand("appdna.registerModelServices"),
    "login": ViewCommand("appdna.loginModelServices"),
}


class ModelTools:
    def __init__(self, client: BridgeClient):
        self.client = client

    def save(self) -> dict[str, Any]:
        """Write the host's in-memory model to disk."""
        return self._run(SAVE_COMMAND, [], SAVE_TIMEOUT, "Model saved successfully")

    def close_all_open_views(self) -> dict[str, Any]:
        return self._run(CLOSE_VIEWS_COMMAND, [], MUTATION_TIMEOUT, "All open views closed")

    def open_view(self, view: str, target_name: str | None = None, initial_tab: str | None = None) -> dict[str, Any]:
        results.require(view=view)
        command = VIEW_COMMANDS.get(view)
        if command is None:
            return results.validation_failed(
                [f"view: must be one of {', '.join(sorted(VIEW_COMMANDS))}"], message=f'Unknown view "{view}"'
            )
        if command.needs_target:
            results.require(target_name=target_name)
        return self._run(
            command.command, command.build_args(target_name, initial_tab), MUTATION_TIMEOUT, f'Opened view "{view}"'
        )

    def list_roles(self) -> dict[str, Any]:
        try:
            roles = self.client.get("/api/roles", timeout=CATALOG_TIMEOUT) or []
        except BridgeError as e:
            return results.from_bridge_error(e)
        names = [role.get("name") for role in roles if role.get("name")]
        return results.ok(roles=names, count=len(names))

    def _run(self, command: str, args: list[Any], timeout: float, message: str) -> dict[str, Any]:
        try:
            response = self.client.command(command, args, timeout=timeout)
        except BridgeError as e:
            return results.from_bridge_error(e)
        return results.ok(command=command, message=response.get("message") or message)
