"""
MCP server exposing the model tools.

create_server() registers every tool on a FastMCP instance bound to one
BridgeClient. Tools return plain dicts ({"success": ..., ...}); only a
missing required argument surfaces as a tool error.
"""

from __future__ import annotations

from typing import Any

from mcp.server.fastmcp import FastMCP

from dna_tools.client import BridgeClient
from dna_tools.tools import Toolbox

SERVER_INSTRUCTIONS = """\
Tools for inspecting and editing an AppDNA application model held open by the
model host. Names of reports, workflows, flows and data objects are matched
case-insensitively on reads. Changes stay in the host's memory until
save_model is called.
"""


def create_server(client: BridgeClient | None = None) -> FastMCP:
    """Build the server. Pass a client to point the tools at a specific host (tests)."""
    tools = Toolbox(client or BridgeClient())
    mcp = FastMCP("appdna", instructions=SERVER_INSTRUCTIONS)

    # ------------------------------------------------------------------
    # Reports
    # ------------------------------------------------------------------

    reports = tools.reports

    @mcp.tool()
    def get_report_schema() -> dict[str, Any]:
        """JSON schema of a report, its params, columns and buttons."""
        return reports.schema()

    @mcp.tool()
    def list_reports(owner_object_name: str | None = None, report_name: str | None = None) -> dict[str, Any]:
        """List reports, optionally filtered by owner data object and report name (case-insensitive)."""
        return reports.list(owner_object_name, report_name)

    @mcp.tool()
    def get_report(report_name: str, owner_object_name: str | None = None) -> dict[str, Any]:
        """Get one report with element counts. Searches every data object when no owner is given."""
        return reports.get(report_name, owner_object_name)

    @mcp.tool()
    def suggest_report_name_and_title(
        owner_object_name: str,
        role_required: str | None = None,
        visualization_type: str | None = None,
        target_child_object: str | None = None,
    ) -> dict[str, Any]:
        """Suggest a unique PascalCase report name and a readable title."""
        return reports.suggest_name_and_title(owner_object_name, role_required, visualization_type, target_child_object)

    @mcp.tool()
    def create_report(
        owner_object_name: str,
        report_name: str,
        title_text: str,
        visualization_type: str | None = None,
        role_required: str | None = None,
        target_child_object: str | None = None,
    ) -> dict[str, Any]:
        """Create a report with a default Back button and its <Name>InitReport page init flow."""
        return reports.create(
            owner_object_name, report_name, title_text, visualization_type, role_required, target_child_object
        )

    @mcp.tool()
    def update_report(report_name: str, updates: dict[str, Any], owner_object_name: str | None = None) -> dict[str, Any]:
        """Update report properties (titleText, visualizationType, isPagingAvailable, ...)."""
        return reports.update(report_name, updates, owner_object_name)

    @mcp.tool()
    def update_full_report(report: dict[str, Any], owner_object_name: str | None = None) -> dict[str, Any]:
        """Replace a whole report, params, columns and buttons included. report.name selects the report."""
        return reports.update_full(report.get("name"), report, owner_object_name)

    @mcp.tool()
    def add_report_param(report_name: str, param: dict[str, Any], owner_object_name: str | None = None) -> dict[str, Any]:
        """Append a filter parameter to a report."""
        return reports.add_child("param", report_name, param, owner_object_name)

    @mcp.tool()
    def update_report_param(
        report_name: str, param_name: str, updates: dict[str, Any], owner_object_name: str | None = None
    ) -> dict[str, Any]:
        """Update a report parameter. isFK="true" requires fKObjectName."""
        return reports.update_child("param", report_name, param_name, updates, owner_object_name)

    @mcp.tool()
    def move_report_param(
        report_name: str, param_name: str, new_position: int, owner_object_name: str | None = None
    ) -> dict[str, Any]:
        """Move a report parameter to a new zero-based position."""
        return reports.move_child("param", report_name, param_name, new_position, owner_object_name)

    @mcp.tool()
    def add_report_column(report_name: str, column: dict[str, Any], owner_object_name: str | None = None) -> dict[str, Any]:
        """Append a column to a report."""
        return reports.add_child("column", report_name, column, owner_object_name)

    @mcp.tool()
    def update_report_column(
        report_name: str, column_name: str, updates: dict[str, Any], owner_object_name: str | None = None
    ) -> dict[str, Any]:
        """Update a report column."""
        return reports.update_child("column", report_name, column_name, updates, owner_object_name)

    @mcp.tool()
    def move_report_column(
        report_name: str, column_name: str, new_position: int, owner_object_name: str | None = None
    ) -> dict[str, Any]:
        """Move a report column to a new zero-based position."""
        return reports.move_child("column", report_name, column_name, new_position, owner_object_name)

    @mcp.tool()
    def add_report_button(report_name: str, button: dict[str, Any], owner_object_name: str | None = None) -> dict[str, Any]:
        """Append a button to a report. buttonText is required and identifies the button."""
        return reports.add_child("button", report_name, button, owner_object_name)

    @mcp.tool()
    def update_report_button(
        report_name: str, button_text: str, updates: dict[str, Any], owner_object_name: str | None = None
    ) -> dict[str, Any]:
        """Update a report button, selected by its buttonText."""
        return reports.update_child("button", report_name, button_text, updates, owner_object_name)

    @mcp.tool()
    def move_report_button(
        report_name: str, button_text: str, new_position: int, owner_object_name: str | None = None
    ) -> dict[str, Any]:
        """Move a report button to a new zero-based position."""
        return reports.move_child("button", report_name, button_text, new_position, owner_object_name)

    # ------------------------------------------------------------------
    # Workflows
    # ------------------------------------------------------------------

    workflows = tools.workflows

    @mcp.tool()
    def get_workflow_schema() -> dict[str, Any]:
        """JSON schema of a DynaFlow workflow and its tasks."""
        return workflows.schema()

    @mcp.tool()
    def list_workflows(owner_object_name: str | None = None, workflow_name: str | None = None) -> dict[str, Any]:
        """List DynaFlow workflows (isDynaFlow="true")."""
        return workflows.list(owner_object_name, workflow_name)

    @mcp.tool()
    def get_workflow(workflow_name: str, owner_object_name: str | None = None) -> dict[str, Any]:
        """Get one workflow and its task names."""
        return workflows.get(workflow_name, owner_object_name)

    @mcp.tool()
    def create_workflow(owner_object_name: str, name: str, code_description: str | None = None) -> dict[str, Any]:
        """Create an empty DynaFlow workflow. The name may not end with InitObjWF or InitReport."""
        return workflows.create(owner_object_name, name, code_description)

    @mcp.tool()
    def update_workflow(
        workflow_name: str, updates: dict[str, Any], owner_object_name: str | None = None
    ) -> dict[str, Any]:
        """Update workflow properties (codeDescription, isCustomLogicOverwritten)."""
        return workflows.update(workflow_name, updates, owner_object_name)

    @mcp.tool()
    def add_workflow_task(workflow_name: str, name: str, owner_object_name: str | None = None) -> dict[str, Any]:
        """Append a task to a workflow."""
        return workflows.add_task(workflow_name, name, owner_object_name)

    @mcp.tool()
    def move_workflow_task(
        workflow_name: str, task_name: str, new_position: int, owner_object_name: str | None = None
    ) -> dict[str, Any]:
        """Move a workflow task to a new zero-based position."""
        return workflows.move_task(workflow_name, task_name, new_position, owner_object_name)

    # ------------------------------------------------------------------
    # General flows
    # ------------------------------------------------------------------

    general = tools.general_flows

    @mcp.tool()
    def get_general_flow_schema() -> dict[str, Any]:
        """JSON schema of a general flow, its params and output variables."""
        return general.schema()

    @mcp.tool()
    def list_general_flows(
        owner_object_name: str | None = None, general_flow_name: str | None = None
    ) -> dict[str, Any]:
        """List general flows (objectWorkflow records that are not pages, workflows or tasks)."""
        return general.list(owner_object_name, general_flow_name)

    @mcp.tool()
    def get_general_flow(general_flow_name: str, owner_object_name: str | None = None) -> dict[str, Any]:
        """Get one general flow."""
        return general.get(general_flow_name, owner_object_name)

    @mcp.tool()
    def update_general_flow(
        general_flow_name: str, updates: dict[str, Any], owner_object_name: str | None = None
    ) -> dict[str, Any]:
        """Update general flow properties."""
        return general.update(general_flow_name, updates, owner_object_name)

    @mcp.tool()
    def update_full_general_flow(
        general_flow: dict[str, Any], owner_object_name: str | None = None
    ) -> dict[str, Any]:
        """Replace a whole general flow. general_flow.name selects the flow."""
        return general.update_full(general_flow.get("name"), general_flow, owner_object_name)

    @mcp.tool()
    def add_general_flow_param(
        general_flow_name: str, param: dict[str, Any], owner_object_name: str | None = None
    ) -> dict[str, Any]:
        """Append an input parameter (name, dataType, dataSize, ...)."""
        return general.add_child("param", general_flow_name, param, owner_object_name)

    @mcp.tool()
    def update_general_flow_param(
        general_flow_name: str, param_name: str, updates: dict[str, Any], owner_object_name: str | None = None
    ) -> dict[str, Any]:
        """Update an input parameter."""
        return general.update_child("param", general_flow_name, param_name, updates, owner_object_name)

    @mcp.tool()
    def move_general_flow_param(
        general_flow_name: str, param_name: str, new_position: int, owner_object_name: str | None = None
    ) -> dict[str, Any]:
        """Move an input parameter to a new zero-based position."""
        return general.move_child("param", general_flow_name, param_name, new_position, owner_object_name)

    @mcp.tool()
    def add_general_flow_output_var(
        general_flow_name: str, output_var: dict[str, Any], owner_object_name: str | None = None
    ) -> dict[str, Any]:
        """Append an output variable."""
        return general.add_child("output_var", general_flow_name, output_var, owner_object_name)

    @mcp.tool()
    def update_general_flow_output_var(
        general_flow_name: str, output_var_name: str, updates: dict[str, Any], owner_object_name: str | None = None
    ) -> dict[str, Any]:
        """Update an output variable."""
        return general.update_child("output_var", general_flow_name, output_var_name, updates, owner_object_name)

    @mcp.tool()
    def move_general_flow_output_var(
        general_flow_name: str, output_var_name: str, new_position: int, owner_object_name: str | None = None
    ) -> dict[str, Any]:
        """Move an output variable to a new zero-based position."""
        return general.move_child("output_var", general_flow_name, output_var_name, new_position, owner_object_name)

    # ------------------------------------------------------------------
    # Page init flows
    # ------------------------------------------------------------------

    page_init = tools.page_init_flows

    @mcp.tool()
    def get_page_init_flow_schema() -> dict[str, Any]:
        """JSON schema of a page init flow and its output variables."""
        return page_init.schema()

    @mcp.tool()
    def list_page_init_flows(
        owner_object_name: str | None = None, page_init_flow_name: str | None = None
    ) -> dict[str, Any]:
        """List page init flows (names ending with InitObjWF or InitReport)."""
        return page_init.list(owner_object_name, page_init_flow_name)

    @mcp.tool()
    def get_page_init_flow(page_init_flow_name: str, owner_object_name: str | None = None) -> dict[str, Any]:
        """Get one page init flow."""
        return page_init.get(page_init_flow_name, owner_object_name)

    @mcp.tool()
    def update_page_init_flow(
        page_init_flow_name: str, updates: dict[str, Any], owner_object_name: str | None = None
    ) -> dict[str, Any]:
        """Update page init flow settings (pageTitleText, roleRequired, ...)."""
        return page_init.update(page_init_flow_name, updates, owner_object_name)

    @mcp.tool()
    def update_full_page_init_flow(
        page_init_flow: dict[str, Any], owner_object_name: str | None = None
    ) -> dict[str, Any]:
        """Replace a whole page init flow. page_init_flow.name selects the flow."""
        return page_init.update_full(page_init_flow.get("name"), page_init_flow, owner_object_name)

    @mcp.tool()
    def add_page_init_flow_output_var(
        page_init_flow_name: str, output_var: dict[str, Any], owner_object_name: str | None = None
    ) -> dict[str, Any]:
        """Append an output variable. isFK="true" requires fKObjectName."""
        return page_init.add_child("output_var", page_init_flow_name, output_var, owner_object_name)

    @mcp.tool()
    def update_page_init_flow_output_var(
        page_init_flow_name: str, output_var_name: str, updates: dict[str, Any], owner_object_name: str | None = None
    ) -> dict[str, Any]:
        """Update an output variable."""
        return page_init.update_child("output_var", page_init_flow_name, output_var_name, updates, owner_object_name)

    @mcp.tool()
    def move_page_init_flow_output_var(
        page_init_flow_name: str, output_var_name: str, new_position: int, owner_object_name: str | None = None
    ) -> dict[str, Any]:
        """Move an output variable to a new zero-based position."""
        return page_init.move_child("output_var", page_init_flow_name, output_var_name, new_position, owner_object_name)

    # ------------------------------------------------------------------
    # Data objects
    # ------------------------------------------------------------------

    data_objects = tools.data_objects

    @mcp.tool()
    def list_data_objects(
        search_name: str | None = None, is_lookup: str | None = None, parent_object_name: str | None = None
    ) -> dict[str, Any]:
        """Summaries of data objects. search_name also matches with spaces removed."""
        return data_objects.list_summaries(search_name, is_lookup, parent_object_name)

    @mcp.tool()
    def get_data_object(name: str) -> dict[str, Any]:
        """Get one data object with its properties."""
        return data_objects.get(name)

    @mcp.tool()
    def create_data_object(
        name: str, parent_object_name: str, is_lookup: str | None = None, code_description: str | None = None
    ) -> dict[str, Any]:
        """Create a data object. Lookup objects (is_lookup="true") must have parent "Pac"."""
        return data_objects.create(name, parent_object_name, is_lookup, code_description)

    @mcp.tool()
    def add_data_object_props(object_name: str, props: list[dict[str, Any]]) -> dict[str, Any]:
        """Append properties to a data object."""
        return data_objects.add_props(object_name, props)

    @mcp.tool()
    def update_data_object_prop(object_name: str, prop_name: str, updates: dict[str, Any]) -> dict[str, Any]:
        """Update a data object property. isFK="true" requires fKObjectName."""
        return data_objects.update_prop(object_name, prop_name, updates)

    @mcp.tool()
    def get_data_object_schema() -> dict[str, Any]:
        """JSON schema of a data object, its properties and lookup values."""
        return data_objects.schema()

    @mcp.tool()
    def update_data_object(name: str, code_description: str) -> dict[str, Any]:
        """Change a data object's codeDescription. Name, parent and isLookup are fixed."""
        return data_objects.update(name, {"codeDescription": code_description})

    @mcp.tool()
    def update_full_data_object(name: str, data_object: dict[str, Any]) -> dict[str, Any]:
        """Replace a data object wholesale. Its reports and flows are kept, as are lookup values it omits."""
        return data_objects.update_full(name, data_object)

    @mcp.tool()
    def list_lookup_values(lookup_object_name: str, include_inactive: bool = False) -> dict[str, Any]:
        """Values of a lookup data object. Inactive values are left out unless include_inactive."""
        return data_objects.list_lookup_values(lookup_object_name, include_inactive)

    @mcp.tool()
    def add_lookup_value(
        lookup_object_name: str,
        name: str,
        display_name: str | None = None,
        description: str | None = None,
        is_active: str | None = None,
    ) -> dict[str, Any]:
        """Add a PascalCase value to a lookup data object (exact object name)."""
        return data_objects.add_lookup_value(lookup_object_name, name, display_name, description, is_active)

    @mcp.tool()
    def update_lookup_value(lookup_object_name: str, name: str, updates: dict[str, Any]) -> dict[str, Any]:
        """Update displayName, description or isActive of a lookup value (exact names)."""
        return data_objects.update_lookup_value(lookup_object_name, name, updates)

    @mcp.tool()
    def add_role(name: str) -> dict[str, Any]:
        """Add a role, i.e. a value of the Role lookup object."""
        return data_objects.add_role(name)

    @mcp.tool()
    def update_role(
        name: str, display_name: str | None = None, description: str | None = None, is_active: str | None = None
    ) -> dict[str, Any]:
        """Update a role's display name, description or active flag."""
        return data_objects.update_role(name, display_name, description, is_active)

    # ------------------------------------------------------------------
    # User stories
    # ------------------------------------------------------------------

    stories = tools.user_stories

    @mcp.tool()
    def create_user_story(description: str, title: str | None = None) -> dict[str, Any]:
        """Create a user story: "A <Role> wants to <action> <a|an|all> <Object>"."""
        return stories.create(description, title)

    @mcp.tool()
    def list_user_stories() -> dict[str, Any]:
        """List user stories."""
        return stories.list()

    @mcp.tool()
    def get_user_story_schema() -> dict[str, Any]:
        """JSON schema of a user story with an example."""
        return stories.schema()

    @mcp.tool()
    def update_user_story(name: str, is_ignored: str) -> dict[str, Any]:
        """Set a story's isIgnored flag ("true" or "false"). name comes from list_user_stories."""
        return stories.update(name, is_ignored)

    # ------------------------------------------------------------------
    # Model and views
    # ------------------------------------------------------------------

    model = tools.model

    @mcp.tool()
    def save_model() -> dict[str, Any]:
        """Save the model file."""
        return model.save()

    @mcp.tool()
    def close_all_open_views() -> dict[str, Any]:
        """Close every open model view."""
        return model.close_all_open_views()

    @mcp.tool()
    def open_view(view: str, target_name: str | None = None, initial_tab: str | None = None) -> dict[str, Any]:
        """Open a model view, e.g. reports_list or report_details (with target_name)."""
        return model.open_view(view, target_name, initial_tab)

    @mcp.tool()
    def list_roles() -> dict[str, Any]:
        """Names of the roles defined in the Role lookup object."""
        return model.list_roles()

    # ------------------------------------------------------------------
    # Model services (login required)
    # ------------------------------------------------------------------

    services = tools.model_services

    @mcp.tool()
    def list_model_features_catalog_items(
        page_number: int = 1,
        item_count_per_page: int = 10,
        order_by_column_name: str | None = None,
        order_by_descending: bool | None = None,
    ) -> dict[str, Any]:
        """Page through the model feature catalog."""
        return services.listing(
            "model_features", page_number, item_count_per_page, order_by_column_name, order_by_descending
        )

    @mcp.tool()
    def list_model_ai_processing_requests(
        page_number: int = 1,
        item_count_per_page: int = 10,
        order_by_column_name: str | None = None,
        order_by_descending: bool | None = None,
    ) -> dict[str, Any]:
        """Page through model AI processing requests, newest first."""
        return services.listing(
            "ai_processing_requests", page_number, item_count_per_page, order_by_column_name, order_by_descending
        )

    @mcp.tool()
    def list_model_validation_requests(
        page_number: int = 1,
        item_count_per_page: int = 10,
        order_by_column_name: str | None = None,
        order_by_descending: bool | None = None,
    ) -> dict[str, Any]:
        """Page through model validation requests, newest first."""
        return services.listing(
            "validation_requests", page_number, item_count_per_page, order_by_column_name, order_by_descending
        )

    @mcp.tool()
    def list_fabrication_blueprint_catalog_items(
        page_number: int = 1,
        item_count_per_page: int = 10,
        order_by_column_name: str | None = None,
        order_by_descending: bool | None = None,
    ) -> dict[str, Any]:
        """Page through the fabrication blueprint catalog."""
        return services.listing(
            "fabrication_blueprints", page_number, item_count_per_page, order_by_column_name, order_by_descending
        )

    @mcp.tool()
    def list_model_fabrication_requests(
        page_number: int = 1,
        item_count_per_page: int = 10,
        order_by_column_name: str | None = None,
        order_by_descending: bool | None = None,
    ) -> dict[str, Any]:
        """Page through model fabrication requests, newest first."""
        return services.listing(
            "fabrication_requests", page_number, item_count_per_page, order_by_column_name, order_by_descending
        )

    @mcp.tool()
    def select_model_feature(feature_name: str, version: str) -> dict[str, Any]:
        """Add a catalog feature to the model."""
        return services.select_feature(feature_name, version)

    @mcp.tool()
    def unselect_model_feature(feature_name: str, version: str) -> dict[str, Any]:
        """Remove a catalog feature that is not yet completed."""
        return services.unselect_feature(feature_name, version)

    @mcp.tool()
    def select_fabrication_blueprint(blueprint_name: str, version: str) -> dict[str, Any]:
        """Add a catalog fabrication blueprint to the model's template sets."""
        return services.select_blueprint(blueprint_name, version)

    @mcp.tool()
    def unselect_fabrication_blueprint(blueprint_name: str, version: str) -> dict[str, Any]:
        """Remove a fabrication blueprint from the model."""
        return services.unselect_blueprint(blueprint_name, version)

    return mcp
