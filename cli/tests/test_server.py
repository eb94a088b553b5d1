"""The MCP server registers every tool."""

from __future__ import annotations

import asyncio

from dna_tools.server import create_server

EXPECTED_TOOLS = {
    "get_report_schema", "list_reports", "get_report", "suggest_report_name_and_title", "create_report",
    "update_report", "update_full_report", "add_report_param", "update_report_param", "move_report_param",
    "add_report_column", "update_report_column", "move_report_column", "add_report_button",
    "update_report_button", "move_report_button",
    "get_workflow_schema", "list_workflows", "get_workflow", "create_workflow", "update_workflow",
    "add_workflow_task", "move_workflow_task",
    "get_general_flow_schema", "list_general_flows", "get_general_flow", "update_general_flow",
    "update_full_general_flow", "add_general_flow_param", "update_general_flow_param", "move_general_flow_param",
    "add_general_flow_output_var", "update_general_flow_output_var", "move_general_flow_output_var",
    "get_page_init_flow_schema", "list_page_init_flows", "get_page_init_flow", "update_page_init_flow",
    "update_full_page_init_flow", "add_page_init_flow_output_var", "update_page_init_flow_output_var",
    "move_page_init_flow_output_var",
    "list_data_objects", "get_data_object", "create_data_object", "add_data_object_props",
    "update_data_object_prop", "get_data_object_schema", "update_data_object", "update_full_data_object",
    "list_lookup_values", "add_lookup_value", "update_lookup_value", "add_role", "update_role",
    "create_user_story", "list_user_stories", "get_user_story_schema", "update_user_story",
    "save_model", "close_all_open_views", "open_view", "list_roles",
    "list_model_features_catalog_items", "list_model_ai_processing_requests", "list_model_validation_requests",
    "list_fabrication_blueprint_catalog_items", "list_model_fabrication_requests", "select_model_feature", "unselect_model_feature",
    "select_fabrication_blueprint", "unselect_fabrication_blueprint",
}


class TestServer:
    def test_registers_every_tool(self, bridge):
        tools = asyncio.run(create_server(bridge).list_tools())
        assert {t.name for t in tools} == EXPECTED_TOOLS
        assert len(tools) == 72

    def test_tool_inputs_are_described(self, bridge):
        tools = {t.name: t for t in asyncio.run(create_server(bridge).list_tools())}
        schema = tools["move_report_column"].inputSchema
        assert set(schema["required"]) == {"report_name", "column_name", "new_position"}
