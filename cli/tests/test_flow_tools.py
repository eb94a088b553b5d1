"""General flow and page init flow tools against an in-process model host."""

from __future__ import annotations

from dna_tools.config import Plane


def _flow(store, name):
    for obj in store.objects():
        for flow in obj.get("objectWorkflow") or []:
            if flow["name"] == name:
                return flow
    raise KeyError(name)


# ============================================================================
# General flows
# ============================================================================


class TestGeneralFlows:
    def test_list_excludes_other_kinds(self, tools):
        result = tools.general_flows.list()
        assert [f["name"] for f in result["general_flows"]] == ["CalculateDiscount", "Recalculate"]

    def test_get_uses_public_type_names(self, tools):
        result = tools.general_flows.get("calculatediscount")
        flow = result["general_flow"]
        assert flow["objectWorkflowParam"] == [{"name": "Amount", "dataType": "decimal", "dataSize": "18,2"}]
        assert "isPage" not in flow
        assert result["element_counts"] == {"paramCount": 1, "outputVarCount": 1}

    def test_workflow_is_not_a_general_flow(self, tools):
        assert tools.general_flows.get("CustomerProcessing")["error_kind"] == "not_found"

    def test_forms_are_not_general_flows(self, tools, store, host):
        customer = store.objects()[2]
        customer["objectWorkflow"].append({"name": "CustomerAddForm", "isPage": "true"})

        listed = tools.general_flows.list()
        assert [f["name"] for f in listed["general_flows"]] == ["CalculateDiscount", "Recalculate"]

        result = tools.general_flows.update("CustomerAddForm", {"isIgnored": "true"})
        assert result["error_kind"] == "not_found"
        assert "form" in result["error"]
        assert "isIgnored" not in customer["objectWorkflow"][-1]
        assert host.exchanges == [Plane.DATA, Plane.DATA]

    def test_add_param_with_alias(self, tools, store):
        result = tools.general_flows.add_child("param", "CalculateDiscount", {"name": "Rate", "dataType": "decimal"})
        assert result["param"] == {"name": "Rate", "dataType": "decimal"}
        assert _flow(store, "CalculateDiscount")["objectWorkflowParam"][-1] == {
            "name": "Rate",
            "sqlServerDBDataType": "decimal",
        }

    def test_update_output_var_type(self, tools, store):
        result = tools.general_flows.update_child("output_var", "CalculateDiscount", "discount", {"dataType": "money"})
        assert result["success"] is True
        assert _flow(store, "CalculateDiscount")["objectWorkflowOutputVar"][0]["sqlServerDBDataType"] == "money"

    def test_output_var_type_must_be_known(self, tools, host):
        result = tools.general_flows.update_child("output_var", "CalculateDiscount", "Discount", {"dataType": "float"})
        assert result["error_kind"] == "validation_failed"
        assert host.exchanges == []

    def test_flag_values_are_strings(self, tools):
        result = tools.general_flows.update("CalculateDiscount", {"isIgnored": True})
        assert result["error_kind"] == "validation_failed"
        assert any(e.startswith("isIgnored: must be one of") for e in result["validationErrors"])

    def test_full_update_keeps_hidden_fields(self, tools, store):
        entity = {
            "name": "CalculateDiscount",
            "isIgnored": "true",
            "objectWorkflowParam": [{"name": "Amount", "dataType": "int"}],
        }
        result = tools.general_flows.update_full("CalculateDiscount", entity)
        assert result["success"] is True
        stored = _flow(store, "CalculateDiscount")
        assert stored["isPage"] == "false"
        assert stored["objectWorkflowParam"] == [{"name": "Amount", "sqlServerDBDataType": "int"}]

    def test_move_param(self, tools, store):
        tools.general_flows.add_child("param", "CalculateDiscount", {"name": "Rate"})
        result = tools.general_flows.move_child("param", "CalculateDiscount", "Rate", 0)
        assert result["success"] is True
        assert [p["name"] for p in _flow(store, "CalculateDiscount")["objectWorkflowParam"]] == ["Rate", "Amount"]


# ============================================================================
# Page init flows
# ============================================================================


class TestPageInitFlows:
    def test_get_hides_page_fields(self, tools):
        result = tools.page_init_flows.get("customerlistinitreport")
        flow = result["page_init_flow"]
        assert flow["pageTitleText"] == "Customers"
        assert "isPage" not in flow
        assert flow["objectWorkflowOutputVar"] == [{"name": "Total", "dataType": "int"}]
        assert result["element_counts"] == {"outputVarCount": 1}

    def test_update(self, tools, store):
        result = tools.page_init_flows.update("CustomerListInitReport", {"pageTitleText": "All customers"})
        assert result["success"] is True
        assert _flow(store, "CustomerListInitReport")["pageTitleText"] == "All customers"

    def test_fk_output_var_needs_object(self, tools):
        result = tools.page_init_flows.add_child("output_var", "CustomerListInitReport", {"name": "Owner", "isFK": "true"})
        assert result["validationErrors"] == ['fKObjectName: is required when isFK is "true"']

    def test_general_flow_name_is_not_page_init(self, tools):
        result = tools.page_init_flows.get("CalculateDiscount")
        assert result["error"] == "'CalculateDiscount' is a general flow, not a page init flow"
