"""
Model Kernel: Family Catalog Tests

Descriptors are static data; these tests pin the derived names and the
schemas the tool runner publishes.
"""

from jsonschema import Draft202012Validator

from engine.kernel.families import (
    DATA_OBJECT,
    FAMILIES,
    FLOW_FAMILIES,
    GENERAL_FLOW,
    REPORT,
    WORKFLOW,
    family_for_kind,
)
from engine.kernel.types import FlowKind
from engine.kernel.validator import validate


class TestDescriptors:
    def test_schemas_are_valid_json_schema(self):
        for family in FAMILIES.values():
            Draft202012Validator.check_schema(family.schema)
            Draft202012Validator.check_schema(family.update_schema)
            for child in family.children.values():
                Draft202012Validator.check_schema(child.schema)
                Draft202012Validator.check_schema(child.update_schema)

    def test_action_names(self):
        assert REPORT.action("update") == "update-report"
        assert GENERAL_FLOW.action("move", GENERAL_FLOW.child("output_var")) == "move-general-flow-output-var"

    def test_arg_names(self):
        assert GENERAL_FLOW.arg_name == "general_flow_name"
        assert REPORT.resource == "reports"

    def test_button_key(self):
        assert REPORT.child("button").key == "buttonText"
        assert "buttonText" not in REPORT.child("button").update_schema["properties"]

    def test_full_rules_are_scoped_to_arrays(self):
        arrays = {r.array for r in REPORT.full_rules}
        assert arrays == {"reportParam"}

    def test_flow_families_map_to_kinds(self):
        assert {f.kind for f in FLOW_FAMILIES} == {
            FlowKind.WORKFLOW,
            FlowKind.GENERAL_FLOW,
            FlowKind.PAGE_INIT_FLOW,
        }
        assert family_for_kind(FlowKind.WORKFLOW) is WORKFLOW
        assert family_for_kind(FlowKind.WORKFLOW_TASK) is None
        assert family_for_kind(FlowKind.FORM) is None


class TestDataObjectFamily:
    def test_lookup_value_actions(self):
        lookup = DATA_OBJECT.child("lookup_value")
        assert lookup.field == "lookupItem"
        assert lookup.parent_flag == "isLookup"
        assert DATA_OBJECT.action("add", lookup) == "add-data-object-lookup-value"
        assert DATA_OBJECT.action("update-full") == "update-full-data-object"

    def test_only_code_description_is_updatable(self):
        assert list(DATA_OBJECT.update_schema["properties"]) == ["codeDescription"]

    def test_lookup_objects_hang_off_pac(self):
        obj = {"name": "Status", "parentObjectName": "Customer", "isLookup": "true"}
        assert validate(obj, DATA_OBJECT.schema, DATA_OBJECT.rules) == [
            'parentObjectName: must be "Pac" for lookup data objects'
        ]
        assert validate({**obj, "parentObjectName": "Pac"}, DATA_OBJECT.schema, DATA_OBJECT.rules) == []
