"""
Model Kernel: Entity Families

One descriptor per entity family. A descriptor says where records of the
family live in a data object, how they are discriminated inside the shared
objectWorkflow array, which schema and business rules apply, what the views
expose, and which ordered child sequences the family owns.

The host and the tool runner both drive their generic operations
(get / list / update / update-full / add|update|move child) off these
descriptors, so adding a field or a child sequence is a catalog change.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from engine.kernel import catalogs
from engine.kernel.types import LOOKUP_PARENT, TRUE, FlowKind, ViewSpec
from engine.kernel.validator import BusinessRule, requires_when


@dataclass(frozen=True)
class ChildSequence:
    """An ordered child array of an entity, e.g. a report's reportParam."""

    name: str  # tool-facing singular, e.g. "param", "output_var"
    field: str  # canonical array key on the parent, e.g. "reportParam"
    label: str  # human label, e.g. "Parameter"
    schema: dict[str, Any]
    key: str = "name"
    rules: tuple[BusinessRule, ...] = ()
    aliases: dict[str, str] = field(default_factory=dict)
    view: ViewSpec | None = None
    parent_flag: str | None = None  # items may only be added where parent[parent_flag] == "true"

    @property
    def slug(self) -> str:
        return self.name.replace("_", "-")

    @property
    def update_schema(self) -> dict[str, Any]:
        """Schema for partial updates: identity key is not updatable."""
        properties = {k: v for k, v in self.schema["properties"].items() if k != self.key}
        return {"type": "object", "properties": properties, "additionalProperties": False}


@dataclass(frozen=True)
class EntityFamily:
    """Static description of one entity family."""

    name: str  # "report", "general_flow", ...
    label: str  # "Report", "General flow", ...
    resource: str  # data-plane query path segment, e.g. "reports"
    collection: str | None  # array on the data object; None = the data object itself
    schema: dict[str, Any]
    update_fields: dict[str, Any] = field(default_factory=dict)
    kind: FlowKind | None = None
    view: ViewSpec = field(default_factory=ViewSpec)
    children: dict[str, ChildSequence] = field(default_factory=dict)
    rules: tuple[BusinessRule, ...] = ()
    unique_global: bool = True

    @property
    def slug(self) -> str:
        return self.name.replace("_", "-")

    @property
    def arg_name(self) -> str:
        """Query argument naming the entity, e.g. report_name."""
        return f"{self.name}_name"

    @property
    def update_schema(self) -> dict[str, Any]:
        return {"type": "object", "properties": dict(self.update_fields), "additionalProperties": False}

    @property
    def full_rules(self) -> tuple[BusinessRule, ...]:
        """Rules for a full replacement: own rules plus child rules scoped to their arrays."""
        scoped = [
            BusinessRule(field=r.field, message=r.message, violated=r.violated, array=child.field)
            for child in self.children.values()
            for r in child.rules
        ]
        return (*self.rules, *scoped)

    def child(self, name: str) -> ChildSequence:
        return self.children[name]

    def action(self, verb: str, child: ChildSequence | None = None) -> str:
        """Data-plane mutation path, e.g. update-report, move-general-flow-param."""
        if child is None:
            return f"{verb}-{self.slug}"
        return f"{verb}-{self.slug}-{child.slug}"


# ---------------------------------------------------------------------------
# Shared pieces
# ---------------------------------------------------------------------------

FK_RULE = requires_when("isFK", TRUE, "fKObjectName")

LOOKUP_PARENT_RULE = BusinessRule(
    field="parentObjectName",
    message=f'must be "{LOOKUP_PARENT}" for lookup data objects',
    violated=lambda obj: obj.get("isLookup") == TRUE and obj.get("parentObjectName") != LOOKUP_PARENT,
)

_SQL_TYPE_VIEW = ViewSpec(aliases=dict(catalogs.SQL_TYPE_ALIASES))


def _child(name: str, field_name: str, label: str, schema: dict[str, Any], **kwargs: Any) -> ChildSequence:
    return ChildSequence(name=name, field=field_name, label=label, schema=schema, **kwargs)


# ---------------------------------------------------------------------------
# Families
# ---------------------------------------------------------------------------

REPORT = EntityFamily(
    name="report",
    label="Report",
    resource="reports",
    collection="report",
    schema=catalogs.REPORT_SCHEMA,
    update_fields=catalogs.REPORT_UPDATE_FIELDS,
    children={
        "param": _child("param", "reportParam", "Parameter", catalogs.REPORT_PARAM_SCHEMA, rules=(FK_RULE,)),
        "column": _child("column", "reportColumn", "Column", catalogs.REPORT_COLUMN_SCHEMA),
        "button": _child("button", "reportButton", "Button", catalogs.REPORT_BUTTON_SCHEMA, key="buttonText"),
    },
)

WORKFLOW = EntityFamily(
    name="workflow",
    label="Workflow",
    resource="workflows",
    collection="objectWorkflow",
    schema=catalogs.WORKFLOW_SCHEMA,
    update_fields=catalogs.WORKFLOW_UPDATE_FIELDS,
    kind=FlowKind.WORKFLOW,
    view=ViewSpec(
        visible=frozenset({"name", "codeDescription", "isCustomLogicOverwritten", "dynaFlowTask"}),
        children={"dynaFlowTask": ViewSpec(visible=frozenset({"name"}))},
    ),
    children={
        "task": _child("task", "dynaFlowTask", "Task", catalogs.WORKFLOW_TASK_SCHEMA),
    },
)

_FLOW_PARAM = _child(
    "param",
    "objectWorkflowParam",
    "Parameter",
    catalogs.FLOW_PARAM_SCHEMA,
    aliases=dict(catalogs.SQL_TYPE_ALIASES),
    view=_SQL_TYPE_VIEW,
)

_GENERAL_OUTPUT_VAR = _child(
    "output_var",
    "objectWorkflowOutputVar",
    "Output variable",
    catalogs.FLOW_OUTPUT_VAR_SCHEMA,
    aliases=dict(catalogs.SQL_TYPE_ALIASES),
    view=_SQL_TYPE_VIEW,
)

GENERAL_FLOW = EntityFamily(
    name="general_flow",
    label="General flow",
    resource="general-flows",
    collection="objectWorkflow",
    schema=catalogs.GENERAL_FLOW_SCHEMA,
    update_fields=catalogs.GENERAL_FLOW_UPDATE_FIELDS,
    kind=FlowKind.GENERAL_FLOW,
    view=ViewSpec(
        hidden=catalogs.GENERAL_FLOW_HIDDEN,
        children={"objectWorkflowParam": _SQL_TYPE_VIEW, "objectWorkflowOutputVar": _SQL_TYPE_VIEW},
    ),
    children={"param": _FLOW_PARAM, "output_var": _GENERAL_OUTPUT_VAR},
)

PAGE_INIT_FLOW = EntityFamily(
    name="page_init_flow",
    label="Page init flow",
    resource="page-init-flows",
    collection="objectWorkflow",
    schema=catalogs.PAGE_INIT_FLOW_SCHEMA,
    update_fields=catalogs.PAGE_INIT_FLOW_UPDATE_FIELDS,
    kind=FlowKind.PAGE_INIT_FLOW,
    view=ViewSpec(
        hidden=catalogs.PAGE_INIT_FLOW_HIDDEN,
        children={"objectWorkflowOutputVar": _SQL_TYPE_VIEW},
    ),
    children={
        "output_var": _child(
            "output_var",
            "objectWorkflowOutputVar",
            "Output variable",
            catalogs.FLOW_OUTPUT_VAR_SCHEMA,
            rules=(FK_RULE,),
            aliases=dict(catalogs.SQL_TYPE_ALIASES),
            view=_SQL_TYPE_VIEW,
        ),
    },
)

DATA_OBJECT = EntityFamily(
    name="data_object",
    label="Data object",
    resource="data-objects",
    collection=None,
    schema=catalogs.DATA_OBJECT_SCHEMA,
    update_fields=catalogs.DATA_OBJECT_UPDATE_FIELDS,
    view=ViewSpec(hidden=frozenset({"report", "objectWorkflow", "lookupItem"})),
    children={
        "prop": _child("prop", "prop", "Property", catalogs.DATA_OBJECT_PROP_SCHEMA, rules=(FK_RULE,)),
        "lookup_value": _child(
            "lookup_value", "lookupItem", "Lookup value", catalogs.LOOKUP_ITEM_SCHEMA, parent_flag="isLookup"
        ),
    },
    rules=(LOOKUP_PARENT_RULE,),
)

FAMILIES: dict[str, EntityFamily] = {
    f.name: f for f in (REPORT, WORKFLOW, GENERAL_FLOW, PAGE_INIT_FLOW, DATA_OBJECT)
}

# Families that live in the shared objectWorkflow array.
FLOW_FAMILIES: tuple[EntityFamily, ...] = (WORKFLOW, GENERAL_FLOW, PAGE_INIT_FLOW)


def family_for_kind(kind: FlowKind) -> EntityFamily | None:
    for family in FLOW_FAMILIES:
        if family.kind == kind:
            return family
    return None
