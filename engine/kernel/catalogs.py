"""
Model Kernel: Schema Catalogs

Static field catalogs for every entity family, as JSON Schema (2020-12).
These are configuration data fed into the generic validator; they are also
what the get_<family>_schema tools return.

Model booleans are the strings "true" / "false", never JSON booleans.
"""

from __future__ import annotations

from typing import Any

from engine.kernel.types import BOOL_STRINGS, PAGE_INIT_NAME_PATTERN, PASCAL_CASE_PATTERN

# ---------------------------------------------------------------------------
# Field builders
# ---------------------------------------------------------------------------


def _string(description: str = "", **extra: Any) -> dict[str, Any]:
    field: dict[str, Any] = {"type": "string"}
    if description:
        field["description"] = description
    field.update(extra)
    return field


def _flag(description: str = "") -> dict[str, Any]:
    return _string(description, enum=list(BOOL_STRINGS))


def _enum(values: list[str], description: str = "") -> dict[str, Any]:
    return _string(description, enum=list(values))


def _name(description: str = "", pattern: str = PASCAL_CASE_PATTERN) -> dict[str, Any]:
    return _string(description, pattern=pattern)


def _object(properties: dict[str, Any], required: list[str] | None = None, description: str = "") -> dict[str, Any]:
    schema: dict[str, Any] = {"type": "object", "properties": properties}
    if required:
        schema["required"] = required
    if description:
        schema["description"] = description
    return schema


def _array_of(item: dict[str, Any], description: str = "") -> dict[str, Any]:
    schema: dict[str, Any] = {"type": "array", "items": item}
    if description:
        schema["description"] = description
    return schema


# ---------------------------------------------------------------------------
# Shared enumerations
# ---------------------------------------------------------------------------

VISUALIZATION_TYPES: list[str] = ["Grid", "PieChart", "LineChart", "FlowChart", "CardView", "FolderView"]

SQL_DATA_TYPES: list[str] = [
    "varchar", "nvarchar", "int", "bigint", "decimal", "money", "datetime",
    "date", "time", "bit", "uniqueidentifier", "text", "ntext",
]

# Public (UI) names accepted for canonical SQL type fields.
SQL_TYPE_ALIASES: dict[str, str] = {
    "dataType": "sqlServerDBDataType",
    "dataSize": "sqlServerDBDataTypeSize",
}

# ---------------------------------------------------------------------------
# Reports
# ---------------------------------------------------------------------------

REPORT_PARAM_SCHEMA = _object(
    {
        "name": _name("Parameter name in PascalCase."),
        "sqlServerDBDataType": _string("SQL Server data type."),
        "sqlServerDBDataTypeSize": _string("Size for the data type."),
        "labelText": _string("Label shown beside the filter control."),
        "targetColumnName": _string("Report column this parameter filters."),
        "isFK": _flag("Is this parameter a foreign key?"),
        "fKObjectName": _string("Data object referenced when isFK is \"true\"."),
        "isFKLookup": _flag(),
        "isFKList": _flag(),
        "isFKListInactiveIncluded": _flag(),
        "fKListOrderBy": _string(),
        "isFKListSearchable": _flag(),
        "isUnknownLookupAllowed": _flag(),
        "defaultValue": _string(),
        "isVisible": _flag(),
        "codeDescription": _string(),
    },
    required=["name"],
    description="Filter parameter of a report.",
)

REPORT_COLUMN_SCHEMA = _object(
    {
        "name": _name("Column name in PascalCase."),
        "headerText": _string("Column header shown in the grid."),
        "sqlServerDBDataType": _string(),
        "sqlServerDBDataTypeSize": _string(),
        "sourceObjectName": _string("Data object providing the value."),
        "sourcePropertyName": _string("Property providing the value."),
        "isVisible": _flag(),
        "minWidth": _string(),
        "maxWidth": _string(),
        "isButton": _flag("Render the column as a button?"),
        "buttonText": _string(),
        "destinationContextObjectName": _string(),
        "destinationTargetName": _string(),
        "isFilterAvailable": _flag(),
        "codeDescription": _string(),
    },
    required=["name"],
    description="Column of a report grid.",
)

REPORT_BUTTON_SCHEMA = _object(
    {
        "buttonName": _string(),
        "buttonText": _string("Text shown on the button; identifies the button.", minLength=1),
        "buttonType": _string("e.g. back, add, edit, custom."),
        "isVisible": _flag(),
        "destinationContextObjectName": _string(),
        "destinationTargetName": _string(),
        "isButtonCallToAction": _flag(),
    },
    required=["buttonText"],
    description="Button of a report page.",
)

REPORT_UPDATE_FIELDS: dict[str, Any] = {
    "titleText": _string("Title displayed on the report page.", maxLength=100),
    "visualizationType": _enum(VISUALIZATION_TYPES, "Type of visualization for the report data."),
    "introText": _string(),
    "layoutName": _string(),
    "codeDescription": _string(),
    "isCachingAllowed": _flag(),
    "cacheExpirationInMinutes": _string(),
    "isPagingAvailable": _flag(),
    "defaultPageSize": _string(),
    "isFilterSectionHidden": _flag(),
    "isFilterSectionCollapsable": _flag(),
    "isRefreshButtonHidden": _flag(),
    "isExportButtonsHidden": _flag(),
    "isAutoRefresh": _flag(),
    "autoRefreshFrequencyInMinutes": _string(),
    "defaultOrderByColumnName": _string(),
    "defaultOrderByDescending": _flag(),
    "isHeaderVisible": _flag(),
    "isHeaderLabelsVisible": _flag(),
    "noRowsReturnedText": _string(),
    "isAuthorizationRequired": _flag(),
    "roleRequired": _string(),
    "isCustomSqlUsed": _flag(),
    "isIgnoredInDocumentation": _flag(),
}

REPORT_SCHEMA = _object(
    {
        "name": _name("Report ID, unique across the model. PascalCase."),
        **REPORT_UPDATE_FIELDS,
        "targetChildObject": _string(),
        "initObjectWorkflowName": _string(),
        "reportParam": _array_of(REPORT_PARAM_SCHEMA),
        "reportColumn": _array_of(REPORT_COLUMN_SCHEMA),
        "reportButton": _array_of(REPORT_BUTTON_SCHEMA),
    },
    required=["name"],
    description="Report: a data visualization page owned by a data object.",
)

# ---------------------------------------------------------------------------
# Workflows (isDynaFlow == "true")
# ---------------------------------------------------------------------------

WORKFLOW_TASK_SCHEMA = _object(
    {"name": _name("Task name in PascalCase.")},
    required=["name"],
    description="Task of a DynaFlow workflow.",
)

WORKFLOW_UPDATE_FIELDS: dict[str, Any] = {
    "codeDescription": _string(),
    "isCustomLogicOverwritten": _flag(),
}

WORKFLOW_SCHEMA = _object(
    {
        "name": _name("Workflow name in PascalCase; must not end with InitObjWF/InitReport."),
        **WORKFLOW_UPDATE_FIELDS,
        "dynaFlowTask": _array_of(WORKFLOW_TASK_SCHEMA),
    },
    required=["name"],
    description="DynaFlow workflow (objectWorkflow with isDynaFlow=\"true\").",
)

# ---------------------------------------------------------------------------
# General flows and page init flows
# ---------------------------------------------------------------------------

FLOW_PARAM_SCHEMA = _object(
    {
        "name": _name("Parameter name in PascalCase."),
        "sqlServerDBDataType": _string("SQL Server data type (public name: dataType)."),
        "sqlServerDBDataTypeSize": _string("Size for the data type (public name: dataSize)."),
        "codeDescription": _string(),
        "isIgnored": _flag(),
    },
    required=["name"],
    description="Input parameter of a general flow.",
)

FLOW_OUTPUT_VAR_SCHEMA = _object(
    {
        "name": _name("Output variable name in PascalCase."),
        "buttonNavURL": _string(),
        "buttonObjectWFName": _string(),
        "buttonText": _string(),
        "conditionalVisiblePropertyName": _string(),
        "sqlServerDBDataType": _enum(SQL_DATA_TYPES, "SQL Server data type (public name: dataType)."),
        "sqlServerDBDataTypeSize": _string("Size for the data type (public name: dataSize)."),
        "defaultValue": _string(),
        "fKObjectName": _string(),
        "labelText": _string(),
        "isAutoRedirectURL": _flag(),
        "isFK": _flag(),
        "isFKLookup": _flag(),
        "isLabelVisible": _flag(),
        "isHeaderText": _flag(),
        "isIgnored": _flag(),
        "isLink": _flag(),
        "isVisible": _flag(),
        "sourceObjectName": _string(),
        "sourcePropertyName": _string(),
    },
    required=["name"],
    description="Output variable of a flow.",
)

GENERAL_FLOW_UPDATE_FIELDS: dict[str, Any] = {
    "isAuthorizationRequired": _flag(),
    "roleRequired": _string(),
    "isExposedInBusinessObject": _flag(),
    "isCustomLogicOverwritten": _flag(),
    "isIgnored": _flag(),
}

GENERAL_FLOW_SCHEMA = _object(
    {
        "name": _name("General flow name in PascalCase."),
        **GENERAL_FLOW_UPDATE_FIELDS,
        "objectWorkflowParam": _array_of(FLOW_PARAM_SCHEMA),
        "objectWorkflowOutputVar": _array_of(FLOW_OUTPUT_VAR_SCHEMA),
    },
    required=["name"],
    description="General flow: reusable business logic, not a page and not a DynaFlow.",
)

PAGE_INIT_FLOW_UPDATE_FIELDS: dict[str, Any] = {
    "isAuthorizationRequired": _flag(),
    "isCustomLogicOverwritten": _flag(),
    "isExposedInBusinessObject": _flag(),
    "isRequestRunViaDynaFlowAllowed": _flag(),
    "pageIntroText": _string(),
    "pageTitleText": _string(),
    "roleRequired": _string(),
}

PAGE_INIT_FLOW_SCHEMA = _object(
    {
        "name": _name("Ends with InitObjWF or InitReport.", pattern=PAGE_INIT_NAME_PATTERN),
        **PAGE_INIT_FLOW_UPDATE_FIELDS,
        "objectWorkflowOutputVar": _array_of(FLOW_OUTPUT_VAR_SCHEMA),
    },
    required=["name"],
    description="Page init flow: prepares data before a form or report is shown.",
)

# Fields the page init details view never shows.
PAGE_INIT_FLOW_HIDDEN: frozenset[str] = frozenset({
    "isIgnoredInDocumentation", "formFooterImageURL", "footerImageURL",
    "headerImageURL", "isCreditCardEntryUsed", "isDynaFlow", "isDynaFlowTask",
    "isCustomPageViewUsed", "isImpersonationPage", "isPage", "titleText",
    "initObjectWorkflowName", "isInitObjWFSubscribedToParams", "isObjectDelete",
    "layoutName", "introText", "formTitleText", "formIntroText", "formFooterText",
    "codeDescription", "isAutoSubmit", "targetChildObject", "ownerObject",
    "isAsync", "asyncWaitMilliseconds", "workflowType", "isQueue",
    "maxRetryCount", "errorWorkflowName", "completionWorkflowName",
    "isBackButtonVisible", "isCancelButtonAvailable", "isFileUploadAvailable",
    "isAddressAutoComplete", "objectWorkflowParam", "objectWorkflowButton",
})

# Fields the general flow details view never shows.
GENERAL_FLOW_HIDDEN: frozenset[str] = frozenset({
    "isDynaFlow", "isDynaFlowTask", "isPage", "initObjectWorkflowName",
    "formTitleText", "formIntroText", "formFooterText", "objectWorkflowButton",
})

# ---------------------------------------------------------------------------
# Data objects
# ---------------------------------------------------------------------------

DATA_OBJECT_PROP_SCHEMA = _object(
    {
        "name": _name("Property name in PascalCase."),
        "codeDescription": _string(),
        "defaultValue": _string(),
        "fKObjectName": _string("Data object referenced when isFK is \"true\"."),
        "fKObjectPropertyName": _string(),
        "forceDBColumnIndex": _flag(),
        "isEncrypted": _flag(),
        "isFK": _flag(),
        "isFKConstraintSuppressed": _flag(),
        "isFKLookup": _flag(),
        "isNotPublishedToSubscriptions": _flag(),
        "isQueryByAvailable": _flag(),
        "labelText": _string(),
        "sqlServerDBDataType": _enum(SQL_DATA_TYPES),
        "sqlServerDBDataTypeSize": _string(),
    },
    required=["name"],
    description="Property (column) of a data object.",
)

LOOKUP_ITEM_SCHEMA = _object(
    {
        "name": _name("Lookup value name in PascalCase."),
        "displayName": _string("Text shown to users."),
        "description": _string(),
        "isActive": _flag("Inactive values stay in the model but are not offered."),
    },
    required=["name"],
    description="Value of a lookup data object (isLookup=\"true\"). Roles are the values of \"Role\".",
)

DATA_OBJECT_UPDATE_FIELDS: dict[str, Any] = {
    "codeDescription": _string("Description of the data object and its purpose."),
}

DATA_OBJECT_SCHEMA = _object(
    {
        "name": _name("Data object name in PascalCase."),
        "parentObjectName": _string("Existing data object that owns this one."),
        "isLookup": _flag("Lookup objects must have parentObjectName \"Pac\"."),
        **DATA_OBJECT_UPDATE_FIELDS,
        "prop": _array_of(DATA_OBJECT_PROP_SCHEMA),
        "lookupItem": _array_of(LOOKUP_ITEM_SCHEMA),
    },
    required=["name", "parentObjectName"],
    description="Data object: a table-like entity owning reports and flows.",
)

# ---------------------------------------------------------------------------
# User stories
# ---------------------------------------------------------------------------

USER_STORY_SCHEMA = _object(
    {
        "name": _string("Generated identifier."),
        "storyNumber": _string(),
        "storyText": _string("A <Role> wants to <action> <a|an|all> <Object>.", minLength=1),
        "isIgnored": _flag(),
        "isStoryProcessed": _flag(),
    },
    required=["storyText"],
    description="User story in the model's first namespace.",
)

# Story text is fixed once written; only the ignore flag changes.
USER_STORY_UPDATE_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {"isIgnored": USER_STORY_SCHEMA["properties"]["isIgnored"]},
    "additionalProperties": False,
}
