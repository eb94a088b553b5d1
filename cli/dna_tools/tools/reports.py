"""
Report tools.

Reports live in each data object's `report` array. Report names are unique
across the whole model (case-insensitive). Creating a report also creates
its `<Name>InitReport` page init flow and a default Back button.
"""

from __future__ import annotations

import re
from typing import Any

from dna_tools import results
from dna_tools.client import BridgeClient, BridgeError
from dna_tools.config import MUTATION_TIMEOUT
from dna_tools.tools.base import FamilyTools, fetch_index
from engine.kernel.catalogs import VISUALIZATION_TYPES
from engine.kernel.families import PAGE_INIT_FLOW, REPORT
from engine.kernel.locator import DocumentIndex, find_duplicate, find_owner
from engine.kernel.types import FALSE, ROLE_OBJECT, TRUE, is_pascal_case

DEFAULT_VISUALIZATION = "Grid"
MAX_TITLE_LENGTH = 100


def human_readable(text: str) -> str:
    """CustomerOrder -> Customer Order."""
    return re.sub(r"([A-Z])", r" \1", text or "").strip()


def new_report(
    name: str,
    title_text: str,
    visualization_type: str = DEFAULT_VISUALIZATION,
    role_required: str | None = None,
    target_child_object: str | None = None,
) -> tuple[dict[str, Any], dict[str, Any]]:
    """The report record and its page init flow, as the host will store them."""
    report: dict[str, Any] = {
        "name": name,
        "titleText": title_text,
        "visualizationType": visualization_type,
        "isCustomSqlUsed": FALSE,
        "isPage": TRUE,
        "reportColumn": [],
        "reportButton": [{"buttonName": "Back", "buttonText": "Back", "buttonType": "back", "isVisible": TRUE}],
        "reportParam": [],
    }
    if role_required:
        report["isAuthorizationRequired"] = TRUE
        report["roleRequired"] = role_required
        report["layoutName"] = f"{role_required}Layout"
    else:
        report["isAuthorizationRequired"] = FALSE
    if target_child_object:
        report["targetChildObject"] = target_child_object

    page_init_name = f"{name}InitReport"
    report["initObjectWorkflowName"] = page_init_name
    page_init_flow = {
        "name": page_init_name,
        "titleText": f"{title_text} Page Init",
        "objectWorkflowOutputVar": [],
    }
    return report, page_init_flow


class ReportTools(FamilyTools):
    def __init__(self, client: BridgeClient):
        super().__init__(client, REPORT)

    def suggest_name_and_title(
        self,
        owner_object_name: str,
        role_required: str | None = None,
        visualization_type: str | None = None,
        target_child_object: str | None = None,
    ) -> dict[str, Any]:
        """
        Propose a unique PascalCase report name and a readable title.

        Name: [Role] + (target child or owner) + (visualization | "List"),
        with a numeric suffix when the name is already taken anywhere.
        """
        results.require(owner_object_name=owner_object_name)
        viz = visualization_type or DEFAULT_VISUALIZATION

        try:
            index = fetch_index(self.client)
            problem = self._check_references(index, owner_object_name, role_required, target_child_object)
        except BridgeError as e:
            return results.from_bridge_error(e)
        if problem is not None:
            return problem

        base = target_child_object or owner_object_name
        if role_required:
            base = role_required + base
        if viz != DEFAULT_VISUALIZATION:
            base += viz
        elif target_child_object or not base.endswith("List"):
            base += "List"

        taken = {
            (report.get("name") or "").lower()
            for obj in index.objects
            for report in obj.get("report") or []
        }
        report_name = base
        suffix = 1
        while report_name.lower() in taken:
            report_name = f"{base}{suffix}"
            suffix += 1

        title = human_readable(target_child_object or owner_object_name)
        title += " List" if viz == DEFAULT_VISUALIZATION else f" {human_readable(viz)}"
        if suffix > 1:
            title += f" {suffix - 1}"

        return results.ok(
            suggestions={"report_name": report_name, "title_text": title},
            context={
                "owner_object_name": owner_object_name,
                "role_required": role_required,
                "visualization_type": viz,
                "target_child_object": target_child_object,
            },
            note=(
                f'A numeric suffix was added to "{base}" because that report name already exists.'
                if report_name != base
                else "You can modify these suggestions before creating the report."
            ),
        )

    def create(
        self,
        owner_object_name: str,
        report_name: str,
        title_text: str,
        visualization_type: str | None = None,
        role_required: str | None = None,
        target_child_object: str | None = None,
    ) -> dict[str, Any]:
        results.require(owner_object_name=owner_object_name, report_name=report_name, title_text=title_text)
        viz = visualization_type or DEFAULT_VISUALIZATION

        errors: list[str] = []
        if not is_pascal_case(report_name):
            errors.append("report_name: must be PascalCase (start with an uppercase letter, letters and digits only)")
        if len(title_text) > MAX_TITLE_LENGTH:
            errors.append(f"title_text: must be at most {MAX_TITLE_LENGTH} characters")
        if viz not in VISUALIZATION_TYPES:
            errors.append(f"visualization_type: must be one of {', '.join(VISUALIZATION_TYPES)}")
        if errors:
            return results.validation_failed(errors)

        try:
            index = fetch_index(self.client)
            problem = self._check_references(index, owner_object_name, role_required, target_child_object)
        except BridgeError as e:
            return results.from_bridge_error(e)
        if problem is not None:
            return problem

        report, page_init_flow = new_report(report_name, title_text, viz, role_required, target_child_object)
        for family, name in ((REPORT, report_name), (PAGE_INIT_FLOW, page_init_flow["name"])):
            clash = find_duplicate(index, family, name)
            if clash is not None:
                return results.duplicate(
                    f"{family.label} name \"{name}\" already exists in object \"{clash.owner_name}\""
                )

        try:
            self.client.post(
                "/api/create-report",
                {"owner_object_name": owner_object_name, "report": report, "page_init_flow": page_init_flow},
                timeout=MUTATION_TIMEOUT,
            )
        except BridgeError as e:
            return results.from_bridge_error(e)

        return results.ok(
            report=report,
            page_init_flow=page_init_flow,
            owner_object_name=owner_object_name,
            message=f'Report "{report_name}" and page init flow "{page_init_flow["name"]}" created successfully',
        )

    def _check_references(
        self,
        index: DocumentIndex,
        owner_object_name: str,
        role_required: str | None,
        target_child_object: str | None,
    ) -> dict[str, Any] | None:
        """Owner, target and role must exist with exactly these names."""
        if find_owner(index, owner_object_name, exact=True) is None:
            return results.not_found(f'Owner object "{owner_object_name}" not found (case-sensitive match required)')
        if target_child_object and find_owner(index, target_child_object, exact=True) is None:
            return results.not_found(
                f'Target child object "{target_child_object}" not found (case-sensitive match required)'
            )
        if role_required and role_required not in role_names(index):
            return results.not_found(f'Role "{role_required}" not found in the Role lookup object')
        return None


def role_names(index: DocumentIndex) -> list[str]:
    """Lookup items of the Role data object."""
    role_object = find_owner(index, ROLE_OBJECT, exact=True) or {}
    return [item.get("name") for item in role_object.get("lookupItem") or [] if item.get("name")]
