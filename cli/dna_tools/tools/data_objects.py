"""
Data object tools.

Data objects are the top-level records of every namespace. Names are unique
model-wide (case-insensitive). Lookup objects hang off the "Pac" object
and carry their values in lookupItem; roles are the values of "Role".
"""

from __future__ import annotations

from typing import Any

from dna_tools import results
from dna_tools.client import BridgeClient, BridgeError
from dna_tools.config import CATALOG_TIMEOUT, MUTATION_TIMEOUT
from dna_tools.tools.base import FamilyTools, fetch_index
from dna_tools.tools.reports import human_readable
from engine.kernel.families import DATA_OBJECT
from engine.kernel.locator import find_duplicate, find_item, find_owner
from engine.kernel.types import BOOL_STRINGS, FALSE, LOOKUP_PARENT, ROLE_OBJECT, TRUE, is_pascal_case, is_true
from engine.kernel.validator import validate


def _matches_search(name: str, search: str) -> bool:
    name_lower = name.lower()
    return search.lower() in name_lower or "".join(search.split()).lower() in "".join(name.split()).lower()


class DataObjectTools(FamilyTools):
    def __init__(self, client: BridgeClient):
        super().__init__(client, DATA_OBJECT)

    def list_summaries(
        self,
        search_name: str | None = None,
        is_lookup: str | bool | None = None,
        parent_object_name: str | None = None,
    ) -> dict[str, Any]:
        """Summaries of every data object, filtered client-side."""
        try:
            objects = self.client.get("/api/data-objects", timeout=CATALOG_TIMEOUT) or []
        except BridgeError as e:
            return results.from_bridge_error(e)

        if search_name:
            objects = [o for o in objects if _matches_search(o.get("name") or "", search_name)]
        if is_lookup is not None:
            wanted = is_lookup is True or is_lookup == TRUE
            objects = [o for o in objects if o.get("isLookup") is wanted]
        if parent_object_name:
            objects = [o for o in objects if (o.get("parentObjectName") or "").lower() == parent_object_name.lower()]

        return results.ok(
            objects=objects,
            count=len(objects),
            filters={
                "search_name": search_name,
                "is_lookup": is_lookup,
                "parent_object_name": parent_object_name,
            },
        )

    def create(
        self,
        name: str,
        parent_object_name: str,
        is_lookup: str | None = None,
        code_description: str | None = None,
    ) -> dict[str, Any]:
        results.require(name=name, parent_object_name=parent_object_name)
        lookup = is_lookup if is_lookup is not None else FALSE

        errors: list[str] = []
        if not is_pascal_case(name):
            errors.append(f'name: must be PascalCase (e.g. "CustomerOrder"), got "{name}"')
        if lookup not in BOOL_STRINGS:
            errors.append(f'isLookup: must be "true" or "false", got "{lookup}"')
        elif lookup == TRUE and parent_object_name != LOOKUP_PARENT:
            errors.append(f'parentObjectName: lookup data objects must have parentObjectName "{LOOKUP_PARENT}"')
        if errors:
            return results.validation_failed(errors)

        try:
            index = fetch_index(self.client)
        except BridgeError as e:
            return results.from_bridge_error(e)

        if find_owner(index, parent_object_name, exact=True) is None:
            return results.not_found(
                f'parentObjectName must exactly match an existing data object; "{parent_object_name}" was not found'
            )
        if find_duplicate(index, DATA_OBJECT, name) is not None:
            return results.duplicate(f'A data object with name "{name}" already exists')

        body: dict[str, Any] = {"name": name, "parentObjectName": parent_object_name, "isLookup": lookup}
        if code_description:
            body["codeDescription"] = code_description

        try:
            response = self.client.post("/api/data-objects", body, timeout=MUTATION_TIMEOUT)
        except BridgeError as e:
            return results.from_bridge_error(e)

        return results.ok(
            object=response.get("object"),
            message=response.get("message") or "Data object created successfully",
        )

    def add_props(self, object_name: str, props: list[dict[str, Any]] | None) -> dict[str, Any]:
        """Append several properties at once; the whole batch is rejected on any error."""
        results.require(object_name=object_name)
        child = DATA_OBJECT.child("prop")
        if not props:
            return results.validation_failed(["props: at least one property must be provided"])

        errors: list[str] = []
        for i, prop in enumerate(props):
            errors.extend(f"props.{i}.{e}" for e in validate(prop, child.schema, child.rules))
        seen: set[str] = set()
        for prop in props:
            key = str(prop.get("name", "")).lower()
            if key and key in seen:
                errors.append(f'props: "{prop["name"]}" is listed more than once')
            seen.add(key)
        if errors:
            return results.validation_failed(errors)

        found = self._locate(object_name, None)
        if isinstance(found, dict):
            return found

        for prop in props:
            if find_item(found.entity.get(child.field), prop["name"]) is not None:
                return results.duplicate(f'Property "{prop["name"]}" already exists in data object "{found.owner_name}"')

        try:
            response = self.client.post(
                "/api/data-objects/add-props",
                {"name": found.owner_name, "props": props},
                timeout=MUTATION_TIMEOUT,
            )
        except BridgeError as e:
            return results.from_bridge_error(e)

        return results.ok(
            object_name=found.owner_name,
            added_count=len(props),
            prop_count=response.get("prop_count"),
            message=f'{len(props)} propert{"y" if len(props) == 1 else "ies"} added to "{found.owner_name}"',
        )

    def update_prop(self, object_name: str, prop_name: str, updates: dict[str, Any] | None) -> dict[str, Any]:
        results.require(object_name=object_name, prop_name=prop_name)
        return self.update_child("prop", object_name, prop_name, updates)

    # ------------------------------------------------------------------
    # Lookup values and roles
    # ------------------------------------------------------------------

    def list_lookup_values(self, lookup_object_name: str, include_inactive: bool = False) -> dict[str, Any]:
        results.require(lookup_object_name=lookup_object_name)
        try:
            values = self.client.get("/api/lookup-values", params={"data_object_name": lookup_object_name})
        except BridgeError as e:
            return results.from_bridge_error(e)

        values = values or []
        if not include_inactive:
            values = [v for v in values if v.get("isActive") != FALSE]
        return results.ok(lookup_object_name=lookup_object_name, lookup_values=values, count=len(values))

    def add_lookup_value(
        self,
        lookup_object_name: str,
        name: str,
        display_name: str | None = None,
        description: str | None = None,
        is_active: str | None = None,
    ) -> dict[str, Any]:
        """Append a value to a lookup object. Display name and description default to the spaced-out name."""
        results.require(lookup_object_name=lookup_object_name, name=name)
        child = DATA_OBJECT.child("lookup_value")
        item = {
            "name": name,
            "displayName": display_name or human_readable(name),
            "description": description or human_readable(name),
            "isActive": is_active or TRUE,
        }
        errors = validate(item, child.schema, child.rules)
        if errors:
            return results.validation_failed(errors)

        found = self._locate(lookup_object_name, None, exact=True)
        if isinstance(found, dict):
            return found
        if not is_true(found.entity.get("isLookup")):
            return results.validation_failed([f"isLookup: '{found.owner_name}' is not a lookup data object"])
        if find_item(found.entity.get(child.field), name) is not None:
            return results.duplicate(f"Lookup value '{name}' already exists in '{found.owner_name}'")

        return self._mutate(DATA_OBJECT.action("add", child), found, child=child, item=item)

    def update_lookup_value(
        self, lookup_object_name: str, name: str, updates: dict[str, Any] | None
    ) -> dict[str, Any]:
        """Change displayName, description or isActive of one value. Names match exactly."""
        results.require(lookup_object_name=lookup_object_name, name=name)
        return self.update_child("lookup_value", lookup_object_name, name, updates, exact=True)

    def add_role(self, name: str) -> dict[str, Any]:
        return self.add_lookup_value(ROLE_OBJECT, name)

    def update_role(
        self,
        name: str,
        display_name: str | None = None,
        description: str | None = None,
        is_active: str | None = None,
    ) -> dict[str, Any]:
        updates = {"displayName": display_name, "description": description, "isActive": is_active}
        updates = {k: v for k, v in updates.items() if v is not None}
        if not updates:
            return results.validation_failed(["updates: give display_name, description or is_active"])
        return self.update_lookup_value(ROLE_OBJECT, name, updates)
