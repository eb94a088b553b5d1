"""
Generic tool operations shared by every entity family.

A FamilyTools instance is bound to one EntityFamily descriptor and does the
same thing for reports, workflows, general flows and page init flows:

  1. validate what can be validated without IO
  2. lookup: one data-plane exchange, resolved with the locator
  3. validate business rules against the stored entity
  4. mutation: one data-plane exchange, applied by the host

At most two exchanges per operation; nothing is cached between calls.
"""

from __future__ import annotations

import logging
from typing import Any

from dna_tools import results
from dna_tools.client import BridgeClient, BridgeError
from dna_tools.config import CATALOG_TIMEOUT, MUTATION_TIMEOUT
from engine.kernel.families import ChildSequence, EntityFamily
from engine.kernel.locator import DocumentIndex, find, find_item
from engine.kernel.projector import to_canonical, to_public
from engine.kernel.reorder import move
from engine.kernel.types import OWNER_KEY, Located, LookupMiss, ViewSpec, same_name
from engine.kernel.validator import validate

logger = logging.getLogger(__name__)


def fetch_index(client: BridgeClient) -> DocumentIndex:
    """Snapshot of every data object. Raises BridgeError."""
    data = client.get("/api/objects", timeout=CATALOG_TIMEOUT)
    objects = data.get("objects", []) if isinstance(data, dict) else data
    return DocumentIndex.from_objects(objects or [])


def _count_key(child_name: str) -> str:
    """output_var -> outputVarCount."""
    head, *rest = child_name.split("_")
    return head + "".join(part.title() for part in rest) + "Count"


class FamilyTools:
    """Read and mutate one entity family through the bridge."""

    def __init__(self, client: BridgeClient, family: EntityFamily):
        self.client = client
        self.family = family

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def schema(self) -> dict[str, Any]:
        family = self.family
        if family.collection is None:
            note = f"{family.label} records are the entries of each namespace's 'object' array."
        else:
            note = f"{family.label} records live in each data object's '{family.collection}' array."
        return results.ok(
            schema=family.schema,
            updatable_properties=sorted(family.update_fields),
            child_sequences={c.name: c.field for c in family.children.values()},
            note=note,
        )

    def list(self, owner_object_name: str | None = None, name: str | None = None) -> dict[str, Any]:
        """Entities of this family, optionally filtered by owner and name (case-insensitive)."""
        params = {"owner_object_name": owner_object_name, self.family.arg_name: name}
        try:
            items = self.client.get(f"/api/{self.family.resource}", params=params)
        except BridgeError as e:
            return results.from_bridge_error(e)

        projected = [
            {**to_public(item, self.family.view), "owner_object_name": item.get(OWNER_KEY)}
            for item in items or []
        ]
        return results.ok(**{self.list_key: projected}, count=len(projected))

    def get(self, name: str, owner_object_name: str | None = None) -> dict[str, Any]:
        results.require(**{self.family.arg_name: name})
        found = self._locate(name, owner_object_name)
        if isinstance(found, dict):
            return found

        counts = {
            _count_key(c.name): len(found.entity.get(c.field) or [])
            for c in self.family.children.values()
        }
        return results.ok(
            **{self.family.name: to_public(found.entity, self.family.view)},
            owner_object_name=found.owner_name,
            element_counts=counts,
        )

    # ------------------------------------------------------------------
    # Entity mutations
    # ------------------------------------------------------------------

    def update(self, name: str, updates: dict[str, Any] | None, owner_object_name: str | None = None) -> dict[str, Any]:
        """Partial update of the entity's own properties."""
        results.require(**{self.family.arg_name: name})
        family = self.family
        payload = updates or {}

        errors = validate(payload, family.update_schema, partial=True)
        if errors:
            return results.validation_failed(errors)

        found = self._locate(name, owner_object_name)
        if isinstance(found, dict):
            return found

        errors = validate(payload, family.update_schema, family.rules, partial=True, base=found.entity)
        if errors:
            return results.validation_failed(errors)

        return self._mutate(family.action("update"), found, updates=payload)

    def update_full(
        self, name: str, entity: dict[str, Any] | None, owner_object_name: str | None = None
    ) -> dict[str, Any]:
        """Replace the entity wholesale, children included. The name cannot change."""
        results.require(**{self.family.arg_name: name})
        family = self.family
        replacement = self.canonical_entity(entity or {})

        if replacement.get("name") is not None and not same_name(replacement["name"], name):
            return results.validation_failed(["name: cannot be changed by a full update"])
        replacement["name"] = name

        errors = validate(replacement, family.schema, family.full_rules)
        if errors:
            return results.validation_failed(errors)

        found = self._locate(name, owner_object_name)
        if isinstance(found, dict):
            return found

        replacement["name"] = found.entity["name"]
        return self._mutate(family.action("update-full"), found, entity=replacement)

    # ------------------------------------------------------------------
    # Child sequence mutations
    # ------------------------------------------------------------------

    def add_child(
        self, child_name: str, name: str, item: dict[str, Any] | None, owner_object_name: str | None = None
    ) -> dict[str, Any]:
        results.require(**{self.family.arg_name: name})
        child = self.family.child(child_name)
        payload = to_canonical(item or {}, child.aliases)

        errors = validate(payload, child.schema, child.rules)
        if errors:
            return results.validation_failed(errors)

        found = self._locate(name, owner_object_name)
        if isinstance(found, dict):
            return found

        key_value = payload[child.key]
        if find_item(found.entity.get(child.field), key_value, key=child.key) is not None:
            return results.duplicate(
                f"{child.label} '{key_value}' already exists in {self.family.label.lower()} '{found.entity['name']}'"
            )

        return self._mutate(self.family.action("add", child), found, child=child, item=payload)

    def update_child(
        self,
        child_name: str,
        name: str,
        item_name: str,
        updates: dict[str, Any] | None,
        owner_object_name: str | None = None,
        exact: bool = False,
    ) -> dict[str, Any]:
        """Partial update of one child item. With `exact` both names must match case-sensitively."""
        child = self.family.child(child_name)
        results.require(**{self.family.arg_name: name, f"{child.name}_name": item_name})
        payload = to_canonical(updates or {}, child.aliases)

        errors = validate(payload, child.update_schema, partial=True)
        if errors:
            return results.validation_failed(errors)

        found = self._locate(name, owner_object_name, exact=exact)
        if isinstance(found, dict):
            return found

        existing = find_item(found.entity.get(child.field), item_name, key=child.key, exact=exact)
        if existing is None:
            return results.not_found(self._child_missing(child, item_name, found))
        _, stored = existing

        errors = validate(payload, child.update_schema, child.rules, partial=True, base=stored)
        if errors:
            return results.validation_failed(errors)

        return self._mutate(
            self.family.action("update", child), found, child=child, child_name=stored[child.key], updates=payload
        )

    def move_child(
        self,
        child_name: str,
        name: str,
        item_name: str,
        new_position: int,
        owner_object_name: str | None = None,
    ) -> dict[str, Any]:
        child = self.family.child(child_name)
        results.require(**{self.family.arg_name: name, f"{child.name}_name": item_name})

        if isinstance(new_position, bool) or not isinstance(new_position, int) or new_position < 0:
            return results.validation_failed(["new_position must be >= 0"])

        found = self._locate(name, owner_object_name)
        if isinstance(found, dict):
            return found

        sequence = list(found.entity.get(child.field) or [])
        if find_item(sequence, item_name, key=child.key, exact=True) is None:
            return results.not_found(self._child_missing(child, item_name, found))

        preview = move(sequence, item_name, new_position, key=child.key)
        if not preview.moved:
            return results.validation_failed([preview.error])

        return self._mutate(
            self.family.action("move", child),
            found,
            child=child,
            child_name=item_name,
            new_position=new_position,
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @property
    def list_key(self) -> str:
        return self.family.resource.replace("-", "_")

    def canonical_entity(self, entity: dict[str, Any]) -> dict[str, Any]:
        """Apply child-sequence aliases to every item of every child array."""
        canonical = dict(entity)
        for child in self.family.children.values():
            items = canonical.get(child.field)
            if child.aliases and isinstance(items, list):
                canonical[child.field] = [
                    to_canonical(i, child.aliases) if isinstance(i, dict) else i for i in items
                ]
        return canonical

    def _locate(self, name: str, owner_object_name: str | None, exact: bool = False) -> Located | dict[str, Any]:
        """Located entity, or a failure result."""
        try:
            index = fetch_index(self.client)
        except BridgeError as e:
            return results.from_bridge_error(e)

        found = find(index, self.family, name, owner_object_name, exact=exact)
        if isinstance(found, LookupMiss):
            return results.not_found(found.message)
        return found

    def _child_missing(self, child: ChildSequence, item_name: str, found: Located) -> str:
        return f"{child.label} '{item_name}' not found in {self.family.label.lower()} '{found.entity['name']}'"

    def _mutate(
        self,
        action: str,
        found: Located,
        child: ChildSequence | None = None,
        **body: Any,
    ) -> dict[str, Any]:
        request = {"owner_object_name": found.owner_name, "name": found.entity["name"], **body}
        try:
            response = self.client.post(f"/api/{action}", request, timeout=MUTATION_TIMEOUT)
        except BridgeError as e:
            return results.from_bridge_error(e)

        logger.info("%s %s.%s", action, found.owner_name, found.entity["name"])
        out: dict[str, Any] = {
            self.family.name: to_public(response.get(self.family.name) or {}, self.family.view),
            "owner_object_name": response.get("owner_object_name", found.owner_name),
        }
        if child is not None:
            child_view = child.view or ViewSpec()
            out[child.name] = to_public(response.get(child.name) or {}, child_view)
        for key in ("old_position", "new_position"):
            if key in response:
                out[key] = response[key]
        out["message"] = response.get("message") or f"{action} applied to '{found.entity['name']}'"
        return results.ok(**out)
