"""
Model Kernel: Entity Locator

Resolves (family, name, optional owner) to one record of the document.

The index is built once per snapshot, classifying every objectWorkflow
record once. Lookups never raise: they return a Located or a LookupMiss
whose reason says whether the owner, the entity or the discriminant failed.

Read paths match names case-insensitively; write paths pass exact=True.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from engine.kernel.families import EntityFamily
from engine.kernel.types import (
    FlowKind,
    Located,
    LookupMiss,
    MissReason,
    has_page_init_suffix,
    is_true,
    same_name,
)

logger = logging.getLogger(__name__)

_KIND_LABELS = {
    FlowKind.PAGE_INIT_FLOW: "page init flow",
    FlowKind.WORKFLOW: "workflow",
    FlowKind.WORKFLOW_TASK: "workflow task",
    FlowKind.GENERAL_FLOW: "general flow",
    FlowKind.FORM: "form",
    FlowKind.CONFLICT: "record with conflicting kind markers",
}


def classify_flow(entity: Mapping[str, Any]) -> FlowKind:
    """
    Kind of one objectWorkflow record. More than one discriminant = CONFLICT.

    Forms (isPage == "true") share the array but belong to no flow family.
    """
    matched: list[FlowKind] = []
    if has_page_init_suffix(str(entity.get("name") or "")):
        matched.append(FlowKind.PAGE_INIT_FLOW)
    if is_true(entity.get("isDynaFlow")):
        matched.append(FlowKind.WORKFLOW)
    if is_true(entity.get("isDynaFlowTask")):
        matched.append(FlowKind.WORKFLOW_TASK)

    if len(matched) > 1:
        return FlowKind.CONFLICT
    if matched:
        return matched[0]
    if is_true(entity.get("isPage")):
        return FlowKind.FORM
    return FlowKind.GENERAL_FLOW


def kind_label(kind: FlowKind) -> str:
    return _KIND_LABELS[kind]


@dataclass
class DocumentIndex:
    """
    Snapshot view over the document's data objects.

    `kinds[(i, j)]` is the kind of objects[i]["objectWorkflow"][j].
    `conflicts` lists (owner, flow name) pairs whose kind is ambiguous.
    """

    objects: list[dict[str, Any]]
    kinds: dict[tuple[int, int], FlowKind] = field(default_factory=dict)
    conflicts: list[tuple[str, str]] = field(default_factory=list)

    @classmethod
    def from_document(cls, document: Mapping[str, Any]) -> DocumentIndex:
        """Flatten object[] across every namespace of a full model document."""
        root = document.get("root", document)
        objects: list[dict[str, Any]] = []
        for namespace in root.get("namespace") or []:
            objects.extend(namespace.get("object") or [])
        return cls.from_objects(objects)

    @classmethod
    def from_objects(cls, objects: Iterable[dict[str, Any]]) -> DocumentIndex:
        index = cls(objects=list(objects))
        for i, obj in enumerate(index.objects):
            for j, flow in enumerate(obj.get("objectWorkflow") or []):
                kind = classify_flow(flow)
                index.kinds[(i, j)] = kind
                if kind == FlowKind.CONFLICT:
                    index.conflicts.append((obj.get("name", ""), flow.get("name", "")))
                    logger.warning(
                        "objectWorkflow record %s.%s matches more than one kind; ignoring it",
                        obj.get("name"),
                        flow.get("name"),
                    )
        return index

    def owner_position(self, name: str, exact: bool = False) -> int | None:
        for i, obj in enumerate(self.objects):
            if same_name(obj.get("name"), name, exact):
                return i
        return None


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def find_owner(index: DocumentIndex, name: str, exact: bool = False) -> dict[str, Any] | None:
    """Data object by name."""
    position = index.owner_position(name, exact)
    return None if position is None else index.objects[position]


def find(
    index: DocumentIndex,
    family: EntityFamily,
    name: str,
    owner_name: str | None = None,
    exact: bool = False,
) -> Located | LookupMiss:
    """
    Locate one entity of `family`.

    With `owner_name` the search is confined to that data object. Without it
    the first match in document order wins. Records of another kind that
    share the name are skipped; if nothing else matches the miss reason is
    DISCRIMINANT so callers can say what the name actually refers to.
    """
    if family.collection is None:
        position = index.owner_position(name, exact)
        if position is None:
            return LookupMiss(MissReason.ENTITY, f"{family.label} '{name}' not found")
        obj = index.objects[position]
        return Located(entity=obj, owner_name=obj.get("name", ""), position=position)

    if owner_name is not None:
        owner_pos = index.owner_position(owner_name, exact)
        if owner_pos is None:
            return LookupMiss(MissReason.OWNER, f"Data object '{owner_name}' not found")
        candidates: Iterable[int] = (owner_pos,)
    else:
        candidates = range(len(index.objects))

    wrong_kind: FlowKind | None = None
    for i in candidates:
        obj = index.objects[i]
        for j, entity in enumerate(obj.get(family.collection) or []):
            if not same_name(entity.get("name"), name, exact):
                continue
            kind = index.kinds.get((i, j)) if family.kind is not None else None
            if family.kind is not None and kind != family.kind:
                wrong_kind = wrong_kind or kind
                continue
            return Located(entity=entity, owner_name=obj.get("name", ""), position=j, kind=kind)

    if wrong_kind is not None:
        return LookupMiss(
            MissReason.DISCRIMINANT,
            f"'{name}' is a {kind_label(wrong_kind)}, not a {family.label.lower()}",
        )

    message = f"{family.label} '{name}' not found"
    if owner_name is not None:
        message += f" in data object '{index.objects[owner_pos].get('name', owner_name)}'"
    return LookupMiss(MissReason.ENTITY, message)


def find_duplicate(
    index: DocumentIndex,
    family: EntityFamily,
    name: str,
    owner_name: str | None = None,
) -> Located | None:
    """
    Existing record that a new `name` would collide with (case-insensitive).

    Uniqueness ignores kind: a new workflow may not reuse a general flow's
    name. Scope is application-wide for globally unique families, otherwise
    the given owner only.
    """
    if family.collection is None:
        position = index.owner_position(name)
        if position is None:
            return None
        obj = index.objects[position]
        return Located(entity=obj, owner_name=obj.get("name", ""), position=position)

    if family.unique_global or owner_name is None:
        candidates: Iterable[int] = range(len(index.objects))
    else:
        owner_pos = index.owner_position(owner_name)
        candidates = () if owner_pos is None else (owner_pos,)

    for i in candidates:
        obj = index.objects[i]
        for j, entity in enumerate(obj.get(family.collection) or []):
            if same_name(entity.get("name"), name):
                return Located(entity=entity, owner_name=obj.get("name", ""), position=j, kind=index.kinds.get((i, j)))
    return None


def find_item(
    sequence: list[dict[str, Any]] | None,
    name: str,
    key: str = "name",
    exact: bool = False,
) -> tuple[int, dict[str, Any]] | None:
    """Nested item (param, column, button, ...) of one parent, with its position."""
    for i, item in enumerate(sequence or []):
        if isinstance(item, dict) and same_name(item.get(key), name, exact):
            return i, item
    return None
