"""
Data plane routes: queries and entity mutations on the in-memory model.

Reads match names case-insensitively. Writes resolve the target with an
exact name match, validate with the same engine the tool runner uses, then
change the document in place and mark it unsaved.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from functools import partial
from typing import Any

from fastapi import APIRouter, Depends, Request

from backend.errors import HostError, duplicate, invalid, not_found
from backend.models.bridge import (
    AddPropsRequest,
    CreateDataObjectRequest,
    CreateReportRequest,
    CreateUserStoryRequest,
    CreateWorkflowRequest,
    MutationRequest,
    UpdateUserStoryRequest,
)
from backend.store import DocumentStore, get_store
from engine.kernel.catalogs import USER_STORY_UPDATE_SCHEMA
from engine.kernel.families import (
    DATA_OBJECT,
    FAMILIES,
    FLOW_FAMILIES,
    PAGE_INIT_FLOW,
    REPORT,
    WORKFLOW,
    ChildSequence,
    EntityFamily,
)
from engine.kernel.locator import classify_flow, find, find_duplicate, find_item, find_owner
from engine.kernel.reorder import move
from engine.kernel.types import (
    LOOKUP_PARENT,
    OWNER_KEY,
    ROLE_OBJECT,
    TRUE,
    Located,
    LookupMiss,
    is_pascal_case,
    is_true,
    same_name,
)
from engine.kernel.validator import validate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["data"])


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------


@router.get("/health")
async def health(store: DocumentStore = Depends(get_store)) -> dict[str, Any]:
    return {"status": "ok", "unsaved": store.unsaved}


@router.get("/objects")
async def list_objects(store: DocumentStore = Depends(get_store)) -> list[dict[str, Any]]:
    """Every data object, complete, across all namespaces."""
    return store.objects()


@router.get("/data-objects")
async def list_data_objects(store: DocumentStore = Depends(get_store)) -> list[dict[str, Any]]:
    """One summary line per data object."""
    return [
        {
            "name": obj.get("name", ""),
            "parentObjectName": obj.get("parentObjectName", ""),
            "isLookup": is_true(obj.get("isLookup")),
            "codeDescription": obj.get("codeDescription", ""),
            "propCount": len(obj.get("prop") or []),
        }
        for obj in store.objects()
    ]


@router.get("/data-objects/{name}")
async def get_data_object(name: str, store: DocumentStore = Depends(get_store)) -> dict[str, Any]:
    obj = find_owner(store.index(), name)
    if obj is None:
        raise not_found(f"Data object '{name}' not found")
    return obj


@router.get("/roles")
async def list_roles(store: DocumentStore = Depends(get_store)) -> list[dict[str, Any]]:
    """Lookup items of the Role data object."""
    role_object = find_owner(store.index(), ROLE_OBJECT, exact=True) or {}
    return [{"name": item["name"]} for item in role_object.get("lookupItem") or [] if item.get("name")]


@router.get("/lookup-values")
async def list_lookup_values(data_object_name: str, store: DocumentStore = Depends(get_store)) -> list[dict[str, Any]]:
    """Values of one lookup object, with display defaults filled in."""
    obj = find_owner(store.index(), data_object_name)
    if obj is None:
        raise not_found(f"Data object '{data_object_name}' not found")
    return [
        {
            "name": item.get("name", ""),
            "displayName": item.get("displayName", ""),
            "description": item.get("description", ""),
            "isActive": item.get("isActive") or TRUE,
        }
        for item in obj.get("lookupItem") or []
    ]


@router.get("/user-stories")
async def list_user_stories(store: DocumentStore = Depends(get_store)) -> list[dict[str, Any]]:
    return store.user_stories()


def _family_query(family: EntityFamily) -> Callable:
    async def query(request: Request, store: DocumentStore = Depends(get_store)) -> list[dict[str, Any]]:
        """Entities of one family, tagged with their owner. Filters are case-insensitive and ANDed."""
        owner = request.query_params.get("owner_object_name")
        name = request.query_params.get(family.arg_name)
        index = store.index()

        matches: list[dict[str, Any]] = []
        for i, obj in enumerate(index.objects):
            if owner and not same_name(obj.get("name"), owner):
                continue
            for j, entity in enumerate(obj.get(family.collection) or []):
                if family.kind is not None and index.kinds.get((i, j)) != family.kind:
                    continue
                if name and not same_name(entity.get("name"), name):
                    continue
                matches.append({**entity, OWNER_KEY: obj.get("name", "")})
        return matches

    return query


for _family in (REPORT, *FLOW_FAMILIES):
    router.add_api_route(f"/{_family.resource}", _family_query(_family), methods=["GET"], name=f"list_{_family.name}")


# ---------------------------------------------------------------------------
# Creation
# ---------------------------------------------------------------------------


@router.post("/create-report")
async def create_report(req: CreateReportRequest, store: DocumentStore = Depends(get_store)) -> dict[str, Any]:
    """Add a report and its page init flow to the owner object."""
    index = store.index()
    owner = find_owner(index, req.owner_object_name, exact=True)
    if owner is None:
        raise not_found(f"Owner object '{req.owner_object_name}' not found")

    errors = validate(req.report, REPORT.schema, REPORT.full_rules)
    errors += [f"page_init_flow.{e}" for e in validate(req.page_init_flow, PAGE_INIT_FLOW.schema)]
    if errors:
        raise invalid(errors)

    for family, entity in ((REPORT, req.report), (PAGE_INIT_FLOW, req.page_init_flow)):
        clash = find_duplicate(index, family, entity["name"])
        if clash is not None:
            raise duplicate(f"{family.label} '{entity['name']}' already exists in object '{clash.owner_name}'")

    owner.setdefault("report", []).append(req.report)
    owner.setdefault("objectWorkflow", []).append(req.page_init_flow)
    store.mark_unsaved()
    logger.info("Created report %s.%s", owner["name"], req.report["name"])
    return {
        "success": True,
        "report": req.report,
        "page_init_flow": req.page_init_flow,
        "owner_object_name": owner["name"],
    }


@router.post("/create-workflow")
async def create_workflow(req: CreateWorkflowRequest, store: DocumentStore = Depends(get_store)) -> dict[str, Any]:
    index = store.index()
    owner = find_owner(index, req.owner_object_name, exact=True)
    if owner is None:
        raise not_found(f"Owner object '{req.owner_object_name}' not found")

    workflow = req.workflow
    errors = validate(workflow, WORKFLOW.schema)
    if not errors and classify_flow(workflow) != WORKFLOW.kind:
        errors.append('isDynaFlow: must be "true" and the name must not use a page init suffix')
    if errors:
        raise invalid(errors)
    if find_duplicate(index, WORKFLOW, workflow["name"]) is not None:
        raise duplicate(f"Workflow '{workflow['name']}' already exists")

    owner.setdefault("objectWorkflow", []).append(workflow)
    store.mark_unsaved()
    logger.info("Created workflow %s.%s", owner["name"], workflow["name"])
    return {"success": True, "workflow": workflow, "owner_object_name": owner["name"]}


@router.post("/data-objects")
async def create_data_object(
    req: CreateDataObjectRequest, store: DocumentStore = Depends(get_store)
) -> dict[str, Any]:
    index = store.index()
    errors = []
    if not is_pascal_case(req.name):
        errors.append("name: must match pattern ^[A-Z][A-Za-z0-9]*$")
    if req.isLookup == TRUE and req.parentObjectName != LOOKUP_PARENT:
        errors.append(f'parentObjectName: lookup data objects must have parentObjectName "{LOOKUP_PARENT}"')
    if errors:
        raise invalid(errors)
    if find_owner(index, req.parentObjectName, exact=True) is None:
        raise not_found(f"Parent object '{req.parentObjectName}' not found")
    if find_duplicate(index, DATA_OBJECT, req.name) is not None:
        raise duplicate(f"A data object with name '{req.name}' already exists")

    obj: dict[str, Any] = {
        "name": req.name,
        "parentObjectName": req.parentObjectName,
        "isLookup": req.isLookup,
        "prop": [],
    }
    if req.codeDescription:
        obj["codeDescription"] = req.codeDescription
    store.add_object(obj)
    store.mark_unsaved()
    logger.info("Created data object %s", req.name)
    return {"success": True, "object": obj, "message": f"Data object '{req.name}' created"}


@router.post("/data-objects/add-props")
async def add_data_object_props(req: AddPropsRequest, store: DocumentStore = Depends(get_store)) -> dict[str, Any]:
    obj = find_owner(store.index(), req.name, exact=True)
    if obj is None:
        raise not_found(f"Data object '{req.name}' not found")

    prop_seq = DATA_OBJECT.child("prop")
    errors: list[str] = []
    for i, prop in enumerate(req.props):
        errors.extend(f"props.{i}.{e}" for e in validate(prop, prop_seq.schema, prop_seq.rules))
    if errors:
        raise invalid(errors)

    props = obj.setdefault("prop", [])
    seen: list[dict[str, Any]] = []
    for prop in req.props:
        if find_item(props, prop["name"]) is not None or find_item(seen, prop["name"]) is not None:
            raise duplicate(f"Property '{prop['name']}' already exists in data object '{obj['name']}'")
        seen.append(prop)
    props.extend(req.props)
    store.mark_unsaved()
    return {"success": True, "name": obj["name"], "prop_count": len(props)}


@router.post("/user-stories")
async def create_user_story(req: CreateUserStoryRequest, store: DocumentStore = Depends(get_store)) -> dict[str, Any]:
    text = req.story.get("storyText")
    if not text:
        raise invalid(["storyText: is required"])
    stories = store.user_stories()
    if any(story.get("storyText") == text for story in stories):
        raise duplicate("A user story with this text already exists")
    stories.append(req.story)
    store.mark_unsaved()
    return {"success": True, "story": req.story}


@router.post("/user-stories/update")
async def update_user_story(req: UpdateUserStoryRequest, store: DocumentStore = Depends(get_store)) -> dict[str, Any]:
    """Change the flags of one story, matched by its exact name."""
    errors = validate(req.updates, USER_STORY_UPDATE_SCHEMA, partial=True)
    if errors:
        raise invalid(errors)
    story = next((s for s in store.user_stories() if s.get("name") == req.name), None)
    if story is None:
        raise not_found(f"User story '{req.name}' not found")

    story.update(req.updates)
    store.mark_unsaved()
    logger.info("Updated user story %s", req.name)
    return {"success": True, "story": story}


# ---------------------------------------------------------------------------
# Generic entity mutations
# ---------------------------------------------------------------------------


def _resolve(store: DocumentStore, family: EntityFamily, req: MutationRequest) -> Located:
    found = find(store.index(), family, req.name, req.owner_object_name, exact=True)
    if isinstance(found, LookupMiss):
        raise not_found(found.message)
    return found


def _reply(family: EntityFamily, found: Located, **extra: Any) -> dict[str, Any]:
    return {"success": True, family.name: found.entity, "owner_object_name": found.owner_name, **extra}


def _require(value: Any, field: str) -> Any:
    if value is None:
        raise invalid([f"{field}: is required"])
    return value


def _update(family: EntityFamily, store: DocumentStore, req: MutationRequest) -> dict[str, Any]:
    updates = _require(req.updates, "updates")
    found = _resolve(store, family, req)
    errors = validate(updates, family.update_schema, family.rules, partial=True, base=found.entity)
    if errors:
        raise invalid(errors)
    found.entity.update(updates)
    return _reply(family, found)


def _update_full(family: EntityFamily, store: DocumentStore, req: MutationRequest) -> dict[str, Any]:
    replacement = dict(_require(req.entity, "entity"))
    found = _resolve(store, family, req)
    if replacement.get("name") != found.entity["name"]:
        raise invalid(["name: cannot be changed by a full update"])

    errors = validate(replacement, family.schema, family.full_rules)
    if errors:
        raise invalid(errors)

    # Fields the family's view never shows are kept from the stored record.
    view = family.view
    kept = {
        k: v
        for k, v in found.entity.items()
        if k in view.hidden or (view.visible is not None and k not in view.visible)
    }
    merged = {**kept, **replacement}
    if family.kind is not None and classify_flow(merged) != family.kind:
        raise invalid([f"A full update may not turn this {family.label.lower()} into another kind of flow"])

    found.entity.clear()
    found.entity.update(merged)
    return _reply(family, found)


def _add_child(family: EntityFamily, child: ChildSequence, store: DocumentStore, req: MutationRequest) -> dict[str, Any]:
    item = _require(req.item, "item")
    found = _resolve(store, family, req)
    if child.parent_flag and not is_true(found.entity.get(child.parent_flag)):
        raise invalid(
            [f"{child.parent_flag}: must be \"true\" on '{found.entity['name']}' to add a {child.label.lower()}"]
        )
    errors = validate(item, child.schema, child.rules)
    if errors:
        raise invalid(errors)

    sequence = found.entity.setdefault(child.field, [])
    if find_item(sequence, item[child.key], key=child.key) is not None:
        raise duplicate(f"{child.label} '{item[child.key]}' already exists in '{found.entity['name']}'")
    sequence.append(item)
    return _reply(family, found, **{child.name: item})


def _update_child(
    family: EntityFamily, child: ChildSequence, store: DocumentStore, req: MutationRequest
) -> dict[str, Any]:
    updates = _require(req.updates, "updates")
    child_name = _require(req.child_name, "child_name")
    found = _resolve(store, family, req)

    existing = find_item(found.entity.get(child.field), child_name, key=child.key, exact=True)
    if existing is None:
        raise not_found(f"{child.label} '{child_name}' not found in '{found.entity['name']}'")
    _, item = existing

    errors = validate(updates, child.update_schema, child.rules, partial=True, base=item)
    if errors:
        raise invalid(errors)
    item.update(updates)
    return _reply(family, found, **{child.name: item})


def _move_child(family: EntityFamily, child: ChildSequence, store: DocumentStore, req: MutationRequest) -> dict[str, Any]:
    child_name = _require(req.child_name, "child_name")
    new_position = _require(req.new_position, "new_position")
    found = _resolve(store, family, req)

    sequence = found.entity.get(child.field) or []
    existing = find_item(sequence, child_name, key=child.key, exact=True)
    if existing is None:
        raise not_found(f"{child.label} '{child_name}' not found in '{found.entity['name']}'")

    result = move(sequence, child_name, new_position, key=child.key)
    if not result.moved:
        raise invalid([result.error])
    return _reply(
        family,
        found,
        **{child.name: existing[1]},
        old_position=result.old_index,
        new_position=result.new_index,
    )


MutationHandler = Callable[[DocumentStore, MutationRequest], dict[str, Any]]


def _build_mutations() -> dict[str, MutationHandler]:
    handlers: dict[str, MutationHandler] = {}
    for family in FAMILIES.values():
        if family.update_fields:
            handlers[family.action("update")] = partial(_update, family)
            handlers[family.action("update-full")] = partial(_update_full, family)
        for child in family.children.values():
            handlers[family.action("add", child)] = partial(_add_child, family, child)
            handlers[family.action("update", child)] = partial(_update_child, family, child)
            handlers[family.action("move", child)] = partial(_move_child, family, child)
    return handlers


_MUTATIONS = _build_mutations()


@router.post("/{action}")
async def mutate(action: str, req: MutationRequest, store: DocumentStore = Depends(get_store)) -> dict[str, Any]:
    """Dispatch POST /api/<verb>-<family>[-<child>] to its handler."""
    handler = _MUTATIONS.get(action)
    if handler is None:
        raise HostError(f"Unknown data-plane action '{action}'", 404, "not_found")
    response = handler(store, req)
    store.mark_unsaved()
    logger.info("Applied %s to %s", action, req.name)
    return response
