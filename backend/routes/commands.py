"""
Command plane routes: host commands, login probe and model services listings.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends

from backend.errors import HostError, not_found
from backend.models.bridge import CommandRequest, ServiceListRequest
from backend.store import DocumentStore, get_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["commands"])

SERVICE_ENDPOINTS = (
    "model-features",
    "prep-requests",
    "validation-requests",
    "template-sets",
    "fabrication-requests",
)


@router.get("/auth-status")
async def auth_status(store: DocumentStore = Depends(get_store)) -> dict[str, Any]:
    return {"success": True, "isLoggedIn": store.logged_in}


@router.post("/execute-command")
async def execute_command(req: CommandRequest, store: DocumentStore = Depends(get_store)) -> dict[str, Any]:
    """Run one registered host command."""
    if req.command == "appdna.saveFile":
        try:
            path = store.save()
        except (ValueError, OSError) as e:
            raise HostError(str(e), 500) from e
        return {"success": True, "message": f"Model saved to {path}"}

    if req.command in ("select_model_feature", "unselect_model_feature"):
        return _feature_command(store, req)

    if req.command in ("select_fabrication_blueprint", "unselect_fabrication_blueprint"):
        return _blueprint_command(store, req)

    if not req.command.startswith("appdna."):
        raise HostError(f"Unknown command '{req.command}'", 400, "validation_failed")

    # View commands have no effect on the document; the host only records them.
    store.executed_commands.append({"command": req.command, "args": req.args})
    logger.info("Executed command %s %s", req.command, req.args)
    return {"success": True, "message": f"Command {req.command} executed"}


def _feature_command(store: DocumentStore, req: CommandRequest) -> dict[str, Any]:
    if not store.logged_in:
        raise HostError("Authentication required", 401, "auth_required")
    if not req.featureName or not req.version:
        raise HostError("featureName and version are required", 400, "validation_failed")

    entry = {"featureName": req.featureName, "version": req.version}
    selected = store.selected_features
    if req.command == "select_model_feature":
        if entry not in selected:
            selected.append(entry)
        message = f"Feature {req.featureName} {req.version} selected"
    else:
        feature = _catalog_feature(store, req.featureName, req.version)
        if feature is not None and feature.get("isCompleted") in (True, "true"):
            raise HostError(f"Feature {req.featureName} is completed and cannot be removed", 400, "validation_failed")
        if entry not in selected:
            raise not_found(f"Feature {req.featureName} {req.version} is not selected")
        selected.remove(entry)
        message = f"Feature {req.featureName} {req.version} unselected"

    store.mark_unsaved()
    logger.info(message)
    return {"success": True, "message": message}


def _blueprint_command(store: DocumentStore, req: CommandRequest) -> dict[str, Any]:
    if not store.logged_in:
        raise HostError("Authentication required", 401, "auth_required")
    if not req.blueprintName or not req.version:
        raise HostError("blueprintName and version are required", 400, "validation_failed")

    template_sets = store.root.setdefault("templateSet", [])
    entry = next(
        (t for t in template_sets if t.get("name") == req.blueprintName and t.get("version") == req.version),
        None,
    )
    if req.command == "select_fabrication_blueprint":
        if entry is None:
            catalog = _catalog_blueprint(store, req.blueprintName, req.version) or {}
            template_sets.append(
                {
                    "name": req.blueprintName,
                    "title": catalog.get("displayName", req.blueprintName),
                    "version": req.version,
                    "isDisabled": "false",
                }
            )
        else:
            entry["isDisabled"] = "false"
        message = f"Blueprint {req.blueprintName} {req.version} selected"
    else:
        if entry is None:
            raise not_found(f"Blueprint {req.blueprintName} {req.version} is not selected")
        template_sets.remove(entry)
        message = f"Blueprint {req.blueprintName} {req.version} unselected"

    store.mark_unsaved()
    logger.info(message)
    return {"success": True, "message": message}


def _catalog_blueprint(store: DocumentStore, name: str, version: str) -> dict[str, Any] | None:
    for blueprint in store.service_data.get("template-sets", []):
        if blueprint.get("name") == name and blueprint.get("version") == version:
            return blueprint
    return None


def _catalog_feature(store: DocumentStore, name: str, version: str) -> dict[str, Any] | None:
    for feature in store.service_data.get("model-features", []):
        if feature.get("name") == name and feature.get("version") == version:
            return feature
    return None


@router.post("/model-services/{endpoint}")
async def model_service_listing(
    endpoint: str, req: ServiceListRequest, store: DocumentStore = Depends(get_store)
) -> dict[str, Any]:
    """One sorted page of a model services listing."""
    if not store.logged_in:
        raise HostError("Authentication required", 401, "auth_required")
    if endpoint not in SERVICE_ENDPOINTS:
        raise not_found(f"Unknown model services endpoint '{endpoint}'")

    records = list(store.service_data.get(endpoint, []))
    if req.orderByColumnName:
        column = req.orderByColumnName
        records.sort(
            key=lambda r: (r.get(column) is None, str(r.get(column) or "")),
            reverse=req.orderByDescending,
        )

    start = (req.pageNumber - 1) * req.itemCountPerPage
    page = records[start : start + req.itemCountPerPage]
    return {
        "success": True,
        "data": {
            "items": page,
            "pageNumber": req.pageNumber,
            "itemCountPerPage": req.itemCountPerPage,
            "recordsTotal": len(records),
            "recordsFiltered": len(records),
        },
    }
