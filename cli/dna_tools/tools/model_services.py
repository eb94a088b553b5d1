"""
Model services tools (remote catalog and request queues).

Every operation here needs the user to be logged in to model services. The
AuthGate probe runs first; when it fails the tool answers auth_required
without calling the service.
"""

from __future__ import annotations

from typing import Any

from dna_tools import results
from dna_tools.auth import AuthGate
from dna_tools.client import BridgeClient, BridgeError
from dna_tools.config import CATALOG_TIMEOUT, MUTATION_TIMEOUT, Plane

DEFAULT_PAGE_SIZE = 10

# endpoint, default sort column, default sort descending
LISTINGS: dict[str, tuple[str, str, bool]] = {
    "model_features": ("model-features", "displayName", False),
    "ai_processing_requests": ("prep-requests", "modelPrepRequestRequestedUTCDateTime", True),
    "validation_requests": ("validation-requests", "modelValidationRequestRequestedUTCDateTime", True),
    "fabrication_blueprints": ("template-sets", "displayName", False),
    "fabrication_requests": ("fabrication-requests", "modelFabricationRequestRequestedUTCDateTime", True),
}


class ModelServiceTools:
    def __init__(self, client: BridgeClient, gate: AuthGate | None = None):
        self.client = client
        self.gate = gate or AuthGate(client)

    def listing(
        self,
        name: str,
        page_number: int = 1,
        item_count_per_page: int = DEFAULT_PAGE_SIZE,
        order_by_column_name: str | None = None,
        order_by_descending: bool | None = None,
    ) -> dict[str, Any]:
        """One page of a model services listing."""
        endpoint, default_column, default_descending = LISTINGS[name]
        column = order_by_column_name or default_column
        descending = default_descending if order_by_descending is None else order_by_descending

        if not self.gate.require_auth():
            return results.auth_required()

        body = {
            "pageNumber": page_number,
            "itemCountPerPage": item_count_per_page,
            "orderByColumnName": column,
            "orderByDescending": descending,
        }
        try:
            response = self.client.exchange(
                Plane.COMMAND, f"/api/model-services/{endpoint}", method="POST", body=body, timeout=CATALOG_TIMEOUT
            )
        except BridgeError as e:
            return results.from_bridge_error(e)

        data = response.get("data") or {}
        return results.ok(
            items=data.get("items") or [],
            pageNumber=data.get("pageNumber") or page_number,
            itemCountPerPage=data.get("itemCountPerPage") or item_count_per_page,
            recordsTotal=data.get("recordsTotal") or 0,
            recordsFiltered=data.get("recordsFiltered") or 0,
            orderByColumnName=column,
            orderByDescending=descending,
        )

    def select_feature(self, feature_name: str, version: str) -> dict[str, Any]:
        results.require(feature_name=feature_name, version=version)
        return self._command("select_model_feature", featureName=feature_name, version=version)

    def unselect_feature(self, feature_name: str, version: str) -> dict[str, Any]:
        """Only features not yet marked completed can be removed; the host enforces it."""
        results.require(feature_name=feature_name, version=version)
        return self._command("unselect_model_feature", featureName=feature_name, version=version)

    def select_blueprint(self, blueprint_name: str, version: str) -> dict[str, Any]:
        """Add a fabrication blueprint to the model's template sets."""
        results.require(blueprint_name=blueprint_name, version=version)
        return self._command("select_fabrication_blueprint", blueprintName=blueprint_name, version=version)

    def unselect_blueprint(self, blueprint_name: str, version: str) -> dict[str, Any]:
        results.require(blueprint_name=blueprint_name, version=version)
        return self._command("unselect_fabrication_blueprint", blueprintName=blueprint_name, version=version)

    def _command(self, command: str, **args: str) -> dict[str, Any]:
        if not self.gate.require_auth():
            return results.auth_required()
        try:
            response = self.client.exchange(
                Plane.COMMAND,
                "/api/execute-command",
                method="POST",
                body={"command": command, **args},
                timeout=MUTATION_TIMEOUT,
            )
        except BridgeError as e:
            return results.from_bridge_error(e)
        target = " ".join(args.values())
        return results.ok(**args, message=response.get("message") or f"{command} applied to {target}")
