"""
In-memory model document owned by the host.

Mutations change the document in place and mark it unsaved; only the save
command writes it back to disk. No locking: the host applies requests in
the order its event loop receives them.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from fastapi import Request

from engine.kernel.locator import DocumentIndex

logger = logging.getLogger(__name__)


def empty_document() -> dict[str, Any]:
    return {"root": {"name": "", "namespace": [{"name": "", "object": [], "userStory": []}]}}


class DocumentStore:
    """The model document plus host-side session state."""

    def __init__(
        self,
        document: dict[str, Any] | None = None,
        path: str | Path | None = None,
        logged_in: bool = False,
        service_data: dict[str, list[dict[str, Any]]] | None = None,
    ):
        self.document = document if document is not None else empty_document()
        self.path = Path(path) if path else None
        self.unsaved = False
        self.logged_in = logged_in
        self.service_data = service_data or {}
        self.selected_features: list[dict[str, str]] = []
        self.executed_commands: list[dict[str, Any]] = []

    @classmethod
    def load(cls, path: str | Path, logged_in: bool = False) -> DocumentStore:
        """Read a model file; a missing file starts an empty model at that path."""
        path = Path(path)
        if not path.exists():
            logger.warning("Model file %s not found, starting with an empty model", path)
            return cls(path=path, logged_in=logged_in)
        with open(path, encoding="utf-8") as f:
            document = json.load(f)
        logger.info("Loaded model file %s", path)
        return cls(document=document, path=path, logged_in=logged_in)

    # ------------------------------------------------------------------
    # Views over the document
    # ------------------------------------------------------------------

    @property
    def root(self) -> dict[str, Any]:
        return self.document.setdefault("root", {})

    @property
    def namespaces(self) -> list[dict[str, Any]]:
        namespaces = self.root.setdefault("namespace", [])
        if not namespaces:
            namespaces.append({"name": "", "object": [], "userStory": []})
        return namespaces

    def objects(self) -> list[dict[str, Any]]:
        """Every data object across every namespace, in document order."""
        return [obj for ns in self.namespaces for obj in ns.get("object") or []]

    def index(self) -> DocumentIndex:
        return DocumentIndex.from_document(self.document)

    def user_stories(self) -> list[dict[str, Any]]:
        return self.namespaces[0].setdefault("userStory", [])

    def add_object(self, obj: dict[str, Any]) -> None:
        self.namespaces[0].setdefault("object", []).append(obj)

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def mark_unsaved(self) -> None:
        self.unsaved = True

    def save(self) -> Path:
        """Write the document as JSON. Raises ValueError when no file is associated."""
        if self.path is None:
            raise ValueError("No model file is associated with this host")
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(self.document, f, indent=2)
        self.unsaved = False
        logger.info("Saved model file %s", self.path)
        return self.path


def get_store(request: Request) -> DocumentStore:
    """FastAPI dependency: the store attached to the app serving this request."""
    return request.app.state.store
