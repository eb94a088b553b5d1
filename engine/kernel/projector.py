"""
Model Kernel: Property Projection

Maps between what callers see and what the document stores.

  to_public(entity, view)      outbound: strip internals and hidden fields,
                               rename canonical fields to their public alias
  to_canonical(payload, alias) inbound: rename public aliases to canonical
                               field names, keep everything else

Both directions return new objects. The source is never modified.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from engine.kernel.types import ViewSpec

INTERNAL_PREFIX = "_"


def to_public(entity: Mapping[str, Any], view: ViewSpec | None = None) -> dict[str, Any]:
    """
    Project an entity for a caller.

    Idempotent: to_public(to_public(x, v), v) == to_public(x, v).
    """
    view = view or ViewSpec()
    reverse = {canonical: public for public, canonical in view.aliases.items()}
    projected: dict[str, Any] = {}

    for key, value in entity.items():
        if key.startswith(INTERNAL_PREFIX) or key in view.hidden:
            continue
        public_key = reverse.get(key, key)
        if view.visible is not None and public_key not in view.visible:
            continue

        child_view = view.children.get(key)
        if child_view is not None and isinstance(value, list):
            value = [to_public(item, child_view) if isinstance(item, Mapping) else item for item in value]

        projected[public_key] = value

    return projected


def to_canonical(payload: Mapping[str, Any], aliases: Mapping[str, str]) -> dict[str, Any]:
    """
    Rename public keys to canonical keys.

    Unknown keys pass through untouched. When both the alias and the canonical
    key are present, the alias value wins (it is what the caller typed).
    Values are never dropped, None included.
    """
    canonical = dict(payload)
    for public, target in aliases.items():
        if public in canonical:
            canonical[target] = canonical.pop(public)
    return canonical
