"""
Model Kernel: the pure mutation engine.

Components shared by the host and the tool runner:
  locator    - (family, name, owner?) -> Located | LookupMiss
  validator  - payload -> list of "field: reason" strings
  projector  - canonical <-> public field names, hidden-field stripping
  reorder    - move a named element of an ordered child sequence
  families   - per-family descriptors (schemas, views, child sequences)

Nothing here does IO.
"""

from engine.kernel.families import FAMILIES, EntityFamily
from engine.kernel.locator import DocumentIndex, classify_flow, find, find_duplicate, find_item, find_owner
from engine.kernel.projector import to_canonical, to_public
from engine.kernel.reorder import move
from engine.kernel.validator import validate

__all__ = [
    "FAMILIES",
    "EntityFamily",
    "DocumentIndex",
    "classify_flow",
    "find",
    "find_duplicate",
    "find_item",
    "find_owner",
    "to_canonical",
    "to_public",
    "move",
    "validate",
]
