"""
Model Kernel: Shared Types

Data classes and constants used across the locator, projector, validator and
reorderer. These are the contracts shared by the host and the tool runner.

Discriminants for the shared `objectWorkflow` array:
- page init flow: name ends with InitObjWF / InitReport (case-insensitive)
- workflow:       isDynaFlow == "true"
- workflow task:  isDynaFlowTask == "true"
- form:           isPage == "true" and none of the above
- general flow:   none of the above
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

# ---------------------------------------------------------------------------
# Naming
# ---------------------------------------------------------------------------

PASCAL_CASE_PATTERN = r"^[A-Z][A-Za-z0-9]*$"
PASCAL_CASE = re.compile(PASCAL_CASE_PATTERN)

PAGE_INIT_SUFFIXES: tuple[str, ...] = ("InitObjWF", "InitReport")
PAGE_INIT_NAME_PATTERN = r"^[A-Z][A-Za-z0-9]*(InitObjWF|InitReport)$"

TRUE = "true"
FALSE = "false"
BOOL_STRINGS: list[str] = [TRUE, FALSE]

# Key the host uses to tag query results with their owning data object.
OWNER_KEY = "_ownerObjectName"

# Data object every lookup object hangs off; its lookup items include the roles.
LOOKUP_PARENT = "Pac"
ROLE_OBJECT = "Role"


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class FlowKind(str, Enum):
    """Logical kind of a record in a data object's objectWorkflow array."""

    PAGE_INIT_FLOW = "page_init_flow"
    WORKFLOW = "workflow"
    WORKFLOW_TASK = "workflow_task"
    GENERAL_FLOW = "general_flow"
    FORM = "form"
    CONFLICT = "conflict"


class MissReason(str, Enum):
    """Which part of a lookup failed to resolve."""

    OWNER = "owner"
    ENTITY = "entity"
    DISCRIMINANT = "discriminant"


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------


@dataclass
class Located:
    """An entity found by the locator, paired with its true owner."""

    entity: dict[str, Any]
    owner_name: str
    position: int
    kind: FlowKind | None = None


@dataclass
class LookupMiss:
    """
    A lookup that did not resolve.
    The locator never throws; callers check `isinstance(result, LookupMiss)`.
    """

    reason: MissReason
    message: str


@dataclass
class MoveResult:
    """
    Result of moving one element of an ordered sequence.
    On failure `moved` is False, `error` says why, and the sequence is untouched.
    """

    moved: bool
    old_index: int | None = None
    new_index: int | None = None
    length: int = 0
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "old_position": self.old_index,
            "new_position": self.new_index,
            "length": self.length,
        }


@dataclass(frozen=True)
class ViewSpec:
    """
    What a view exposes of one entity family.

    hidden:   canonical fields never shown
    visible:  when set, the only fields shown (allowlist)
    aliases:  public name -> canonical name
    children: per child-sequence view, applied to every item
    """

    hidden: frozenset[str] = frozenset()
    visible: frozenset[str] | None = None
    aliases: dict[str, str] = field(default_factory=dict)
    children: dict[str, ViewSpec] = field(default_factory=dict)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def is_pascal_case(value: Any) -> bool:
    """Check if a value is a PascalCase identifier (letters and digits only)."""
    return isinstance(value, str) and bool(PASCAL_CASE.match(value))


def has_page_init_suffix(name: str) -> bool:
    """Page init flows are recognised by their name suffix, ignoring case."""
    lowered = name.lower()
    return any(lowered.endswith(suffix.lower()) for suffix in PAGE_INIT_SUFFIXES)


def is_true(value: Any) -> bool:
    """Model booleans are the strings "true" / "false"."""
    return value == TRUE


def same_name(a: str | None, b: str | None, exact: bool = False) -> bool:
    if a is None or b is None:
        return False
    if exact:
        return a == b
    return a.lower() == b.lower()
