"""
Model Kernel: Array Reordering

Moves a named element of an ordered child sequence (params, columns, buttons,
output variables, tasks) to a new zero-based position.

Splice semantics: the element is removed first, then inserted at `new_index`
in the shortened sequence. Moving B in [A, B, C, D] to 3 gives [A, C, D, B].
"""

from __future__ import annotations

from typing import Any

from engine.kernel.types import MoveResult


def move(
    sequence: list[dict[str, Any]],
    name: str,
    new_index: int,
    key: str = "name",
) -> MoveResult:
    """
    Move the element whose `key` equals `name` (case-sensitive) to `new_index`.

    Mutates `sequence` in place on success. Never raises: a bad index or an
    unknown name returns a MoveResult with `moved=False` and leaves the
    sequence as it was.
    """
    length = len(sequence)

    if isinstance(new_index, bool) or not isinstance(new_index, int):
        return _fail(length, f"new_position must be an integer, got {new_index!r}")
    if new_index < 0:
        return _fail(length, "new_position must be >= 0")
    if length == 0:
        return _fail(length, "sequence is empty, nothing to move")
    if new_index >= length:
        return _fail(
            length,
            f"new_position {new_index} is out of bounds (max: {length - 1})",
        )

    old_index = index_of(sequence, name, key)
    if old_index is None:
        return _fail(length, f'"{name}" not found')

    item = sequence.pop(old_index)
    sequence.insert(new_index, item)
    return MoveResult(moved=True, old_index=old_index, new_index=new_index, length=length)


def index_of(sequence: list[dict[str, Any]], name: str, key: str = "name") -> int | None:
    """Exact-match position of an element, or None."""
    for i, item in enumerate(sequence):
        if isinstance(item, dict) and item.get(key) == name:
            return i
    return None


def _fail(length: int, error: str) -> MoveResult:
    return MoveResult(moved=False, length=length, error=error)
