"""
Model Kernel: Update Validation

Validates a proposed entity payload before it is sent to (or applied by) the
host. Two tiers:

  1. JSON Schema (types, enums, patterns, required fields) via jsonschema.
  2. Business rules: predicate + message pairs that can look at several fields
     of the same payload, or of every item of one of its arrays.

Returns a flat list of human-readable strings ("field: reason"). Empty list =
valid. These strings are what callers see, not raw jsonschema output.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from jsonschema import Draft202012Validator
from jsonschema.exceptions import ValidationError

EMPTY_UPDATE = "At least one property to update must be provided"


@dataclass(frozen=True)
class BusinessRule:
    """
    A cross-field invariant.

    `violated(item)` returns True when the rule is broken for one record.
    When `array` is set the rule runs once per item of payload[array] and the
    item index is included in the reported path.
    """

    field: str
    message: str
    violated: Callable[[Mapping[str, Any]], bool]
    array: str | None = None


def requires_when(field: str, value: Any, required: str, array: str | None = None) -> BusinessRule:
    """Rule: when `field` equals `value`, `required` must be present and non-empty."""

    def _violated(item: Mapping[str, Any]) -> bool:
        return item.get(field) == value and not item.get(required)

    return BusinessRule(
        field=required,
        message=f'is required when {field} is "{value}"',
        violated=_violated,
        array=array,
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def validate(
    payload: Any,
    schema: Mapping[str, Any],
    rules: Iterable[BusinessRule] = (),
    partial: bool = False,
    base: Mapping[str, Any] | None = None,
) -> list[str]:
    """
    Validate a full-replace (partial=False) or partial-update (partial=True) payload.

    Partial updates must carry at least one property; that check runs before
    anything else. Only fields actually present are schema-checked. When
    `base` (the stored entity) is given, business rules see base + payload.
    """
    if not isinstance(payload, Mapping):
        return ["root: must be object"]

    if partial and len(payload) == 0:
        return [EMPTY_UPDATE]

    effective_schema = partial_schema(schema, payload) if partial else schema
    errors = schema_errors(payload, effective_schema)

    merged = {**base, **payload} if (partial and base is not None) else payload
    errors.extend(rule_errors(merged, rules))
    return _dedupe(errors)


def partial_schema(schema: Mapping[str, Any], payload: Mapping[str, Any]) -> dict[str, Any]:
    """Schema restricted to the properties present in payload, nothing required."""
    properties = schema.get("properties", {})
    return {
        **{k: v for k, v in schema.items() if k not in ("properties", "required")},
        "properties": {k: v for k, v in properties.items() if k in payload},
    }


def schema_errors(payload: Any, schema: Mapping[str, Any]) -> list[str]:
    validator = Draft202012Validator(schema)
    errors = sorted(validator.iter_errors(payload), key=lambda e: [str(p) for p in e.absolute_path])
    rendered: list[str] = []
    for error in errors:
        rendered.extend(render_error(error))
    return rendered


def rule_errors(payload: Mapping[str, Any], rules: Iterable[BusinessRule]) -> list[str]:
    errors: list[str] = []
    for rule in rules:
        if rule.array is None:
            if rule.violated(payload):
                errors.append(f"{rule.field}: {rule.message}")
            continue

        items = payload.get(rule.array)
        if not isinstance(items, list):
            continue
        for i, item in enumerate(items):
            if isinstance(item, Mapping) and rule.violated(item):
                errors.append(f"{rule.array}.{i}.{rule.field}: {rule.message}")
    return errors


def render_error(error: ValidationError) -> list[str]:
    """Turn one jsonschema error into caller-facing strings."""
    path = ".".join(str(p) for p in error.absolute_path)
    field = path or "root"

    if error.validator == "required":
        instance = error.instance if isinstance(error.instance, Mapping) else {}
        missing = [p for p in error.validator_value if p not in instance]
        return [f"{_join(path, p)}: is required" for p in missing]
    if error.validator == "enum":
        return [f"{field}: must be one of {json.dumps(error.validator_value)}"]
    if error.validator == "pattern":
        return [f"{field}: must match pattern {error.validator_value}"]
    if error.validator == "type":
        return [f"{field}: must be {_type_name(error.validator_value)}"]
    if error.validator == "maxLength":
        return [f"{field}: must be at most {error.validator_value} characters"]
    if error.validator == "minLength":
        return [f"{field}: must not be empty"]
    if error.validator == "additionalProperties" and isinstance(error.instance, Mapping):
        known = error.schema.get("properties", {})
        return [f"{_join(path, k)}: is not an updatable property" for k in error.instance if k not in known]
    return [f"{field}: {error.message}"]


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _join(path: str, prop: str) -> str:
    return f"{path}.{prop}" if path else prop


def _type_name(value: Any) -> str:
    if isinstance(value, list):
        return " or ".join(value)
    return str(value)


def _dedupe(errors: list[str]) -> list[str]:
    seen: set[str] = set()
    out: list[str] = []
    for e in errors:
        if e not in seen:
            seen.add(e)
            out.append(e)
    return out
