"""Vehicle Ruleset — declarative field constraints for create and update bodies.

Invariants:
    - All functions are PURE: no IO, no async, no side effects
    - Unknown keys are rejected before any field is inspected
    - Fields are checked in VEHICLE_FIELDS order; first violation wins (fail-fast)
    - Per field: presence -> null -> type -> constraints in declared order
    - null counts as absent on create and is rejected on update ("cannot be null")
    - String lengths are counted in UTF-16 code units
    - Numbers must be finite; NaN and infinities are type errors
    - Create and update rulesets share one table and differ only in `required`

Design Decisions:
    - Table of FieldRule entries over a generic schema library: the table IS the contract,
      including the exact error messages clients see
    - modelYear upper bound is evaluated per call (current year + 1), never frozen at import
"""

import json
import math
import re
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Any, Callable

from vehicle_api.core.domain_types import VehicleField

_ALPHANUMERIC = re.compile(r"[a-zA-Z0-9]*")


@dataclass(frozen=True)
class RuleViolation:
    """The single violation reported for a body."""
    field: str | None
    constraint: str
    message: str


@dataclass(frozen=True)
class Constraint:
    """One named check applied to a value that already has the right type."""
    name: str
    test: Callable[[Any], bool]
    message: Callable[[str], str]


@dataclass(frozen=True)
class FieldRule:
    """Ordered constraints for one vehicle attribute."""
    name: str
    value_type: str  # "string" | "boolean" | "number"
    constraints: tuple[Constraint, ...] = ()
    required: bool = True


@dataclass(frozen=True)
class Ruleset:
    """Named, ordered set of field rules (strict: no unknown keys)."""
    name: str
    fields: tuple[FieldRule, ...]

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(rule.name for rule in self.fields)


# ─── Constraint Builders ─────────────────────────────────────────

def max_model_year() -> int:
    """Latest accepted modelYear: next calendar year."""
    return datetime.now(timezone.utc).year + 1


def _lowercase() -> Constraint:
    return Constraint(
        "lowercase", lambda v: v == v.lower(),
        lambda f: f"{f} must be a lowercase string",
    )


def _uppercase() -> Constraint:
    return Constraint(
        "uppercase", lambda v: v == v.upper(),
        lambda f: f"{f} must be a upper case string",
    )


def text_length(value: str) -> int:
    """Length in UTF-16 code units, as browsers and JSON clients count it."""
    return len(value.encode("utf-16-le")) // 2


def _max_length(limit: int) -> Constraint:
    return Constraint(
        "max", lambda v: text_length(v) <= limit,
        lambda f: f"{f} must be at most {limit} characters",
    )


def _exact_length(length: int) -> Constraint:
    return Constraint(
        "length", lambda v: text_length(v) == length,
        lambda f: f"{f} must be exactly {length} characters",
    )


def _trimmed() -> Constraint:
    return Constraint(
        "trim", lambda v: v == v.strip(),
        lambda f: f"{f} must be a trimmed string",
    )


def _alphanumeric() -> Constraint:
    return Constraint(
        "matches", lambda v: _ALPHANUMERIC.fullmatch(v) is not None,
        lambda f: f"{f} must not contain whitespace",
    )


def _non_empty() -> Constraint:
    return Constraint(
        "required", lambda v: len(v) > 0,
        lambda f: f"{f} is a required field",
    )


def _at_most_next_year() -> Constraint:
    return Constraint(
        "max", lambda v: v <= max_model_year(),
        lambda f: f"{f} must be less than or equal to {max_model_year()}",
    )


def _lowercase_text(name: str, max_length: int) -> FieldRule:
    return FieldRule(name, "string", (
        _lowercase(), _max_length(max_length), _trimmed(), _non_empty(),
    ))


def _registration_code(name: str, length: int) -> FieldRule:
    return FieldRule(name, "string", (
        _exact_length(length), _alphanumeric(), _uppercase(), _non_empty(),
    ))


# ─── Rulesets ────────────────────────────────────────────────────

_VEHICLE_TABLE: tuple[FieldRule, ...] = (
    _lowercase_text(VehicleField.MANUFACTURER.value, 30),
    _lowercase_text(VehicleField.MODEL.value, 30),
    _lowercase_text(VehicleField.FUEL.value, 20),
    _lowercase_text(VehicleField.TYPE.value, 30),
    _lowercase_text(VehicleField.COLOR.value, 25),
    _registration_code(VehicleField.VIN.value, 17),
    _registration_code(VehicleField.VRM.value, 7),
    FieldRule(VehicleField.USED.value, "boolean"),
    FieldRule(VehicleField.MODEL_YEAR.value, "number", (_at_most_next_year(),)),
)

VEHICLE_CREATE_RULES = Ruleset("create", _VEHICLE_TABLE)

VEHICLE_UPDATE_RULES = Ruleset(
    "update", tuple(replace(rule, required=False) for rule in _VEHICLE_TABLE),
)


# ─── Validation ──────────────────────────────────────────────────

def _has_type(value: Any, value_type: str) -> bool:
    if value_type == "string":
        return isinstance(value, str)
    if value_type == "boolean":
        return isinstance(value, bool)
    if value_type == "number":
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return False
        # NaN, infinities and ints beyond float range (json.loads accepts all three)
        try:
            return math.isfinite(value)
        except OverflowError:
            return False
    if value_type == "object":
        return isinstance(value, dict)
    raise ValueError(f"Unknown value type: {value_type}")


def render_value(value: Any) -> str:
    """Render a rejected value the way it appeared in the JSON body."""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    try:
        return json.dumps(value, ensure_ascii=False)
    except (TypeError, ValueError):
        return repr(value)


def _type_violation(path: str, value_type: str, value: Any) -> RuleViolation:
    return RuleViolation(
        None if path == "this" else path, "typeError",
        f"{path} must be a `{value_type}` type, "
        f"but the final value was: `{render_value(value)}`.",
    )


def check_field(rule: FieldRule, body: dict) -> RuleViolation | None:
    """Validate one field of body against its rule."""
    if rule.name not in body:
        if rule.required:
            return RuleViolation(
                rule.name, "required", f"{rule.name} is a required field",
            )
        return None

    value = body[rule.name]
    if value is None:
        if rule.required:
            return RuleViolation(
                rule.name, "required", f"{rule.name} is a required field",
            )
        return RuleViolation(
            rule.name, "nullable", f"{rule.name} cannot be null",
        )
    if not _has_type(value, rule.value_type):
        return _type_violation(rule.name, rule.value_type, value)

    for constraint in rule.constraints:
        # optional strings may be blank; only required ones must be non-empty
        if constraint.name == "required" and not rule.required:
            continue
        if not constraint.test(value):
            return RuleViolation(
                rule.name, constraint.name, constraint.message(rule.name),
            )
    return None


def find_unknown_keys(body: dict, rules: Ruleset) -> list[str]:
    known = set(rules.field_names)
    return [key for key in body if key not in known]


def validate_vehicle(body: Any, rules: Ruleset) -> RuleViolation | None:
    """Apply rules to body. Returns the first violation, or None when valid."""
    if not _has_type(body, "object"):
        return _type_violation("this", "object", body)

    unknown = find_unknown_keys(body, rules)
    if unknown:
        return RuleViolation(
            None, "noUnknown", f"unknown property: {', '.join(unknown)}",
        )

    for rule in rules.fields:
        violation = check_field(rule, body)
        if violation is not None:
            return violation
    return None
