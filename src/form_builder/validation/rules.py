"""
Rule/field-type compatibility and operand normalization for validation rules.
"""

from __future__ import annotations

import math
import re
from typing import Any, Dict, FrozenSet, Optional, Pattern, Tuple

from form_builder.schemas.form import FIELD_TYPES
from form_builder.schemas.values import is_number


STRING_FIELD_TYPES: FrozenSet[str] = frozenset({"text", "textarea", "email", "select", "radio", "date"})

RULE_FIELD_TYPES: Dict[str, FrozenSet[str]] = {
    "required": frozenset(FIELD_TYPES),
    "min": frozenset({"number"}),
    "max": frozenset({"number"}),
    "minLength": STRING_FIELD_TYPES,
    "maxLength": STRING_FIELD_TYPES,
    "pattern": STRING_FIELD_TYPES,
    "email": STRING_FIELD_TYPES,
}

# Same shape zod's `.email()` accepts.
EMAIL_RE = re.compile(
    r"^(?!\.)(?!.*\.\.)([A-Z0-9_'+\-\.]*)[A-Z0-9_+-]@([A-Z0-9][A-Z0-9\-]*\.)+[A-Z]{2,}$",
    re.IGNORECASE,
)


def is_email(value: Any) -> bool:
    return isinstance(value, str) and EMAIL_RE.match(value) is not None


def is_rule_compatible(kind: str, field_type: str) -> bool:
    return field_type in RULE_FIELD_TYPES.get(kind, frozenset())


def numeric_operand(operand: Any) -> Tuple[Optional[float], Optional[str]]:
    if not is_number(operand):
        return None, f"expected a number, got {operand!r}"
    if not math.isfinite(operand):
        return None, f"expected a finite number, got {operand!r}"
    return operand, None


def length_operand(operand: Any) -> Tuple[Optional[int], Optional[str]]:
    if not is_number(operand) or not math.isfinite(operand) or int(operand) != operand:
        return None, f"expected a whole number, got {operand!r}"
    if operand < 0:
        return None, f"expected a non-negative length, got {operand!r}"
    return int(operand), None


def pattern_operand(operand: Any) -> Tuple[Optional[Pattern[str]], Optional[str]]:
    if not isinstance(operand, str) or not operand:
        return None, f"expected a regular expression, got {operand!r}"
    try:
        return re.compile(operand), None
    except re.error as e:
        return None, f"invalid regular expression {operand!r}: {e}"


OPERAND_PARSERS = {
    "min": numeric_operand,
    "max": numeric_operand,
    "minLength": length_operand,
    "maxLength": length_operand,
    "pattern": pattern_operand,
}


def normalize_operand(kind: str, operand: Any) -> Tuple[Any, Optional[str]]:
    """
    Return `(normalized_operand, error)`; `error` is set when the operand is
    missing or unusable for `kind`. Kinds without an operand always succeed.
    """
    parser = OPERAND_PARSERS.get(kind)
    if parser is None:
        return None, None
    return parser(operand)
