"""
Explicit coercion rules for conditional-display comparisons.

Loose equality (`==` / `!=`):

    left \\ right | str                     | number            | bool
    -------------+-------------------------+-------------------+------------------
    str          | exact string equality   | string -> number  | see below
    number       | string -> number        | numeric equality  | bool -> 1 / 0
    bool         | see below               | bool -> 1 / 0     | identity

  - string -> number: trimmed; blank -> 0; a decimal literal -> its value;
    anything else -> NaN. NaN is never equal to anything.
  - bool vs str: "true" / "false" (trimmed, case-insensitive) match the bool;
    otherwise the string is converted to a number and compared with 1 / 0.
  - FileRef / file lists only equal an identical value or the string form
    (file names joined with ",").

Ordering (`>`, `<`, `>=`, `<=`): numeric when both sides are finite numbers,
bools or non-blank numeric strings; otherwise lexical on the string forms.

String form (used by `contains` / `startsWith` / `endsWith` and lexical
ordering): bools -> "true"/"false"; integral floats drop ".0"; FileRef -> name.

The generated document and component scripts embed the same table
(`form_builder.generators.visibility_script`).
"""

from __future__ import annotations

import math
import operator as _op
import re
from typing import Any, Callable, Dict, Optional

from form_builder.schemas.values import FileRef, is_number


_DECIMAL_RE = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")


def to_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if is_number(value):
        if isinstance(value, float):
            if math.isnan(value):
                return "NaN"
            if math.isinf(value):
                return "Infinity" if value > 0 else "-Infinity"
            if value.is_integer():
                return str(int(value))
            return repr(value)
        return str(value)
    if isinstance(value, FileRef):
        return value.name
    if isinstance(value, (list, tuple)):
        return ",".join(to_text(v) for v in value)
    if value is None:
        return ""
    return str(value)


def _parse_decimal(text: str) -> Optional[float]:
    t = text.strip()
    if not _DECIMAL_RE.match(t):
        return None
    return float(t)


def to_number(value: Any) -> float:
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if is_number(value):
        return float(value)
    if isinstance(value, str):
        if not value.strip():
            return 0.0
        n = _parse_decimal(value)
        return math.nan if n is None else n
    return math.nan


def _ordering_number(value: Any) -> Optional[float]:
    if isinstance(value, bool) or is_number(value):
        n = to_number(value)
    elif isinstance(value, str):
        n = _parse_decimal(value)
    else:
        return None
    if n is None or not math.isfinite(n):
        return None
    return n


def _is_file(value: Any) -> bool:
    return isinstance(value, FileRef) or (isinstance(value, (list, tuple)) and all(isinstance(v, FileRef) for v in value))


def _bool_matches_text(flag: bool, text: str) -> bool:
    t = text.strip().lower()
    if t in ("true", "false"):
        return (t == "true") is flag
    return to_number(text) == (1.0 if flag else 0.0)


def loose_equals(left: Any, right: Any) -> bool:
    if left is None or right is None:
        return left is None and right is None
    if _is_file(left) or _is_file(right):
        if _is_file(left) and _is_file(right):
            return left == right
        other = right if _is_file(left) else left
        return isinstance(other, str) and to_text(left if _is_file(left) else right) == other
    if isinstance(left, str) and isinstance(right, str):
        return left == right
    if isinstance(left, bool) and isinstance(right, bool):
        return left is right
    if isinstance(left, bool) and isinstance(right, str):
        return _bool_matches_text(left, right)
    if isinstance(left, str) and isinstance(right, bool):
        return _bool_matches_text(right, left)
    return to_number(left) == to_number(right)


_ORDERING: Dict[str, Callable[[Any, Any], bool]] = {
    ">": _op.gt,
    "<": _op.lt,
    ">=": _op.ge,
    "<=": _op.le,
}


def compare_ordered(left: Any, op: str, right: Any) -> bool:
    fn = _ORDERING[op]
    ln, rn = _ordering_number(left), _ordering_number(right)
    if ln is not None and rn is not None:
        return fn(ln, rn)
    return fn(to_text(left), to_text(right))


def evaluate_condition(source_value: Any, op: str, operand: Any) -> bool:
    """Apply a conditional-display operator to a (present) raw source value."""
    if op == "==":
        return loose_equals(source_value, operand)
    if op == "!=":
        return not loose_equals(source_value, operand)
    if op in _ORDERING:
        return compare_ordered(source_value, op, operand)
    if op == "contains":
        return to_text(operand) in to_text(source_value)
    if op == "startsWith":
        return to_text(source_value).startswith(to_text(operand))
    if op == "endsWith":
        return to_text(source_value).endswith(to_text(operand))
    return False
