"""
Runtime value types supplied by the host UI.

The value map passed to `recompute` / `validate_form` holds, per field id, one of:
  - `str`   (text, textarea, email, select, radio, date)
  - `int` / `float` (number)
  - `bool`  (checkbox)
  - `FileRef` or a sequence of `FileRef` (file)

A missing key and `None` both mean "absent" (the field was never touched and
has no default).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Sequence, Union


@dataclass(frozen=True)
class FileRef:
    """Opaque handle to a file chosen in a `file` field."""

    name: str
    size: Optional[int] = None
    content_type: Optional[str] = None


Scalar = Union[bool, int, float, str]
FieldValue = Union[bool, int, float, str, FileRef, Sequence[FileRef]]


def is_number(value: Any) -> bool:
    # bool is an int subclass but is never a number here.
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_file_value(value: Any) -> bool:
    if isinstance(value, FileRef):
        return True
    if isinstance(value, (list, tuple)):
        return all(isinstance(v, FileRef) for v in value)
    return False


def is_empty(value: Any) -> bool:
    """
    True when a value counts as "not provided" for optional-field bypass and
    for the `required` rule: `None`, `""`, or an empty file selection.
    """
    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (list, tuple)):
        return len(value) == 0
    return False
