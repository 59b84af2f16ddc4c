"""
Pure edit operations over a field list.

Every function returns a new list (and new field objects for the fields it
touches); inputs are never mutated. Unknown field ids leave the list unchanged,
mirroring how the builder ignores stale selections.
"""

from __future__ import annotations

import uuid
from typing import Any, Dict, List, Optional, Sequence, Tuple

from form_builder.errors import FieldEditError
from form_builder.schemas.form import (
    OPTION_FIELD_TYPES,
    ConditionalRule,
    FieldOption,
    FormField,
    ValidationRule,
    option_value_from_label,
)


_RULE_DEFAULT_OPERANDS: Dict[str, Any] = {
    "min": 0,
    "max": 0,
    "minLength": 1,
    "maxLength": 1,
    "pattern": ".*",
}

_AUTHORING_RULE_KINDS: Dict[str, Tuple[str, ...]] = {
    "text": ("required", "minLength", "maxLength", "pattern"),
    "textarea": ("required", "minLength", "maxLength", "pattern"),
    "email": ("required", "email"),
    "number": ("required", "min", "max"),
}


def new_field_id() -> str:
    return f"field_{uuid.uuid4().hex[:12]}"


def compatible_rule_kinds(field_type: str) -> Tuple[str, ...]:
    """Rule kinds the authoring surface offers for a field type."""
    return _AUTHORING_RULE_KINDS.get(field_type, ("required",))


def _seed_options() -> List[FieldOption]:
    return [FieldOption(label="Option 1", value="option1"), FieldOption(label="Option 2", value="option2")]


def _replace(field: FormField, **changes: Any) -> FormField:
    data = field.model_dump()
    data.update(changes)
    return FormField.model_validate(data)


def _index_of(fields: Sequence[FormField], field_id: str) -> int:
    for i, f in enumerate(fields):
        if f.id == field_id:
            return i
    return -1


def _map_field(fields: Sequence[FormField], field_id: str, fn) -> List[FormField]:
    return [fn(f) if f.id == field_id else f for f in fields]


def create_field(field_type: str, *, field_id: Optional[str] = None) -> FormField:
    field = FormField(
        id=field_id or new_field_id(),
        type=field_type,
        label=f"New {field_type} field",
        placeholder=f"Enter {field_type}",
        validations=[],
    )
    if field_type in OPTION_FIELD_TYPES:
        field.options = _seed_options()
    if field_type == "checkbox":
        field.default_value = False
    return field


def add_field(fields: Sequence[FormField], field_type: str) -> Tuple[List[FormField], FormField]:
    field = create_field(field_type)
    return [*fields, field], field


def update_field(fields: Sequence[FormField], field_id: str, **changes: Any) -> List[FormField]:
    if "id" in changes and changes["id"] != field_id:
        raise FieldEditError("field ids are immutable")
    changes.pop("id", None)
    return _map_field(fields, field_id, lambda f: _replace(f, **changes))


def change_field_type(fields: Sequence[FormField], field_id: str, new_type: str) -> List[FormField]:
    def _retype(f: FormField) -> FormField:
        if f.type == new_type:
            return f
        changes: Dict[str, Any] = {"type": new_type}
        if new_type in OPTION_FIELD_TYPES:
            changes["options"] = f.options if f.options else _seed_options()
        else:
            changes["options"] = None
        if new_type == "checkbox":
            changes["default_value"] = False
        elif f.type == "checkbox":
            changes["default_value"] = None
        return _replace(f, **changes)

    return _map_field(fields, field_id, _retype)


def remove_field(fields: Sequence[FormField], field_id: str) -> List[FormField]:
    return [f for f in fields if f.id != field_id]


def duplicate_field(fields: Sequence[FormField], field_id: str) -> Tuple[List[FormField], Optional[FormField]]:
    """Clone a field (fresh id, label suffixed with ' (copy)') right after the original."""
    idx = _index_of(fields, field_id)
    if idx < 0:
        return list(fields), None
    original = fields[idx]
    clone = FormField.model_validate(
        {**original.model_dump(), "id": new_field_id(), "label": f"{original.label} (copy)"}
    )
    out = list(fields)
    out.insert(idx + 1, clone)
    return out, clone


def move_field(fields: Sequence[FormField], from_index: int, to_index: int) -> List[FormField]:
    n = len(fields)
    if not (0 <= from_index < n) or not (0 <= to_index < n):
        raise FieldEditError(f"move out of range: {from_index} -> {to_index} (fields={n})")
    out = list(fields)
    item = out.pop(from_index)
    out.insert(to_index, item)
    return out


def toggle_manually_hidden(fields: Sequence[FormField], field_id: str) -> List[FormField]:
    return _map_field(fields, field_id, lambda f: _replace(f, is_manually_hidden=not f.is_manually_hidden))


# --- options -----------------------------------------------------------------


def _options_of(field: FormField) -> List[FieldOption]:
    if field.options is None:
        raise FieldEditError(f"field {field.id} ({field.type}) has no options")
    return list(field.options)


def add_option(fields: Sequence[FormField], field_id: str) -> List[FormField]:
    def _add(f: FormField) -> FormField:
        opts = _options_of(f)
        n = len(opts) + 1
        opts.append(FieldOption(label=f"Option {n}", value=f"option{n}"))
        return _replace(f, options=opts)

    return _map_field(fields, field_id, _add)


def update_option(
    fields: Sequence[FormField],
    field_id: str,
    index: int,
    *,
    label: Optional[str] = None,
    value: Optional[str] = None,
) -> List[FormField]:
    """
    Edit one option. A new `label` re-derives `value` from it unless an explicit
    `value` is passed as well.
    """

    def _update(f: FormField) -> FormField:
        opts = _options_of(f)
        if not (0 <= index < len(opts)):
            raise FieldEditError(f"option index out of range: {index}")
        cur = opts[index]
        new_label = cur.label if label is None else label
        if value is not None:
            new_value = value
        elif label is not None:
            new_value = option_value_from_label(label)
        else:
            new_value = cur.value
        opts[index] = FieldOption(label=new_label, value=new_value)
        return _replace(f, options=opts)

    return _map_field(fields, field_id, _update)


def remove_option(fields: Sequence[FormField], field_id: str, index: int) -> List[FormField]:
    def _remove(f: FormField) -> FormField:
        opts = _options_of(f)
        if not (0 <= index < len(opts)):
            raise FieldEditError(f"option index out of range: {index}")
        del opts[index]
        return _replace(f, options=opts)

    return _map_field(fields, field_id, _remove)


# --- validation rules --------------------------------------------------------


def add_validation(fields: Sequence[FormField], field_id: str, kind: str) -> List[FormField]:
    message = "Field is required" if kind == "required" else "Field is invalid"
    rule = ValidationRule(kind=kind, operand=_RULE_DEFAULT_OPERANDS.get(kind), message=message)
    return _map_field(fields, field_id, lambda f: _replace(f, validations=[*f.validations, rule]))


def update_validation(fields: Sequence[FormField], field_id: str, index: int, **changes: Any) -> List[FormField]:
    def _update(f: FormField) -> FormField:
        rules = list(f.validations)
        if not (0 <= index < len(rules)):
            raise FieldEditError(f"validation index out of range: {index}")
        data = rules[index].model_dump()
        data.update(changes)
        rules[index] = ValidationRule.model_validate(data)
        return _replace(f, validations=rules)

    return _map_field(fields, field_id, _update)


def remove_validation(fields: Sequence[FormField], field_id: str, index: int) -> List[FormField]:
    def _remove(f: FormField) -> FormField:
        if not (0 <= index < len(f.validations)):
            raise FieldEditError(f"validation index out of range: {index}")
        return _replace(f, validations=[r for i, r in enumerate(f.validations) if i != index])

    return _map_field(fields, field_id, _remove)


# --- conditional display -----------------------------------------------------


def enable_conditional_display(fields: Sequence[FormField], field_id: str) -> List[FormField]:
    """Seed a `==` rule against the first other field; no-op when there is none."""
    others = [f for f in fields if f.id != field_id]
    if not others:
        return list(fields)
    rule = ConditionalRule(source_field_id=others[0].id, operator="==", operand="")
    return _map_field(fields, field_id, lambda f: _replace(f, conditional_display=rule))


def set_conditional_display(
    fields: Sequence[FormField],
    field_id: str,
    rule: Optional[ConditionalRule],
) -> List[FormField]:
    return _map_field(fields, field_id, lambda f: _replace(f, conditional_display=rule))
