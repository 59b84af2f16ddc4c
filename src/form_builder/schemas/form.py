"""
Field model for form definitions.

These classes mirror the JSON export contract (`{ "title", "fields" }`) and are
used both to validate imported documents and to serialize the builder state.
Attribute names are snake_case; the JSON names are camelCase aliases.
"""

from __future__ import annotations

import json
import re
from typing import Any, Dict, List, Literal, Optional, Union, get_args

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, model_validator

from form_builder.errors import FormDefinitionError


FieldType = Literal["text", "email", "number", "select", "checkbox", "radio", "file", "date", "textarea"]
RuleKind = Literal["required", "min", "max", "pattern", "minLength", "maxLength", "email"]
ConditionOperator = Literal["==", "!=", ">", "<", ">=", "<=", "contains", "startsWith", "endsWith"]

FIELD_TYPES = get_args(FieldType)
RULE_KINDS = get_args(RuleKind)
CONDITION_OPERATORS = get_args(ConditionOperator)

# Types whose builder field carries an option list.
OPTION_FIELD_TYPES = {"select", "radio"}

# Order matters for pydantic's smart union: bool before int keeps `True` a bool.
Operand = Union[bool, int, float, str]


def option_value_from_label(label: str) -> str:
    """Derive an option value the way the builder does: lower-case, whitespace runs -> '-'."""
    return re.sub(r"\s+", "-", str(label or "").lower())


class FieldOption(BaseModel):
    label: str = Field(..., description="Option label (user-facing)")
    value: str = Field(..., description="Submitted value")


class ValidationRule(BaseModel):
    kind: RuleKind = Field(
        ...,
        validation_alias=AliasChoices("kind", "type"),
        description="Rule kind; compatibility with the field type is checked by the compiler",
    )
    operand: Optional[Operand] = Field(
        default=None,
        validation_alias=AliasChoices("operand", "value"),
        description="Numeric bound, length bound or pattern source depending on `kind`",
    )
    message: str = Field(..., description="Message reported when the rule fails")

    model_config = ConfigDict(populate_by_name=True)


class ConditionalRule(BaseModel):
    source_field_id: str = Field(
        ...,
        validation_alias=AliasChoices("sourceFieldId", "source_field_id", "fieldId"),
        serialization_alias="sourceFieldId",
        description="Id of the field whose raw value drives visibility",
    )
    operator: ConditionOperator = "=="
    operand: Operand = Field(..., validation_alias=AliasChoices("operand", "value"))

    model_config = ConfigDict(populate_by_name=True)


class FormField(BaseModel):
    """
    One form input's declarative definition.

    `options` is present only for select/radio fields; `is_manually_hidden` is a
    builder-canvas hint and plays no part in conditional visibility.
    """

    id: str = Field(..., description="Unique, immutable field id")
    type: FieldType
    label: str
    placeholder: Optional[str] = None
    default_value: Optional[Operand] = Field(default=None, alias="defaultValue")
    options: Optional[List[FieldOption]] = None
    validations: List[ValidationRule] = Field(default_factory=list)
    conditional_display: Optional[ConditionalRule] = Field(default=None, alias="conditionalDisplay")
    is_manually_hidden: Optional[bool] = Field(default=None, alias="isManuallyHidden")

    model_config = ConfigDict(populate_by_name=True)

    def has_rule(self, kind: str) -> bool:
        return any(v.kind == kind for v in self.validations)

    @property
    def is_required(self) -> bool:
        return self.has_rule("required")


class Form(BaseModel):
    title: str = ""
    fields: List[FormField] = Field(default_factory=list)

    @model_validator(mode="after")
    def _unique_field_ids(self) -> "Form":
        seen: set[str] = set()
        for f in self.fields:
            if f.id in seen:
                raise ValueError(f"duplicate field id: {f.id}")
            seen.add(f.id)
        return self


def form_to_dict(form: Form) -> Dict[str, Any]:
    """JSON-ready dict; absent optional attributes are omitted, never null."""
    return form.model_dump(mode="json", by_alias=True, exclude_none=True)


def parse_form(data: Any) -> Form:
    if not isinstance(data, dict):
        raise FormDefinitionError(f"form document must be an object, got {type(data).__name__}")
    try:
        return Form.model_validate(data)
    except ValidationError as e:
        raise FormDefinitionError(str(e)) from e


def parse_form_json(text: str) -> Form:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise FormDefinitionError(f"invalid JSON: {e}") from e
    return parse_form(data)
