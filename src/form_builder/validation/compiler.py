"""
Compile a field's type and rule list into an executable constraint.

Compilation never raises: incompatible rules are dropped, rules with unusable
operands fail closed, and both are reported as diagnostics on the constraint.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from form_builder.errors import Diagnostic, DiagnosticCode
from form_builder.schemas.form import FormField
from form_builder.schemas.values import is_empty, is_file_value, is_number
from form_builder.validation.results import FormValidationResult, ValidationIssue, ValidationResult
from form_builder.validation.rules import is_email, is_rule_compatible, normalize_operand

logger = logging.getLogger("form_builder.validation")


def _is_string(value: Any) -> bool:
    return isinstance(value, str)


def _is_valid_number(value: Any) -> bool:
    return is_number(value) and value == value  # NaN != NaN


def _is_bool(value: Any) -> bool:
    return isinstance(value, bool)


# field type -> (predicate, message)
_BASE_CHECKS: Dict[str, Tuple[Callable[[Any], bool], str]] = {
    "text": (_is_string, "Expected string"),
    "textarea": (_is_string, "Expected string"),
    "select": (_is_string, "Expected string"),
    "radio": (_is_string, "Expected string"),
    "date": (_is_string, "Expected string"),
    "email": (is_email, "Invalid email"),
    "number": (_is_valid_number, "Expected number"),
    "checkbox": (_is_bool, "Expected boolean"),
    "file": (is_file_value, "Expected file"),
}


def _required_check(field_type: str) -> Callable[[Any], bool]:
    if field_type == "checkbox":
        return lambda v: v is True
    # `False` never satisfies a required rule, whatever the field type.
    return lambda v: not is_empty(v) and v is not False


def _rule_check(kind: str, operand: Any) -> Callable[[Any], bool]:
    if kind == "min":
        return lambda v: v >= operand
    if kind == "max":
        return lambda v: v <= operand
    if kind == "minLength":
        return lambda v: len(v) >= operand
    if kind == "maxLength":
        return lambda v: len(v) <= operand
    if kind == "pattern":
        return lambda v: operand.fullmatch(v) is not None
    if kind == "email":
        return is_email
    raise ValueError(f"no check for rule kind {kind!r}")


def _always_fails(_value: Any) -> bool:
    return False


@dataclass(frozen=True)
class CompiledRule:
    kind: str
    message: str
    check: Callable[[Any], bool]
    operand: Any = None
    malformed: bool = False
    index: Optional[int] = None


@dataclass(frozen=True)
class Constraint:
    field_id: str
    field_type: str
    required: Tuple[CompiledRule, ...]
    rules: Tuple[CompiledRule, ...]
    diagnostics: Tuple[Diagnostic, ...] = ()

    @property
    def optional(self) -> bool:
        return not self.required

    def validate(self, value: Any) -> ValidationResult:
        if not self.required and is_empty(value):
            return ValidationResult()

        missing = [ValidationIssue(r.kind, r.message) for r in self.required if not r.check(value)]
        if missing:
            return ValidationResult(tuple(missing))

        base_check, base_message = _BASE_CHECKS.get(self.field_type, (_is_string, "Expected string"))
        if not base_check(value):
            return ValidationResult((ValidationIssue("type", base_message),))

        issues: List[ValidationIssue] = []
        for rule in self.rules:
            try:
                passed = rule.check(value)
            except (TypeError, ValueError):
                passed = False
            if not passed:
                issues.append(ValidationIssue(rule.kind, rule.message))
        return ValidationResult(tuple(issues))


_COMPILE_CACHE_SIZE = 512
_compiled: Dict[str, Constraint] = {}


def compile_field(field: FormField) -> Constraint:
    """
    Compile one field. Results are cached per field definition, so hosts that
    recompile on every keystroke reuse the constraint and a malformed operand is
    logged once.
    """
    key = repr(field.model_dump())
    constraint = _compiled.get(key)
    if constraint is None:
        if len(_compiled) >= _COMPILE_CACHE_SIZE:
            _compiled.clear()
        constraint = _compiled[key] = _compile(field)
    return constraint


def _compile(field: FormField) -> Constraint:
    required: List[CompiledRule] = []
    rules: List[CompiledRule] = []
    diagnostics: List[Diagnostic] = []

    for idx, rule in enumerate(field.validations):
        if not is_rule_compatible(rule.kind, field.type):
            logger.debug("ignoring %s rule on %s field %s", rule.kind, field.type, field.id)
            diagnostics.append(
                Diagnostic(
                    code=DiagnosticCode.INCOMPATIBLE_RULE_FOR_TYPE,
                    field_id=field.id,
                    message=f"{rule.kind} does not apply to {field.type} fields",
                    rule_index=idx,
                )
            )
            continue

        if rule.kind == "required":
            required.append(CompiledRule(kind="required", message=rule.message, check=_required_check(field.type), index=idx))
            continue

        operand, error = normalize_operand(rule.kind, rule.operand)
        if error is not None:
            logger.warning("field %s: %s rule fails closed: %s", field.id, rule.kind, error)
            diagnostics.append(
                Diagnostic(
                    code=DiagnosticCode.MALFORMED_RULE_OPERAND,
                    field_id=field.id,
                    message=f"{rule.kind}: {error}",
                    rule_index=idx,
                )
            )
            rules.append(
                CompiledRule(
                    kind=rule.kind,
                    message=rule.message,
                    check=_always_fails,
                    operand=rule.operand,
                    malformed=True,
                    index=idx,
                )
            )
            continue

        rules.append(
            CompiledRule(
                kind=rule.kind,
                message=rule.message,
                check=_rule_check(rule.kind, operand),
                operand=operand,
                index=idx,
            )
        )

    return Constraint(
        field_id=field.id,
        field_type=field.type,
        required=tuple(required),
        rules=tuple(rules),
        diagnostics=tuple(diagnostics),
    )


def compile_form(fields: Sequence[FormField]) -> Dict[str, Constraint]:
    return {f.id: compile_field(f) for f in fields}


def validate_form(
    fields: Sequence[FormField],
    values: Mapping[str, Any],
    visibility: Optional[Mapping[str, bool]] = None,
) -> FormValidationResult:
    """
    Validate every field's current value. Fields hidden in `visibility` are
    skipped: their controls are disabled and their values never submitted.
    """
    errors: Dict[str, List[ValidationIssue]] = {}
    for field in fields:
        if visibility is not None and not visibility.get(field.id, True):
            continue
        result = compile_field(field).validate(values.get(field.id))
        if not result.ok:
            errors[field.id] = list(result.issues)
    return FormValidationResult(errors=errors)
