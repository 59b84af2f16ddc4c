"""
Conditional visibility evaluation.

Every field starts visible. A field with a conditional-display rule is visible
only when its source field's *raw* value is present and satisfies the rule.
Visibility never depends on another field's computed visibility, so dependency
cycles (A -> B -> A) evaluate in one pass without recursion.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Sequence, Tuple

from form_builder.errors import Diagnostic, DiagnosticCode
from form_builder.schemas.form import FormField
from form_builder.visibility.coercion import evaluate_condition

logger = logging.getLogger("form_builder.visibility")


def evaluate_visibility(
    fields: Sequence[FormField],
    values: Mapping[str, Any],
) -> Tuple[Dict[str, bool], List[Diagnostic]]:
    field_ids = {f.id for f in fields}
    visibility: Dict[str, bool] = {f.id: True for f in fields}
    diagnostics: List[Diagnostic] = []

    for field in fields:
        rule = field.conditional_display
        if rule is None:
            continue

        source_id = rule.source_field_id
        if source_id == field.id:
            diagnostics.append(
                Diagnostic(
                    code=DiagnosticCode.SELF_DEPENDENCY,
                    field_id=field.id,
                    message="field cannot depend on its own value",
                )
            )
            visibility[field.id] = False
            continue
        if source_id not in field_ids:
            logger.debug("field %s depends on unknown field %s; hidden", field.id, source_id)
            diagnostics.append(
                Diagnostic(
                    code=DiagnosticCode.UNRESOLVED_DEPENDENCY,
                    field_id=field.id,
                    message=f"source field {source_id!r} does not exist",
                )
            )
            visibility[field.id] = False
            continue

        raw = values.get(source_id)
        if raw is None:
            visibility[field.id] = False
            continue
        visibility[field.id] = evaluate_condition(raw, rule.operator, rule.operand)

    return visibility, diagnostics


def compute_visibility(fields: Sequence[FormField], values: Mapping[str, Any]) -> Dict[str, bool]:
    visibility, _ = evaluate_visibility(fields, values)
    return visibility
