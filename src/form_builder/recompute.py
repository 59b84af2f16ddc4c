from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Sequence, Tuple

from form_builder.errors import Diagnostic
from form_builder.schemas.form import FormField
from form_builder.validation.compiler import compile_field
from form_builder.visibility.evaluator import evaluate_visibility


@dataclass(frozen=True)
class RecomputeResult:
    visibility: Dict[str, bool]
    diagnostics: Tuple[Diagnostic, ...]

    def visible_ids(self) -> Tuple[str, ...]:
        return tuple(fid for fid, shown in self.visibility.items() if shown)


def recompute(fields: Sequence[FormField], values: Mapping[str, Any]) -> RecomputeResult:
    """
    Host entry point, called after every applied edit or value change.

    Returns the visibility map plus every recovered anomaly (unresolved or self
    dependencies, malformed or incompatible rules) in field order.
    """
    visibility, visibility_diags = evaluate_visibility(fields, values)
    by_field: Dict[str, list] = {}
    for d in visibility_diags:
        by_field.setdefault(d.field_id, []).append(d)

    diagnostics = []
    for field in fields:
        diagnostics.extend(compile_field(field).diagnostics)
        diagnostics.extend(by_field.get(field.id, []))
    return RecomputeResult(visibility=visibility, diagnostics=tuple(diagnostics))
