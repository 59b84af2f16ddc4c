from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class FormDefinitionError(ValueError):
    """Raised when a form document cannot be parsed into the field model."""


class FieldEditError(ValueError):
    """Raised for edits the field model does not allow (e.g. changing an id)."""


class DiagnosticCode(str, Enum):
    MALFORMED_RULE_OPERAND = "MalformedRuleOperand"
    INCOMPATIBLE_RULE_FOR_TYPE = "IncompatibleRuleForType"
    UNRESOLVED_DEPENDENCY = "UnresolvedDependency"
    SELF_DEPENDENCY = "SelfDependency"


@dataclass(frozen=True)
class Diagnostic:
    """
    A recovered anomaly in a field definition.

    Diagnostics never interrupt compilation or evaluation; the affected rule
    fails closed or the affected field is hidden, and the host may surface the
    message next to the field in the builder.
    """

    code: DiagnosticCode
    field_id: str
    message: str
    rule_index: Optional[int] = None
