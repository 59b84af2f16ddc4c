from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Tuple


@dataclass(frozen=True)
class ValidationIssue:
    kind: str
    message: str


@dataclass(frozen=True)
class ValidationResult:
    issues: Tuple[ValidationIssue, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.issues

    @property
    def messages(self) -> List[str]:
        return [i.message for i in self.issues]


@dataclass(frozen=True)
class FormValidationResult:
    errors: Dict[str, List[ValidationIssue]] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors

    def messages_for(self, field_id: str) -> List[str]:
        return [i.message for i in self.errors.get(field_id, [])]
