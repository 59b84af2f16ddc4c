"""
Validation compiler: field type + rule list -> executable constraint.
"""

from .compiler import CompiledRule, Constraint, compile_field, compile_form, validate_form  # noqa: F401
from .results import FormValidationResult, ValidationIssue, ValidationResult  # noqa: F401
from .rules import EMAIL_RE, STRING_FIELD_TYPES, is_email, is_rule_compatible  # noqa: F401
