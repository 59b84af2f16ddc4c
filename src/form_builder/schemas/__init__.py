"""
Schema package for the form field model and runtime value types.
"""

from .form import (  # noqa: F401
    CONDITION_OPERATORS,
    FIELD_TYPES,
    OPTION_FIELD_TYPES,
    RULE_KINDS,
    ConditionalRule,
    ConditionOperator,
    FieldOption,
    FieldType,
    Form,
    FormField,
    Operand,
    RuleKind,
    ValidationRule,
    form_to_dict,
    option_value_from_label,
    parse_form,
    parse_form_json,
)
from .values import FieldValue, FileRef, is_empty, is_file_value, is_number  # noqa: F401
