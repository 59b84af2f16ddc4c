"""
Builder-side edit operations (create, duplicate, reorder, options, rules, conditions).
"""

from .fields import (  # noqa: F401
    add_field,
    add_option,
    add_validation,
    change_field_type,
    compatible_rule_kinds,
    create_field,
    duplicate_field,
    enable_conditional_display,
    move_field,
    new_field_id,
    remove_field,
    remove_option,
    remove_validation,
    set_conditional_display,
    toggle_manually_hidden,
    update_field,
    update_option,
    update_validation,
)
