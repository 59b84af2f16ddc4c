import copy

import pytest

from form_builder.editing import (
    add_field,
    add_option,
    add_validation,
    change_field_type,
    compatible_rule_kinds,
    create_field,
    duplicate_field,
    enable_conditional_display,
    move_field,
    remove_field,
    remove_option,
    remove_validation,
    set_conditional_display,
    toggle_manually_hidden,
    update_field,
    update_option,
    update_validation,
)
from form_builder.errors import FieldEditError
from form_builder.schemas import ConditionalRule


def test_create_field_defaults_per_type():
    text = create_field("text")
    assert text.id.startswith("field_")
    assert text.label == "New text field"
    assert text.placeholder == "Enter text"
    assert text.validations == []
    assert text.options is None
    assert text.default_value is None

    select = create_field("select")
    assert [(o.label, o.value) for o in select.options] == [("Option 1", "option1"), ("Option 2", "option2")]
    assert create_field("radio").options is not None
    assert create_field("checkbox").default_value is False


def test_field_ids_are_unique():
    ids = {create_field("text").id for _ in range(50)}
    assert len(ids) == 50


def test_add_field_appends_without_mutating_input():
    fields = [create_field("text")]
    before = copy.deepcopy(fields)
    out, created = add_field(fields, "number")
    assert fields == before
    assert [f.id for f in out] == [fields[0].id, created.id]


def test_duplicate_field_inserts_copy_after_original():
    a, b = create_field("radio"), create_field("text")
    fields = add_validation([a, b], a.id, "required")
    out, clone = duplicate_field(fields, a.id)

    assert [f.id for f in out] == [a.id, clone.id, b.id]
    assert clone.id != a.id
    assert clone.label == "New radio field (copy)"
    assert clone.options == fields[0].options
    assert clone.validations == fields[0].validations


def test_duplicate_unknown_field_is_noop():
    fields = [create_field("text")]
    out, clone = duplicate_field(fields, "nope")
    assert out == fields
    assert clone is None


def test_update_field_rejects_id_changes():
    field = create_field("text")
    with pytest.raises(FieldEditError):
        update_field([field], field.id, id="other")
    out = update_field([field], field.id, label="Full name", placeholder=None)
    assert out[0].label == "Full name"
    assert out[0].placeholder is None
    assert field.label == "New text field"


def test_remove_and_move_fields():
    a, b, c = create_field("text"), create_field("email"), create_field("number")
    assert [f.id for f in remove_field([a, b, c], b.id)] == [a.id, c.id]
    assert [f.id for f in move_field([a, b, c], 0, 2)] == [b.id, c.id, a.id]
    with pytest.raises(FieldEditError):
        move_field([a], 0, 3)


def test_toggle_manually_hidden():
    field = create_field("text")
    hidden = toggle_manually_hidden([field], field.id)
    assert hidden[0].is_manually_hidden is True
    assert toggle_manually_hidden(hidden, field.id)[0].is_manually_hidden is False


def test_change_field_type_seeds_and_drops_options():
    field = create_field("text")
    as_select = change_field_type([field], field.id, "select")
    assert len(as_select[0].options) == 2
    back = change_field_type(as_select, field.id, "checkbox")
    assert back[0].options is None
    assert back[0].default_value is False
    assert change_field_type(back, field.id, "text")[0].default_value is None


def test_option_edits():
    field = create_field("select")
    fields = add_option([field], field.id)
    assert fields[0].options[-1].label == "Option 3"
    assert fields[0].options[-1].value == "option3"

    fields = update_option(fields, field.id, 0, label="Extra Large")
    assert fields[0].options[0].value == "extra-large"
    fields = update_option(fields, field.id, 0, value="xl")
    assert (fields[0].options[0].label, fields[0].options[0].value) == ("Extra Large", "xl")

    fields = remove_option(fields, field.id, 1)
    assert [o.value for o in fields[0].options] == ["xl", "option3"]

    text = create_field("text")
    with pytest.raises(FieldEditError):
        add_option([text], text.id)


def test_validation_edits_use_kind_defaults():
    field = create_field("number")
    fields = add_validation([field], field.id, "required")
    fields = add_validation(fields, field.id, "min")
    rules = fields[0].validations
    assert (rules[0].kind, rules[0].operand, rules[0].message) == ("required", None, "Field is required")
    assert (rules[1].kind, rules[1].operand, rules[1].message) == ("min", 0, "Field is invalid")

    fields = update_validation(fields, field.id, 1, operand=18, message="Must be 18+")
    assert fields[0].validations[1].operand == 18
    fields = remove_validation(fields, field.id, 0)
    assert [r.kind for r in fields[0].validations] == ["min"]

    text = create_field("text")
    assert add_validation([text], text.id, "pattern")[0].validations[0].operand == ".*"
    assert add_validation([text], text.id, "maxLength")[0].validations[0].operand == 1
    with pytest.raises(FieldEditError):
        remove_validation([text], text.id, 0)


def test_conditional_display_edits():
    a, b = create_field("text"), create_field("text")
    fields = enable_conditional_display([a, b], b.id)
    rule = fields[1].conditional_display
    assert (rule.source_field_id, rule.operator, rule.operand) == (a.id, "==", "")

    assert enable_conditional_display([a], a.id)[0].conditional_display is None

    custom = ConditionalRule(source_field_id=a.id, operator="contains", operand="x")
    fields = set_conditional_display(fields, b.id, custom)
    assert fields[1].conditional_display.operator == "contains"
    assert set_conditional_display(fields, b.id, None)[1].conditional_display is None


def test_compatible_rule_kinds():
    assert compatible_rule_kinds("text") == ("required", "minLength", "maxLength", "pattern")
    assert compatible_rule_kinds("email") == ("required", "email")
    assert compatible_rule_kinds("number") == ("required", "min", "max")
    assert compatible_rule_kinds("checkbox") == ("required",)
