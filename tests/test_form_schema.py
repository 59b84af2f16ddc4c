import pytest

from form_builder.errors import FormDefinitionError
from form_builder.schemas import FormField, option_value_from_label, parse_form, parse_form_json


def test_parse_form_reads_camel_case_contract():
    form = parse_form(
        {
            "title": "Signup",
            "fields": [
                {"id": "age", "type": "number", "label": "Age", "defaultValue": 21, "validations": [{"kind": "min", "operand": 18, "message": "Must be 18+"}]},
                {
                    "id": "plan",
                    "type": "select",
                    "label": "Plan",
                    "options": [{"label": "Pro", "value": "pro"}],
                    "validations": [],
                    "conditionalDisplay": {"sourceFieldId": "age", "operator": ">=", "operand": 18},
                    "isManuallyHidden": True,
                },
            ],
        }
    )
    age, plan = form.fields
    assert age.default_value == 21
    assert isinstance(age.default_value, int)
    assert age.validations[0].kind == "min"
    assert age.validations[0].operand == 18
    assert plan.conditional_display.source_field_id == "age"
    assert plan.conditional_display.operator == ">="
    assert plan.is_manually_hidden is True


def test_parse_form_accepts_legacy_rule_and_condition_keys():
    form = parse_form(
        {
            "title": "Legacy",
            "fields": [
                {"id": "a", "type": "text", "label": "A", "validations": [{"type": "pattern", "value": "[a-z]+", "message": "letters"}]},
                {"id": "b", "type": "text", "label": "B", "validations": [], "conditionalDisplay": {"fieldId": "a", "operator": "==", "value": "x"}},
            ],
        }
    )
    assert form.fields[0].validations[0].kind == "pattern"
    assert form.fields[0].validations[0].operand == "[a-z]+"
    assert form.fields[1].conditional_display.source_field_id == "a"
    assert form.fields[1].conditional_display.operand == "x"


def test_operand_union_keeps_scalar_types():
    field = FormField.model_validate(
        {"id": "c", "type": "checkbox", "label": "C", "defaultValue": True, "validations": [{"kind": "min", "operand": 1.5, "message": "m"}]}
    )
    assert field.default_value is True
    assert isinstance(field.validations[0].operand, float)

    text = FormField.model_validate({"id": "t", "type": "text", "label": "T", "defaultValue": "5"})
    assert text.default_value == "5"


def test_parse_form_rejects_duplicate_ids():
    with pytest.raises(FormDefinitionError):
        parse_form(
            {
                "title": "Dup",
                "fields": [
                    {"id": "x", "type": "text", "label": "One"},
                    {"id": "x", "type": "text", "label": "Two"},
                ],
            }
        )


def test_parse_form_rejects_unknown_field_type():
    with pytest.raises(FormDefinitionError):
        parse_form({"title": "Bad", "fields": [{"id": "x", "type": "color", "label": "X"}]})


def test_parse_form_json_rejects_invalid_json_and_non_objects():
    with pytest.raises(FormDefinitionError):
        parse_form_json("{not json")
    with pytest.raises(FormDefinitionError):
        parse_form_json("[]")


def test_option_value_from_label():
    assert option_value_from_label("Option 1") == "option-1"
    assert option_value_from_label("Very   Big\tPlan") == "very-big-plan"
    assert option_value_from_label("") == ""


def test_field_required_helpers():
    field = FormField.model_validate(
        {"id": "e", "type": "email", "label": "E", "validations": [{"kind": "required", "message": "Required"}]}
    )
    assert field.is_required is True
    assert field.has_rule("email") is False
