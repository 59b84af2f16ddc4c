import copy

from form_builder.errors import DiagnosticCode
from form_builder.schemas import FileRef, FormField
from form_builder.visibility import compute_visibility, evaluate_visibility


def _field(fid, ftype="text", cond=None, **extra):
    data = {"id": fid, "type": ftype, "label": fid, "validations": []}
    if cond is not None:
        data["conditionalDisplay"] = cond
    data.update(extra)
    return FormField.model_validate(data)


def test_greater_than_example():
    fields = [_field("A", "number"), _field("B", cond={"sourceFieldId": "A", "operator": ">", "operand": 10})]
    assert compute_visibility(fields, {"A": 15}) == {"A": True, "B": True}
    assert compute_visibility(fields, {"A": 5}) == {"A": True, "B": False}
    assert compute_visibility(fields, {}) == {"A": True, "B": False}


def test_fields_without_condition_are_always_visible():
    fields = [_field("a"), _field("b", "checkbox")]
    assert compute_visibility(fields, {}) == {"a": True, "b": True}


def test_absent_source_value_hides_even_for_not_equal():
    fields = [_field("src"), _field("dep", cond={"sourceFieldId": "src", "operator": "!=", "operand": "x"})]
    assert compute_visibility(fields, {})["dep"] is False
    assert compute_visibility(fields, {"src": None})["dep"] is False
    assert compute_visibility(fields, {"src": "y"})["dep"] is True


def test_dependency_cycle_terminates_using_raw_values():
    fields = [
        _field("A", cond={"sourceFieldId": "B", "operator": "==", "operand": "yes"}),
        _field("B", cond={"sourceFieldId": "A", "operator": "==", "operand": "yes"}),
    ]
    assert compute_visibility(fields, {"A": "yes", "B": "no"}) == {"A": False, "B": True}
    assert compute_visibility(fields, {"A": "yes", "B": "yes"}) == {"A": True, "B": True}


def test_hidden_source_still_drives_dependents_by_raw_value():
    fields = [
        _field("gate", "checkbox"),
        _field("mid", "number", cond={"sourceFieldId": "gate", "operator": "==", "operand": True}),
        _field("leaf", cond={"sourceFieldId": "mid", "operator": ">=", "operand": 3}),
    ]
    visibility = compute_visibility(fields, {"gate": False, "mid": 4})
    assert visibility["mid"] is False
    assert visibility["leaf"] is True


def test_unresolved_dependency_is_hidden_with_diagnostic():
    fields = [_field("orphan", cond={"sourceFieldId": "missing", "operator": "==", "operand": "x"})]
    visibility, diagnostics = evaluate_visibility(fields, {"missing": "x"})
    assert visibility == {"orphan": False}
    assert [d.code for d in diagnostics] == [DiagnosticCode.UNRESOLVED_DEPENDENCY]


def test_self_dependency_is_hidden_with_diagnostic():
    fields = [_field("loop", cond={"sourceFieldId": "loop", "operator": "==", "operand": "x"})]
    visibility, diagnostics = evaluate_visibility(fields, {"loop": "x"})
    assert visibility == {"loop": False}
    assert diagnostics[0].code == DiagnosticCode.SELF_DEPENDENCY


def test_loose_equality_between_numeric_string_and_number():
    fields = [_field("qty"), _field("bulk", cond={"sourceFieldId": "qty", "operator": "==", "operand": 10})]
    assert compute_visibility(fields, {"qty": "10"})["bulk"] is True
    assert compute_visibility(fields, {"qty": "10.0"})["bulk"] is True
    assert compute_visibility(fields, {"qty": "ten"})["bulk"] is False


def test_checkbox_source_against_string_operand():
    fields = [_field("agree", "checkbox"), _field("more", cond={"sourceFieldId": "agree", "operator": "==", "operand": "true"})]
    assert compute_visibility(fields, {"agree": True})["more"] is True
    assert compute_visibility(fields, {"agree": False})["more"] is False


def test_string_operators_use_string_forms():
    src = _field("name")
    fields = [
        src,
        _field("c", cond={"sourceFieldId": "name", "operator": "contains", "operand": "ann"}),
        _field("s", cond={"sourceFieldId": "name", "operator": "startsWith", "operand": "Jo"}),
        _field("e", cond={"sourceFieldId": "name", "operator": "endsWith", "operand": "na"}),
    ]
    assert compute_visibility(fields, {"name": "Joanna"}) == {"name": True, "c": True, "s": True, "e": True}
    assert compute_visibility(fields, {"name": "Mark"}) == {"name": True, "c": False, "s": False, "e": False}

    numeric = [_field("n", "number"), _field("d", cond={"sourceFieldId": "n", "operator": "startsWith", "operand": 12})]
    assert compute_visibility(numeric, {"n": 123.0})["d"] is True


def test_file_source_compares_by_name():
    fields = [_field("upload", "file"), _field("note", cond={"sourceFieldId": "upload", "operator": "endsWith", "operand": ".pdf"})]
    assert compute_visibility(fields, {"upload": [FileRef(name="cv.pdf")]})["note"] is True
    assert compute_visibility(fields, {"upload": [FileRef(name="cv.png")]})["note"] is False


def test_manual_hidden_flag_does_not_affect_visibility():
    fields = [_field("a", isManuallyHidden=True)]
    assert compute_visibility(fields, {}) == {"a": True}


def test_compute_visibility_does_not_mutate_inputs():
    fields = [_field("A", "number"), _field("B", cond={"sourceFieldId": "A", "operator": "<=", "operand": 2})]
    values = {"A": 1}
    before_fields = copy.deepcopy(fields)
    before_values = dict(values)
    compute_visibility(fields, values)
    assert fields == before_fields
    assert values == before_values


def test_cleared_source_value_is_present_not_absent():
    fields = [
        _field("size", "select", options=[{"label": "S", "value": "s"}]),
        _field("dep", cond={"sourceFieldId": "size", "operator": "!=", "operand": "s"}),
    ]
    assert compute_visibility(fields, {"size": ""})["dep"] is True
    assert compute_visibility(fields, {"size": None})["dep"] is False
    assert compute_visibility(fields, {"size": "s"})["dep"] is False
