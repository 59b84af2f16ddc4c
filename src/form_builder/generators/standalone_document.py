"""
Standalone HTML document generator.

The document carries everything needed to run without the builder:
  - one `.form-group` per field with `data-*` metadata (type, default presence,
    conditional rule with a JSON-encoded operand, compiled rules) and native
    constraint attributes (`required`, `min`, `max`, `minlength`, `maxlength`,
    `pattern`) derived from the same compiled rules,
  - a script that re-evaluates visibility on every `input` / `change` event using
    the same comparison rules as the in-app evaluator, and disables the controls
    of hidden groups so their values are never submitted,
  - a submit handler that validates visible groups with the compiled rules,
    surfaces each group's first message through `setCustomValidity`, and
    collects `FormData`.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional, Sequence

from form_builder.generators.templates import attr, indent, js_string, text
from form_builder.generators.visibility_script import MATCHES_CONDITION_JS
from form_builder.schemas.form import FormField
from form_builder.settings import ExportSettings
from form_builder.validation.compiler import Constraint, compile_field
from form_builder.validation.rules import EMAIL_RE
from form_builder.visibility.coercion import to_text

logger = logging.getLogger("form_builder.generators")

_STYLE = """body {
  font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
  line-height: 1.5;
  padding: 1rem;
  max-width: 600px;
  margin: 0 auto;
}
.form-group {
  margin-bottom: 1rem;
}
label {
  display: block;
  margin-bottom: 0.5rem;
  font-weight: 500;
}
.choice label {
  display: inline;
}
input, select, textarea {
  width: 100%;
  padding: 0.5rem;
  border: 1px solid #d1d5db;
  border-radius: 0.25rem;
  font-size: 1rem;
}
input[type="checkbox"], input[type="radio"] {
  width: auto;
}
button {
  background-color: #2563eb;
  color: white;
  border: none;
  padding: 0.5rem 1rem;
  border-radius: 0.25rem;
  cursor: pointer;
  font-size: 1rem;
}
button:hover {
  background-color: #1d4ed8;
}
.error {
  color: red;
  font-size: 0.875rem;
  margin-top: 0.25rem;
}"""

_RUNTIME_JS = r"""function readValue(group, raw) {
  var type = group.dataset.fieldType;
  var id = group.dataset.fieldId;
  var present = group.hasAttribute("data-has-default") || touched.has(id);
  if (type === "radio") {
    var checked = group.querySelector('input[type="radio"]:checked');
    return checked ? checked.value : undefined;
  }
  var control = document.getElementById(id);
  if (!control) return undefined;
  // Absent means untouched with no default; a cleared control reports "".
  if (raw && !present) return undefined;
  if (type === "checkbox") return control.checked;
  if (type === "file") return Array.from(control.files || []);
  if (type === "number") return control.value === "" ? "" : Number(control.value);
  return control.value;
}

function updateVisibility() {
  groups.forEach(function (group) {
    var sourceId = group.dataset.conditionalField;
    if (sourceId === undefined) return;
    var source = form.querySelector('[data-field-id="' + CSS.escape(sourceId) + '"]');
    var shouldShow = false;
    if (source && sourceId !== group.dataset.fieldId) {
      // Raw value only: the source's own visibility is never consulted.
      var operand = JSON.parse(group.dataset.conditionalOperand);
      shouldShow = matchesCondition(readValue(source, true), group.dataset.conditionalOperator, operand);
    }
    group.style.display = shouldShow ? "block" : "none";
    group.dataset.hiddenByCondition = shouldShow ? "false" : "true";
    group.querySelectorAll("input, select, textarea").forEach(function (control) {
      control.disabled = !shouldShow;
    });
  });
}

function isEmpty(value) {
  return value === undefined || value === null || value === "" || (Array.isArray(value) && value.length === 0);
}

var BASE_CHECKS = {
  text: [function (v) { return typeof v === "string"; }, "Expected string"],
  textarea: [function (v) { return typeof v === "string"; }, "Expected string"],
  select: [function (v) { return typeof v === "string"; }, "Expected string"],
  radio: [function (v) { return typeof v === "string"; }, "Expected string"],
  date: [function (v) { return typeof v === "string"; }, "Expected string"],
  email: [isEmail, "Invalid email"],
  number: [function (v) { return typeof v === "number" && !isNaN(v); }, "Expected number"],
  checkbox: [function (v) { return typeof v === "boolean"; }, "Expected boolean"],
  file: [function (v) { return Array.isArray(v); }, "Expected file"]
};

function isEmail(value) {
  return typeof value === "string" && EMAIL_RE.test(value);
}

function ruleHolds(rule, value) {
  if (rule.malformed) return false;
  switch (rule.kind) {
    case "min":
    case "minLength":
      return (rule.kind === "min" ? value : value.length) >= rule.operand;
    case "max":
    case "maxLength":
      return (rule.kind === "max" ? value : value.length) <= rule.operand;
    case "pattern": return new RegExp("^(?:" + rule.operand + ")$").test(value);
    case "email": return isEmail(value);
  }
  return true;
}

function validateGroup(group) {
  var type = group.dataset.fieldType;
  var payload = JSON.parse(group.dataset.rules || "{}");
  var required = payload.required || [];
  var value = readValue(group, false);
  if (!required.length && isEmpty(value)) return [];
  var missing = required.filter(function () {
    return type === "checkbox" ? value !== true : isEmpty(value) || value === false;
  });
  if (missing.length) return missing;
  var base = BASE_CHECKS[type] || BASE_CHECKS.text;
  if (!base[0](value)) return [base[1]];
  return (payload.rules || []).filter(function (rule) {
    return !ruleHolds(rule, value);
  }).map(function (rule) {
    return rule.message;
  });
}

function setValidity(group, messages) {
  group.querySelectorAll("input, select, textarea").forEach(function (control) {
    control.setCustomValidity(messages.length ? messages[0] : "");
  });
  var errorEl = group.querySelector(".error");
  if (errorEl) errorEl.textContent = messages.join(" ");
}

function markTouched(event) {
  var group = event.target.closest("[data-field-id]");
  if (group) {
    touched.add(group.dataset.fieldId);
    setValidity(group, []);
  }
  updateVisibility();
}

form.addEventListener("input", markTouched);
form.addEventListener("change", markTouched);
updateVisibility();

form.addEventListener("submit", function (event) {
  event.preventDefault();
  updateVisibility();
  var isValid = true;
  groups.forEach(function (group) {
    var messages = group.dataset.hiddenByCondition === "true" ? [] : validateGroup(group);
    setValidity(group, messages);
    if (messages.length) isValid = false;
  });
  if (!isValid) {
    form.reportValidity();
    return;
  }
  var data = {};
  new FormData(form).forEach(function (value, key) {
    data[key] = value;
  });
  console.log("Form data:", data);
  alert("Form submitted successfully!");
});"""


# native constraint attribute -> (rule kind, field types the attribute is valid on, tighter-of)
_NATIVE_BOUNDS = (
    ("min", "min", frozenset({"number"}), max),
    ("max", "max", frozenset({"number"}), min),
    ("minlength", "minLength", frozenset({"text", "email", "textarea"}), max),
    ("maxlength", "maxLength", frozenset({"text", "email", "textarea"}), min),
)
_NATIVE_PATTERN_TYPES = frozenset({"text", "email"})


def _rules_payload(constraint: Constraint) -> Dict[str, Any]:
    rules: List[Dict[str, Any]] = []
    for rule in constraint.rules:
        entry: Dict[str, Any] = {"kind": rule.kind, "message": rule.message}
        if rule.malformed:
            entry["malformed"] = True
        elif rule.kind == "pattern":
            entry["operand"] = rule.operand.pattern
        elif rule.operand is not None:
            entry["operand"] = rule.operand
        rules.append(entry)
    return {"required": [r.message for r in constraint.required], "rules": rules}


def native_constraint_attrs(constraint: Constraint) -> str:
    """
    Native HTML constraint attributes mirroring the compiled rules.

    Malformed rules get no attribute; the script rejects them through
    `setCustomValidity`. Repeated bounds collapse to the tightest one and only the
    first pattern is expressible natively.
    """
    valid = [r for r in constraint.rules if not r.malformed]
    out = ""
    for name, kind, types, tighter in _NATIVE_BOUNDS:
        if constraint.field_type not in types:
            continue
        operands = [r.operand for r in valid if r.kind == kind]
        if operands:
            out += f' {name}="{attr(to_text(tighter(operands)))}"'
    if constraint.field_type in _NATIVE_PATTERN_TYPES:
        patterns = [r.operand.pattern for r in valid if r.kind == "pattern"]
        if patterns:
            out += f' pattern="{attr(patterns[0])}"'
    if constraint.required:
        out += " required"
    return out


def _group_attrs(field: FormField, payload: Dict[str, Any]) -> str:
    parts = [
        'class="form-group"',
        f'data-field-id="{attr(field.id)}"',
        f'data-field-type="{attr(field.type)}"',
    ]
    if field.default_value is not None and field.type != "file":
        parts.append("data-has-default")
    parts.append(f'data-rules="{attr(json.dumps(payload, ensure_ascii=False))}"')
    rule = field.conditional_display
    if rule is not None:
        parts += [
            f'data-conditional-field="{attr(rule.source_field_id)}"',
            f'data-conditional-operator="{attr(rule.operator)}"',
            f'data-conditional-operand="{attr(json.dumps(rule.operand, ensure_ascii=False))}"',
            'style="display: none;"',
        ]
    return " ".join(parts)


def _control(field: FormField, constraint: Constraint, hidden: bool) -> List[str]:
    fid = attr(field.id)
    flags = native_constraint_attrs(constraint)
    if hidden:
        flags += " disabled"
    default = field.default_value

    if field.type in ("text", "email", "number", "date"):
        value = f' value="{attr(to_text(default))}"' if default is not None else ""
        placeholder = f' placeholder="{attr(field.placeholder or "")}"' if field.type != "date" else ""
        return [f'<input type="{field.type}" id="{fid}" name="{fid}"{placeholder}{value}{flags}>']
    if field.type == "textarea":
        content = text(to_text(default)) if default is not None else ""
        return [f'<textarea id="{fid}" name="{fid}" placeholder="{attr(field.placeholder or "")}"{flags}>{content}</textarea>']
    if field.type == "select":
        lines = [f'<select id="{fid}" name="{fid}"{flags}>', '  <option value="">Select an option</option>']
        for opt in field.options or []:
            selected = " selected" if default is not None and to_text(default) == opt.value else ""
            lines.append(f'  <option value="{attr(opt.value)}"{selected}>{text(opt.label)}</option>')
        return lines + ["</select>"]
    if field.type == "checkbox":
        checked = " checked" if default is True else ""
        return [
            '<div class="choice">',
            f'  <input type="checkbox" id="{fid}" name="{fid}" value="true"{checked}{flags}>',
            f'  <label for="{fid}">{text(field.placeholder or "Checkbox")}</label>',
            "</div>",
        ]
    if field.type == "radio":
        lines = ['<div role="radiogroup">']
        for i, opt in enumerate(field.options or []):
            oid = attr(f"{field.id}-{i}")
            checked = " checked" if default is not None and to_text(default) == opt.value else ""
            lines += [
                '  <div class="choice">',
                f'    <input type="radio" id="{oid}" name="{fid}" value="{attr(opt.value)}"{checked}{flags}>',
                f'    <label for="{oid}">{text(opt.label)}</label>',
                "  </div>",
            ]
        return lines + ["</div>"]
    if field.type == "file":
        return [f'<input type="file" id="{fid}" name="{fid}"{flags}>']
    return []


def field_group(field: FormField) -> str:
    constraint = compile_field(field)
    payload = _rules_payload(constraint)
    hidden = field.conditional_display is not None
    lines = [
        f"<div {_group_attrs(field, payload)}>",
        f'  <label for="{attr(field.id)}">{text(field.label)}</label>',
        *("  " + line for line in _control(field, constraint, hidden)),
        f'  <div class="error" id="{attr(field.id)}-error"></div>',
        "</div>",
    ]
    return "\n".join(lines)


def generate_standalone_document(
    title: str,
    fields: Sequence[FormField],
    settings: Optional[ExportSettings] = None,
) -> str:
    groups = "\n".join(field_group(f) for f in fields)
    script = "\n\n".join(
        [
            "var EMAIL_RE = new RegExp(" + js_string(EMAIL_RE.pattern) + ', "i");',
            MATCHES_CONDITION_JS,
            'document.addEventListener("DOMContentLoaded", function () {\n'
            + '  var form = document.getElementById("dynamicForm");\n'
            + '  var groups = Array.from(form.querySelectorAll("[data-field-id]"));\n'
            + "  var touched = new Set();\n\n"
            + indent(_RUNTIME_JS, 2)
            + "\n});",
        ]
    )

    body = ['<form id="dynamicForm" novalidate>']
    if groups:
        body.append(indent(groups, 2))
    body += ['  <button type="submit">Submit</button>', "</form>"]

    out = "\n".join(
        [
            "<!DOCTYPE html>",
            '<html lang="en">',
            "<head>",
            '  <meta charset="UTF-8">',
            '  <meta name="viewport" content="width=device-width, initial-scale=1.0">',
            f"  <title>{text(title)}</title>",
            "  <style>",
            indent(_STYLE, 4),
            "  </style>",
            "</head>",
            "<body>",
            f"  <h2>{text(title)}</h2>",
            indent("\n".join(body), 2),
            "  <script>",
            indent(script, 4),
            "  </script>",
            "</body>",
            "</html>",
        ]
    )
    logger.debug("generated standalone document for %d fields (%d chars)", len(fields), len(out))
    return out + "\n"
