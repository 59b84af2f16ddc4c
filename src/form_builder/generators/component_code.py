"""
React component generator (react-hook-form + zod).

The zod schema is built from the compiled constraint of each field, so the
generated chain applies the same rules in the same order as `compile_field`:
incompatible rules are dropped and rules with unusable operands become checks
that can never pass.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Set

from form_builder.generators.templates import (
    component_name,
    indent,
    js_key,
    js_literal,
    js_member,
    js_string,
    jsx_attr,
    jsx_text,
)
from form_builder.generators.visibility_script import MATCHES_CONDITION_JS
from form_builder.schemas.form import FormField
from form_builder.settings import ExportSettings, load_settings
from form_builder.validation.compiler import CompiledRule, compile_field
from form_builder.validation.rules import STRING_FIELD_TYPES

logger = logging.getLogger("form_builder.generators")

_NUMBER_PREPROCESS = "z.preprocess((value) => (Number.isNaN(value) ? undefined : value), {inner})"


def _base_schema(field: FormField, required_message: Optional[str]) -> str:
    if field.type == "email":
        return 'z.string().email({ message: "Invalid email" })'
    if field.type in STRING_FIELD_TYPES:
        return "z.string()"
    if field.type == "number":
        if required_message is not None:
            return f"z.number({{ required_error: {js_string(required_message)} }})"
        return "z.number()"
    if field.type == "checkbox":
        return "z.boolean()"
    if field.type == "file":
        return "z.instanceof(FileList)"
    return "z.any()"


def _rule_call(field_type: str, rule: CompiledRule) -> str:
    msg = js_string(rule.message)
    if rule.kind == "required":
        if field_type == "checkbox":
            return f".refine((value) => value === true, {{ message: {msg} }})"
        if field_type == "file":
            return f".refine((files) => files.length > 0, {{ message: {msg} }})"
        if field_type == "number":
            return ""
        return f".min(1, {msg})"
    if rule.malformed:
        # Unsatisfiable check that keeps the zod chain type intact.
        if field_type == "number":
            return f".lt(-Infinity, {msg})"
        return f".regex(/(?!)/, {{ message: {msg} }})"
    if rule.kind in ("min", "minLength"):
        return f".min({js_literal(rule.operand)}, {msg})"
    if rule.kind in ("max", "maxLength"):
        return f".max({js_literal(rule.operand)}, {msg})"
    if rule.kind == "pattern":
        anchored = js_string(f"^(?:{rule.operand.pattern})$")
        return f".regex(new RegExp({anchored}), {{ message: {msg} }})"
    if rule.kind == "email":
        return f".email({{ message: {msg} }})"
    return ""


def schema_expression(field: FormField) -> str:
    constraint = compile_field(field)
    ordered = sorted([*constraint.required, *constraint.rules], key=lambda r: r.index)
    required_message = constraint.required[0].message if constraint.required else None

    expr = _base_schema(field, required_message)
    for rule in ordered:
        expr += _rule_call(field.type, rule)

    if constraint.optional:
        if field.type in STRING_FIELD_TYPES:
            # Empty strings skip every rule on optional fields.
            expr = f'{expr}.or(z.literal("")).optional()'
        else:
            expr = f"{expr}.optional()"
    if field.type == "number":
        expr = _NUMBER_PREPROCESS.format(inner=expr)
    return expr


def _register(field: FormField) -> str:
    if field.type == "number":
        return f"{{...form.register({js_string(field.id)}, {{ valueAsNumber: true }})}}"
    return f"{{...form.register({js_string(field.id)})}}"


def _control(field: FormField) -> List[str]:
    fid = jsx_attr(field.id)
    placeholder = jsx_attr(field.placeholder or "")
    reg = _register(field)

    if field.type in ("text", "email", "number", "date", "file"):
        lines = ["<Input", f"  id={fid}", f'  type="{field.type}"']
        if field.type not in ("date", "file"):
            lines.append(f"  placeholder={placeholder}")
        return lines + [f"  {reg}", "/>"]
    if field.type == "textarea":
        return ["<Textarea", f"  id={fid}", f"  placeholder={placeholder}", f"  {reg}", "/>"]
    if field.type == "select":
        lines = [f"<select id={fid} {reg}>", '  <option value="">Select an option</option>']
        for opt in field.options or []:
            lines.append(f"  <option value={jsx_attr(opt.value)}>{jsx_text(opt.label)}</option>")
        return lines + ["</select>"]
    if field.type == "checkbox":
        return [
            '<div className="flex items-center gap-2">',
            f'  <input type="checkbox" id={fid} {reg} />',
            f'  <label htmlFor={fid} className="text-sm">{jsx_text(field.placeholder or "Checkbox")}</label>',
            "</div>",
        ]
    if field.type == "radio":
        lines = ['<div role="radiogroup">']
        for opt in field.options or []:
            oid = jsx_attr(f"{field.id}-{opt.value}")
            lines += [
                '  <div className="flex items-center gap-2">',
                f'    <input type="radio" id={oid} value={jsx_attr(opt.value)} {reg} />',
                f"    <label htmlFor={oid}>{jsx_text(opt.label)}</label>",
                "  </div>",
            ]
        return lines + ["</div>"]
    return []


def _guard(field: FormField, field_ids: Set[str]) -> Optional[str]:
    rule = field.conditional_display
    if rule is None:
        return None
    if rule.source_field_id == field.id or rule.source_field_id not in field_ids:
        # Unresolvable dependency: never rendered.
        return "false"
    return (
        f"matchesCondition(form.watch({js_string(rule.source_field_id)}), "
        f"{js_string(rule.operator)}, {js_literal(rule.operand)})"
    )


def field_block(field: FormField, field_ids: Set[str]) -> str:
    error = js_member("form.formState.errors", field.id)
    lines = [
        '<div className="space-y-2">',
        f'  <label htmlFor={jsx_attr(field.id)} className="text-sm font-medium">{jsx_text(field.label)}</label>',
        *("  " + line for line in _control(field)),
        f"  {{{error} && (",
        f'    <p className="text-sm text-red-500">{{{error}.message}}</p>',
        "  )}",
        "</div>",
    ]
    block = "\n".join(lines)
    guard = _guard(field, field_ids)
    if guard is None:
        return block
    return "\n".join([f"{{{guard} && (", indent(block, 2), ")}"])


def generate_component_code(
    title: str,
    fields: Sequence[FormField],
    settings: Optional[ExportSettings] = None,
) -> str:
    cfg = settings or load_settings()
    field_ids = {f.id for f in fields}

    imports = "\n".join(
        [
            'import { useForm } from "react-hook-form";',
            'import { zodResolver } from "@hookform/resolvers/zod";',
            'import * as z from "zod";',
            f"import {{ Button, Input, Textarea }} from {js_string(cfg.ui_library)};",
        ]
    )

    if fields:
        entries = ",\n".join(f"  {js_key(f.id)}: {schema_expression(f)}" for f in fields)
        schema = f"const formSchema = z.object({{\n{entries},\n}});"
    else:
        schema = "const formSchema = z.object({});"

    defaults = [f for f in fields if f.default_value is not None]
    if defaults:
        entries = ",\n".join(f"  {js_key(f.id)}: {js_literal(f.default_value)}" for f in defaults)
        default_values = f"const defaultValues = {{\n{entries},\n}};"
    else:
        default_values = "const defaultValues = {};"

    name = component_name(title)
    body = "\n\n".join(field_block(f, field_ids) for f in fields)
    form_children = [f'<h2 className="text-2xl font-bold">{jsx_text(title)}</h2>']
    if body:
        form_children.append(body)
    form_children.append('<Button type="submit">Submit</Button>')

    component = "\n".join(
        [
            f"function {name}() {{",
            "  const form = useForm({",
            "    resolver: zodResolver(formSchema),",
            "    defaultValues,",
            "    shouldUnregister: true,",
            "  });",
            "",
            "  function onSubmit(data) {",
            "    console.log(data);",
            "  }",
            "",
            "  return (",
            '    <form onSubmit={form.handleSubmit(onSubmit)} className="space-y-6">',
            indent("\n\n".join(form_children), 6),
            "    </form>",
            "  );",
            "}",
            "",
            f"export default {name};",
        ]
    )

    sections = [imports, schema]
    if any(f.conditional_display is not None for f in fields):
        sections.append(MATCHES_CONDITION_JS)
    sections += [default_values, component]
    out = "\n\n".join(sections) + "\n"
    logger.debug("generated component code for %d fields (%d chars)", len(fields), len(out))
    return out
