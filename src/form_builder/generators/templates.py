"""
Small render helpers shared by the artifact generators.

Everything interpolated into generated markup or code goes through one of these
so titles, labels and operands can never break out of their context.
"""

from __future__ import annotations

import html
import json
import re
from typing import Any, Iterable

from form_builder.schemas.values import is_number

_JS_IDENT_RE = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")
_JSX_SAFE_ATTR_RE = re.compile(r'^[^"\\{}<>&\n\r]*$')


def js_string(value: Any) -> str:
    """JS string literal, safe inside a <script> block."""
    s = json.dumps(str(value), ensure_ascii=False)
    return s.replace("</", "<\\/").replace("\u2028", "\\u2028").replace("\u2029", "\\u2029")


def js_literal(value: Any) -> str:
    if value is None:
        return "undefined"
    if isinstance(value, bool):
        return "true" if value else "false"
    if is_number(value):
        return json.dumps(value)
    return js_string(value)


def js_key(name: str) -> str:
    return name if _JS_IDENT_RE.match(name) else js_string(name)


def js_member(obj: str, name: str) -> str:
    return f"{obj}.{name}" if _JS_IDENT_RE.match(name) else f"{obj}[{js_string(name)}]"


def jsx_attr(value: Any) -> str:
    s = str(value)
    return f'"{s}"' if _JSX_SAFE_ATTR_RE.match(s) else "{" + js_string(s) + "}"


def jsx_text(value: Any) -> str:
    return "{" + js_string(value) + "}"


def attr(value: Any) -> str:
    return html.escape(str(value), quote=True)


def text(value: Any) -> str:
    return html.escape(str(value), quote=False)


def indent(block: str, spaces: int) -> str:
    pad = " " * spaces
    return "\n".join(pad + line if line else line for line in block.splitlines())


def join_blocks(blocks: Iterable[str], sep: str = "\n") -> str:
    return sep.join(b for b in blocks if b)


def component_name(title: str) -> str:
    base = re.sub(r"[^A-Za-z0-9_$]+", "", str(title or ""))
    if not base or base[0].isdigit():
        base = f"Generated{base}"
    return f"{base}Form"
