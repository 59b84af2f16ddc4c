from __future__ import annotations

import json
from typing import Optional, Sequence

from form_builder.schemas.form import Form, FormField, form_to_dict
from form_builder.settings import ExportSettings, load_settings


def generate_json(title: str, fields: Sequence[FormField], settings: Optional[ExportSettings] = None) -> str:
    """
    Serialize `{title, fields}` exactly as the field model declares it.

    Key order follows the model's attribute order; optional attributes that are
    not set are omitted rather than written as null, so `parse_form_json`
    round-trips the output without loss.
    """
    cfg = settings or load_settings()
    form = Form(title=title, fields=list(fields))
    return json.dumps(form_to_dict(form), indent=cfg.json_indent or None, ensure_ascii=False)
