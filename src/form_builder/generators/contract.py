from __future__ import annotations

from functools import lru_cache
from typing import Any, Dict, List

import jsonschema

from form_builder.schemas.form import Form


@lru_cache(maxsize=1)
def form_document_schema() -> Dict[str, Any]:
    """JSON Schema (draft 2020-12) of the export format, derived from the field model."""
    return Form.model_json_schema(by_alias=True, mode="serialization")


@lru_cache(maxsize=1)
def _validator() -> jsonschema.Validator:
    schema = form_document_schema()
    jsonschema.Draft202012Validator.check_schema(schema)
    return jsonschema.Draft202012Validator(schema)


def validate_form_document(doc: Any) -> List[str]:
    """
    Check a decoded JSON export against the form document schema.

    Returns human-readable error strings (`<path>: <message>`), empty when valid.
    """
    errors = sorted(_validator().iter_errors(doc), key=lambda e: [str(p) for p in e.path])
    out: List[str] = []
    for err in errors:
        path = "/".join(str(p) for p in err.path) or "<root>"
        out.append(f"{path}: {err.message}")
    return out
