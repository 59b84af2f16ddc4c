"""
Export surface: the four artifact kinds the host UI can request.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Callable, Dict, Optional, Sequence, Union

from form_builder.generators.component_code import generate_component_code
from form_builder.generators.embed_snippet import generate_embed_snippet
from form_builder.generators.json_export import generate_json
from form_builder.generators.standalone_document import generate_standalone_document
from form_builder.schemas.form import FormField
from form_builder.settings import ExportSettings, load_settings


class ArtifactKind(str, Enum):
    JSON = "json"
    COMPONENT_CODE = "component-code"
    STANDALONE_DOCUMENT = "standalone-document"
    EMBED_SNIPPET = "embed-snippet"


Generator = Callable[[str, Sequence[FormField], Optional[ExportSettings]], str]

GENERATORS: Dict[ArtifactKind, Generator] = {
    ArtifactKind.JSON: generate_json,
    ArtifactKind.COMPONENT_CODE: generate_component_code,
    ArtifactKind.STANDALONE_DOCUMENT: generate_standalone_document,
    ArtifactKind.EMBED_SNIPPET: generate_embed_snippet,
}

_EXTENSIONS = {
    ArtifactKind.JSON: "json",
    ArtifactKind.COMPONENT_CODE: "jsx",
    ArtifactKind.STANDALONE_DOCUMENT: "html",
    ArtifactKind.EMBED_SNIPPET: "txt",
}


def _coerce_kind(kind: Union[ArtifactKind, str]) -> ArtifactKind:
    try:
        return ArtifactKind(kind)
    except ValueError:
        allowed = ", ".join(k.value for k in ArtifactKind)
        raise ValueError(f"unknown artifact kind {kind!r} (expected one of: {allowed})") from None


def export_form(
    kind: Union[ArtifactKind, str],
    title: str,
    fields: Sequence[FormField],
    settings: Optional[ExportSettings] = None,
) -> str:
    return GENERATORS[_coerce_kind(kind)](title, fields, settings)


def export_all(
    title: str,
    fields: Sequence[FormField],
    settings: Optional[ExportSettings] = None,
) -> Dict[ArtifactKind, str]:
    cfg = settings or load_settings()
    return {kind: gen(title, fields, cfg) for kind, gen in GENERATORS.items()}


def artifact_filename(kind: Union[ArtifactKind, str], title: str) -> str:
    """Download name for an artifact: lower-cased title, whitespace runs -> '-'."""
    stem = re.sub(r"\s+", "-", str(title or "").strip().lower()) or "form"
    return f"{stem}.{_EXTENSIONS[_coerce_kind(kind)]}"
