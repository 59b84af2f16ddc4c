from __future__ import annotations

from typing import Optional, Sequence

from form_builder.generators.templates import attr
from form_builder.schemas.form import FormField
from form_builder.settings import ExportSettings, load_settings


def generate_embed_snippet(
    title: str,
    fields: Sequence[FormField],
    settings: Optional[ExportSettings] = None,
) -> str:
    # The snippet points at a hosted copy of the form; the field list does not change it.
    cfg = settings or load_settings()
    return "\n".join(
        [
            "<iframe",
            f'  src="{attr(cfg.embed_url)}"',
            '  width="100%"',
            f'  height="{cfg.embed_height}"',
            '  style="border: none;"',
            f'  title="{attr(title)}"',
            "></iframe>",
        ]
    )
