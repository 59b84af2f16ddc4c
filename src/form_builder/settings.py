"""
Export settings, read from environment variables.

- `FORM_BUILDER_JSON_INDENT=2` indent used by the JSON export
- `FORM_BUILDER_UI_LIBRARY=your-ui-library` import source for UI components in generated code
- `FORM_BUILDER_EMBED_URL=YOUR_FORM_URL_HERE` iframe `src` of the embed snippet
- `FORM_BUILDER_EMBED_HEIGHT=800` iframe height of the embed snippet
"""

from __future__ import annotations

import os
from dataclasses import dataclass


def _env_int(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_str(name: str, default: str) -> str:
    v = (os.getenv(name) or "").strip()
    return v or default


@dataclass(frozen=True)
class ExportSettings:
    json_indent: int = 2
    ui_library: str = "your-ui-library"
    embed_url: str = "YOUR_FORM_URL_HERE"
    embed_height: int = 800


def load_settings() -> ExportSettings:
    return ExportSettings(
        json_indent=max(0, _env_int("FORM_BUILDER_JSON_INDENT", 2)),
        ui_library=_env_str("FORM_BUILDER_UI_LIBRARY", "your-ui-library"),
        embed_url=_env_str("FORM_BUILDER_EMBED_URL", "YOUR_FORM_URL_HERE"),
        embed_height=max(1, _env_int("FORM_BUILDER_EMBED_HEIGHT", 800)),
    )
