import json

import pytest

from form_builder.generators import ArtifactKind, artifact_filename, export_all, export_form, generate_embed_snippet
from form_builder.schemas import FormField
from form_builder.settings import ExportSettings, load_settings


@pytest.mark.parametrize("kind", ["json", "component-code", "standalone-document", "embed-snippet"])
def test_every_artifact_kind_handles_empty_field_list(kind):
    out = export_form(kind, "Blank", [])
    assert isinstance(out, str)
    assert out.strip()


def test_export_form_dispatches_by_kind():
    fields = [FormField.model_validate({"id": "a", "type": "text", "label": "A"})]
    assert json.loads(export_form(ArtifactKind.JSON, "T", fields))["fields"][0]["id"] == "a"
    assert "function TForm()" in export_form("component-code", "T", fields)
    assert export_form("standalone-document", "T", fields).startswith("<!DOCTYPE html>")
    assert export_form("embed-snippet", "T", fields).startswith("<iframe")


def test_export_form_rejects_unknown_kind():
    with pytest.raises(ValueError):
        export_form("pdf", "T", [])


def test_export_all_produces_each_kind():
    out = export_all("T", [])
    assert set(out) == set(ArtifactKind)
    assert json.loads(out[ArtifactKind.JSON]) == {"title": "T", "fields": []}


def test_embed_snippet_uses_settings_and_escapes_title():
    snippet = generate_embed_snippet('My "form"', [], settings=ExportSettings(embed_url="https://forms.example.com/f/1", embed_height=640))
    assert 'src="https://forms.example.com/f/1"' in snippet
    assert 'height="640"' in snippet
    assert 'title="My &quot;form&quot;"' in snippet


@pytest.mark.parametrize(
    "kind,title,expected",
    [
        ("json", "Contact Us", "contact-us.json"),
        ("component-code", "Contact  Us", "contact-us.jsx"),
        ("standalone-document", "Survey", "survey.html"),
        ("embed-snippet", "  ", "form.txt"),
    ],
)
def test_artifact_filename(kind, title, expected):
    assert artifact_filename(kind, title) == expected


def test_load_settings_from_env(monkeypatch):
    monkeypatch.setenv("FORM_BUILDER_JSON_INDENT", "4")
    monkeypatch.setenv("FORM_BUILDER_UI_LIBRARY", "@/components/ui")
    monkeypatch.setenv("FORM_BUILDER_EMBED_URL", "https://example.com/form")
    monkeypatch.setenv("FORM_BUILDER_EMBED_HEIGHT", "not-a-number")
    settings = load_settings()
    assert settings.json_indent == 4
    assert settings.ui_library == "@/components/ui"
    assert settings.embed_url == "https://example.com/form"
    assert settings.embed_height == 800


def test_load_settings_defaults(monkeypatch):
    for name in ("FORM_BUILDER_JSON_INDENT", "FORM_BUILDER_UI_LIBRARY", "FORM_BUILDER_EMBED_URL", "FORM_BUILDER_EMBED_HEIGHT"):
        monkeypatch.delenv(name, raising=False)
    assert load_settings() == ExportSettings()
    assert 'src="YOUR_FORM_URL_HERE"' in export_form("embed-snippet", "T", [])
