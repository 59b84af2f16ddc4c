"""
form-builder-core: the pure core behind a visual form builder.

- Field model and JSON contract: `form_builder.schemas`
- Builder edit operations: `form_builder.editing`
- Validation compiler: `form_builder.validation`
- Conditional visibility: `form_builder.visibility`
- Artifact generators / export surface: `form_builder.generators`
- Host entry point: `form_builder.recompute.recompute`
"""

from form_builder.errors import Diagnostic, DiagnosticCode, FieldEditError, FormDefinitionError  # noqa: F401
from form_builder.generators import ArtifactKind, export_form  # noqa: F401
from form_builder.recompute import RecomputeResult, recompute  # noqa: F401
from form_builder.schemas import FileRef, Form, FormField, parse_form, parse_form_json  # noqa: F401
from form_builder.validation import compile_field, validate_form  # noqa: F401
from form_builder.visibility import compute_visibility  # noqa: F401
