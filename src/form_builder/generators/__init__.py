"""
Artifact generators: JSON, React component code, standalone HTML, embed snippet.
"""

from .component_code import generate_component_code, schema_expression  # noqa: F401
from .contract import form_document_schema, validate_form_document  # noqa: F401
from .embed_snippet import generate_embed_snippet  # noqa: F401
from .export import ArtifactKind, artifact_filename, export_all, export_form  # noqa: F401
from .json_export import generate_json  # noqa: F401
from .standalone_document import generate_standalone_document  # noqa: F401
