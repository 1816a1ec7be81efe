from __future__ import annotations

from schemaview.core.errors import LoaderError, NoNavigationTarget, SchemaViewError, UnresolvableReference
from schemaview.core.version import SCHEMAVIEW_VERSION
from schemaview.generation import (
    GeneratedValue,
    GenerationError,
    GenerationErrorKind,
    GenerationErrors,
    GenerationResult,
    Stage,
    generate,
)
from schemaview.jsonschema import (
    NOT_FOUND,
    BooleanSchema,
    ExternalLookup,
    InternalLookup,
    Lookup,
    ObjectSchema,
    SchemaNode,
    parse_schema,
)
from schemaview.loaders import Document, DocumentLoader, load_document, parse_document
from schemaview.navigation import PathElement, extract_links, resolve_path
from schemaview.view import SchemaView, Session, build_view

__version__ = SCHEMAVIEW_VERSION

__all__ = [
    "BooleanSchema",
    "Document",
    "DocumentLoader",
    "ExternalLookup",
    "GeneratedValue",
    "GenerationError",
    "GenerationErrorKind",
    "GenerationErrors",
    "GenerationResult",
    "InternalLookup",
    "LoaderError",
    "Lookup",
    "NOT_FOUND",
    "NoNavigationTarget",
    "ObjectSchema",
    "PathElement",
    "SchemaNode",
    "SchemaView",
    "SchemaViewError",
    "Session",
    "Stage",
    "UnresolvableReference",
    "__version__",
    "build_view",
    "extract_links",
    "generate",
    "load_document",
    "parse_document",
    "parse_schema",
    "resolve_path",
]
