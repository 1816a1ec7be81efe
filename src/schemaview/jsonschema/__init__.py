from .lookup import NOT_FOUND, ChainedLookup, ExternalLookup, InternalLookup, Lookup, NotFound
from .nodes import ANYTHING, NOTHING, BooleanSchema, ObjectSchema, SchemaNode, parse_schema
from .types import get_type

__all__ = [
    "ANYTHING",
    "NOTHING",
    "NOT_FOUND",
    "BooleanSchema",
    "ChainedLookup",
    "ExternalLookup",
    "InternalLookup",
    "Lookup",
    "NotFound",
    "ObjectSchema",
    "SchemaNode",
    "get_type",
    "parse_schema",
]
