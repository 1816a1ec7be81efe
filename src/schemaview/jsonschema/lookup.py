from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from typing import Any

from schemaview.core import ROOT_REFERENCE
from schemaview.core.errors import UnresolvableReference
from schemaview.core.pointers import UNRESOLVABLE, resolve_pointer
from schemaview.jsonschema.nodes import SchemaNode, parse_schema
from schemaview.jsonschema.types import is_schema

logger = logging.getLogger(__name__)


class NotFound:
    """Outcome of resolving a reference that points nowhere."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "NOT_FOUND"

    def __bool__(self) -> bool:
        return False


NOT_FOUND = NotFound()


def is_internal(reference: str) -> bool:
    return reference.startswith("#")


class Lookup(ABC):
    """Resolves reference strings into schema nodes."""

    @abstractmethod
    def resolve(self, reference: str) -> SchemaNode | NotFound: ...

    def require(self, reference: str) -> SchemaNode:
        resolved = self.resolve(reference)
        if isinstance(resolved, NotFound):
            raise UnresolvableReference(reference)
        return resolved


class InternalLookup(Lookup):
    """Resolve `#`-rooted references within a single immutable document.

    Pointers are applied to the raw parsed document, so they may address keyword containers
    (`#/properties/name`, `#/allOf/0`) as well as named definitions.
    """

    __slots__ = ("document", "_cache", "_lock")

    def __init__(self, document: Any) -> None:
        self.document = document
        self._cache: dict[str, SchemaNode | NotFound] = {}
        self._lock = threading.Lock()

    def resolve(self, reference: str) -> SchemaNode | NotFound:
        with self._lock:
            cached = self._cache.get(reference)
        if cached is not None:
            return cached
        resolved = self._resolve(reference)
        with self._lock:
            return self._cache.setdefault(reference, resolved)

    def _resolve(self, reference: str) -> SchemaNode | NotFound:
        if not is_internal(reference):
            logger.debug("Not an internal reference: %s", reference)
            return NOT_FOUND
        value = resolve_pointer(self.document, reference[1:])
        if value is UNRESOLVABLE or not is_schema(value):
            logger.debug("Unresolvable reference: %s", reference)
            return NOT_FOUND
        return parse_schema(value)

    @property
    def root(self) -> SchemaNode:
        return self.require(ROOT_REFERENCE)


class ExternalLookup(Lookup):
    """Resolution of references into other documents.

    Only single-document resolution is supported, so every reference is reported as not found.
    """

    def resolve(self, reference: str) -> SchemaNode | NotFound:
        logger.debug("External references are not resolvable: %s", reference)
        return NOT_FOUND


class ChainedLookup(Lookup):
    """Route `#`-rooted references to an internal lookup and everything else to an external one."""

    __slots__ = ("internal", "external")

    def __init__(self, internal: Lookup, external: Lookup | None = None) -> None:
        self.internal = internal
        self.external = external or ExternalLookup()

    def resolve(self, reference: str) -> SchemaNode | NotFound:
        if is_internal(reference):
            return self.internal.resolve(reference)
        return self.external.resolve(reference)
