"""Values handed to the presentation layer for the current navigation state."""

from __future__ import annotations

import logging
import threading
from collections.abc import Sequence
from dataclasses import dataclass

from schemaview.core import DEFAULT_BASE_PATH
from schemaview.core.errors import LoaderError, LoaderErrorKind
from schemaview.core.result import Err
from schemaview.generation import GenerationResult, Stage, generate_for_reference
from schemaview.jsonschema.lookup import ChainedLookup, InternalLookup, Lookup, NotFound
from schemaview.jsonschema.nodes import SchemaNode
from schemaview.loaders import Document, DocumentLoader
from schemaview.navigation import PathElement, current_element, extract_links, link_to, resolve_location
from schemaview.recently_viewed import InMemoryRecentlyViewed, RecentlyViewedStore

logger = logging.getLogger(__name__)


@dataclass
class SchemaView:
    trail: list[PathElement]
    # `NOT_FOUND` when the breadcrumb target does not exist in the document
    selected: SchemaNode | NotFound
    example: GenerationResult

    __slots__ = ("trail", "selected", "example")

    @property
    def current(self) -> PathElement:
        return self.trail[-1]


def make_lookup(document: Document) -> Lookup:
    return ChainedLookup(InternalLookup(document.raw))


def build_view(
    document: Document,
    location: str,
    base_prefix: Sequence[str] = DEFAULT_BASE_PATH,
    stage: Stage = Stage.BOTH,
    lookup: Lookup | None = None,
) -> SchemaView:
    """Resolve the navigation location against the document and synthesize the example for its target."""
    if lookup is None:
        lookup = make_lookup(document)
    trail = resolve_location(location, base_prefix, lookup)
    element = current_element(trail)
    return SchemaView(
        trail=trail,
        selected=lookup.resolve(element.reference),
        example=generate_for_reference(element.reference, lookup, stage),
    )


class Session:
    """One viewer: the document loader, the navigation settings and the recently viewed store."""

    def __init__(
        self,
        loader: DocumentLoader | None = None,
        *,
        base_path: Sequence[str] = DEFAULT_BASE_PATH,
        stage: Stage = Stage.BOTH,
        recently_viewed: RecentlyViewedStore | None = None,
    ) -> None:
        self.loader = loader or DocumentLoader()
        self.base_path = tuple(base_path)
        self.stage = stage
        self.recently_viewed = recently_viewed if recently_viewed is not None else InMemoryRecentlyViewed()
        # Lookup of the last used document, its cache stays warm across views
        self._lookup: tuple[Document, Lookup] | None = None
        self._lookup_lock = threading.Lock()

    def open(self, location: str, *, timeout: float | None = None) -> Document:
        """Request `location` and wait until it is the visible document."""
        self.loader.request(location)
        self.loader.wait(timeout)
        if self.loader.pending is not None:
            raise LoaderError(
                kind=LoaderErrorKind.NETWORK_OTHER, message=f"Timed out loading {location}", url=location
            )
        return self.document()

    def document(self) -> Document:
        result = self.loader.current
        if result is None:
            raise LoaderError(kind=LoaderErrorKind.UNCLASSIFIED, message="No schema has been loaded yet")
        if isinstance(result, Err):
            raise result.err()
        return result.ok()

    def lookup(self) -> Lookup:
        """Lookup for the visible document, reused until another document is committed."""
        return self._lookup_for(self.document())

    def _lookup_for(self, document: Document) -> Lookup:
        with self._lookup_lock:
            if self._lookup is None or self._lookup[0] is not document:
                self._lookup = (document, make_lookup(document))
            return self._lookup[1]

    def view(self, location: str | None = None) -> SchemaView:
        """Build the view for a navigation location, e.g. `/view/%23%2Fdefinitions%2Fuser`.

        Without a location, the document root is shown.
        """
        document = self.document()
        if location is None:
            location = link_to(self.base_path)
        view = build_view(document, location, self.base_path, self.stage, lookup=self._lookup_for(document))
        logger.debug("Resolved %s to %s", location, view.current.reference)
        self.recently_viewed.add(document.title, document.location)
        return view

    def links(self) -> list[PathElement]:
        return extract_links(self.lookup())
