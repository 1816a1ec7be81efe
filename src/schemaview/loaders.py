"""Loading schema documents and keeping only the result for the most recent request."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from schemaview.core.deserialization import deserialize_document
from schemaview.core.errors import LoaderError, LoaderErrorKind, format_exception
from schemaview.core.loaders import fetch_text
from schemaview.core.result import Err, Ok
from schemaview.jsonschema.nodes import ObjectSchema, SchemaNode, parse_schema
from schemaview.jsonschema.types import is_schema, to_json_type_name

logger = logging.getLogger(__name__)

Fetcher = Callable[[str], str]
Executor = Callable[[Callable[[], None]], None]


@dataclass(frozen=True)
class Document:
    """A loaded schema document. Never mutated, replaced wholesale on reload."""

    location: str
    raw: Any
    root: SchemaNode

    __slots__ = ("location", "raw", "root")

    @property
    def title(self) -> str:
        if isinstance(self.root, ObjectSchema) and self.root.title:
            return self.root.title
        return self.location

    @property
    def id(self) -> str | None:
        return self.root.id if isinstance(self.root, ObjectSchema) else None


LoadResult = Ok[Document] | Err[LoaderError]


def parse_document(text: str | bytes, location: str) -> Document:
    raw = deserialize_document(text, url=location)
    if not is_schema(raw):
        raise LoaderError(
            kind=LoaderErrorKind.UNEXPECTED_CONTENT,
            message=f"Expected JSON Schema (object or boolean), got {to_json_type_name(raw)}",
            url=location,
        )
    try:
        root = parse_schema(raw)
    except RecursionError:
        raise LoaderError(
            kind=LoaderErrorKind.UNEXPECTED_CONTENT,
            message="Schema is nested too deeply to be processed",
            url=location,
        ) from None
    return Document(location=location, raw=raw, root=root)


def load_document(location: str, fetch: Fetcher = fetch_text) -> Document:
    """Fetch and parse the document behind `location`."""
    return parse_document(fetch(location), location)


def _start_thread(task: Callable[[], None]) -> None:
    threading.Thread(target=task, name="schemaview_loader", daemon=True).start()


class DocumentLoader:
    """Single-flight loading of schema documents.

    Every `request` supersedes the previous ones. Completions arrive in any order and only the one belonging to
    the latest request is committed. Superseded requests are not cancelled, their results are dropped.
    """

    def __init__(
        self,
        fetch: Fetcher = fetch_text,
        *,
        on_commit: Callable[[str, LoadResult], None] | None = None,
        executor: Executor = _start_thread,
    ) -> None:
        self.fetch = fetch
        self.on_commit = on_commit
        self.executor = executor
        self._lock = threading.Lock()
        self._committed = threading.Condition(self._lock)
        # Serializes commits together with their `on_commit` notifications
        self._commit_lock = threading.RLock()
        self._generation = 0
        self._pending: str | None = None
        self._current: LoadResult | None = None

    @property
    def pending(self) -> str | None:
        """Location that is currently awaited, if any."""
        with self._lock:
            return self._pending

    @property
    def current(self) -> LoadResult | None:
        """The committed result, `None` until the first completion."""
        with self._lock:
            return self._current

    def request(self, location: str) -> int:
        """Start loading `location`, superseding every earlier request."""
        with self._lock:
            self._generation += 1
            generation = self._generation
            self._pending = location
        logger.debug("Requesting %s (generation %s)", location, generation)
        self.executor(lambda: self._run(generation, location))
        return generation

    def _run(self, generation: int, location: str) -> None:
        result: LoadResult
        try:
            result = Ok(load_document(location, self.fetch))
        except LoaderError as exc:
            result = Err(exc)
        except Exception as exc:
            result = Err(
                LoaderError(kind=LoaderErrorKind.UNCLASSIFIED, message=format_exception(exc), url=location)
            )
        self.complete(generation, location, result)

    def complete(self, generation: int, location: str, result: LoadResult) -> bool:
        """Commit `result` if it belongs to the latest request. Returns whether it was committed.

        `on_commit` is called in commit order: a superseded result is never announced after a newer one.
        """
        with self._commit_lock:
            with self._lock:
                if generation != self._generation:
                    logger.debug("Discarding superseded result for %s (generation %s)", location, generation)
                    return False
                self._current = result
                self._pending = None
                self._committed.notify_all()
            logger.debug("Committed result for %s (generation %s)", location, generation)
            if self.on_commit is not None:
                self.on_commit(location, result)
        return True

    def wait(self, timeout: float | None = None) -> LoadResult | None:
        """Block until the latest request is committed and return the visible result."""
        with self._committed:
            self._committed.wait_for(lambda: self._pending is None, timeout=timeout)
            return self._current
