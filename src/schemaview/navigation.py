"""Translate navigation locations into breadcrumb trails anchored in the schema document."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from urllib.parse import quote, unquote

from schemaview.core import INVALID_REFERENCE, ROOT_REFERENCE
from schemaview.core.errors import NoNavigationTarget
from schemaview.core.pointers import to_reference
from schemaview.jsonschema.lookup import Lookup, NotFound
from schemaview.jsonschema.nodes import BooleanSchema, ObjectSchema, SchemaNode

logger = logging.getLogger(__name__)

NOT_FOUND_TITLE = "<not found>"
ANYTHING_TITLE = "<anything>"
DEFAULT_TITLE = "object"


@dataclass(frozen=True)
class PathElement:
    """One breadcrumb: a display title and the reference it represents."""

    title: str
    reference: str

    __slots__ = ("title", "reference")


def get_title(node: SchemaNode | NotFound, default: str = DEFAULT_TITLE) -> str:
    if isinstance(node, NotFound):
        return NOT_FOUND_TITLE
    if isinstance(node, BooleanSchema):
        return ANYTHING_TITLE
    return node.title or default


def split_location(location: str) -> list[str]:
    """Strip a single leading separator and split the location into raw segments."""
    if location.startswith("/"):
        location = location[1:]
    if not location:
        return []
    return location.split("/")


def _common_prefix_length(segments: Sequence[str], base_prefix: Sequence[str]) -> int:
    length = 0
    for segment, base in zip(segments, base_prefix):
        if segment != base:
            break
        length += 1
    return length


def to_reference_candidate(raw_segment: str) -> str:
    segment = unquote(raw_segment)
    if segment.startswith("#"):
        return segment
    logger.debug("Invalid navigation segment: %r", raw_segment)
    return INVALID_REFERENCE


def resolve_path(raw_segments: Sequence[str], base_prefix: Sequence[str], lookup: Lookup) -> list[PathElement]:
    """Build the breadcrumb trail for the given navigation segments.

    Segments shared with `base_prefix` are skipped. Segments that are not `#`-rooted pointers are kept as
    visibly broken entries pointing to the invalid reference sentinel.
    """
    start = _common_prefix_length(raw_segments, base_prefix)
    if start == len(raw_segments):
        return [PathElement(title=get_title(lookup.resolve(ROOT_REFERENCE)), reference=ROOT_REFERENCE)]
    trail = []
    for raw_segment in raw_segments[start:]:
        reference = to_reference_candidate(raw_segment)
        trail.append(PathElement(title=get_title(lookup.resolve(reference)), reference=reference))
    return trail


def link_to(base_prefix: Sequence[str], references: Sequence[str] = ()) -> str:
    """Navigation location for a sequence of references below the base path."""
    return "/" + "/".join([*base_prefix, *(quote(reference, safe="") for reference in references)])


def resolve_location(location: str, base_prefix: Sequence[str], lookup: Lookup) -> list[PathElement]:
    return resolve_path(split_location(location), base_prefix, lookup)


def current_element(trail: Sequence[PathElement]) -> PathElement:
    """The element the user navigated to, i.e. the last one in the trail."""
    if not trail:
        raise NoNavigationTarget()
    return trail[-1]


def extract_links(lookup: Lookup) -> list[PathElement]:
    """Side navigation entries: every named definition of the root schema, in declaration order."""
    root = lookup.resolve(ROOT_REFERENCE)
    if not isinstance(root, ObjectSchema):
        return []
    links = []
    for keyword in ("definitions", "$defs"):
        container = root.raw.get(keyword)
        if not isinstance(container, dict):
            continue
        for name in container:
            reference = to_reference(keyword, name)
            links.append(PathElement(title=get_title(lookup.resolve(reference), default=name), reference=reference))
    return links
