import pytest

from schemaview.core.errors import NoNavigationTarget
from schemaview.jsonschema import InternalLookup
from schemaview.navigation import (
    PathElement,
    current_element,
    extract_links,
    link_to,
    resolve_location,
    resolve_path,
    split_location,
)

BASE = ["view"]


@pytest.mark.parametrize(
    ("location", "expected"),
    [
        ("/view", ["view"]),
        ("view/a", ["view", "a"]),
        ("//view", ["", "view"]),
        ("/", []),
        ("", []),
    ],
)
def test_split_location(location, expected):
    assert split_location(location) == expected


@pytest.mark.parametrize("segments", [["view"], []], ids=["base-only", "empty"])
def test_root(lookup, segments):
    assert resolve_path(segments, BASE, lookup) == [PathElement(title="Pet", reference="#")]


def test_trail(lookup):
    trail = resolve_location("/view/%23/%23%2Fdefinitions%2FOwner/%23%2Fproperties%2Fname", BASE, lookup)
    assert trail == [
        PathElement(title="Pet", reference="#"),
        PathElement(title="Owner", reference="#/definitions/Owner"),
        PathElement(title="object", reference="#/properties/name"),
    ]


def test_escaped_segments(lookup):
    trail = resolve_location("/view/%23%2Fdefinitions%2Fa~1b", BASE, lookup)
    assert trail == [PathElement(title="Slash", reference="#/definitions/a~1b")]


def test_invalid_segment(lookup):
    trail = resolve_location("/view/%23%2Fdefinitions%2FOwner/not-a-pointer", BASE, lookup)
    assert trail[-1] == PathElement(title="<not found>", reference="#/invalid-reference")
    assert len(trail) == 2


def test_not_found_title(lookup):
    assert resolve_path(["view", "%23%2Fdefinitions%2FMissing"], BASE, lookup) == [
        PathElement(title="<not found>", reference="#/definitions/Missing")
    ]


def test_anything_title():
    lookup = InternalLookup({"definitions": {"Any": True, "None": False}})
    trail = resolve_path(["view", "%23%2Fdefinitions%2FAny", "%23%2Fdefinitions%2FNone"], BASE, lookup)
    assert [element.title for element in trail] == ["<anything>", "<anything>"]


def test_partial_base_prefix(lookup):
    # Only the shared prefix is skipped
    trail = resolve_path(["other", "%23"], BASE, lookup)
    assert [element.reference for element in trail] == ["#/invalid-reference", "#"]


def test_no_base_prefix(lookup):
    assert resolve_path(["%23%2Fdefinitions%2FTag"], [], lookup) == [
        PathElement(title="Tag", reference="#/definitions/Tag")
    ]


def test_current_element():
    trail = [PathElement(title="Pet", reference="#"), PathElement(title="Tag", reference="#/definitions/Tag")]
    assert current_element(trail).title == "Tag"
    with pytest.raises(NoNavigationTarget, match="Could not work out what to load from the schema."):
        current_element([])


@pytest.mark.parametrize(
    ("base", "references", "expected"),
    [
        (["view"], [], "/view"),
        (["view"], ["#/definitions/User"], "/view/%23%2Fdefinitions%2FUser"),
        ([], ["#", "#/a~1b"], "/%23/%23%2Fa~1b"),
    ],
)
def test_link_to(base, references, expected):
    assert link_to(base, references) == expected


def test_link_roundtrip(lookup):
    references = ["#", "#/definitions/m~0n", "#/properties/owner"]
    trail = resolve_location(link_to(BASE, references), BASE, lookup)
    assert [element.reference for element in trail] == references


def test_extract_links(lookup):
    assert extract_links(lookup) == [
        PathElement(title="Owner", reference="#/definitions/Owner"),
        PathElement(title="Tag", reference="#/definitions/Tag"),
        PathElement(title="Slash", reference="#/definitions/a~1b"),
        PathElement(title="Tilde", reference="#/definitions/m~0n"),
    ]


def test_extract_links_defaults_to_names():
    lookup = InternalLookup({"$defs": {"Untitled": {"type": "string"}, "Any": True}, "definitions": {"Old": {}}})
    assert extract_links(lookup) == [
        PathElement(title="Old", reference="#/definitions/Old"),
        PathElement(title="Untitled", reference="#/$defs/Untitled"),
        PathElement(title="<anything>", reference="#/$defs/Any"),
    ]


def test_extract_links_boolean_root():
    assert extract_links(InternalLookup(True)) == []
