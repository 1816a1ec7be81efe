import pytest
from hypothesis import given
from hypothesis import strategies as st

from schemaview.core.pointers import (
    UNRESOLVABLE,
    decode_pointer,
    encode_pointer,
    resolve_pointer,
    to_reference,
)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("plain", "plain"),
        ("a~1b", "a/b"),
        ("m~0n", "m~n"),
        ("~01", "~1"),
        ("~10", "/0"),
        ("~0~1", "~/"),
        ("~2", "~2"),
        ("~", "~"),
    ],
    ids=["plain", "slash", "tilde", "escaped-tilde-then-one", "slash-then-zero", "both", "unknown-escape", "bare-tilde"],
)
def test_decode_pointer(value, expected):
    assert decode_pointer(value) == expected


@given(st.text())
def test_encode_decode_roundtrip(segment):
    assert decode_pointer(encode_pointer(segment)) == segment


@pytest.mark.parametrize(
    ("pointer", "expected"),
    [
        ("", {"a": [10, {"b/c": 20, "d~e": 30}]}),
        ("/a", [10, {"b/c": 20, "d~e": 30}]),
        ("/a/0", 10),
        ("/a/1/b~1c", 20),
        ("/a/1/d~0e", 30),
    ],
)
def test_resolve_pointer(pointer, expected):
    assert resolve_pointer({"a": [10, {"b/c": 20, "d~e": 30}]}, pointer) == expected


@pytest.mark.parametrize(
    "pointer",
    ["a", "/missing", "/a/2", "/a/-1", "/a/01", "/a/x", "/a/0/deeper", "/a/²"],
    ids=["no-slash", "missing-key", "out-of-range", "negative", "leading-zero", "not-a-number", "through-scalar", "unicode-digit"],
)
def test_resolve_pointer_unresolvable(pointer):
    assert resolve_pointer({"a": [10, {"b/c": 20}]}, pointer) is UNRESOLVABLE


def test_resolve_pointer_keeps_null_values():
    assert resolve_pointer({"a": None}, "/a") is None


@pytest.mark.parametrize(
    ("segments", "expected"),
    [
        ((), "#"),
        (("definitions", "User"), "#/definitions/User"),
        (("definitions", "a/b"), "#/definitions/a~1b"),
        (("items", 0), "#/items/0"),
    ],
)
def test_to_reference(segments, expected):
    assert to_reference(*segments) == expected
