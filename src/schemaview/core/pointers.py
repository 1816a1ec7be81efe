from __future__ import annotations

import re
from collections.abc import Iterator
from typing import Any


class Unresolvable: ...


UNRESOLVABLE = Unresolvable()

_ESCAPE_SEQUENCE = re.compile("~[01]")
_UNESCAPED = {"~0": "~", "~1": "/"}


def encode_pointer(segment: str) -> str:
    return segment.replace("~", "~0").replace("/", "~1")


def decode_pointer(segment: str) -> str:
    """Unescape a single pointer token in one left-to-right pass.

    `~01` decodes to `~1`, not `/`.
    """
    return _ESCAPE_SEQUENCE.sub(lambda match: _UNESCAPED[match.group(0)], segment)


def iter_decoded_pointer_segments(pointer: str) -> Iterator[str]:
    return map(decode_pointer, pointer.split("/")[1:])


def to_reference(*segments: str | int) -> str:
    """Build a local reference (`#/a/b`) from raw, unescaped segments."""
    return "#" + "".join(f"/{encode_pointer(str(segment))}" for segment in segments)


def resolve_pointer(document: Any, pointer: str) -> dict | list | str | int | float | bool | None | Unresolvable:
    """Walk the parsed document literally, following dict keys and list indices.

    Implementation is adapted from Rust's `serde-json` crate.

    Ref: https://github.com/serde-rs/json/blob/master/src/value/mod.rs#L751
    """
    if not pointer:
        return document
    if not pointer.startswith("/"):
        return UNRESOLVABLE

    target = document
    for token in iter_decoded_pointer_segments(pointer):
        if isinstance(target, dict):
            target = target.get(token, UNRESOLVABLE)
            if target is UNRESOLVABLE:
                return UNRESOLVABLE
        elif isinstance(target, list):
            # Leading zeros and signs are not valid array indices
            if not (token.isascii() and token.isdigit()) or (len(token) > 1 and token[0] == "0"):
                return UNRESOLVABLE
            try:
                target = target[int(token)]
            except IndexError:
                return UNRESOLVABLE
        else:
            return UNRESOLVABLE
    return target
