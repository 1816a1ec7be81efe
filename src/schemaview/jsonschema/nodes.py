"""Tagged representation of parsed JSON Schema fragments."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

from schemaview.jsonschema.types import get_type

COMBINATORS = ("allOf", "anyOf", "oneOf")


@dataclass(frozen=True)
class BooleanSchema:
    """`true` matches anything, `false` matches nothing."""

    value: bool

    __slots__ = ("value",)


@dataclass(frozen=True)
class ObjectSchema:
    """A schema written as a JSON object.

    When `reference` is set, the other keywords are informational only.
    Nodes hold mappings of subschemas and are therefore unhashable.
    """

    id: str | None = None
    title: str | None = None
    description: str | None = None
    type: tuple[str, ...] = ()
    properties: dict[str, SchemaNode] = field(default_factory=dict)
    items: SchemaNode | None = None
    reference: str | None = None
    all_of: tuple[SchemaNode, ...] = ()
    any_of: tuple[SchemaNode, ...] = ()
    one_of: tuple[SchemaNode, ...] = ()
    read_only: bool = False
    write_only: bool = False
    definitions: dict[str, SchemaNode] = field(default_factory=dict)
    raw: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    __hash__ = None  # type: ignore[assignment]

    @property
    def is_reference(self) -> bool:
        return self.reference is not None

    @property
    def has_structure(self) -> bool:
        """Whether any keyword that shapes a generated value is present."""
        return bool(
            self.reference is not None
            or self.all_of
            or self.any_of
            or self.one_of
            or self.properties
            or self.items is not None
        )


SchemaNode = Union[BooleanSchema, ObjectSchema]

ANYTHING = BooleanSchema(True)
NOTHING = BooleanSchema(False)


def parse_schema(value: Any) -> SchemaNode:
    """Build a SchemaNode from a parsed JSON / YAML value.

    Values that are not schemas at all (numbers, strings, lists, null) become the universal `true` schema.
    """
    if isinstance(value, bool):
        return ANYTHING if value else NOTHING
    if not isinstance(value, dict):
        return ANYTHING
    reference = value.get("$ref")
    return ObjectSchema(
        id=_string_or_none(value.get("$id", value.get("id"))),
        title=_string_or_none(value.get("title")),
        description=_string_or_none(value.get("description")),
        type=get_type(value),
        properties=_parse_mapping(value.get("properties")),
        items=_parse_items(value.get("items")),
        reference=reference if isinstance(reference, str) else None,
        all_of=_parse_list(value.get("allOf")),
        any_of=_parse_list(value.get("anyOf")),
        one_of=_parse_list(value.get("oneOf")),
        read_only=value.get("readOnly") is True,
        write_only=value.get("writeOnly") is True,
        definitions={**_parse_mapping(value.get("definitions")), **_parse_mapping(value.get("$defs"))},
        raw=value,
    )


def _string_or_none(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def _parse_mapping(value: Any) -> dict[str, SchemaNode]:
    if not isinstance(value, dict):
        return {}
    return {str(key): parse_schema(subschema) for key, subschema in value.items()}


def _parse_list(value: Any) -> tuple[SchemaNode, ...]:
    if not isinstance(value, list):
        return ()
    return tuple(parse_schema(subschema) for subschema in value)


def _parse_items(value: Any) -> SchemaNode | None:
    if value is None:
        return None
    if isinstance(value, list):
        # Tuple-form `items` (Draft 4 - 2019-09): the first position is representative
        return parse_schema(value[0]) if value else None
    return parse_schema(value)
