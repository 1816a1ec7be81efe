"""Synthesis of representative JSON values for schema nodes.

Generation is deterministic: the first satisfiable `anyOf` / `oneOf` branch is used, `allOf` branches are merged
left to right with later keys winning, and arrays contain exactly one representative item.
Problems never abort the whole walk. They are collected together with the location where they happened,
so a partially generated value is still available.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any

from schemaview.generation.stage import Stage
from schemaview.jsonschema.lookup import Lookup, NotFound
from schemaview.jsonschema.nodes import BooleanSchema, ObjectSchema, SchemaNode

PathItem = str | int

TRIVIAL_VALUES: dict[str, Any] = {
    "string": "",
    "number": 0,
    "integer": 0,
    "boolean": False,
    "null": None,
}


class Missing:
    __slots__ = ()

    def __repr__(self) -> str:
        return "MISSING"


# Marks a value that could not be produced at all
MISSING = Missing()


@enum.unique
class GenerationErrorKind(str, enum.Enum):
    REFERENCE_NOT_FOUND = "reference_not_found"
    UNSATISFIABLE_SCHEMA = "unsatisfiable_schema"
    CYCLIC_REFERENCE = "cyclic_reference"


@dataclass(frozen=True)
class GenerationError:
    kind: GenerationErrorKind
    message: str
    # Reference in effect where the problem happened
    reference: str | None
    # Property names and item indices leading from the generation root to the problem
    path: tuple[PathItem, ...]

    __slots__ = ("kind", "message", "reference", "path")

    @property
    def location(self) -> str:
        return "/".join(str(item) for item in self.path) or "<root>"

    def __str__(self) -> str:
        return f"{self.location}: {self.message}"


@dataclass(frozen=True)
class GeneratedValue:
    value: Any

    __slots__ = ("value",)


@dataclass(frozen=True)
class GenerationErrors:
    errors: tuple[GenerationError, ...]
    # Whatever could be generated around the failures, `None` if nothing
    partial: Any = None


GenerationResult = GeneratedValue | GenerationErrors


def is_errors(result: GenerationResult) -> bool:
    return isinstance(result, GenerationErrors)


@dataclass
class _Context:
    lookup: Lookup
    stage: Stage
    errors: list[GenerationError]

    __slots__ = ("lookup", "stage", "errors")


@dataclass(frozen=True)
class _Scope:
    # References currently being expanded on this path
    visited: frozenset[str]
    reference: str | None
    path: tuple[PathItem, ...]

    __slots__ = ("visited", "reference", "path")

    def at(self, item: PathItem) -> _Scope:
        return _Scope(visited=self.visited, reference=self.reference, path=(*self.path, item))

    def entering(self, reference: str) -> _Scope:
        return _Scope(visited=self.visited | {reference}, reference=reference, path=self.path)


def generate(
    node: SchemaNode, lookup: Lookup, stage: Stage = Stage.BOTH, *, reference: str | None = None
) -> GenerationResult:
    """Synthesize an example value for `node`.

    `reference` is where `node` lives in the document, if known. It is treated as already being expanded.
    """
    ctx = _Context(lookup=lookup, stage=stage, errors=[])
    visited = frozenset({reference}) if reference is not None else frozenset()
    value = _generate(node, ctx, _Scope(visited=visited, reference=reference, path=()))
    return _finish(value, ctx)


def generate_for_reference(reference: str, lookup: Lookup, stage: Stage = Stage.BOTH) -> GenerationResult:
    """Synthesize an example for whatever `reference` points to."""
    ctx = _Context(lookup=lookup, stage=stage, errors=[])
    value = _generate_reference(reference, ctx, _Scope(visited=frozenset(), reference=None, path=()))
    return _finish(value, ctx)


def _finish(value: Any, ctx: _Context) -> GenerationResult:
    if ctx.errors:
        return GenerationErrors(errors=tuple(ctx.errors), partial=None if value is MISSING else value)
    return GeneratedValue(value)


def _error(ctx: _Context, scope: _Scope, kind: GenerationErrorKind, message: str, reference: str | None) -> Missing:
    ctx.errors.append(GenerationError(kind=kind, message=message, reference=reference, path=scope.path))
    return MISSING


def _generate(node: SchemaNode, ctx: _Context, scope: _Scope) -> Any:
    if isinstance(node, BooleanSchema):
        if node.value:
            return {}
        return _error(
            ctx, scope, GenerationErrorKind.UNSATISFIABLE_SCHEMA, "Schema `false` can not be satisfied", scope.reference
        )
    if node.reference is not None:
        return _generate_reference(node.reference, ctx, scope)
    if node.all_of:
        return _generate_all_of(node, ctx, scope)
    if node.any_of:
        return _with_sibling_properties(node, _generate_first_of(node.any_of, ctx, scope), ctx, scope)
    if node.one_of:
        return _with_sibling_properties(node, _generate_first_of(node.one_of, ctx, scope), ctx, scope)
    if node.properties:
        return _generate_properties(node, ctx, scope)
    if node.items is not None:
        item = _generate(node.items, ctx, scope.at(0))
        return [] if item is MISSING else [item]
    if node.type:
        return _trivial_value(node.type[0])
    # Stand-in for "anything"
    return {}


def _trivial_value(ty: str) -> Any:
    if ty == "array":
        return []
    if ty == "object":
        return {}
    return TRIVIAL_VALUES[ty]


def _generate_reference(reference: str, ctx: _Context, scope: _Scope) -> Any:
    if reference in scope.visited:
        return _error(
            ctx,
            scope,
            GenerationErrorKind.CYCLIC_REFERENCE,
            f"Reference `{reference}` is already being expanded",
            reference,
        )
    resolved = ctx.lookup.resolve(reference)
    if isinstance(resolved, NotFound):
        return _error(
            ctx,
            scope,
            GenerationErrorKind.REFERENCE_NOT_FOUND,
            f"Reference `{reference}` cannot be resolved",
            reference,
        )
    return _generate(resolved, ctx, scope.entering(reference))


def _is_excluded(node: SchemaNode, ctx: _Context) -> bool:
    if not isinstance(node, ObjectSchema):
        return False
    if ctx.stage.excludes(node):
        return True
    if node.reference is not None:
        # Flags may live on the referenced definition
        resolved = ctx.lookup.resolve(node.reference)
        return isinstance(resolved, ObjectSchema) and ctx.stage.excludes(resolved)
    return False


def _generate_properties(node: ObjectSchema, ctx: _Context, scope: _Scope) -> dict[str, Any]:
    result = {}
    for name, subschema in node.properties.items():
        if _is_excluded(subschema, ctx):
            continue
        value = _generate(subschema, ctx, scope.at(name))
        if value is not MISSING:
            result[name] = value
    return result


def _generate_all_of(node: ObjectSchema, ctx: _Context, scope: _Scope) -> Any:
    values = [_generate(branch, ctx, scope) for branch in node.all_of]
    if node.properties:
        # Sibling properties act as the last branch
        values.append(_generate_properties(node, ctx, scope))
    return _merge(values)


def _with_sibling_properties(node: ObjectSchema, value: Any, ctx: _Context, scope: _Scope) -> Any:
    if not node.properties:
        return value
    return _merge([value, _generate_properties(node, ctx, scope)])


def _merge(values: list[Any]) -> Any:
    """Merge mappings left to right, later keys win. Without any mapping, the last value is used."""
    values = [value for value in values if value is not MISSING]
    if not values:
        return MISSING
    mappings = [value for value in values if isinstance(value, dict)]
    if not mappings:
        return values[-1]
    merged: dict[str, Any] = {}
    for mapping in mappings:
        merged.update(mapping)
    return merged


def _generate_first_of(branches: tuple[SchemaNode, ...], ctx: _Context, scope: _Scope) -> Any:
    collected: list[GenerationError] = []
    first: Any = MISSING
    for branch in branches:
        errors = ctx.errors
        ctx.errors = []
        try:
            value = _generate(branch, ctx, scope)
            branch_errors = ctx.errors
        finally:
            ctx.errors = errors
        if not branch_errors:
            return value
        collected.extend(branch_errors)
        if first is MISSING:
            first = value
    ctx.errors.extend(collected)
    return first
