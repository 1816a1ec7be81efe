from typing import Any

JsonSchemaObject = dict[str, Any]
JsonSchema = JsonSchemaObject | bool

ALL_TYPES = ["null", "boolean", "integer", "number", "string", "array", "object"]


def get_type(schema: JsonSchema) -> tuple[str, ...]:
    """Declared primitive types, in declaration order. Unknown tags are dropped."""
    if isinstance(schema, bool):
        return ()
    ty = schema.get("type")
    if isinstance(ty, str):
        ty = [ty]
    if not isinstance(ty, list):
        return ()
    return tuple(t for t in ty if t in ALL_TYPES)


def is_schema(value: Any) -> bool:
    return isinstance(value, (dict, bool))


def to_json_type_name(v: Any) -> str:
    if v is None:
        return "null"
    if isinstance(v, bool):
        return "boolean"
    if isinstance(v, dict):
        return "object"
    if isinstance(v, list):
        return "array"
    if isinstance(v, (int, float)):
        return "number"
    if isinstance(v, str):
        return "string"
    return type(v).__name__
