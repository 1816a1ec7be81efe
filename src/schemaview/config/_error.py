from __future__ import annotations

import difflib
from typing import TYPE_CHECKING

from schemaview.core.errors import SchemaViewError

if TYPE_CHECKING:
    from jsonschema import ValidationError


class ConfigError(SchemaViewError):
    """Invalid configuration."""

    @classmethod
    def from_validation_error(cls, error: ValidationError) -> ConfigError:
        message = error.message
        if error.validator == "enum":
            message = _format_enum_error(error)
        elif error.validator == "type":
            message = _format_type_error(error)
        elif error.validator == "additionalProperties":
            message = _format_additional_properties_error(error)
        elif error.validator in ("minimum", "exclusiveMinimum", "minLength"):
            message = _format_minimum_error(error)
        return cls(message)


def _format_enum_error(error: ValidationError) -> str:
    assert isinstance(error.validator_value, list)
    valid_values = sorted(error.validator_value)
    path = list(error.path)
    prop_name = path[-1] if path else "value"
    section = path_to_section_name(path[:-1])

    suggestion = ""
    if isinstance(error.instance, str):
        match = _find_closest_match(error.instance, valid_values)
        if match:
            suggestion = f" Did you mean '{match}'?"

    valid_values_str = ", ".join(repr(v) for v in valid_values)
    return (
        f"Error in {section} section:\n  Invalid value:\n\n"
        f"  - '{prop_name}' -> '{error.instance}' is not a valid value.{suggestion}\n\n"
        f"Valid values are: {valid_values_str}."
    )


def _format_type_error(error: ValidationError) -> str:
    expected = error.validator_value
    assert isinstance(expected, str)
    path = list(error.path)
    section = path_to_section_name(path[:-1])
    type_phrases = {
        "object": "a table",
        "array": "an array",
        "number": "a number",
        "string": "a string",
        "integer": "an integer",
    }
    prop_name = path[-1] if path else "value"
    actual = type(error.instance).__name__
    return (
        f"Error in {section} section:\n  Type error:\n\n"
        f"  - '{prop_name}' -> Must be {type_phrases.get(expected, expected)}, but got {actual}: {error.instance}"
    )


def _format_minimum_error(error: ValidationError) -> str:
    path = list(error.path)
    section = path_to_section_name([item for item in path[:-1] if isinstance(item, str)])
    prop_name = next((item for item in reversed(path) if isinstance(item, str)), "value")
    return f"Error in {section} section:\n  Value too low:\n\n  - '{prop_name}' -> {error.message}."


def _format_additional_properties_error(error: ValidationError) -> str:
    valid = list(error.schema.get("properties", {}))
    unknown = sorted(set(error.instance) - set(valid))
    section = path_to_section_name(list(error.path))

    details = []
    for prop in unknown:
        match = _find_closest_match(prop, valid)
        if match:
            details.append(f"- '{prop}' -> Did you mean '{match}'?")
        else:
            details.append(f"- '{prop}'")
    valid_list = ", ".join(f"'{prop}'" for prop in valid)
    return (
        f"Error in {section} section:\n  Unknown properties:\n\n  "
        + "\n  ".join(details)
        + f"\n\nValid properties for {section}: {valid_list}"
    )


def path_to_section_name(path: list[int | str]) -> str:
    """Convert a JSON path to a TOML-like section name."""
    if not path:
        return "root"

    return f"[{'.'.join(str(p) for p in path)}]"


def _find_closest_match(value: str, variants: list[str]) -> str | None:
    matches = difflib.get_close_matches(value, variants, n=1, cutoff=0.6)
    return matches[0] if matches else None
