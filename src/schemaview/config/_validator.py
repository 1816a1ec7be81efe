import jsonschema.validators

CONFIG_SCHEMA = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "schemaview.toml",
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "base-path": {"type": "array", "items": {"type": "string", "minLength": 1}},
        "stage": {"type": "string", "enum": ["request", "response", "both"]},
        "request-timeout": {"type": "number", "exclusiveMinimum": 0},
        "recently-viewed": {
            "type": "object",
            "additionalProperties": False,
            "properties": {
                "path": {"type": "string"},
                "limit": {"type": "integer", "minimum": 1},
            },
        },
    },
}

CONFIG_VALIDATOR = jsonschema.validators.Draft202012Validator(CONFIG_SCHEMA)
