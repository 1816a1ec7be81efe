from __future__ import annotations

from enum import Enum

from schemaview.jsonschema.nodes import ObjectSchema


class Stage(str, Enum):
    """Defines which side of an exchange a synthesized example represents."""

    # Data sent by a client, `readOnly` properties are omitted
    REQUEST = "request"
    # Data returned by a server, `writeOnly` properties are omitted
    RESPONSE = "response"
    BOTH = "both"

    def excludes(self, schema: ObjectSchema) -> bool:
        if self == Stage.REQUEST:
            return schema.read_only
        if self == Stage.RESPONSE:
            return schema.write_only
        return False
