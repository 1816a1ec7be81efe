from json import JSONDecodeError as JSONDecodeError
from typing import Any

import orjson


def loads(data: str | bytes) -> Any:
    return orjson.loads(data)


def dumps(obj: object, *, sort_keys: bool = False, indent: bool = False) -> str:
    option = 0
    if sort_keys:
        option |= orjson.OPT_SORT_KEYS
    if indent:
        option |= orjson.OPT_INDENT_2
    return orjson.dumps(obj, option=option or None).decode("utf-8")
