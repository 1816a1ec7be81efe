from __future__ import annotations

ROOT_REFERENCE = "#"
INVALID_REFERENCE = "#/invalid-reference"
DEFAULT_BASE_PATH = ("view",)
DEFAULT_REQUEST_TIMEOUT = 10
DEFAULT_RECENTLY_VIEWED_LIMIT = 10
