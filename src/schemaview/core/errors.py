"""Base error handling that is not tied to any specific part of the viewer."""

from __future__ import annotations

import enum
import re
import traceback
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from requests import RequestException


class SchemaViewError(Exception):
    """Base exception class for all schemaview errors."""


class UnresolvableReference(SchemaViewError):
    """A reference cannot be resolved within the loaded document."""

    def __init__(self, reference: str) -> None:
        self.reference = reference

    def __str__(self) -> str:
        return f"Reference `{self.reference}` cannot be resolved"


class NoNavigationTarget(SchemaViewError):
    """Path resolution yielded nothing that could be displayed."""

    def __init__(self, location: str | None = None) -> None:
        self.location = location

    def __str__(self) -> str:
        return "Could not work out what to load from the schema."


@enum.unique
class LoaderErrorKind(str, enum.Enum):
    # Connection related issues
    CONNECTION_SSL = "connection_ssl"
    CONNECTION_OTHER = "connection_other"
    NETWORK_OTHER = "network_other"

    # HTTP error codes
    HTTP_SERVER_ERROR = "http_server_error"
    HTTP_CLIENT_ERROR = "http_client_error"
    HTTP_NOT_FOUND = "http_not_found"
    HTTP_FORBIDDEN = "http_forbidden"

    # Local files
    FILE_NOT_FOUND = "file_not_found"

    # Content decoding issues
    SYNTAX_ERROR = "syntax_error"
    UNEXPECTED_CONTENT = "unexpected_content"

    # Unclassified
    UNCLASSIFIED = "unclassified"


class LoaderError(SchemaViewError):
    """Failed to load a schema document."""

    def __init__(
        self,
        kind: LoaderErrorKind,
        message: str,
        url: str | None = None,
        extras: list[str] | None = None,
    ) -> None:
        self.kind = kind
        self.message = message
        self.url = url
        self.extras = extras or []

    def __str__(self) -> str:
        return self.message


def get_request_error_extras(exc: RequestException) -> list[str]:
    """Extract additional context from a request exception."""
    from requests.exceptions import ConnectionError, SSLError
    from urllib3.exceptions import MaxRetryError

    if isinstance(exc, SSLError):
        reason = str(getattr(exc.args[0], "reason", exc.args[0]))
        return [_remove_ssl_line_number(reason).strip()]
    if isinstance(exc, ConnectionError) and exc.args:
        inner = exc.args[0]
        if isinstance(inner, MaxRetryError) and inner.reason is not None:
            arg = inner.reason.args[0] if inner.reason.args else None
            if isinstance(arg, str):
                if ":" not in arg:
                    reason = arg
                else:
                    _, reason = arg.split(":", maxsplit=1)
            else:
                reason = f"Max retries exceeded with url: {inner.url}"
            return [reason.strip()]
        return [" ".join(map(_clean_inner_request_message, exc.args))]
    return []


def _remove_ssl_line_number(text: str) -> str:
    return re.sub(r"\(_ssl\.c:\d+\)", "", text)


def _clean_inner_request_message(message: object) -> str:
    if isinstance(message, str) and message.startswith("HTTPConnectionPool"):
        return re.sub(r"HTTPConnectionPool\(.+?\): ", "", message).rstrip(".")
    return str(message)


def get_request_error_message(exc: RequestException) -> str:
    """Extract user-facing message from a request exception."""
    from requests.exceptions import ConnectionError, ReadTimeout, SSLError

    if isinstance(exc, ReadTimeout):
        return "Read timed out while fetching the schema"
    if isinstance(exc, SSLError):
        return "SSL verification problem"
    if isinstance(exc, ConnectionError):
        return "Connection failed"
    return str(exc)


def format_exception(error: BaseException) -> str:
    """Format an exception as a single `Type: message` line."""
    lines = traceback.format_exception_only(type(error), error)
    return "".join(lines).strip()
