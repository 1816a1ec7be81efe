from __future__ import annotations

import http.client
from pathlib import Path
from typing import TYPE_CHECKING, Any, NoReturn
from urllib.parse import unquote, urlsplit

from schemaview.core import DEFAULT_REQUEST_TIMEOUT
from schemaview.core.errors import LoaderError, LoaderErrorKind, get_request_error_extras, get_request_error_message
from schemaview.core.version import SCHEMAVIEW_VERSION

if TYPE_CHECKING:
    import requests

USER_AGENT = f"schemaview/{SCHEMAVIEW_VERSION}"


def prepare_request_kwargs(kwargs: dict[str, Any]) -> None:
    """Prepare common request kwargs."""
    headers = kwargs.setdefault("headers", {})
    if "user-agent" not in {header.lower() for header in headers}:
        kwargs["headers"]["User-Agent"] = USER_AGENT


def handle_request_error(exc: requests.RequestException) -> NoReturn:
    """Handle request-level errors."""
    import requests

    url = exc.request.url if exc.request is not None else None
    if isinstance(exc, requests.exceptions.SSLError):
        kind = LoaderErrorKind.CONNECTION_SSL
    elif isinstance(exc, requests.exceptions.ConnectionError):
        kind = LoaderErrorKind.CONNECTION_OTHER
    else:
        kind = LoaderErrorKind.NETWORK_OTHER
    raise LoaderError(
        message=get_request_error_message(exc),
        kind=kind,
        url=url,
        extras=get_request_error_extras(exc),
    ) from exc


def raise_for_status(response: requests.Response) -> requests.Response:
    """Handle response status codes."""
    status_code = response.status_code
    if status_code < 400:
        return response

    reason = http.client.responses.get(status_code, "Unknown")
    if status_code >= 500:
        message = f"Failed to load schema due to server error (HTTP {status_code} {reason})"
        kind = LoaderErrorKind.HTTP_SERVER_ERROR
    else:
        message = f"Failed to load schema due to client error (HTTP {status_code} {reason})"
        kind = (
            LoaderErrorKind.HTTP_FORBIDDEN
            if status_code == 403
            else LoaderErrorKind.HTTP_NOT_FOUND
            if status_code == 404
            else LoaderErrorKind.HTTP_CLIENT_ERROR
        )
    raise LoaderError(message=message, kind=kind, url=response.url, extras=[])


def load_from_url(url: str, **kwargs: Any) -> str:
    """Fetch the raw document text over HTTP(S)."""
    import requests

    kwargs.setdefault("timeout", DEFAULT_REQUEST_TIMEOUT)
    prepare_request_kwargs(kwargs)
    try:
        response = requests.get(url, **kwargs)
    except requests.RequestException as exc:
        handle_request_error(exc)
    return raise_for_status(response).text


def load_from_path(location: str) -> str:
    """Read the raw document text from the filesystem (plain path or `file://` URI)."""
    if location.startswith("file://"):
        location = unquote(urlsplit(location).path)
    path = Path(location)
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise LoaderError(
            kind=LoaderErrorKind.FILE_NOT_FOUND, message=f"Schema file not found: {location}", url=location
        ) from None
    except (OSError, UnicodeDecodeError) as exc:
        raise LoaderError(kind=LoaderErrorKind.FILE_NOT_FOUND, message=str(exc), url=location) from exc


def fetch_text(location: str, **kwargs: Any) -> str:
    """Fetch the raw text behind a location: a URL or a local path."""
    if location.startswith(("http://", "https://")):
        return load_from_url(location, **kwargs)
    return load_from_path(location)
