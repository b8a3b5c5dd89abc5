"""Default fetch and parse capabilities.

The resolver only needs ``fetch(locator) -> bytes`` and ``parse(bytes) -> value``;
these implementations cover ``file:`` and ``http(s):`` locators and plain JSON.
"""

import json
import logging
from pathlib import Path
from typing import Any
from urllib.parse import unquote, urlsplit

import httpx

from jsonschema_deref.exceptions import FetchError, ParseError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


def _read_file(locator: str) -> bytes:
    path = Path(unquote(urlsplit(locator).path))
    try:
        return path.read_bytes()
    except FileNotFoundError:
        raise FetchError(f"Referenced document not found: {path}") from None
    except OSError as e:
        raise FetchError(f"Failed to read {path}: {e}") from e


def _read_url(locator: str, timeout: float, client: httpx.Client | None) -> bytes:
    try:
        if client is not None:
            response = client.get(locator, timeout=timeout, follow_redirects=True)
        else:
            response = httpx.get(locator, timeout=timeout, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        raise FetchError(f"Failed to fetch {locator}: HTTP {e.response.status_code}") from e
    except httpx.HTTPError as e:
        raise FetchError(f"Failed to fetch {locator}: {e}") from e
    return response.content


def fetch_document(
    locator: str,
    *,
    timeout: float = DEFAULT_TIMEOUT,
    client: httpx.Client | None = None,
) -> bytes:
    """Retrieve the raw bytes of a document.

    Args:
        locator: Absolute ``file:``, ``http:`` or ``https:`` URL
        timeout: Seconds to wait for an HTTP response
        client: Optional httpx client to send HTTP requests with

    Returns:
        The document bytes

    Raises:
        FetchError: If the document cannot be retrieved or the scheme is unsupported
    """
    scheme = urlsplit(locator).scheme
    logger.debug(f"Fetching {locator}")

    match scheme:
        case "file":
            return _read_file(locator)
        case "http" | "https":
            return _read_url(locator, timeout, client)
        case _:
            raise FetchError(f"Unsupported locator scheme '{scheme}' in {locator}")


def parse_document(raw: bytes) -> Any:
    """Parse raw bytes into a JSON value.

    Raises:
        ParseError: If the bytes are not valid UTF-8 JSON
    """
    try:
        return json.loads(raw)
    except ValueError as e:
        raise ParseError(f"Invalid JSON document: {e}") from e
