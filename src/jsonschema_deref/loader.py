"""One-shot dereferencing entry points.

Each call builds a fresh resolver, so no documents are cached between calls.
"""

from pathlib import Path
from typing import Any

from jsonschema_deref.config import DerefSettings
from jsonschema_deref.context import Fetch, Parse
from jsonschema_deref.resolver import JsonRef


def deref(
    value: Any,
    base_locator: str | Path | None = None,
    *,
    fetch: Fetch | None = None,
    parse: Parse | None = None,
    settings: DerefSettings | None = None,
) -> Any:
    """Dereference all $ref statements in a parsed JSON document.

    Args:
        value: The parsed document; it is left untouched
        base_locator: Path or URL the document conceptually lives at
        fetch: Callable returning the raw bytes of an external document
        parse: Callable turning raw bytes into a JSON value
        settings: Resolver settings; read from the environment when omitted

    Returns:
        A new document with every non-recursive $ref replaced

    Raises:
        DerefError: If a reference is malformed, cannot be fetched, parsed or found
    """
    return JsonRef(settings, fetch=fetch, parse=parse).deref_value(value, base_locator)


def deref_file(
    path: str | Path,
    *,
    fetch: Fetch | None = None,
    parse: Parse | None = None,
    settings: DerefSettings | None = None,
) -> Any:
    """Load a JSON file and dereference it."""
    return JsonRef(settings, fetch=fetch, parse=parse).deref_file(path)


def deref_url(
    url: str,
    *,
    fetch: Fetch | None = None,
    parse: Parse | None = None,
    settings: DerefSettings | None = None,
) -> Any:
    """Fetch a JSON document from a URL and dereference it."""
    return JsonRef(settings, fetch=fetch, parse=parse).deref_url(url)
