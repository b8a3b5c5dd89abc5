"""Reference splitting and document locator normalization."""

import re
from pathlib import Path
from urllib.parse import quote, unquote, urldefrag, urljoin, urlsplit, urlunsplit, uses_relative

from jsonschema_deref.exceptions import MalformedReferenceError, UnresolvableLocatorError

# Regex pattern for parsing $ref values
REF_PATTERN = re.compile(r"^(?P<locator>[^#]*)(?:#(?P<pointer>(?:/[^#]*)?))?$")

ANONYMOUS_DOCUMENT = "anon.json"

# Characters left unescaped in a normalized locator path (RFC 3986 pchar plus "/")
PATH_SAFE = "/:@!$&'()*+,;=~"


def split_reference(ref: str) -> tuple[str, str]:
    """Split a $ref value into its document locator and JSON pointer.

    Either part may be empty, but the reference itself may not.

    Raises:
        MalformedReferenceError: If the reference has no usable split
    """
    match = REF_PATTERN.match(ref)

    if not ref or not match:
        raise MalformedReferenceError(f"Invalid $ref format: {ref!r}")

    return match.group("locator"), match.group("pointer") or ""


def to_locator(location: str | Path) -> str:
    """Turn a filesystem path or URL into an absolute document locator."""
    if isinstance(location, Path):
        return normalize_locator(location.resolve().as_uri())

    if urlsplit(location).scheme and not Path(location).drive:
        return normalize_locator(urldefrag(location).url)

    return normalize_locator(Path(location).resolve().as_uri())


def normalize_locator(locator: str) -> str:
    """Canonicalize the path of a hierarchical URL.

    Dot segments are removed and percent-encoding is made uniform, so
    ``a b.json``, ``a%20b.json`` and ``./a%20b.json`` name one document.
    """
    parts = urlsplit(locator)
    if parts.scheme not in uses_relative or not parts.path.startswith("/") or parts.path.startswith("//"):
        return locator

    parts = urlsplit(urljoin(locator, urlunsplit(("", "", parts.path, parts.query, ""))))
    return urlunsplit(parts._replace(path=quote(unquote(parts.path), safe=PATH_SAFE)))


def default_base_locator() -> str:
    """Locator used for documents that were not loaded from anywhere."""
    return to_locator(Path.cwd() / ANONYMOUS_DOCUMENT)


def resolve_locator(base: str, locator: str) -> str:
    """Resolve a (possibly relative) document locator against a base.

    Returns:
        Absolute locator without fragment; ``base`` when ``locator`` is empty

    Raises:
        UnresolvableLocatorError: If the result is not an absolute URL
    """
    try:
        absolute = normalize_locator(urldefrag(urljoin(base, locator) if locator else base).url)
        parts = urlsplit(absolute)
    except ValueError as e:
        raise UnresolvableLocatorError(f"Cannot resolve '{locator}' against '{base}': {e}") from e

    if not parts.scheme:
        raise UnresolvableLocatorError(f"Cannot resolve '{locator}' against '{base}': no absolute base")

    return absolute
