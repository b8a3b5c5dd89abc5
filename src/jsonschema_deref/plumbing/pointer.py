"""JSON pointer (RFC 6901) utilities."""

from functools import reduce
from typing import Any
from urllib.parse import unquote

from jsonschema_deref.exceptions import MalformedReferenceError, PointerNotFoundError


def parse_json_pointer(pointer: str) -> list[str]:
    """Parse a JSON pointer into reference tokens.

    Tokens are percent-decoded first (pointers arrive as URI fragments),
    then ``~1`` and ``~0`` are unescaped in that order.

    Args:
        pointer: JSON pointer string (e.g., "/definitions/address")

    Returns:
        List of unescaped tokens; empty for the whole-document pointer

    Raises:
        MalformedReferenceError: If the pointer does not start with '/'
    """
    if not pointer:
        return []

    if not pointer.startswith("/"):
        raise MalformedReferenceError(f"Invalid JSON pointer: {pointer} (must start with '/')")

    return [unquote(part).replace("~1", "/").replace("~0", "~") for part in pointer[1:].split("/")]


def escape_token(token: str) -> str:
    return token.replace("~", "~0").replace("/", "~1")


def join_pointer(pointer: str, token: str | int) -> str:
    """Append one token to a pointer, escaping it."""
    return f"{pointer}/{escape_token(str(token))}"


def _step(node: Any, token: str) -> Any:
    match node:
        case dict():
            return node[token]
        case list():
            if not token.isdigit():
                raise ValueError(f"'{token}' is not an array index")
            if len(token) > 1 and token.startswith("0"):
                raise ValueError(f"array index '{token}' has leading zeros")
            return node[int(token)]
        case _:
            raise TypeError(f"cannot index into {type(node).__name__} with '{token}'")


def navigate(document: Any, pointer: str) -> Any:
    """Return the node a JSON pointer addresses inside a document.

    Raises:
        PointerNotFoundError: If any token cannot be resolved
    """
    tokens = parse_json_pointer(pointer)

    try:
        return reduce(_step, tokens, document)
    except (KeyError, IndexError, ValueError, TypeError) as e:
        raise PointerNotFoundError(f"Invalid JSON pointer {pointer}: {e}") from e
