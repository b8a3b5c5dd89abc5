"""Exception classes for jsonschema-deref."""


class DerefError(Exception):
    """Base exception for all jsonschema-deref errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MalformedReferenceError(DerefError):
    """A $ref value cannot be split into a document locator and a JSON pointer."""


class UnresolvableLocatorError(DerefError):
    """A document locator cannot be normalized against the current base."""


class FetchError(DerefError):
    """An external document could not be retrieved."""


class ParseError(DerefError):
    """Retrieved bytes are not a valid JSON document."""


class PointerNotFoundError(DerefError):
    """A JSON pointer does not address a node in the target document."""


class MergeConflictError(DerefError):
    """Sibling properties of a $ref cannot be merged into the resolved fragment."""
