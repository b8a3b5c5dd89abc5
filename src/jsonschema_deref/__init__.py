from .config import DerefSettings, SiblingPolicy
from .exceptions import (
    DerefError,
    FetchError,
    MalformedReferenceError,
    MergeConflictError,
    ParseError,
    PointerNotFoundError,
    UnresolvableLocatorError,
)
from .fetch import fetch_document, parse_document
from .loader import deref, deref_file, deref_url
from .resolver import JsonRef

__all__ = [
    "deref",
    "deref_file",
    "deref_url",
    "fetch_document",
    "parse_document",
    "JsonRef",
    "DerefSettings",
    "SiblingPolicy",
    "DerefError",
    "FetchError",
    "MalformedReferenceError",
    "MergeConflictError",
    "ParseError",
    "PointerNotFoundError",
    "UnresolvableLocatorError",
]
