"""Dereferencing of $ref nodes in JSON documents."""

import copy
import logging
from functools import partial
from pathlib import Path
from typing import Any

from deepmerge import always_merger

from jsonschema_deref.config import DerefSettings, SiblingPolicy
from jsonschema_deref.context import Fetch, Parse, ResolverContext
from jsonschema_deref.exceptions import (
    DerefError,
    FetchError,
    MergeConflictError,
    ParseError,
    PointerNotFoundError,
)
from jsonschema_deref.fetch import fetch_document, parse_document
from jsonschema_deref.plumbing.cache import DocumentCache
from jsonschema_deref.plumbing.circular import ResolutionPathSet
from jsonschema_deref.plumbing.locator import (
    default_base_locator,
    resolve_locator,
    split_reference,
    to_locator,
)
from jsonschema_deref.plumbing.pointer import join_pointer, navigate

logger = logging.getLogger(__name__)

REF_KEY = "$ref"
ID_KEY = "$id"


class JsonRef:
    """Replaces every $ref in a JSON document with the fragment it points to.

    An instance keeps its document cache across calls, so a batch of schemas
    that share external documents fetches each of them once. Use the
    functions in ``jsonschema_deref.loader`` for one-off calls.

    Recursive references are expanded one level; the next occurrence of the
    same reference becomes an empty object.
    """

    def __init__(
        self,
        settings: DerefSettings | None = None,
        fetch: Fetch | None = None,
        parse: Parse | None = None,
    ):
        self.settings = settings.model_copy() if settings is not None else DerefSettings()
        self.fetch = fetch or partial(fetch_document, timeout=self.settings.http_timeout)
        self.parse = parse or parse_document
        self.cache = DocumentCache()

    def set_reference_key(self, reference_key: str) -> None:
        """Store the keys a $ref replaced under ``reference_key`` in the output."""
        self.settings = self.settings.model_copy(update={"reference_key": reference_key})

    def clear_cache(self) -> None:
        self.cache.clear()

    def deref_value(self, value: Any, base_locator: str | Path | None = None) -> Any:
        """Dereference an already parsed document.

        Args:
            value: The document; it is not modified
            base_locator: Where the document lives, used for relative external
                references. Defaults to ``anon.json`` in the working directory.

        Returns:
            A new document with all references resolved

        Raises:
            DerefError: If any reference cannot be resolved
        """
        base = to_locator(base_locator) if base_locator else default_base_locator()
        self.cache.put(base, value)
        return self._walk(value, ResolverContext(base=base, cache=self.cache))

    def deref_file(self, path: str | Path) -> Any:
        """Load a JSON file and dereference it; relative references resolve against the file."""
        return self._deref_document(to_locator(Path(path)))

    def deref_url(self, url: str) -> Any:
        """Fetch a JSON document from a URL and dereference it."""
        return self._deref_document(to_locator(url))

    def _deref_document(self, locator: str) -> Any:
        document = self.cache.get_or_load(locator, self._load)
        return self._walk(document, ResolverContext(base=locator, cache=self.cache))

    def _load(self, locator: str) -> Any:
        logger.debug(f"Loading document {locator}")

        try:
            raw = self.fetch(locator)
        except DerefError:
            raise
        except Exception as e:
            raise FetchError(f"Failed to fetch {locator}: {e}") from e

        try:
            return self.parse(raw)
        except DerefError:
            raise
        except Exception as e:
            raise ParseError(f"Failed to parse {locator}: {e}") from e

    def _walk(self, node: Any, context: ResolverContext) -> Any:
        """Rebuild ``node`` with every reference in it resolved."""
        match node:
            case dict():
                context = self._enter_resource(node, context)
                if isinstance(node.get(REF_KEY), str):
                    return self._substitute(node, context)
                return self._walk_members(node, context)
            case list():
                return [self._walk(item, context.at(join_pointer(context.pointer, index))) for index, item in enumerate(node)]
            case _:
                return node

    def _walk_members(self, mapping: dict[str, Any], context: ResolverContext) -> dict[str, Any]:
        return {key: self._walk(value, context.at(join_pointer(context.pointer, key))) for key, value in mapping.items()}

    def _enter_resource(self, node: dict[str, Any], context: ResolverContext) -> ResolverContext:
        """Switch the base locator for a subtree that declares its own $id."""
        schema_id = node.get(ID_KEY)
        if not isinstance(schema_id, str):
            return context

        base = resolve_locator(context.base, schema_id)
        if base == context.base:
            return context

        context.cache.put(base, node)
        return context.rebased(base)

    def _substitute(self, node: dict[str, Any], context: ResolverContext) -> Any:
        """Replace a $ref node with its resolved fragment.

        Sibling keys are dropped unless the sibling policy merges them. With a
        reference key configured they are also kept under that key.
        """
        fragment = self._resolve(node[REF_KEY], context)

        siblings = {key: value for key, value in node.items() if key != REF_KEY}
        merge_siblings = bool(siblings) and self.settings.sibling_policy == SiblingPolicy.MERGE
        keep_siblings = self.settings.reference_key is not None and isinstance(fragment, dict)
        if not merge_siblings and not keep_siblings:
            return fragment

        resolved_siblings = self._walk_members(siblings, context)

        if merge_siblings:
            fragment = self._merge(fragment, resolved_siblings, context)

        if keep_siblings:
            fragment[self.settings.reference_key] = copy.deepcopy(resolved_siblings)

        return fragment

    def _resolve(self, ref: str, context: ResolverContext) -> Any:
        """Return an independent, fully dereferenced copy of the fragment ``ref`` names."""
        locator, pointer = split_reference(ref)
        target = resolve_locator(context.base, locator)
        key = ResolutionPathSet.key(target, pointer)

        if key in context.active:
            logger.debug(f"Recursive reference {ref} at {context.location}, expansion stopped")
            return {}

        with context.active.entered(key):
            document = context.cache.get_or_load(target, self._load)
            try:
                fragment = navigate(document, pointer)
            except PointerNotFoundError as e:
                raise PointerNotFoundError(f"$ref '{ref}' at {context.location} cannot be resolved: {e.message}") from e

            return self._walk(fragment, context.rebased(target, pointer))

    def _merge(self, fragment: Any, siblings: dict[str, Any], context: ResolverContext) -> Any:
        if not isinstance(fragment, dict):
            raise MergeConflictError(f"Cannot merge non-dict reference with sibling properties at {context.location}")

        self._detect_merge_conflicts(fragment, siblings, context.pointer)
        return always_merger.merge(fragment, siblings)

    def _detect_merge_conflicts(self, base: Any, overlay: Any, path: str) -> None:
        """Raise if ``overlay`` would overwrite a differing scalar in ``base``.

        ``path`` is the JSON pointer of ``base`` in the output document, e.g.
        ``/properties/name/type``; it names the conflicting key in the error.
        """
        if base is None or overlay is None:
            return

        if isinstance(base, dict) and isinstance(overlay, dict):
            for key, value in overlay.items():
                if key in base:
                    self._detect_merge_conflicts(base[key], value, join_pointer(path, key))
            return

        if isinstance(base, list) and isinstance(overlay, list):
            return

        if base == overlay:
            return

        raise MergeConflictError(f"Merge conflict at {path or '/'}")
