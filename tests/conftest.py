"""Shared pytest fixtures for jsonschema-deref tests."""

import json
from collections.abc import Callable
from functools import partial
from pathlib import Path
from typing import Any

import httpx
import pytest


def _write_schema(root: Path, relative: str, content: Any) -> Path:
    target = root / relative
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(json.dumps(content))
    return target


@pytest.fixture
def create_json_file(tmp_path: Path):
    """Write one schema document under tmp_path and return its path.

    Subdirectories in the name are created, so relative $refs such as
    ``../common.json`` can be laid out.
    """
    return partial(_write_schema, tmp_path)


@pytest.fixture
def create_json_files(tmp_path: Path):
    """Write a set of schema documents that reference each other.

    Takes ``{relative name: content}`` and returns ``{relative name: path}``;
    pass the entry point's path to ``deref_file``.
    """

    def _create(documents: dict[str, Any]) -> dict[str, Path]:
        return {name: _write_schema(tmp_path, name, content) for name, content in documents.items()}

    return _create


class RecordingFetch:
    """In-memory fetch capability that records every locator it is asked for."""

    def __init__(self, documents: dict[str, Any]):
        self.documents = documents
        self.calls: list[str] = []

    def __call__(self, locator: str) -> bytes:
        self.calls.append(locator)
        if locator not in self.documents:
            raise FileNotFoundError(locator)
        content = self.documents[locator]
        return content if isinstance(content, bytes) else json.dumps(content).encode()


@pytest.fixture
def recording_fetch() -> Callable[[dict[str, Any]], RecordingFetch]:
    """Factory fixture for an in-memory fetch keyed by absolute locator."""
    return RecordingFetch


@pytest.fixture
def mock_http_client():
    """Factory fixture for an httpx client served by a dict of url -> JSON body.

    Unknown URLs answer 404. Every request is recorded in ``client.requested``.
    """

    def _create(routes: dict[str, Any]) -> httpx.Client:
        requested: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            url = str(request.url)
            requested.append(url)
            if url not in routes:
                return httpx.Response(404, text="Not Found")
            return httpx.Response(200, json=routes[url])

        client = httpx.Client(transport=httpx.MockTransport(handler))
        client.requested = requested
        return client

    return _create
