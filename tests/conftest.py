"""Shared fixtures: fake HTTP session for the blob client and an in-memory blob store."""

from __future__ import annotations

import json
from typing import Any

import pytest
import requests

from backend.services.blob_client import BlobClient, BlobObject, BlobStoreError


def make_response(status_code: int = 200, json_data: Any = None, content: bytes = b"") -> requests.Response:
    """Build a real `requests.Response` with the given status and body."""
    response = requests.Response()
    response.status_code = status_code
    response._content = json.dumps(json_data).encode("utf-8") if json_data is not None else content
    response.url = "https://blob.test"
    return response


class FakeSession:
    """Stands in for `requests.Session`: replays queued responses and records calls."""

    def __init__(self, responses: list[requests.Response | Exception] | None = None) -> None:
        self.responses = list(responses or [])
        self.calls: list[dict[str, Any]] = []

    def request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        self.calls.append({"method": method, "url": url, **kwargs})
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


class InMemoryBlobClient:
    """Blob client double backed by a dict keyed by pathname."""

    def __init__(self) -> None:
        self.store: dict[str, tuple[BlobObject, bytes]] = {}
        self.fail = False
        self.deleted: list[str] = []
        self.list_limits: list[int] = []

    def add(self, pathname: str, content: bytes = b"%PDF", size: int | None = None) -> BlobObject:
        blob = BlobObject(
            url=f"https://store.test/{pathname}",
            pathname=pathname,
            size=len(content) if size is None else size,
            uploaded_at="2026-01-01T00:00:00Z",
        )
        self.store[pathname] = (blob, content)
        return blob

    def _check(self) -> None:
        if self.fail:
            raise BlobStoreError("store unavailable", 503)

    def list_all(self, prefix: str | None = None, limit: int = 1000) -> list[BlobObject]:
        self._check()
        self.list_limits.append(limit)
        return [blob for path, (blob, _) in self.store.items() if not prefix or path.startswith(prefix)]

    def put(self, pathname: str, body: bytes | str, content_type: str | None = None, **kwargs: Any) -> BlobObject:
        self._check()
        if isinstance(body, str):
            body = body.encode("utf-8")
        return self.add(pathname, body)

    def delete(self, urls: list[str]) -> None:
        self._check()
        for url in urls:
            pathname = url.removeprefix("https://store.test/")
            self.store.pop(pathname, None)
            self.deleted.append(pathname)

    def get_json(self, url: str) -> Any:
        self._check()
        return json.loads(self.store[url.removeprefix("https://store.test/")][1])


@pytest.fixture
def fake_session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def blob_client(fake_session: FakeSession) -> BlobClient:
    return BlobClient(token="test-token", base_url="https://blob.test", backoff=0, session=fake_session)


@pytest.fixture
def memory_store() -> InMemoryBlobClient:
    return InMemoryBlobClient()
