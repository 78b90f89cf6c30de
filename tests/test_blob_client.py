"""Tests for the blob storage REST client, using a fake HTTP session."""

from __future__ import annotations

import json

import pytest
import requests

from backend.services.blob_client import BlobClient, BlobObject, BlobStoreError
from conftest import FakeSession, make_response


def _blob(pathname: str, size: int = 10) -> dict:
    return {
        "url": f"https://store.test/{pathname}",
        "downloadUrl": f"https://store.test/{pathname}?download=1",
        "pathname": pathname,
        "size": size,
        "uploadedAt": "2026-01-01T00:00:00.000Z",
    }


def test_client_requires_token() -> None:
    with pytest.raises(ValueError, match="Blob token required"):
        BlobClient(token="")


def test_list_sends_auth_and_query_parameters(blob_client: BlobClient, fake_session: FakeSession) -> None:
    """Listing passes prefix, limit, cursor and the bearer token."""
    fake_session.responses.append(
        make_response(json_data={"blobs": [_blob("icap-papers/a.pdf")], "cursor": "next", "hasMore": True})
    )

    page = blob_client.list(prefix="icap-papers/", limit=50, cursor="abc")

    call = fake_session.calls[0]
    assert call["method"] == "GET"
    assert call["url"] == "https://blob.test"
    assert call["params"] == {"limit": 50, "prefix": "icap-papers/", "cursor": "abc"}
    assert call["headers"]["authorization"] == "Bearer test-token"
    assert call["headers"]["x-api-version"] == "7"
    assert page.cursor == "next"
    assert page.has_more is True
    assert page.blobs[0].name == "a.pdf"
    assert page.blobs[0].uploaded_at == "2026-01-01T00:00:00.000Z"


def test_list_all_follows_cursor_until_exhausted(blob_client: BlobClient, fake_session: FakeSession) -> None:
    """Every page is fetched; the last page has no cursor."""
    fake_session.responses.extend(
        [
            make_response(json_data={"blobs": [_blob("p/a.pdf"), _blob("p/b.pdf")], "cursor": "c1", "hasMore": True}),
            make_response(json_data={"blobs": [_blob("p/c.pdf")], "cursor": "c2", "hasMore": True}),
            make_response(json_data={"blobs": [], "hasMore": False}),
        ]
    )

    blobs = blob_client.list_all(prefix="p/")

    assert [blob.pathname for blob in blobs] == ["p/a.pdf", "p/b.pdf", "p/c.pdf"]
    assert [call["params"].get("cursor") for call in fake_session.calls] == [None, "c1", "c2"]


def test_put_sets_storage_headers_and_returns_object(blob_client: BlobClient, fake_session: FakeSession) -> None:
    fake_session.responses.append(
        make_response(json_data={"url": "https://store.test/config/x.json", "pathname": "config/x.json"})
    )

    blob = blob_client.put(
        "config/x.json",
        '{"a": 1}',
        content_type="application/json",
        cache_control_max_age=0,
    )

    call = fake_session.calls[0]
    assert call["method"] == "PUT"
    assert call["params"] == {"pathname": "config/x.json"}
    assert call["data"] == b'{"a": 1}'
    assert call["headers"]["x-add-random-suffix"] == "0"
    assert call["headers"]["x-allow-overwrite"] == "1"
    assert call["headers"]["x-content-type"] == "application/json"
    assert call["headers"]["x-cache-control-max-age"] == "0"
    assert blob == BlobObject(url="https://store.test/config/x.json", pathname="config/x.json", size=8)


def test_delete_posts_urls_and_skips_empty(blob_client: BlobClient, fake_session: FakeSession) -> None:
    fake_session.responses.append(make_response(json_data={}))

    blob_client.delete([])
    blob_client.delete("https://store.test/a.pdf")

    assert len(fake_session.calls) == 1
    assert fake_session.calls[0]["url"] == "https://blob.test/delete"
    assert fake_session.calls[0]["json"] == {"urls": ["https://store.test/a.pdf"]}


def test_get_json_fetches_public_url_without_token(blob_client: BlobClient, fake_session: FakeSession) -> None:
    fake_session.responses.append(make_response(content=json.dumps({"rubrics": {}}).encode()))

    data = blob_client.get_json("https://store.test/config/x.json")

    call = fake_session.calls[0]
    assert data == {"rubrics": {}}
    assert call["headers"] is None
    assert "t" in call["params"]


def test_get_json_rejects_invalid_json(blob_client: BlobClient, fake_session: FakeSession) -> None:
    fake_session.responses.append(make_response(content=b"<html>"))
    with pytest.raises(BlobStoreError, match="not valid JSON"):
        blob_client.get_json("https://store.test/config/x.json")


def test_retries_server_errors_then_succeeds(blob_client: BlobClient, fake_session: FakeSession) -> None:
    """429 and 5xx are retried with backoff."""
    fake_session.responses.extend(
        [
            make_response(status_code=503),
            make_response(status_code=429),
            make_response(json_data={"blobs": []}),
        ]
    )

    page = blob_client.list()

    assert page.blobs == []
    assert len(fake_session.calls) == 3


def test_gives_up_after_max_retries(blob_client: BlobClient, fake_session: FakeSession) -> None:
    fake_session.responses.extend([make_response(status_code=500)] * 3)

    with pytest.raises(BlobStoreError, match="after 3 attempts") as excinfo:
        blob_client.list()
    assert excinfo.value.status_code == 500


def test_auth_failure_is_not_retried(blob_client: BlobClient, fake_session: FakeSession) -> None:
    fake_session.responses.append(make_response(status_code=403))

    with pytest.raises(BlobStoreError, match="Invalid blob storage token") as excinfo:
        blob_client.list()
    assert excinfo.value.status_code == 403
    assert len(fake_session.calls) == 1


def test_client_error_fails_fast(blob_client: BlobClient, fake_session: FakeSession) -> None:
    fake_session.responses.append(make_response(status_code=404))

    with pytest.raises(BlobStoreError, match="HTTP 404"):
        blob_client.get_by_url("https://store.test/missing.pdf")
    assert len(fake_session.calls) == 1


def test_connection_errors_are_retried(blob_client: BlobClient, fake_session: FakeSession) -> None:
    fake_session.responses.extend(
        [requests.exceptions.ConnectionError("reset"), make_response(content=b"%PDF-1.7")]
    )

    assert blob_client.get_by_url("https://store.test/a.pdf") == b"%PDF-1.7"
    assert len(fake_session.calls) == 2
