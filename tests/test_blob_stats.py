"""Tests for storage usage summaries."""

from __future__ import annotations

import pytest

from backend.core.blob_stats import ROOT_FOLDER, folder_of, format_size, format_stats, summarize_blobs
from backend.services.blob_client import BlobObject


def _blob(pathname: str, size: int) -> BlobObject:
    return BlobObject(url=f"https://store.test/{pathname}", pathname=pathname, size=size)


@pytest.mark.parametrize(
    ("pathname", "folder"),
    [
        ("icap-papers/a.pdf", "icap-papers/"),
        ("config/nested/x.json", "config/"),
        ("top.pdf", ROOT_FOLDER),
    ],
)
def test_folder_of(pathname: str, folder: str) -> None:
    assert folder_of(pathname) == folder


@pytest.mark.parametrize(
    ("size", "text"),
    [
        (0, "0 B"),
        (1023, "1023 B"),
        (1536, "1.5 KB"),
        (5 * 1024 ** 2, "5.00 MB"),
        (3 * 1024 ** 3 // 2, "1.50 GB"),
    ],
)
def test_format_size(size: int, text: str) -> None:
    assert format_size(size) == text


def test_summarize_groups_by_folder_largest_first() -> None:
    stats = summarize_blobs(
        [
            _blob("mxml-pdfs/a.pdf", 100),
            _blob("icap-papers/b.pdf", 300),
            _blob("icap-papers/c.pdf", 200),
            _blob("readme.txt", 50),
        ]
    )

    assert stats.total_files == 4
    assert stats.total_size == 650
    assert [(f.folder, f.count, f.size) for f in stats.folders] == [
        ("icap-papers/", 2, 500),
        ("mxml-pdfs/", 1, 100),
        (ROOT_FOLDER, 1, 50),
    ]


def test_format_stats_hides_files_by_default() -> None:
    text = format_stats(summarize_blobs([_blob("icap-papers/b.pdf", 300), _blob("mxml-pdfs/a.pdf", 100)]))

    assert text.startswith("Total: 2 files | 400 B")
    assert "By folder:" in text
    assert "(75.0%)" in text
    assert "(Add --files to see individual files)" in text
    assert "All files:" not in text


def test_format_stats_lists_files_largest_first() -> None:
    text = format_stats(
        summarize_blobs([_blob("x/small.pdf", 10), _blob("x/big.pdf", 2048)]),
        show_files=True,
    )

    assert "All files:" in text
    assert text.index("x/big.pdf") < text.index("x/small.pdf")


def test_format_stats_empty_store() -> None:
    text = format_stats(summarize_blobs([]))
    assert text.startswith("Total: 0 files | 0 B")
