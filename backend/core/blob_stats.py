"""
Blob Stats - Storage usage summary grouped by top-level folder
"""

from dataclasses import dataclass, field
from typing import Iterable, List

from ..services.blob_client import BlobObject

ROOT_FOLDER = "(root)"


@dataclass
class FolderStats:
    folder: str
    count: int = 0
    size: int = 0


@dataclass
class BlobStats:
    total_files: int = 0
    total_size: int = 0
    folders: List[FolderStats] = field(default_factory=list)  # largest first
    blobs: List[BlobObject] = field(default_factory=list)


def folder_of(pathname: str) -> str:
    """First path segment with a trailing slash, or ROOT_FOLDER"""
    parts = pathname.split('/')
    return parts[0] + '/' if len(parts) > 1 else ROOT_FOLDER


def format_size(size: int) -> str:
    """Human-readable byte size, e.g. 1536 -> '1.5 KB'"""
    if size < 1024:
        return f"{size} B"
    if size < 1024 ** 2:
        return f"{size / 1024:.1f} KB"
    if size < 1024 ** 3:
        return f"{size / 1024 ** 2:.2f} MB"
    return f"{size / 1024 ** 3:.2f} GB"


def summarize_blobs(blobs: Iterable[BlobObject]) -> BlobStats:
    """Group blobs by folder, sorted by total size descending"""
    blobs = list(blobs)
    folders = {}
    for blob in blobs:
        stats = folders.setdefault(folder_of(blob.pathname), FolderStats(folder_of(blob.pathname)))
        stats.count += 1
        stats.size += blob.size

    return BlobStats(
        total_files=len(blobs),
        total_size=sum(blob.size for blob in blobs),
        folders=sorted(folders.values(), key=lambda f: f.size, reverse=True),
        blobs=blobs,
    )


def format_stats(stats: BlobStats, show_files: bool = False) -> str:
    """Render stats for the console"""
    lines = [f"Total: {stats.total_files} files | {format_size(stats.total_size)}", "", "By folder:", "-" * 50]

    for folder in stats.folders:
        pct = (folder.size / stats.total_size * 100) if stats.total_size else 0.0
        lines.append(
            f"  {folder.folder:<25} {folder.count:>5} files | {format_size(folder.size):>10} ({pct:.1f}%)"
        )

    if show_files:
        lines.extend(["", "All files:", "-" * 70])
        for blob in sorted(stats.blobs, key=lambda b: b.size, reverse=True):
            lines.append(f"  {format_size(blob.size):>10}  {blob.pathname}")
    else:
        lines.extend(["", "(Add --files to see individual files)"])

    return "\n".join(lines)
