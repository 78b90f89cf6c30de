"""
Blob Storage Stats
==================
Prints file counts and sizes per top-level folder.

Usage:
    python blob_stats.py [prefix] [--files]
"""

import argparse
import logging
import sys
from typing import List, Optional

from dotenv import load_dotenv

from backend.core.blob_stats import format_stats, summarize_blobs
from backend.services.blob_client import BlobStoreError, create_blob_client
from shared.config import get_settings


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Show blob storage usage by folder.")
    parser.add_argument("prefix", nargs="?", help="Only include pathnames with this prefix")
    parser.add_argument("--files", action="store_true", help="List individual files, largest first")
    parser.add_argument("--token", help="Blob read/write token (default: BLOB_READ_WRITE_TOKEN)")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv(".env.local")
    logging.basicConfig(level=logging.WARNING, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    args = parse_args(argv)
    settings = get_settings()

    token = args.token or settings.blob_read_write_token
    if not token:
        print("Error: BLOB_READ_WRITE_TOKEN is not set", file=sys.stderr)
        return 1

    print("Blob Storage Stats")
    print("==================")
    if args.prefix:
        print(f"Prefix filter: {args.prefix}")
    print("\nFetching files...")

    try:
        blobs = create_blob_client(token=token, settings=settings).list_all(
            prefix=args.prefix, limit=settings.list_page_size
        )
    except BlobStoreError as e:
        print(f"Error: Failed to list blob storage: {e}", file=sys.stderr)
        return 1

    print()
    print(format_stats(summarize_blobs(blobs), show_files=args.files))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
