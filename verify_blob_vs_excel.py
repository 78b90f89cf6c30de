"""
Verify Blob vs Excel
====================
Checks that every PDF named in a spreadsheet's filename column exists in
blob storage under a prefix, and that every stored PDF is listed.

Usage:
    python verify_blob_vs_excel.py "data/ICAP papers with metrics.xlsx" icap-papers/
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from backend.core.blob_verifier import BlobVerifier, VerificationConfig, format_report
from backend.services.blob_client import BlobStoreError, create_blob_client
from shared.config import get_settings

DEFAULT_SPREADSHEET = Path("data") / "ICAP papers with metrics.xlsx"


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Compare a spreadsheet's PDF filenames with blob storage.")
    parser.add_argument(
        "spreadsheet",
        nargs="?",
        type=Path,
        default=DEFAULT_SPREADSHEET,
        help=f"Excel/CSV file with a filename column (default: {DEFAULT_SPREADSHEET})",
    )
    parser.add_argument(
        "prefix",
        nargs="?",
        help="Blob prefix to list (default: settings.verify_prefix)",
    )
    parser.add_argument(
        "--column-alias",
        action="append",
        dest="column_aliases",
        help="Accepted filename column header; repeatable (default: built-in aliases)",
    )
    parser.add_argument("--sheet", help="Excel sheet name (default: first sheet)")
    parser.add_argument("--token", help="Blob read/write token (default: BLOB_READ_WRITE_TOKEN)")
    parser.add_argument("--json", action="store_true", help="Print the report as JSON")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv(".env.local")
    logging.basicConfig(
        level=logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    args = parse_args(argv)
    settings = get_settings()

    token = args.token or settings.blob_read_write_token
    if not token:
        print("Error: BLOB_READ_WRITE_TOKEN not set", file=sys.stderr)
        return 1

    if not args.spreadsheet.exists():
        print(f"Error: Spreadsheet not found at {args.spreadsheet}", file=sys.stderr)
        return 1

    config = VerificationConfig(
        spreadsheet_path=args.spreadsheet,
        prefix=args.prefix or settings.verify_prefix,
        filename_aliases=args.column_aliases or list(settings.filename_column_aliases),
        sheet_name=args.sheet,
        page_size=settings.list_page_size,
    )

    if not args.json:
        print("Verify Blob vs Excel")
        print("====================")
        print(f"Spreadsheet: {config.spreadsheet_path}")
        print(f"Prefix     : {config.prefix}\n")

    client = create_blob_client(token=token, settings=settings)

    try:
        report = BlobVerifier(client).verify(config)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except BlobStoreError as e:
        print(f"Error: Failed to list blob storage: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(report.to_dict(), indent=2, ensure_ascii=False))
    else:
        print(f"Filename column: \"{report.filename_column}\"\n")
        print(format_report(report))

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
