"""
Blob Verifier - Spreadsheet vs Blob Storage Check

Reads the filename column of a spreadsheet, lists every blob under a
prefix, and reconciles the two by normalized filename.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Union
import logging

from shared.config import DEFAULT_FILENAME_ALIASES
from .filename_reconciler import ReconciliationResult, find_collisions, reconcile
from .spreadsheet_reader import SpreadsheetReader
from ..services.blob_client import BlobClient

logger = logging.getLogger(__name__)


@dataclass
class VerificationConfig:
    """Explicit inputs of one verification run"""
    spreadsheet_path: Union[str, Path]
    prefix: str = "icap-papers/"
    filename_aliases: List[str] = field(default_factory=lambda: list(DEFAULT_FILENAME_ALIASES))
    sheet_name: Optional[str] = None
    page_size: int = 1000


@dataclass
class VerificationReport:
    """Reconciliation outcome plus the context it was computed in"""
    spreadsheet_path: str
    prefix: str
    filename_column: str
    result: ReconciliationResult
    spreadsheet_collisions: Dict[str, List[str]] = field(default_factory=dict)
    blob_collisions: Dict[str, List[str]] = field(default_factory=dict)

    @property
    def is_perfect_match(self) -> bool:
        return self.result.is_perfect_match

    def to_dict(self) -> Dict:
        return {
            'spreadsheet_path': self.spreadsheet_path,
            'prefix': self.prefix,
            'filename_column': self.filename_column,
            'perfect_match': self.is_perfect_match,
            'summary': {
                'spreadsheet_rows_with_filename': self.result.total_a,
                'unique_spreadsheet_filenames': self.result.unique_a,
                'blob_files': self.result.total_b,
                'unique_blob_filenames': self.result.unique_b,
                'matched': self.result.matched_count,
                'in_spreadsheet_not_blob': len(self.result.only_in_a),
                'in_blob_not_spreadsheet': len(self.result.only_in_b),
            },
            'matched': list(self.result.matched),
            'in_spreadsheet_not_blob': list(self.result.only_in_a),
            'in_blob_not_spreadsheet': list(self.result.only_in_b),
            'spreadsheet_collisions': self.spreadsheet_collisions,
            'blob_collisions': self.blob_collisions,
        }


class BlobVerifier:
    """Runs spreadsheet-vs-blob verification against a blob client"""

    def __init__(self, client: BlobClient, reader: Optional[SpreadsheetReader] = None):
        self.client = client
        self.reader = reader or SpreadsheetReader()

    def verify(self, config: VerificationConfig) -> VerificationReport:
        """
        Verify that every spreadsheet filename exists in blob storage and vice versa

        Raises:
            FileNotFoundError: Spreadsheet missing
            FilenameColumnNotFound: No filename column in the spreadsheet
            BlobStoreError: Listing the store failed
        """
        logger.info(f"🔍 Verifying {config.spreadsheet_path} against prefix '{config.prefix}'")

        column, filenames = self.reader.read_filenames(
            config.spreadsheet_path,
            aliases=config.filename_aliases,
            sheet_name=config.sheet_name,
        )

        blobs = self.client.list_all(prefix=config.prefix, limit=config.page_size)
        blob_names = [blob.name for blob in blobs]

        result = reconcile(filenames, blob_names)

        report = VerificationReport(
            spreadsheet_path=str(config.spreadsheet_path),
            prefix=config.prefix,
            filename_column=column,
            result=result,
            spreadsheet_collisions=find_collisions(filenames),
            blob_collisions=find_collisions(blob_names),
        )

        for source, collisions in (('spreadsheet', report.spreadsheet_collisions),
                                   ('blob', report.blob_collisions)):
            for key, originals in collisions.items():
                logger.warning(
                    f"⚠️ {len(originals)} {source} names share key '{key}', keeping '{originals[-1]}'"
                )

        logger.info(
            f"✅ Verification complete: {result.matched_count} matched, "
            f"{len(result.only_in_a)} only in spreadsheet, {len(result.only_in_b)} only in blob"
        )
        return report


def format_report(report: VerificationReport) -> str:
    """Render a verification report for the console"""
    result = report.result
    lines = [
        "========== RESULTS ==========",
        "",
        f"Spreadsheet rows with filename : {result.total_a}",
        f"Unique spreadsheet filenames   : {result.unique_a}",
        f"Blob files ({report.prefix})".ljust(31) + f": {result.unique_b}",
        f"Matched                        : {result.matched_count}",
        "",
    ]

    if report.is_perfect_match:
        lines.append("✓ Perfect match — every spreadsheet file is in blob and vice versa.")
        return "\n".join(lines)

    if result.only_in_a:
        lines.append(f"✗ In spreadsheet but NOT in blob ({len(result.only_in_a)}):")
        lines.extend(f"  {i}. {name}" for i, name in enumerate(result.only_in_a, start=1))
        lines.append("")

    if result.only_in_b:
        lines.append(f"✗ In blob but NOT in spreadsheet ({len(result.only_in_b)}):")
        lines.extend(
            f"  {i}. {report.prefix}{name}" for i, name in enumerate(result.only_in_b, start=1)
        )
        lines.append("")

    return "\n".join(lines).rstrip("\n")
