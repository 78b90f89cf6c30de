"""
Spreadsheet Reader - Filename Column Extraction

Parses Excel and CSV exports (Scopus / Web of Science / hand-kept sheets)
and pulls the PDF filename column out of them for reconciliation.
"""

import pandas as pd
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple, Union
import chardet
import logging

from shared.config import DEFAULT_FILENAME_ALIASES

logger = logging.getLogger(__name__)


class FilenameColumnNotFound(ValueError):
    """No spreadsheet header matched a known filename alias"""

    def __init__(self, headers: Sequence[str]):
        self.headers = list(headers)
        super().__init__(
            f"Could not find filename column. Headers: {', '.join(self.headers)}"
        )


class SpreadsheetParseError(ValueError):
    """The spreadsheet exists but could not be parsed (corrupt or not a spreadsheet)"""

    def __init__(self, file_path: Union[str, Path], cause: Optional[Exception] = None):
        self.file_path = str(file_path)
        super().__init__(f"Could not read spreadsheet {Path(file_path).name}: {cause}")


def find_filename_column(
    columns: Iterable[str],
    aliases: Optional[Iterable[str]] = None
) -> Optional[str]:
    """
    Find the first header matching a filename alias (case-insensitive, trimmed)

    Args:
        columns: Spreadsheet headers in sheet order
        aliases: Accepted header names (default: DEFAULT_FILENAME_ALIASES)

    Returns:
        Matching header as it appears in the sheet, or None
    """
    accepted = {alias.strip().lower() for alias in (aliases or DEFAULT_FILENAME_ALIASES)}
    for column in columns:
        if str(column).strip().lower() in accepted:
            return column
    return None


def extract_filenames(df: pd.DataFrame, column: str) -> List[str]:
    """
    Extract non-empty, trimmed filename cells from a column

    Args:
        df: Parsed spreadsheet
        column: Filename column header

    Returns:
        Filenames in row order (duplicates kept)
    """
    filenames = []
    for value in df[column].tolist():
        if value is None or pd.isna(value):
            continue
        text = str(value).strip()
        if text:
            filenames.append(text)
    return filenames


class SpreadsheetReader:
    """
    File reader for filename spreadsheets

    Supports:
    - Excel files (.xlsx, .xls), first sheet unless a sheet name is given
    - CSV files with automatic encoding detection
    """

    def __init__(self):
        self.supported_extensions = {
            '.xlsx': 'excel',
            '.xls': 'excel_legacy',
            '.csv': 'csv',
        }

    def detect_file_type(self, file_path: Union[str, Path]) -> str:
        """
        Detect file type based on extension

        Raises:
            ValueError: If file type is not supported
        """
        extension = Path(file_path).suffix.lower()

        if extension not in self.supported_extensions:
            raise ValueError(
                f"Unsupported file type: {extension}. "
                f"Supported types: {', '.join(self.supported_extensions.keys())}"
            )

        return self.supported_extensions[extension]

    def parse_file(
        self,
        file_path: Union[str, Path],
        sheet_name: Optional[str] = None
    ) -> pd.DataFrame:
        """
        Parse a spreadsheet into a DataFrame of text cells

        Args:
            file_path: Path to the spreadsheet
            sheet_name: For Excel files, which sheet to parse

        Returns:
            DataFrame with parsed data

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the file type is not supported
            SpreadsheetParseError: If the file cannot be parsed
        """
        path = Path(file_path)
        file_type = self.detect_file_type(path)

        if not path.exists():
            raise FileNotFoundError(f"Spreadsheet not found: {path}")

        logger.info(f"Parsing {file_type} file: {path}")

        if file_type == 'csv':
            return self.parse_csv(path)
        return self.parse_excel(path, sheet_name)

    def parse_excel(
        self,
        file_path: Union[str, Path],
        sheet_name: Optional[str] = None
    ) -> pd.DataFrame:
        """Parse Excel file (default: first sheet)"""
        try:
            df = pd.read_excel(file_path, sheet_name=sheet_name or 0, dtype=str, keep_default_na=False)
        except Exception as e:
            logger.error(f"Failed to parse Excel file: {e}")
            raise SpreadsheetParseError(file_path, e) from e

        df = self._clean_dataframe(df)
        logger.info(f"Parsed Excel: {len(df)} rows, {len(df.columns)} columns")
        return df

    def parse_csv(
        self,
        file_path: Union[str, Path],
        encoding: Optional[str] = None
    ) -> pd.DataFrame:
        """Parse CSV file with automatic encoding detection"""
        if encoding is None:
            encoding = self._detect_encoding(file_path)
            logger.info(f"Detected encoding: {encoding}")

        last_error: Optional[Exception] = None
        for attempt_encoding in [encoding, 'utf-8-sig', 'latin-1', 'cp1252']:
            try:
                df = pd.read_csv(file_path, encoding=attempt_encoding, dtype=str, keep_default_na=False)
            except (UnicodeDecodeError, LookupError) as e:
                logger.warning(f"Failed to parse CSV with {attempt_encoding}: {e}")
                last_error = e
                continue
            except (pd.errors.ParserError, pd.errors.EmptyDataError) as e:
                logger.error(f"Failed to parse CSV file: {e}")
                raise SpreadsheetParseError(file_path, e) from e

            if attempt_encoding != encoding:
                logger.info(f"Successfully parsed with {attempt_encoding}")
            df = self._clean_dataframe(df)
            logger.info(f"Parsed CSV: {len(df)} rows, {len(df.columns)} columns")
            return df

        raise SpreadsheetParseError(file_path, last_error) from last_error

    def read_filenames(
        self,
        file_path: Union[str, Path],
        aliases: Optional[Iterable[str]] = None,
        sheet_name: Optional[str] = None
    ) -> Tuple[str, List[str]]:
        """
        Read the filename column of a spreadsheet

        Returns:
            (matched column header, filenames)

        Raises:
            FilenameColumnNotFound: If no header matches an alias
        """
        df = self.parse_file(file_path, sheet_name=sheet_name)

        column = find_filename_column(df.columns, aliases)
        if column is None:
            raise FilenameColumnNotFound(df.columns)

        filenames = extract_filenames(df, column)
        logger.info(f"Filename column '{column}': {len(filenames)} filenames")
        return column, filenames

    def _detect_encoding(self, file_path: Union[str, Path]) -> str:
        """Detect file encoding using chardet (first 10KB)"""
        try:
            with open(file_path, 'rb') as f:
                raw_data = f.read(10000)
            result = chardet.detect(raw_data)
            return result['encoding'] or 'utf-8'
        except OSError as e:
            logger.warning(f"Encoding detection failed: {e}, defaulting to utf-8")
            return 'utf-8'

    def _clean_dataframe(self, df: pd.DataFrame) -> pd.DataFrame:
        """
        Basic DataFrame cleaning

        - Strip whitespace from column names
        - Remove rows whose cells are all blank
        """
        df.columns = [str(col).strip() for col in df.columns]
        blank = df.fillna('').astype(str).apply(lambda col: col.str.strip() == '')
        df = df[~blank.all(axis=1)]
        return df.reset_index(drop=True)
