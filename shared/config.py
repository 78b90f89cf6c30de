"""
Shared Configuration Module

Central configuration management for the backend API and the command-line tools
"""

from typing import Dict, List
from pydantic_settings import BaseSettings
from functools import lru_cache


# ===== Constants =====

# Spreadsheet headers accepted as the PDF filename column (compared lowercased)
DEFAULT_FILENAME_ALIASES = [
    'filename in ai bot',
    'filename',
    'file name',
    'file_name',
    'pdf filename',
    'pdf_filename',
    'pdf file',
]

# Blob folders exposed through the file listing endpoint
BLOB_FOLDERS = {
    'mxml': 'mxml-pdfs/',
    'icap': 'icap-papers/',
}


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # ===== Blob Storage =====
    blob_read_write_token: str = ""
    blob_upload_token: str = ""  # optional dedicated token for PDF uploads
    blob_api_url: str = "https://blob.vercel-storage.com"
    blob_api_version: str = "7"
    list_page_size: int = 1000

    # ===== Performance Settings =====
    request_timeout: int = 30  # seconds
    max_retries: int = 3
    upload_concurrency: int = 10

    # ===== Access Control =====
    access_keys: str = ""  # comma separated

    # ===== Stored Config =====
    config_prefix: str = "config/"
    rubric_blob_path: str = "config/screening-rubrics.json"

    # ===== Folders / Verification =====
    blob_folders: Dict[str, str] = dict(BLOB_FOLDERS)
    default_folder: str = "mxml"
    upload_prefix: str = "mxml-pdfs/"
    verify_prefix: str = "icap-papers/"
    filename_column_aliases: List[str] = list(DEFAULT_FILENAME_ALIASES)

    # ===== File Upload Settings =====
    max_file_size_mb: int = 100
    supported_formats: list = ['.xlsx', '.xls', '.csv']

    # ===== Backend Settings =====
    backend_host: str = "0.0.0.0"
    backend_port: int = 8000

    class Config:
        env_file = (".env", ".env.local")
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"

    @property
    def upload_token(self) -> str:
        """Token used for PDF uploads, falling back to the read/write token"""
        return self.blob_upload_token or self.blob_read_write_token

    @property
    def valid_access_keys(self) -> List[str]:
        """Configured access keys, trimmed, blanks dropped"""
        return [key.strip() for key in self.access_keys.split(',') if key.strip()]


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance

    Returns:
        Settings instance
    """
    return Settings()
