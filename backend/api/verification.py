"""
Verification API Endpoint

Checks an uploaded spreadsheet's filename column against blob storage
"""

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from typing import Dict, Optional
from pathlib import Path
import tempfile
import shutil
import logging

from shared.config import Settings, get_settings
from ..core.blob_verifier import BlobVerifier, VerificationConfig
from ..services.blob_client import BlobClient, BlobStoreError
from .dependencies import get_blob_client

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("")
def verify_spreadsheet(
    file: UploadFile = File(...),
    prefix: Optional[str] = Form(None),
    sheet_name: Optional[str] = Form(None),
    client: BlobClient = Depends(get_blob_client),
    settings: Settings = Depends(get_settings)
) -> Dict:
    """
    Reconcile the spreadsheet's PDF filenames with the blobs under a prefix

    Returns the verification report (counts, matched and unmatched names).
    """
    logger.info(f"📤 Verifying spreadsheet: {file.filename}")

    suffix = Path(file.filename or "").suffix
    if suffix.lower() not in settings.supported_formats:
        file.file.close()
        raise HTTPException(
            status_code=400,
            detail=f"Unsupported file type: {suffix or '(none)'}. "
                   f"Supported types: {', '.join(settings.supported_formats)}"
        )

    with tempfile.NamedTemporaryFile(delete=False, suffix=suffix) as tmp_file:
        shutil.copyfileobj(file.file, tmp_file)
        tmp_path = Path(tmp_file.name)

    try:
        config = VerificationConfig(
            spreadsheet_path=tmp_path,
            prefix=prefix or settings.verify_prefix,
            filename_aliases=list(settings.filename_column_aliases),
            sheet_name=sheet_name or None,
            page_size=settings.list_page_size,
        )
        report = BlobVerifier(client).verify(config)

        data = report.to_dict()
        data['spreadsheet_path'] = file.filename
        return data

    except ValueError as e:
        logger.error(f"❌ Spreadsheet rejected: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except BlobStoreError as e:
        logger.error(f"❌ Blob listing failed: {e}")
        raise HTTPException(status_code=502, detail=f"Blob storage error: {str(e)}")
    finally:
        tmp_path.unlink(missing_ok=True)
        file.file.close()
