"""
Shared FastAPI dependencies
"""

from fastapi import Depends, HTTPException
import logging

from shared.config import Settings, get_settings
from ..services.blob_client import BlobClient, create_blob_client

logger = logging.getLogger(__name__)


def get_blob_client(settings: Settings = Depends(get_settings)) -> BlobClient:
    """Blob client for listing, config reads/writes and verification"""
    if not settings.blob_read_write_token:
        logger.error("❌ BLOB_READ_WRITE_TOKEN not configured")
        raise HTTPException(status_code=500, detail="BLOB_READ_WRITE_TOKEN not configured")
    return create_blob_client(settings=settings)


def get_upload_client(settings: Settings = Depends(get_settings)) -> BlobClient:
    """Blob client for PDF uploads (dedicated upload token when configured)"""
    if not settings.upload_token:
        logger.error("❌ BLOB_UPLOAD_TOKEN / BLOB_READ_WRITE_TOKEN not configured")
        raise HTTPException(status_code=500, detail="BLOB_UPLOAD_TOKEN not configured")
    return create_blob_client(token=settings.upload_token, settings=settings)
