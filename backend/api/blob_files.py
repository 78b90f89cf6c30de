"""
Blob Files API Endpoints

Lists stored PDFs by folder and uploads new PDFs to blob storage
"""

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from pydantic import BaseModel
from typing import List, Optional
from concurrent.futures import ThreadPoolExecutor
import logging

from shared.config import Settings, get_settings
from ..services.blob_client import BlobClient, BlobStoreError
from .dependencies import get_blob_client, get_upload_client

logger = logging.getLogger(__name__)

router = APIRouter()


# ===== Request/Response Models =====

class BlobFileInfo(BaseModel):
    url: str
    pathname: str
    name: str
    size: int
    uploaded_at: Optional[str] = None


class FileListResponse(BaseModel):
    files: List[BlobFileInfo]
    total: int
    folder: str
    prefix: str


class UploadResult(BaseModel):
    file_name: str
    success: bool
    url: Optional[str] = None
    error: Optional[str] = None


class UploadResponse(BaseModel):
    success: bool
    total_files: int
    success_count: int
    fail_count: int
    results: List[UploadResult]


# ===== Helper Functions =====

def upload_one(client: BlobClient, prefix: str, file_name: str, content: bytes) -> UploadResult:
    """Upload a single PDF, capturing the failure instead of raising"""
    try:
        blob = client.put(
            f"{prefix}{file_name}",
            content,
            content_type="application/pdf",
            allow_overwrite=True,
        )
        return UploadResult(file_name=file_name, success=True, url=blob.url)
    except BlobStoreError as e:
        logger.warning(f"⚠️ Upload failed for {file_name}: {e}")
        return UploadResult(file_name=file_name, success=False, error=str(e))


# ===== API Endpoints =====

@router.get("", response_model=FileListResponse)
def list_files(
    folder: Optional[str] = None,
    client: BlobClient = Depends(get_blob_client),
    settings: Settings = Depends(get_settings)
):
    """
    List every file in a folder (all pages), sorted by name

    Unknown folders fall back to the default folder.
    """
    folder_key = folder if folder in settings.blob_folders else settings.default_folder
    prefix = settings.blob_folders[folder_key]

    try:
        blobs = client.list_all(prefix=prefix, limit=settings.list_page_size)
    except BlobStoreError as e:
        logger.error(f"❌ Error listing blobs: {e}")
        raise HTTPException(status_code=502, detail="Failed to list files")

    files = [
        BlobFileInfo(
            url=blob.url,
            pathname=blob.pathname,
            name=blob.pathname[len(prefix):] if blob.pathname.startswith(prefix) else blob.pathname,
            size=blob.size,
            uploaded_at=blob.uploaded_at,
        )
        for blob in blobs
    ]
    files.sort(key=lambda f: f.name.lower())

    return FileListResponse(files=files, total=len(files), folder=folder_key, prefix=prefix)


@router.post("/upload", response_model=UploadResponse)
def upload_files(
    files: Optional[List[UploadFile]] = File(None),
    client: BlobClient = Depends(get_upload_client),
    settings: Settings = Depends(get_settings)
):
    """
    Upload PDF files to blob storage (existing files are overwritten)
    """
    if not files:
        raise HTTPException(status_code=400, detail="No files provided")

    logger.info(f"📤 Uploading {len(files)} file(s) to {settings.upload_prefix}")

    max_bytes = settings.max_file_size_mb * 1024 * 1024
    payloads = []
    oversized = []
    for upload in files:
        try:
            content = upload.file.read()
        finally:
            upload.file.close()
        if len(content) > max_bytes:
            logger.warning(f"⚠️ Skipping {upload.filename}: {len(content)} bytes exceeds limit")
            oversized.append(UploadResult(
                file_name=upload.filename,
                success=False,
                error=f"File exceeds {settings.max_file_size_mb} MB limit",
            ))
        else:
            payloads.append((upload.filename, content))

    with ThreadPoolExecutor(max_workers=max(1, settings.upload_concurrency)) as executor:
        results = list(executor.map(
            lambda item: upload_one(client, settings.upload_prefix, item[0], item[1]),
            payloads
        ))
    results.extend(oversized)

    success_count = sum(1 for r in results if r.success)
    logger.info(f"✅ Upload finished: {success_count}/{len(results)} succeeded")

    return UploadResponse(
        success=True,
        total_files=len(results),
        success_count=success_count,
        fail_count=len(results) - success_count,
        results=results,
    )
