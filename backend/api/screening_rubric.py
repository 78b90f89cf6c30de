"""
Screening Rubric API Endpoints

Reads and writes the inclusion / exclusion rubric config stored as a JSON
blob. Falls back to the built-in defaults when nothing has been saved.
"""

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime, timezone
import json
import logging

from shared.config import Settings, get_settings
from ..core.default_rubrics import (
    DEFAULT_ML_TERMS,
    DEFAULT_PSYCHOMETRICIAN_JOBS,
    DEFAULT_RUBRICS,
)
from ..services.blob_client import BlobClient, BlobObject, BlobStoreError
from .dependencies import get_blob_client

logger = logging.getLogger(__name__)

router = APIRouter()

NO_STORE = "no-store, max-age=0"


# ===== Request/Response Models =====

class ScreeningRubrics(BaseModel):
    """Textual screening rubrics"""
    inclusion_rules: str
    exclusion_rules: str
    special_rules: str
    definitions: str
    ml_terms: str = DEFAULT_ML_TERMS
    psychometrician_jobs: str = DEFAULT_PSYCHOMETRICIAN_JOBS


class RubricsResponse(BaseModel):
    rubrics: ScreeningRubrics
    is_default: bool
    updated_at: Optional[str] = None
    error: Optional[str] = None


class SaveRubricsRequest(BaseModel):
    rubrics: ScreeningRubrics


class SaveRubricsResponse(BaseModel):
    success: bool
    updated_at: str
    blob_url: str


class ResetRubricsResponse(BaseModel):
    success: bool
    message: str


# ===== Helper Functions =====

def find_rubric_blobs(client: BlobClient, settings: Settings) -> List[BlobObject]:
    """Stored rubric configs (exact path, or any pathname ending in its file name)"""
    file_name = settings.rubric_blob_path.rsplit('/', 1)[-1]
    return [
        blob for blob in client.list_all(prefix=settings.config_prefix)
        if blob.pathname == settings.rubric_blob_path or blob.pathname.endswith(file_name)
    ]


def default_rubrics_response(error: Optional[str] = None) -> RubricsResponse:
    return RubricsResponse(rubrics=ScreeningRubrics(**DEFAULT_RUBRICS), is_default=True, error=error)


# ===== API Endpoints =====

@router.get("", response_model=RubricsResponse)
def get_rubrics(
    response: Response,
    client: BlobClient = Depends(get_blob_client),
    settings: Settings = Depends(get_settings)
):
    """
    Get the saved screening rubrics, or the defaults if none are saved
    """
    response.headers["Cache-Control"] = NO_STORE

    try:
        blobs = find_rubric_blobs(client, settings)
        if not blobs:
            return default_rubrics_response()

        saved = client.get_json(blobs[0].url)
        rubrics = saved.get('rubrics') if isinstance(saved, dict) else None

        return RubricsResponse(
            rubrics=ScreeningRubrics(**rubrics) if rubrics else ScreeningRubrics(**DEFAULT_RUBRICS),
            is_default=False,
            updated_at=saved.get('updated_at') if isinstance(saved, dict) else None,
        )

    except (BlobStoreError, TypeError, ValueError) as e:
        logger.error(f"❌ Failed to load rubrics from blob: {e}")
        return default_rubrics_response(error="Failed to load from storage, using defaults")


@router.post("", response_model=SaveRubricsResponse)
def save_rubrics(
    request: SaveRubricsRequest,
    client: BlobClient = Depends(get_blob_client),
    settings: Settings = Depends(get_settings)
):
    """
    Save screening rubrics, replacing any previously stored config
    """
    try:
        existing = find_rubric_blobs(client, settings)
        if existing:
            client.delete([blob.url for blob in existing])

        updated_at = datetime.now(timezone.utc).isoformat()
        payload = {
            'rubrics': request.rubrics.model_dump(),
            'updated_at': updated_at,
        }

        stored = client.put(
            settings.rubric_blob_path,
            json.dumps(payload, indent=2),
            content_type="application/json",
            add_random_suffix=False,
            cache_control_max_age=0,
        )

        logger.info(f"💾 Saved rubrics to {stored.pathname}")
        return SaveRubricsResponse(success=True, updated_at=updated_at, blob_url=stored.url)

    except BlobStoreError as e:
        logger.error(f"❌ Failed to save rubrics to blob: {e}")
        raise HTTPException(status_code=502, detail=f"Failed to save rubrics: {str(e)}")


@router.delete("", response_model=ResetRubricsResponse)
def reset_rubrics(
    client: BlobClient = Depends(get_blob_client),
    settings: Settings = Depends(get_settings)
):
    """
    Reset rubrics to defaults by deleting the stored config
    """
    try:
        existing = find_rubric_blobs(client, settings)
        if existing:
            client.delete([blob.url for blob in existing])

        logger.info(f"🔄 Rubrics reset to defaults ({len(existing)} blob(s) removed)")
        return ResetRubricsResponse(success=True, message="Rubrics reset to defaults")

    except BlobStoreError as e:
        logger.error(f"❌ Failed to reset rubrics: {e}")
        raise HTTPException(status_code=502, detail=f"Failed to reset rubrics: {str(e)}")
