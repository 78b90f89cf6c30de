"""
Access Key API Endpoint

Gate for the screening UI: a submitted key is valid when it equals one of
the comma-separated ACCESS_KEYS (both sides trimmed).
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from typing import Iterable, Optional
import logging

from shared.config import Settings, get_settings

logger = logging.getLogger(__name__)

router = APIRouter()


class ValidateKeyRequest(BaseModel):
    key: Optional[str] = None


class ValidateKeyResponse(BaseModel):
    valid: bool


def validate_access_key(key: str, valid_keys: Iterable[str]) -> bool:
    """Return True when the trimmed key equals one of the valid keys"""
    if not key or not key.strip():
        return False
    return key.strip() in {valid.strip() for valid in valid_keys}


@router.post("/validate-key", response_model=ValidateKeyResponse)
async def validate_key(request: ValidateKeyRequest, settings: Settings = Depends(get_settings)):
    """
    Validate an access key provided by the user
    """
    if not request.key or not request.key.strip():
        return JSONResponse(status_code=400, content={"valid": False, "error": "No key provided"})

    valid_keys = settings.valid_access_keys
    if not valid_keys:
        logger.error("❌ ACCESS_KEYS not configured")
        return JSONResponse(status_code=500, content={"valid": False, "error": "Server configuration error"})

    is_valid = validate_access_key(request.key, valid_keys)
    if not is_valid:
        logger.info("🔒 Rejected access key")

    return ValidateKeyResponse(valid=is_valid)
