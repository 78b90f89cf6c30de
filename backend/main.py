"""
FastAPI Backend - Main Application Entry Point

This is the FastAPI server behind the document screening UI:
- Access key validation
- Screening rubric config (stored as a JSON blob)
- PDF listing and upload to blob storage
- Spreadsheet vs blob storage verification

Run with: uvicorn backend.main:app --reload --port 8000
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from contextlib import asynccontextmanager
import logging
import time
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env / .env.local (optional for deployment)
project_root = Path(__file__).parent.parent
for env_name in ('.env', '.env.local'):
    env_path = project_root / env_name
    if env_path.exists():
        load_dotenv(env_path)

from backend.api import access, blob_files, screening_rubric, verification
from shared.config import get_settings

# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

VERSION = "1.0.0"


# ===== Middleware for Request Logging =====

class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log all incoming requests (method, path, status, timing)"""

    async def dispatch(self, request: Request, call_next):
        start_time = time.time()

        logger.info(f"📨 Incoming request: {request.method} {request.url.path}")

        try:
            response = await call_next(request)
            process_time = time.time() - start_time
            logger.info(f"✅ Response: {response.status_code} (took {process_time:.3f}s)")
            return response
        except Exception as e:
            logger.error(f"❌ Error processing request: {str(e)}", exc_info=True)
            raise


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifecycle manager for startup and shutdown events"""
    logger.info("🚀 Starting Document Screening Backend Server")

    settings = get_settings()
    token_status = "configured" if settings.blob_read_write_token else "not set"
    keys_status = f"{len(settings.valid_access_keys)} configured" if settings.valid_access_keys else "not set"
    logger.info(f"🔑 BLOB_READ_WRITE_TOKEN: {token_status}")
    logger.info(f"🔑 ACCESS_KEYS: {keys_status}")

    logger.info("✅ Server startup complete - ready to accept requests")

    yield

    logger.info("🛑 Shutting down server...")


# Create FastAPI app
app = FastAPI(
    title="Document Screening API",
    description="Backend API for PDF storage, screening rubrics and blob verification",
    version=VERSION,
    lifespan=lifespan
)

# Add request logging middleware
app.add_middleware(RequestLoggingMiddleware)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Health check endpoint
@app.get("/")
async def root():
    """Root endpoint - simple health check"""
    return {
        "status": "healthy",
        "service": "Document Screening Backend",
        "version": VERSION
    }


@app.get("/health")
async def health_check():
    """Health check - must respond quickly"""
    return {"status": "healthy"}


# Include API routers
app.include_router(
    access.router,
    prefix="/api",
    tags=["Access"]
)

app.include_router(
    screening_rubric.router,
    prefix="/api/screening-rubric",
    tags=["Screening Rubric"]
)

app.include_router(
    blob_files.router,
    prefix="/api/files",
    tags=["Blob Files"]
)

app.include_router(
    verification.router,
    prefix="/api/verify",
    tags=["Verification"]
)


if __name__ == "__main__":
    import uvicorn

    logger.info("🏃 Running development server directly...")
    settings = get_settings()
    uvicorn.run(
        "backend.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        reload=True,
        log_level="info"
    )
