"""
Backend Launcher - FastAPI Server
==================================
Starts the FastAPI backend server for Document Screening
"""

import uvicorn
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent))

from shared.config import get_settings


def main():
    """Launch FastAPI backend server"""
    settings = get_settings()

    print("🚀 Starting Document Screening - FastAPI Backend")
    print("=" * 60)
    print(f"📡 API will be available at: http://localhost:{settings.backend_port}")
    print(f"📚 API docs will be available at: http://localhost:{settings.backend_port}/docs")
    print("=" * 60)

    project_root = Path(__file__).parent

    uvicorn.run(
        "backend.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        reload=True,  # Auto-reload on code changes (development only)
        reload_dirs=[str(project_root / "backend"), str(project_root / "shared")],
        reload_excludes=["*.pyc", "__pycache__/**"],
        log_level="info"
    )


if __name__ == "__main__":
    main()
