"""
ISQ Reconciler FastAPI Application
==================================

REST API over the reconciliation engine.

Endpoints:
    GET  /api/health           - Health check
    POST /api/reconcile        - Common specs + buyer ISQs
    POST /api/reconcile/options
    POST /api/names/similar
    POST /api/compare
    POST /api/audit/merge

Usage:
    uvicorn src.api.main:app --reload --port 8000

    Or with CLI:
    python -m src.api.main
"""

from dotenv import load_dotenv
load_dotenv()

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging
import os

from ..data.config import get_settings
from ..orchestrator.logging_config import setup_logging
from ..reconciliation.synonym_tables import TABLES_VERSION
from .models import HealthResponse
from .reconciliation_routes import router as reconciliation_router

logger = logging.getLogger(__name__)

settings = get_settings()

app = FastAPI(
    title="ISQ Reconciler API",
    description="Seller spec / website ISQ reconciliation",
    version=settings.app_version,
)

# CORS configuration
# In production, set CORS_ORIGINS env var (comma-separated)
_default_origins = [
    "http://localhost:3000",
    "http://localhost:5173",
    "http://127.0.0.1:3000",
    "http://127.0.0.1:5173",
]
_default_origins.extend(o for o in settings.api.cors_origins if o not in _default_origins)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_default_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(reconciliation_router)


@app.get("/api/health", response_model=HealthResponse)
async def health_check():
    """The engine has no external dependencies: healthy when the app is up."""
    return HealthResponse(
        status="healthy",
        version=settings.app_version,
        tables_version=TABLES_VERSION,
    )


if __name__ == "__main__":
    import uvicorn

    setup_logging(
        level=settings.logging.level,
        json_output=settings.logging.json_logs,
        log_file=settings.logging.log_file,
    )
    port = int(os.getenv("PORT", "8000"))
    logger.info(f"Starting ISQ Reconciler API on port {port}")
    uvicorn.run("src.api.main:app", host="0.0.0.0", port=port)
