"""FastAPI backend for the radiotherapy AI product catalog."""

import logging
import sys
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from rtcatalog.config import get_settings

settings = get_settings()

logger = logging.getLogger(__name__)
logging.basicConfig(level=getattr(logging, settings.rtcat_log_level.upper(), logging.INFO))

app = FastAPI(
    title="RT Catalog API",
    description="Catalog, filtering and review dashboard for radiotherapy AI products.",
    version="0.3.0",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
)

# Authentication is handled upstream; this service only serves catalog data.
cors_origins = settings.cors_origin_list
logger.info("CORS configured for origins: %s", cors_origins)
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# Health & root
# ---------------------------------------------------------------------------
class HealthResponse(BaseModel):
    status: str
    data_dir: str
    products_path: str


@app.get("/health", response_model=HealthResponse)
@app.get("/api/health", response_model=HealthResponse)
async def health():
    """Health check endpoint."""
    return HealthResponse(
        status="ok",
        data_dir=str(settings.data_dir),
        products_path=str(settings.products_path),
    )


@app.get("/api/")
async def root():
    """API root."""
    return {"message": "RT Catalog API", "version": "0.3.0"}


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------
from backend.routes import products, review  # noqa: E402

app.include_router(products.router, prefix="/api", tags=["products"])
app.include_router(review.router, prefix="/api", tags=["review"])
