"""FastAPI application entrypoint — lifespan, routers, middleware."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text

from fieldsight.config import get_settings
from fieldsight.database import engine
from fieldsight.middleware.logging import RequestLoggingMiddleware, configure_structured_logging
from fieldsight.routes import context, inference, insights, provenance

logger = logging.getLogger("fieldsight")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application startup / shutdown lifecycle.

    Startup:
      1. Initialize structured logging
      2. Verify the database is reachable

    Shutdown:
      1. Dispose SQLAlchemy engine
    """
    configure_structured_logging()
    settings = get_settings()
    logger.info(
        "FieldSight starting",
        extra={
            "log_level": settings.log_level,
            "historical_baseline_excludes_current_season": (
                settings.historical_baseline_excludes_current_season
            ),
        },
    )

    try:
        async with engine.connect() as connection:
            await connection.execute(text("SELECT 1"))
    except Exception as exc:
        logger.exception("startup failure", extra={"error": str(exc)})
        raise

    yield

    logger.info("FieldSight shutting down")
    await engine.dispose()


app = FastAPI(
    title="FieldSight API",
    description=(
        "Deterministic field-performance insights: NDVI status, "
        "baseline deviation, confidence scoring and auditable provenance "
        "derived from persisted vegetation and weather signals."
    ),
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# ── CORS ────────────────────────────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestLoggingMiddleware)


# ── Health check ────────────────────────────────────────────────────────────
@app.get("/health", tags=["system"])
async def health_check() -> dict[str, str]:
    """Basic health check — verifies the API process is alive."""
    return {
        "status": "ok",
        "service": "fieldsight",
        "version": "0.1.0",
    }


# ── Router registration ────────────────────────────────────────────────────
app.include_router(insights.router, prefix="/api/v1")
app.include_router(inference.router, prefix="/api/v1")
app.include_router(provenance.router, prefix="/api/v1")
app.include_router(context.router, prefix="/api/v1")
