"""FastAPI application for the Clinical Risk Engine."""

import logging
import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from clinical_risk import __version__
from clinical_risk.api import calculators_router
from clinical_risk.core.config import settings
from clinical_risk.services.scoring import get_risk_scoring_service

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

SERVICE_NAME = "clinical-risk-engine"


def prewarm_services() -> dict[str, Any]:
    """Build the scoring service singleton before accepting requests.

    Returns:
        Dictionary with service names and their stats.
    """
    start_time = time.perf_counter()
    services_loaded = {"risk_scoring": get_risk_scoring_service().get_stats()}
    total_time_ms = (time.perf_counter() - start_time) * 1000

    return {
        "services_loaded": len(services_loaded),
        "total_prewarm_time_ms": round(total_time_ms, 2),
        "services": services_loaded,
    }


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Startup pre-warms the scoring service and records its stats for /ready.
    """
    startup_start = time.perf_counter()

    prewarm_stats = prewarm_services()
    logger.info(
        "Services pre-warmed: %s services in %sms",
        prewarm_stats["services_loaded"],
        prewarm_stats["total_prewarm_time_ms"],
    )

    total_startup_ms = (time.perf_counter() - startup_start) * 1000
    logger.info("Server ready - total startup time: %.0fms", total_startup_ms)

    app.state.prewarm_stats = prewarm_stats
    app.state.startup_time_ms = total_startup_ms

    yield


app = FastAPI(
    title=settings.app_name,
    description="Validated clinical risk scores: validation, scoring, risk "
    "classification, guidance and live preview.",
    version=__version__,
    debug=settings.debug,
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(calculators_router, prefix=settings.api_v1_prefix)


@app.get("/health", tags=["Health"])
async def health_check() -> dict[str, Any]:
    """Health check endpoint (liveness probe).

    Use /ready for readiness checks.
    """
    return {
        "status": "healthy",
        "service": SERVICE_NAME,
        "version": __version__,
        "timestamp": datetime.now(UTC).isoformat(),
    }


@app.get("/ready", tags=["Health"])
async def readiness_check() -> dict[str, Any]:
    """Readiness check endpoint.

    Confirms the scoring service is built and ready to handle requests.
    """
    prewarm_stats = getattr(app.state, "prewarm_stats", {})
    startup_time = getattr(app.state, "startup_time_ms", 0)

    return {
        "status": "ready",
        "service": SERVICE_NAME,
        "version": __version__,
        "timestamp": datetime.now(UTC).isoformat(),
        "startup_time_ms": startup_time,
        "scoring": get_risk_scoring_service().get_stats(),
        "prewarmed_services": prewarm_stats.get("services_loaded", 0),
        "prewarm_time_ms": prewarm_stats.get("total_prewarm_time_ms", 0),
    }


@app.get("/", tags=["Health"])
async def root() -> dict[str, str]:
    """Root endpoint with API info."""
    return {
        "service": "Clinical Risk Engine API",
        "version": __version__,
        "docs": "/docs",
        "health": "/health",
        "ready": "/ready",
    }
