"""
api/main.py -- FastAPI application exposing the export check over HTTP.

Lets a deployment run the same check the CLI runs, e.g. as a readiness probe
for a service that depends on the auth package being importable.

Run with:  uvicorn asgi:app --reload

Routes:
  GET /api/v1/health  -- liveness, no checks run
  GET /api/v1/checks  -- run the async checker; 200 when passed, 503 when the
                         mandatory unit fails
"""

from __future__ import annotations

import logging
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from api.models import API_VERSION, CheckReportResponse, HealthResponse
from core.checker import run_checks_async
from core.config import get_settings
from core.loader import add_search_path
from core.models import build_manifest

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)-5s %(name)s %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("authcheck.api")


# ---------------------------------------------------------------------------
# Lifespan
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Resolve the target once at startup and keep the manifest on app.state."""
    settings = get_settings()
    if settings.target_path:
        add_search_path(settings.target_path)
    app.state.manifest = build_manifest(settings.target_package)
    app.state.strict = settings.strict_callables
    logger.info("authcheck API starting up (target=%s, strict=%s)", settings.target_package, app.state.strict)

    yield

    logger.info("authcheck API shutdown complete")


# ---------------------------------------------------------------------------
# App instantiation
# ---------------------------------------------------------------------------

app = FastAPI(
    title="authcheck API",
    description="Export-presence checks for an auth package and its adapters/utilities.",
    version=API_VERSION,
    lifespan=lifespan,
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    ms = (time.perf_counter() - start) * 1000
    logger.info("%s %s %d %.1fms", request.method, request.url.path, response.status_code, ms)
    return response


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@app.get("/api/v1/health", tags=["Health"])
async def health() -> HealthResponse:
    """Return API liveness and current version."""
    return HealthResponse()


@app.get("/api/v1/checks", response_model=CheckReportResponse, tags=["Checks"])
async def get_checks(request: Request, strict: bool | None = None) -> JSONResponse:
    """Run the export checks against the configured target.

    Query params:
        strict -- override AUTHCHECK_STRICT_CALLABLES for this request
    """
    effective_strict = request.app.state.strict if strict is None else strict
    report = await run_checks_async(request.app.state.manifest, strict=effective_strict)
    body = CheckReportResponse.from_report(report)
    if not report.passed:
        logger.warning("Check failed for %s: %s", report.target, report.fatal_reason)
    return JSONResponse(status_code=200 if report.passed else 503, content=body.model_dump(mode="json"))
