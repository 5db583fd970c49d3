"""
Review Service: FastAPI application entry point.
Lifespan: create DB tables (development) → verify connectivity.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, AsyncIterator

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from review_service import __version__
from review_service.config import settings
from review_service.database import check_db_connectivity, engine
from review_service.exceptions import ReviewServiceError
from review_service.models import Base
from review_service.routers import comments, health, reviews

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan handler.
    1. Create all tables when running in development (idempotent).
    2. Verify DB connectivity.
    """
    logger.info("Starting Review Service (env=%s)", settings.app_env)

    if settings.app_env == "development":
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables created/verified.")

    ok = await check_db_connectivity()
    if not ok:
        logger.error("Database connectivity check FAILED at startup.")
    else:
        logger.info("Database connectivity verified.")

    yield

    logger.info("Shutting down Review Service.")
    await engine.dispose()


app = FastAPI(
    title="Review Service",
    description="Workplace reviews with threaded comments and like/dislike voting.",
    version=__version__,
    lifespan=lifespan,
)

# ── CORS ─────────────────────────────────────────────────────────────────────

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ── Routers ──────────────────────────────────────────────────────────────────

app.include_router(health.router)
app.include_router(reviews.router)
app.include_router(comments.router)


# ── Exception handlers ───────────────────────────────────────────────────────


def error_body(request: Request, status_code: int, error: str, **extra: Any) -> dict:
    """Common error envelope: timestamp, status, error, message(s), path."""
    body: dict[str, Any] = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "status": status_code,
        "error": error,
    }
    body.update(extra)
    body["path"] = request.url.path
    return body


@app.exception_handler(ReviewServiceError)
async def review_service_error_handler(
    request: Request, exc: ReviewServiceError
) -> JSONResponse:
    """NotFound → 404, BadRequest → 400, with the service's message."""
    logger.warning("%s: %s", exc.error, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(request, exc.status_code, exc.error, message=exc.message),
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Field-level validation failures, one "field: message" line per error."""
    messages = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        field = ".".join(loc) or "request"
        messages.append(f"{field}: {err.get('msg')}")
    logger.warning("Validation error on %s %s: %s", request.method, request.url.path, messages)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body(
            request, status.HTTP_400_BAD_REQUEST, "Validation Error", messages=messages
        ),
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return a generic error for any unhandled exception."""
    logger.exception("Unhandled exception on %s %s", request.method, request.url)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(
            request,
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Internal Server Error",
            message="An unexpected error occurred. Please try again later.",
        ),
    )
