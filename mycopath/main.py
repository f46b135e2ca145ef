"""FastAPI application entrypoint: lifespan, routers, middleware."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from redis.asyncio import Redis
from sqlalchemy import text

from mycopath.config import get_settings
from mycopath.database import engine
from mycopath.middleware.exceptions import register_exception_handlers
from mycopath.middleware.logging import RequestLoggingMiddleware, configure_structured_logging
from mycopath.middleware.rate_limit import RateLimitMiddleware
from mycopath.routes import (
    activities,
    analytics,
    auth,
    batches,
    contamination,
    finance,
    hr,
    planning,
    sales,
    users,
)

logger = structlog.get_logger("mycopath")

VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application startup / shutdown lifecycle.

    Startup:
      1. Initialize structured logging
      2. Verify the database connection
      3. Connect to Redis (auth rate limiting)

    Shutdown:
      1. Close Redis connection pool
      2. Dispose SQLAlchemy engine
    """
    configure_structured_logging()
    settings = get_settings()
    logger.info("mycopath_starting", log_level=settings.log_level, version=VERSION)

    redis: Redis | None = None
    try:
        async with engine.connect() as connection:
            await connection.execute(text("SELECT 1"))

        redis = Redis.from_url(settings.redis_url, decode_responses=True)
        await redis.ping()
        app.state.redis = redis
    except Exception as exc:
        logger.exception("startup_failure", error=str(exc))
        raise

    yield

    logger.info("mycopath_shutting_down")
    if redis is not None:
        await redis.aclose()
    await engine.dispose()


app = FastAPI(
    title="MycoPath API",
    description=(
        "Farm operations API for a mushroom producer: production batch workflow "
        "with manager approval, contamination tracking, HR, sales, finance, "
        "planning and inventory."
    ),
    version=VERSION,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# ── CORS ────────────────────────────────────────────────────────────────────
_origins = [origin.strip() for origin in get_settings().cors_origins.split(",") if origin.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=_origins or ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RateLimitMiddleware)
app.add_middleware(RequestLoggingMiddleware)

register_exception_handlers(app)


# ── Health check ────────────────────────────────────────────────────────────
@app.get("/health", tags=["system"])
async def health_check() -> dict[str, str]:
    """Basic health check: verifies the API process is alive."""
    return {
        "status": "ok",
        "service": "mycopath",
        "version": VERSION,
    }


# ── Router registration ────────────────────────────────────────────────────
app.include_router(auth.router, prefix="/api")
app.include_router(users.router, prefix="/api")
app.include_router(batches.router, prefix="/api")
app.include_router(contamination.router, prefix="/api")
app.include_router(activities.router, prefix="/api")
app.include_router(hr.router, prefix="/api")
app.include_router(sales.router, prefix="/api")
app.include_router(finance.router, prefix="/api")
app.include_router(planning.router, prefix="/api")
app.include_router(analytics.router, prefix="/api")
