"""FastAPI application: lifespan, routers and middleware."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from redis.asyncio import Redis

from agrisync import __version__
from agrisync.config import get_settings
from agrisync.knowledge_base import get_knowledge_base
from agrisync.middleware.logging import RequestLoggingMiddleware, configure_structured_logging
from agrisync.routes import advisory, ask, crops, diagnosis, region, soil, weather
from agrisync.services.stores import InMemoryKeyValueStore, RedisKeyValueStore
from agrisync.services.weather_service import default_rng

logger = logging.getLogger("agrisync")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application startup / shutdown lifecycle.

    Startup:
      1. Initialize structured logging
      2. Load and validate the static knowledge base
      3. Connect to Redis when configured, else keep overrides in memory

    Shutdown:
      1. Close Redis connection pool
    """
    configure_structured_logging()
    settings = get_settings()
    logger.info(
        "AgriSync starting",
        extra={
            "log_level": settings.log_level,
            "redis_enabled": settings.redis_url is not None,
        },
    )

    redis: Redis | None = None
    try:
        knowledge_base = get_knowledge_base()
        app.state.crop_count = len(knowledge_base.crops)
        app.state.weather_rng = default_rng()

        if settings.redis_url:
            redis = Redis.from_url(settings.redis_url, decode_responses=True)
            await redis.ping()
            app.state.redis = redis
            app.state.kv_store = RedisKeyValueStore(redis, prefix=settings.redis_key_prefix)
        else:
            app.state.kv_store = InMemoryKeyValueStore()
    except Exception as exc:
        logger.exception("startup failure", extra={"error": str(exc)})
        if redis is not None:
            await redis.aclose()
        raise

    yield

    logger.info("AgriSync shutting down")
    if redis is not None:
        await redis.aclose()


app = FastAPI(
    title="AgriSync Advisory API",
    description=(
        "Rule-based agronomic advisory core: crop timelines and harvest windows, "
        "region-aware soil and synthesized weather, symptom diagnosis and "
        "48-hour advisories, plus an offline keyword assistant."
    ),
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# ── Middleware ──────────────────────────────────────────────────────────────
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
    """Liveness probe; does not touch Redis."""
    return {
        "status": "ok",
        "service": "agrisync",
        "version": __version__,
    }


# ── Router registration ────────────────────────────────────────────────────
app.include_router(crops.router, prefix="/api/v1")
app.include_router(region.router, prefix="/api/v1")
app.include_router(soil.router, prefix="/api/v1")
app.include_router(weather.router, prefix="/api/v1")
app.include_router(diagnosis.router, prefix="/api/v1")
app.include_router(advisory.router, prefix="/api/v1")
app.include_router(ask.router, prefix="/api/v1")
