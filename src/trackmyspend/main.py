"""FastAPI application factory.

Learn: App factory pattern — create_app() returns a configured FastAPI
instance. Settings, the database, and the optional Redis connection are
built once here and hung off app.state; nothing reads configuration from
a module-level global. Lifespan manages startup/shutdown.

Run with:  uvicorn --factory trackmyspend.main:create_app
      or:  trackmyspend  (console script → run())
"""

from contextlib import asynccontextmanager
from typing import Optional

import redis.asyncio as aioredis
import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from redis.exceptions import RedisError
from starlette.exceptions import HTTPException as StarletteHTTPException

from trackmyspend import __version__
from trackmyspend.api import api_router
from trackmyspend.config import Settings
from trackmyspend.db.engine import Database
from trackmyspend.errors import AppError
from trackmyspend.log_config import configure_logging
from trackmyspend.middleware.rate_limit import RateLimitMiddleware
from trackmyspend.middleware.request_id import RequestIdMiddleware
from trackmyspend.middleware.security import SecurityHeadersMiddleware

logger = structlog.get_logger()


async def connect_redis(url: str) -> Optional[aioredis.Redis]:
    """Open the Redis pool used for rate limiting, or None if unreachable."""
    client = aioredis.from_url(url, encoding="utf-8", decode_responses=True)
    try:
        await client.ping()
    except (RedisError, OSError) as e:
        logger.warning("app.redis_unavailable", error=str(e))
        await client.aclose()
        return None
    logger.info("app.redis_connected")
    return client


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle.

    Learn: Anything before `yield` runs at startup, after `yield` runs at
    shutdown. Redis is optional; without it there is no rate limiting.
    """
    settings: Settings = app.state.settings
    logger.info(
        "app.starting",
        version=__version__,
        environment=settings.environment,
        port=settings.port,
    )

    app.state.redis = await connect_redis(settings.redis_url)

    yield

    logger.info("app.shutdown")
    if app.state.redis is not None:
        await app.state.redis.aclose()
        app.state.redis = None
    await app.state.db.dispose()


# ─── Error handlers ──────────────────────────────────────


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("app.server_error", error=exc.message)
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


async def http_error_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed bodies are a client error: 400 with a readable message."""
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        detail = f"{field}: {first.get('msg')}" if field else first.get("msg")
        message = f"Invalid request: {detail}"
    else:
        message = "Invalid request"
    return JSONResponse(status_code=400, content={"message": message})


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("app.unhandled_error")
    return JSONResponse(status_code=500, content={"message": "Internal server error"})


# ─── Factory ─────────────────────────────────────────────


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build and return the FastAPI application."""
    settings = settings or Settings()
    configure_logging(settings)

    app = FastAPI(
        title="TrackMySpend API",
        description="Personal finance manager — accounts, transactions, budgets, reminders",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.db = Database.from_settings(settings)
    app.state.redis = None

    # ── Middleware stack ──────────────────────────────────────
    # Note: Starlette middleware executes in reverse order of registration.
    # Request flow: CORS → RateLimit → Security → RequestId → handler
    app.add_middleware(RequestIdMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        RateLimitMiddleware,
        default_rpm=settings.rate_limit_rpm,
        auth_rpm=settings.rate_limit_auth_rpm,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.include_router(api_router)

    return app


def run() -> None:
    """Console entry point: build the app once and serve it with uvicorn."""
    import uvicorn

    settings = Settings()
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)
