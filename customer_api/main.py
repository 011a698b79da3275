"""Customer Management API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers (api/error_handlers.py) are the single failure exit point
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup via lifespan context manager; schema
      created when DATABASE_CREATE_SCHEMA is true

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - One access-log line per request, emitted through the structured logger
"""

import logging
import time
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from customer_api.api.error_handlers import register_error_handlers
from customer_api.api.routes import addresses, customers, health
from customer_api.config import get_settings
from customer_api.infrastructure.database import close_db, init_db
from customer_api.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    if settings.database_create_schema:
        await manager.create_schema()
    logger.info(f"Customer API started (environment: {settings.environment})")
    yield
    await close_db()
    logger.info("Customer API shutting down")


app = FastAPI(
    title="Customer Management API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    # Unhandled errors are answered by the catch-all handler outside this middleware
    status_code = 500
    try:
        response = await call_next(request)
        status_code = response.status_code
        return response
    finally:
        logger.info(
            f"{request.method} {request.url.path} {status_code}",
            extra={
                "method": request.method,
                "url": str(request.url),
                "status_code": status_code,
                "duration_ms": round((time.perf_counter() - started) * 1000, 2),
            },
        )


app.include_router(health.router)
app.include_router(customers.router)
app.include_router(addresses.router)

register_error_handlers(app)


def run() -> None:
    """Console entry point: serve the app on the configured host/port."""
    settings = get_settings()
    uvicorn.run("customer_api.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
