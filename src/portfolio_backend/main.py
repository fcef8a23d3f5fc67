# src/portfolio_backend/main.py
"""Main entry point for the portfolio backend."""

from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from portfolio_backend.api.dependencies import resolve_client_ip
from portfolio_backend.api.endpoints import contact_router, system_router
from portfolio_backend.api.middleware import AccessLogMiddleware
from portfolio_backend.core.logging import setup_logging
from portfolio_backend.core.settings import settings
from portfolio_backend.db.session import Database
from portfolio_backend.services.event_log import EventLogService
from portfolio_backend.services.rate_limit import RateLimiter, RateLimitSweeper

logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Contact form and access logging backend for a personal portfolio",
    version=settings.app_version,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Log page visits for every qualifying request
app.add_middleware(AccessLogMiddleware, skip_prefixes=settings.access_log_skip_prefixes)

# Include API routers
app.include_router(contact_router, prefix="/api")
app.include_router(system_router, prefix="/api")


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Render dict details as the response body, everything else under ``detail``."""
    content = exc.detail if isinstance(exc.detail, dict) else {"detail": exc.detail}
    return JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Record unexpected errors and hide their details from the client."""
    logger.error("Unhandled exception on %s: %s", request.url.path, exc, exc_info=True)
    event_log: EventLogService | None = getattr(request.app.state, "event_log", None)
    if event_log is not None:
        event_log.log_error(
            exc,
            {"path": request.url.path, "method": request.method, "ip": resolve_client_ip(request)},
        )
    return JSONResponse(
        status_code=500,
        content={"success": False, "message": "Internal server error"},
    )


@app.on_event("startup")
async def on_startup() -> None:
    setup_logging(settings.log_level)

    if not settings.database_url:
        settings.resolved_db_path.parent.mkdir(parents=True, exist_ok=True)
    database = Database(settings.effective_database_url, echo=settings.sql_debug)
    database.create_tables()
    app.state.database = database

    event_log = EventLogService(
        settings.resolved_log_dir,
        max_bytes=settings.log_max_bytes,
        anonymize_ips=settings.anonymize_ips,
    )
    event_log.open()
    app.state.event_log = event_log

    rate_limiter = RateLimiter(
        max_requests=settings.contact_rate_limit_max,
        window_seconds=settings.contact_rate_limit_window_seconds,
    )
    sweeper = RateLimitSweeper(rate_limiter, settings.rate_limit_sweep_interval_seconds)
    await sweeper.start()
    app.state.rate_limiter = rate_limiter
    app.state.rate_limit_sweeper = sweeper

    logger.info("Started %s %s", settings.app_name, settings.app_version)


@app.on_event("shutdown")
async def on_shutdown() -> None:
    sweeper: RateLimitSweeper | None = getattr(app.state, "rate_limit_sweeper", None)
    if sweeper:
        await sweeper.stop()
    event_log: EventLogService | None = getattr(app.state, "event_log", None)
    if event_log:
        event_log.close()
    database: Database | None = getattr(app.state, "database", None)
    if database:
        database.dispose()


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


def run() -> None:
    """Serve the application with uvicorn."""
    import uvicorn

    uvicorn.run("portfolio_backend.main:app", host="0.0.0.0", port=8000, reload=settings.debug)


if __name__ == "__main__":
    run()
