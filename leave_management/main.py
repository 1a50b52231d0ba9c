"""
Leave Management API.

Employees apply for and cancel leave; administrators decide on requests and
maintain employees with their per-category balances. Routers live under
``settings.api_prefix``; health probes stay at the root.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

import leave_management.models  # noqa: F401  Force model registration with SQLAlchemy
from leave_management.core.config import settings
from leave_management.core.error_handlers import register_exception_handlers
from leave_management.core.init_system import init_system_data
from leave_management.core.limiter import limiter
from leave_management.core.logging import setup_logging
from leave_management.core.middleware import CorrelationIdMiddleware, LoggingMiddleware
from leave_management.database import init_db
from leave_management.routers import health
from leave_management.routers.api_router import api_router

setup_logging(settings.log_level, json_output=settings.log_json)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Creates the schema and seeds categories (and the bootstrap admin) before serving."""
    logger.info(f"Starting {settings.app_name} v{settings.version} ({settings.environment})")
    try:
        init_db()
        init_system_data()
    except Exception as e:
        logger.error(f"Startup failed while preparing the database: {e}")
        raise
    logger.info("Database ready")

    yield

    logger.info(f"{settings.app_name} stopped")


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.app_name,
        version=settings.version,
        description="Leave requests, approvals and per-category leave balances",
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    register_exception_handlers(app)

    # Last added runs first: CORS -> CorrelationId -> Logging -> route
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(CorrelationIdMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[settings.request_id_header, "X-Process-Time"],
    )

    app.include_router(health.router)
    app.include_router(api_router, prefix=settings.api_prefix)
    return app


app = create_app()
