"""Statement Ledger API — FastAPI entry point.

Exposes statement ingestion and the per-user ledger to the frontend. The
LedgerStore is opened once at startup (creating the schema if needed) and
closed at shutdown.
"""

from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from apps.api.core.config import Settings, get_settings
from apps.api.core.errors import register_error_handlers
from apps.api.core.logging import setup_logging
from apps.api.deps import open_store
from apps.api.domains.accounts.router import router as accounts_router
from apps.api.domains.statements.router import router as statements_router
from apps.api.routers import health

logger = structlog.get_logger()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan — startup/shutdown hooks."""
        setup_logging(
            log_level=settings.log_level,
            json_output=(settings.ENVIRONMENT == "production"),
        )
        app.state.store = open_store(settings)
        logger.info(
            "app_starting",
            version=settings.APP_VERSION,
            database=str(settings.database_path),
        )
        yield
        app.state.store.close()
        logger.info("app_stopping")

    app = FastAPI(
        title="Statement Ledger API",
        description="Parses bank statements into a per-user transaction ledger.",
        version=settings.APP_VERSION,
        lifespan=lifespan,
    )
    app.state.settings = settings

    register_error_handlers(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(statements_router, prefix="/api/v1")
    app.include_router(accounts_router, prefix="/api/v1")
    app.include_router(health.router, prefix="/api/v1")
    return app


app = create_app()
