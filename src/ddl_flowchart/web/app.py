"""FastAPI web application exposing the DDL parser."""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ddl_flowchart.config import AppConfig, load_app_config

# Import routes
from ddl_flowchart.web.routes import diagram

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    logger.info("ddl-flowchart API starting up...")
    yield
    logger.info("ddl-flowchart API shutting down...")


def create_app(config: AppConfig | None = None) -> FastAPI:
    """Build the FastAPI application.

    Args:
        config: Application config (loaded from file/environment if omitted)

    Returns:
        Configured FastAPI app
    """
    config = config or load_app_config()

    app = FastAPI(
        title="ddl-flowchart",
        description="Convert SQL CREATE TABLE statements into diagram schemas",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.config = config

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.web.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(diagram.router, prefix="/api", tags=["diagram"])

    @app.get("/api/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


app = create_app()
