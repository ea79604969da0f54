"""FastAPI application factory and configuration.

Hosts the NiceGUI knowledge base console, a health endpoint and a
read-only view of the client configuration. All remote
calls happen in the vector store client; the server itself keeps no
document or chat state.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src import __version__
from src.client.config import get_client_config

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application startup and shutdown lifecycle.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control to the application while it runs.
    """
    config = get_client_config()
    logger.info(f"Starting Knowledge Base Console against {config.base_url}")
    yield
    logger.info("Shutting down Knowledge Base Console...")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    application = FastAPI(
        title="Knowledge Base Console",
        description=(
            "Manage documents in a hosted vector store and chat against them. "
            "Credentials stay in the browser session and are passed through "
            "to the remote service on every call."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @application.get("/health")
    async def health_check() -> dict[str, str]:
        """Check service health status."""
        return {"status": "healthy", "service": "kb-console"}

    @application.get("/config")
    async def client_config() -> dict[str, str | float | None]:
        """Report which remote endpoint and fallback model the console uses."""
        config = get_client_config()
        return {
            "base_url": config.base_url,
            "default_model": config.default_model,
            "request_timeout": config.request_timeout,
        }

    return application


app = create_app()
