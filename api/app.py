"""FastAPI application factory and configuration."""
from typing import Optional

from fastapi import FastAPI

from api.middleware import request_logging_middleware
from api.exceptions import register_exception_handlers
from api.routes import health, webhook
from update_handler.handlers import build_registry
from update_handler.registry import HandlerRegistry
from update_handler.services.idempotency_service import UpdateDeduplicator
from update_handler.version import __version__


def create_app(registry: Optional[HandlerRegistry] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        registry: Handler registry to serve (defaults to build_registry())

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title="Dotless Bot",
        version=__version__,
        description="Telegram webhook bot that removes dots from text"
    )

    # Built once per process, read-only afterwards
    app.state.registry = registry or build_registry()
    app.state.deduplicator = UpdateDeduplicator()

    app.middleware("http")(request_logging_middleware)

    register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(webhook.router)

    return app
