"""Centralized exception handlers for the API."""
from fastapi import Request
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from update_handler.exceptions import BaseAppException
from api.error_codes import get_http_status
from api.models.responses import WebhookResponse
from utils import get_logger

logger = get_logger("api_exceptions")


def handle_app_exception(request: Request, exc: BaseAppException) -> JSONResponse:
    """
    Handle all custom update handler exceptions.

    Maps internal error codes to HTTP status codes. The body carries the
    error message so it shows up in Telegram's getWebhookInfo.
    """
    status_code, default_message = get_http_status(exc.error_code)
    trace_id = getattr(request.state, "trace_id", None)

    log_context = {
        "trace_id": trace_id,
        "path": request.url.path,
        "error_code": exc.error_code.name,
        "status_code": status_code
    }
    if status_code >= 500:
        logger.error(f"Webhook failed: {exc}", log_context)
    else:
        logger.warning(f"Webhook rejected: {exc}", log_context)

    return WebhookResponse.error(
        str(exc) or default_message,
        status_code=status_code,
        trace_id=trace_id
    )


def handle_http_exception(request: Request, exc: StarletteHTTPException):
    """
    Unknown routes and unsupported methods both answer 404 in plain text.
    """
    if exc.status_code in (404, 405):
        return PlainTextResponse(
            f"{request.method} - {request.url.path} not found (404)",
            status_code=404
        )

    return PlainTextResponse(str(exc.detail), status_code=exc.status_code, headers=getattr(exc, "headers", None))


def handle_unexpected_exception(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle unexpected exceptions that weren't caught by custom handlers.

    Logs the full exception and returns the structured error body.
    """
    trace_id = getattr(request.state, "trace_id", "unknown")

    logger.exception(
        "Unexpected exception in API",
        extra={
            "trace_id": trace_id,
            "path": request.url.path,
            "method": request.method,
            "exception_type": type(exc).__name__,
            "exception_message": str(exc)
        }
    )

    return WebhookResponse.error(
        str(exc) or type(exc).__name__,
        status_code=500,
        trace_id=trace_id
    )


def register_exception_handlers(app):
    """
    Register all exception handlers with the FastAPI app.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(BaseAppException, handle_app_exception)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(Exception, handle_unexpected_exception)
