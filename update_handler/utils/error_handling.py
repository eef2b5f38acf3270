"""
Error handling utilities for the update handler.

Provides the decorator that keeps application exceptions intact on their
way to the API layer while wrapping anything unexpected.
"""
import functools
from typing import Any, Awaitable, Callable, List, Optional, Type, TypeVar

import httpx

from update_handler.exceptions import (
    BaseAppException, ErrorCode, PlatformError, UpdateProcessingError
)
from update_handler.utils.logging import get_context_logger

R = TypeVar('R')


def handle_platform_error(
    exception: Exception,
    method: str,
    logger: Any = None,
    trace_id: Optional[str] = None
) -> None:
    """
    Standardized handler for Bot API transport errors.

    Args:
        exception: The exception raised by httpx
        method: Bot API method that was being called
        logger: Logger instance to use (optional)
        trace_id: Trace ID for logging context (optional)

    Raises:
        PlatformError: A standardized error wrapping the original exception
    """
    if logger is None:
        logger = get_context_logger("telegram_client", trace_id=trace_id)

    error_code = ErrorCode.PLATFORM_ERROR
    error_msg = f"Telegram API call {method} failed: {str(exception)}"

    if isinstance(exception, httpx.TimeoutException):
        error_code = ErrorCode.TIMEOUT_ERROR
        error_msg = f"Telegram API call {method} timed out"

    logger.error(error_msg)

    raise PlatformError(
        error_msg,
        method=method,
        error_code=error_code,
        original_exception=exception
    )


def with_error_handling(
    operation_name: Optional[str] = None,
    trace_id_param: str = 'trace_id',
    reraise: Optional[List[Type[Exception]]] = None
) -> Callable[[Callable[..., Awaitable[R]]], Callable[..., Awaitable[R]]]:
    """
    Decorator to standardize error handling for coroutine functions.

    Application exceptions (and any type listed in ``reraise``) propagate
    unchanged. Anything else is logged and re-raised as an
    UpdateProcessingError carrying the original message.

    Args:
        operation_name: Name of the operation (defaults to function name if None)
        trace_id_param: Name of the keyword argument containing trace_id
        reraise: Extra exception types to re-raise without wrapping

    Returns:
        Decorated coroutine function
    """
    passthrough = tuple([BaseAppException] + list(reraise or []))

    def decorator(func: Callable[..., Awaitable[R]]) -> Callable[..., Awaitable[R]]:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs) -> R:
            operation = operation_name or func.__name__
            trace_id = kwargs.get(trace_id_param)
            logger = get_context_logger(operation, trace_id=trace_id)

            try:
                return await func(*args, **kwargs)

            except passthrough as e:
                logger.error(f"Error in {operation}: {str(e)}")
                raise

            except Exception as e:
                logger.exception(f"Unexpected error in {operation}: {str(e)}")
                raise UpdateProcessingError(
                    str(e) or type(e).__name__,
                    error_code=ErrorCode.INTERNAL_ERROR,
                    original_exception=e,
                    operation=operation
                ) from e

        return wrapper
    return decorator
