"""
Utility modules for the update handler.
"""

from .logging import get_context_logger, with_context, configure_logging
from .error_handling import with_error_handling, handle_platform_error

__all__ = [
    # Logging
    "get_context_logger",
    "with_context",
    "configure_logging",

    # Error handling
    "with_error_handling",
    "handle_platform_error",
]
