"""
Update handlers.

Each category's predicates are mutually exclusive, so registration order
only matters for readability. New handlers must keep them that way.
"""

from update_handler.registry import HandlerRegistry

from .start_handler import start_handler
from .passthrough_handler import passthrough_handler
from .replacer_handler import replacer_handler
from .default_inline_handler import default_inline_handler

MESSAGE_HANDLERS = (
    start_handler,
    passthrough_handler,
)

INLINE_QUERY_HANDLERS = (
    replacer_handler,
    default_inline_handler,
)

CALLBACK_QUERY_HANDLERS = ()


def build_registry() -> HandlerRegistry:
    """Registry with every handler, in priority order."""
    return HandlerRegistry(MESSAGE_HANDLERS + INLINE_QUERY_HANDLERS + CALLBACK_QUERY_HANDLERS)


__all__ = [
    "start_handler",
    "passthrough_handler",
    "replacer_handler",
    "default_inline_handler",
    "MESSAGE_HANDLERS",
    "INLINE_QUERY_HANDLERS",
    "CALLBACK_QUERY_HANDLERS",
    "build_registry",
]
