"""
Update handling for the dotless bot.

This package turns Telegram webhook updates into handler calls: the
registry picks the first matching handler per event category, the
processor isolates handler failures and sends error replies, and the
client talks to the Bot API.
"""

from .config import BotConfig, load_config
from .registry import (
    Handler, HandlerCategory, HandlerRegistry,
    message_handler, inline_query_handler, callback_query_handler
)
from .processor import process_update
from .handlers import build_registry
from .client import TelegramClient
from .version import __version__

__all__ = [
    # Configuration
    "BotConfig",
    "load_config",

    # Registry
    "Handler",
    "HandlerCategory",
    "HandlerRegistry",
    "message_handler",
    "inline_query_handler",
    "callback_query_handler",
    "build_registry",

    # Processing
    "process_update",
    "TelegramClient",

    # Version information
    "__version__",
]
