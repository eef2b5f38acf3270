"""
Outbound client for the Telegram Bot API.
"""

from .telegram_client import TelegramClient

__all__ = ["TelegramClient"]
