"""FastAPI dependencies shared by the routes."""
import hmac
from typing import AsyncIterator, Optional

from fastapi import Depends, Request

from update_handler.client import TelegramClient
from update_handler.config import BotConfig, load_config
from update_handler.exceptions import UnauthorizedError
from update_handler.registry import HandlerRegistry
from update_handler.services.idempotency_service import UpdateDeduplicator


def get_bot_config() -> BotConfig:
    """Settings are read per request so a redeploy of env vars takes effect immediately."""
    return load_config()


async def get_telegram_client(config: BotConfig = Depends(get_bot_config)) -> AsyncIterator[TelegramClient]:
    """One Bot API client per request, closed when the request ends."""
    async with TelegramClient.from_config(config) as client:
        yield client


def get_registry(request: Request) -> HandlerRegistry:
    return request.app.state.registry


def get_deduplicator(request: Request, config: BotConfig = Depends(get_bot_config)) -> Optional[UpdateDeduplicator]:
    if not config.dedup_updates:
        return None
    return request.app.state.deduplicator


SECRET_HEADER = "X-Telegram-Bot-Api-Secret-Token"


def verify_webhook_secret(request: Request, config: BotConfig = Depends(get_bot_config)) -> None:
    """
    Reject the request when a secret is configured and the header differs.

    Raises:
        UnauthorizedError: On a missing or wrong secret header
    """
    if not config.webhook_secret:
        return
    provided = request.headers.get(SECRET_HEADER) or ""
    if not hmac.compare_digest(provided.encode(), config.webhook_secret.encode()):
        raise UnauthorizedError("Unauthorized", details={"reason": "invalid_secret_token"})
