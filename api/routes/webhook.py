"""Telegram webhook route."""
import json
from typing import Optional

from fastapi import APIRouter, Depends, Request
from pydantic import ValidationError as PydanticValidationError

from api.dependencies import (
    get_bot_config, get_deduplicator, get_registry, get_telegram_client,
    verify_webhook_secret
)
from api.models.responses import WebhookResponse
from update_handler.client import TelegramClient
from update_handler.config import BotConfig
from update_handler.exceptions import UpdateParseError
from update_handler.processor import process_update
from update_handler.registry import HandlerRegistry
from update_handler.schemas import Update
from update_handler.services.idempotency_service import UpdateDeduplicator
from utils import get_logger

router = APIRouter(tags=["webhook"])

logger = get_logger("webhook")


def parse_update(body: bytes) -> Update:
    """
    Decode a webhook body into an Update.

    Raises:
        UpdateParseError: If the body is not JSON or not a valid update
    """
    try:
        payload = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise UpdateParseError(f"Invalid JSON body: {e}", original_exception=e)

    try:
        return Update.model_validate(payload)
    except PydanticValidationError as e:
        raise UpdateParseError(
            f"Invalid update payload: {e.error_count()} validation error(s)",
            original_exception=e,
            details={"errors": e.errors(include_url=False, include_context=False)}
        )


@router.post("/webhook", dependencies=[Depends(verify_webhook_secret)])
async def handle_webhook(
    request: Request,
    config: BotConfig = Depends(get_bot_config),
    client: TelegramClient = Depends(get_telegram_client),
    registry: HandlerRegistry = Depends(get_registry),
    deduplicator: Optional[UpdateDeduplicator] = Depends(get_deduplicator),
):
    """
    Receive one Telegram update.

    No try/except - exceptions bubble to centralized handler. Handler
    failures are already turned into user replies by the processor, so
    anything reaching the handler is a pipeline fault (HTTP 500).
    """
    trace_id = getattr(request.state, "trace_id", None)

    update = parse_update(await request.body())
    logger.debug("Parsed update", {"trace_id": trace_id, "update_id": update.update_id})

    await process_update(
        update,
        registry,
        client,
        config,
        deduplicator=deduplicator,
        trace_id=trace_id
    )

    return WebhookResponse.ok()
