"""
Update processing - classifies an update and delegates to the registry.

Each event category present in an update is dispatched independently.
A handler failure is logged and turned into a best-effort error reply on
the channel the event arrived on, and the next category still runs. Only
failures outside that isolation (including a failing error reply) escape
as UpdateProcessingError.
"""
from typing import Any, Dict, Optional

from update_handler.config import BotConfig
from update_handler.registry import HandlerRegistry
from update_handler.schemas import (
    CallbackQuery, InlineQuery, InlineQueryResultArticle,
    InputTextMessageContent, Message, Update
)
from update_handler.services.idempotency_service import UpdateDeduplicator
from update_handler.utils.error_handling import with_error_handling
from update_handler.utils.logging import get_context_logger, with_context
from utils.text_transform import cut_down_text, escape_markdown_code

PARSE_MODE = "MarkdownV2"
ERROR_RESULT_ID = "error"
ERROR_RESULT_TITLE = "❌ Error occurred"
ERROR_RESULT_DESCRIPTION = "An error occurred while processing your request"


def format_error_reply(error_message: str, subject: str = "your request") -> str:
    """
    Build the MarkdownV2 error reply.

    The error text is escaped for a code span; the static parts are
    already escaped.
    """
    return (
        f"❌ *Error occurred while processing {subject}*\n\n"
        f"*Error:* `{escape_markdown_code(error_message)}`\n\n"
        "Please try again or contact support if the problem persists\\."
    )


def _error_text(exc: Exception) -> str:
    return str(exc) or type(exc).__name__


async def _handle_message(message: Message, registry: HandlerRegistry, client: Any,
                          config: BotConfig, logger) -> Dict[str, Any]:
    if not message.chat.is_private:
        logger.debug(f"Ignoring non-private chat: {message.chat.type}")
        return {"skipped": "non_private_chat"}

    logger.debug("Received message", extra={"preview": cut_down_text(message.text or "")})

    try:
        handled_by = await registry.process_message(message, client, config.allowed_user_ids)
        logger.debug("Message processed successfully", extra={"handled_by": handled_by})
        return {"handled_by": handled_by}
    except Exception as e:
        logger.exception(f"Message handler error: {_error_text(e)}")
        await client.send_message(
            message.chat.id,
            format_error_reply(_error_text(e), subject="your message"),
            PARSE_MODE
        )
        return {"error": _error_text(e)}


async def _handle_inline_query(query: InlineQuery, registry: HandlerRegistry, client: Any,
                               config: BotConfig, logger) -> Dict[str, Any]:
    try:
        handled_by = await registry.process_inline_query(query, client, config.allowed_user_ids)
        logger.debug("Inline query processed successfully", extra={"handled_by": handled_by})
        return {"handled_by": handled_by}
    except Exception as e:
        logger.exception(f"Inline query handler error: {_error_text(e)}")
        error_result = InlineQueryResultArticle(
            id=ERROR_RESULT_ID,
            title=ERROR_RESULT_TITLE,
            description=ERROR_RESULT_DESCRIPTION,
            input_message_content=InputTextMessageContent(
                message_text=format_error_reply(_error_text(e)),
                parse_mode=PARSE_MODE
            )
        )
        await client.answer_inline_query(query.id, [error_result])
        return {"error": _error_text(e)}


async def _handle_callback_query(callback_query: CallbackQuery, registry: HandlerRegistry, client: Any,
                                 config: BotConfig, logger) -> Dict[str, Any]:
    try:
        handled_by = await registry.process_callback_query(callback_query, client, config.allowed_user_ids)
        logger.debug("Callback query processed successfully", extra={"handled_by": handled_by})
        return {"handled_by": handled_by}
    except Exception as e:
        logger.exception(f"Callback query handler error: {_error_text(e)}")
        await client.answer_callback_query(callback_query.id, f"❌ Error: {_error_text(e)}")
        if callback_query.message is not None:
            await client.send_message(
                callback_query.message.chat.id,
                format_error_reply(_error_text(e)),
                PARSE_MODE
            )
        return {"error": _error_text(e)}


@with_error_handling(operation_name="process_update")
async def process_update(
    update: Update,
    registry: HandlerRegistry,
    client: Any,
    config: BotConfig,
    deduplicator: Optional[UpdateDeduplicator] = None,
    trace_id: Optional[str] = None
) -> Dict[str, Any]:
    """
    Process one webhook update.

    Args:
        update: Parsed update
        registry: Handler registry
        client: Telegram client used by handlers and error replies
        config: Bot configuration (allowed ids)
        deduplicator: Optional seen-set keyed by update_id
        trace_id: Trace ID for logging (optional)

    Returns:
        Summary dict with update_id, kind and per-category results

    Raises:
        UpdateProcessingError: If anything fails outside handler isolation
    """
    logger = get_context_logger("update_processor", trace_id=trace_id, update_id=update.update_id)
    summary: Dict[str, Any] = {
        "update_id": update.update_id,
        "kind": update.kind.value if update.kind else None,
    }

    if deduplicator is not None and deduplicator.is_seen(update.update_id):
        summary["status"] = "duplicate"
        return summary

    if update.message is not None:
        message = update.message
        sender = message.from_user.id if message.from_user else None
        summary["message"] = await _handle_message(
            message, registry, client, config, with_context(logger, user_id=sender)
        )

    if update.inline_query is not None:
        query = update.inline_query
        sender = query.from_user.id if query.from_user else None
        summary["inline_query"] = await _handle_inline_query(
            query, registry, client, config, with_context(logger, user_id=sender)
        )

    if update.callback_query is not None:
        callback_query = update.callback_query
        sender = callback_query.from_user.id if callback_query.from_user else None
        summary["callback_query"] = await _handle_callback_query(
            callback_query, registry, client, config, with_context(logger, user_id=sender)
        )

    if update.chosen_inline_result is not None:
        chosen = update.chosen_inline_result
        logger.debug(
            "Chosen inline result",
            extra={"result_id": chosen.result_id, "query": cut_down_text(chosen.query)}
        )
        summary["chosen_inline_result"] = {"result_id": chosen.result_id}

    if deduplicator is not None:
        deduplicator.mark_seen(update.update_id)

    logger.debug("Update processed", extra={"kind": summary["kind"]})
    return summary
