"""
Telegram Bot API client.

Thin async wrapper over the Bot API REST methods used by the handlers.
Responses are returned decoded and are not checked for semantic success;
non-2xx statuses are only logged. There is no retry or backoff.
"""
from typing import Any, Dict, List, Optional, Sequence, Union

import httpx

from update_handler.config import BotConfig, DEFAULT_API_BASE_URL, DEFAULT_HTTP_TIMEOUT_SECONDS
from update_handler.schemas import InlineQueryResultArticle
from update_handler.utils.error_handling import handle_platform_error
from update_handler.utils.logging import get_context_logger

logger = get_context_logger("telegram_client")

InlineResult = Union[InlineQueryResultArticle, Dict[str, Any]]


class TelegramClient:
    """Async client for one bot token."""

    def __init__(
        self,
        token: str,
        base_url: str = DEFAULT_API_BASE_URL,
        timeout: float = DEFAULT_HTTP_TIMEOUT_SECONDS,
        http_client: Optional[httpx.AsyncClient] = None
    ):
        self._token = token
        self.base_url = f"{base_url.rstrip('/')}/bot{token}"
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=timeout)

    @classmethod
    def from_config(cls, config: BotConfig, http_client: Optional[httpx.AsyncClient] = None) -> "TelegramClient":
        return cls(
            config.telegram_bot_token,
            base_url=config.telegram_api_base_url,
            timeout=config.http_timeout_seconds,
            http_client=http_client
        )

    async def __aenter__(self) -> "TelegramClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()

    def get_token(self) -> str:
        return self._token

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    async def _call(self, method: str, payload: Optional[Dict[str, Any]] = None, http_method: str = "POST") -> Any:
        url = f"{self.base_url}/{method}"
        try:
            if http_method == "GET":
                response = await self._http.get(url, params=payload)
            else:
                response = await self._http.post(url, json=payload or {})
        except httpx.HTTPError as e:
            handle_platform_error(e, method, logger=logger)

        if response.status_code > 299:
            logger.warning(
                f"Telegram API {method} returned status {response.status_code}",
                extra={"method": method, "status_code": response.status_code}
            )

        try:
            return response.json()
        except ValueError:
            return {"ok": False, "status_code": response.status_code, "description": response.text}

    # ------------------------------------------------------------------
    # Bot API methods
    # ------------------------------------------------------------------

    async def send_message(
        self,
        chat_id: int,
        text: str,
        parse_mode: Optional[str] = None,
        disable_web_page_preview: Optional[bool] = None
    ) -> Any:
        body: Dict[str, Any] = {"chat_id": chat_id, "text": text}
        if parse_mode:
            body["parse_mode"] = parse_mode
        if disable_web_page_preview is not None:
            body["disable_web_page_preview"] = disable_web_page_preview
        return await self._call("sendMessage", body)

    async def reply_to_message(
        self,
        chat_id: int,
        message_id: int,
        text: str,
        parse_mode: Optional[str] = None,
        disable_web_page_preview: Optional[bool] = None
    ) -> Any:
        body: Dict[str, Any] = {"chat_id": chat_id, "reply_to_message_id": message_id, "text": text}
        if parse_mode:
            body["parse_mode"] = parse_mode
        if disable_web_page_preview is not None:
            body["disable_web_page_preview"] = disable_web_page_preview
        return await self._call("sendMessage", body)

    async def answer_inline_query(self, inline_query_id: str, results: Sequence[InlineResult]) -> Any:
        payload_results: List[Dict[str, Any]] = [
            r.to_payload() if isinstance(r, InlineQueryResultArticle) else r
            for r in results
        ]
        return await self._call(
            "answerInlineQuery",
            {"inline_query_id": inline_query_id, "results": payload_results}
        )

    async def answer_callback_query(self, callback_query_id: str, text: Optional[str] = None) -> Any:
        body: Dict[str, Any] = {"callback_query_id": callback_query_id}
        if text:
            body["text"] = text
        return await self._call("answerCallbackQuery", body)

    async def edit_message_text(
        self,
        chat_id: int,
        message_id: int,
        text: str,
        reply_markup: Optional[Dict[str, Any]] = None,
        parse_mode: Optional[str] = None
    ) -> Any:
        body: Dict[str, Any] = {"chat_id": chat_id, "message_id": message_id, "text": text}
        if reply_markup:
            body["reply_markup"] = reply_markup
        if parse_mode:
            body["parse_mode"] = parse_mode
        return await self._call("editMessageText", body)

    async def edit_inline_message_text(
        self,
        inline_message_id: str,
        text: str,
        reply_markup: Optional[Dict[str, Any]] = None,
        parse_mode: Optional[str] = None
    ) -> Any:
        body: Dict[str, Any] = {"inline_message_id": inline_message_id, "text": text}
        if reply_markup:
            body["reply_markup"] = reply_markup
        if parse_mode:
            body["parse_mode"] = parse_mode
        return await self._call("editMessageText", body)

    async def get_file(self, file_id: str) -> Any:
        return await self._call("getFile", {"file_id": file_id}, http_method="GET")

    async def get_chat_member(self, chat_id: int, user_id: int) -> Any:
        return await self._call("getChatMember", {"chat_id": chat_id, "user_id": user_id}, http_method="GET")

    async def get_me(self) -> Any:
        return await self._call("getMe", http_method="GET")
