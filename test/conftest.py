# ============================================================================
# FILE: test/conftest.py
# Shared fixtures for ALL test suites
# ============================================================================

import pytest
import sys
from pathlib import Path
from typing import Any, Dict, Optional
from unittest.mock import AsyncMock

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from fastapi.testclient import TestClient

from api.app import create_app
from api.dependencies import get_bot_config, get_telegram_client
from update_handler.client import TelegramClient
from update_handler.config import BotConfig
from update_handler.handlers import build_registry
from update_handler.schemas import CallbackQuery, InlineQuery, Message

ALLOWED_USER_ID = 42
STRANGER_USER_ID = 7
PRIVATE_CHAT_ID = 1001
WEBHOOK_SECRET = "s3cret-token"


# ============================================================================
# Payload builders
# ============================================================================

def message_payload(
    text: Optional[str] = "hello",
    chat_type: str = "private",
    user_id: Optional[int] = ALLOWED_USER_ID,
    chat_id: int = PRIVATE_CHAT_ID,
    **extra
) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "message_id": 10,
        "chat": {"id": chat_id, "type": chat_type},
    }
    if text is not None:
        payload["text"] = text
    if user_id is not None:
        payload["from"] = {"id": user_id, "first_name": "Test"}
    payload.update(extra)
    return payload


def inline_query_payload(query: str = "", user_id: Optional[int] = ALLOWED_USER_ID) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"id": "iq-1", "query": query, "offset": ""}
    if user_id is not None:
        payload["from"] = {"id": user_id, "first_name": "Test"}
    return payload


def callback_query_payload(
    data: str = "btn",
    user_id: Optional[int] = ALLOWED_USER_ID,
    with_message: bool = True
) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"id": "cb-1", "chat_instance": "ci", "data": data}
    if user_id is not None:
        payload["from"] = {"id": user_id, "first_name": "Test"}
    if with_message:
        payload["message"] = message_payload(text="menu")
    return payload


def update_payload(update_id: int = 1, **events) -> Dict[str, Any]:
    return {"update_id": update_id, **events}


# ============================================================================
# Event fixtures
# ============================================================================

@pytest.fixture
def make_message():
    """Build a Message model."""
    def _make(**kwargs) -> Message:
        return Message.model_validate(message_payload(**kwargs))
    return _make


@pytest.fixture
def make_inline_query():
    """Build an InlineQuery model."""
    def _make(**kwargs) -> InlineQuery:
        return InlineQuery.model_validate(inline_query_payload(**kwargs))
    return _make


@pytest.fixture
def make_callback_query():
    """Build a CallbackQuery model."""
    def _make(**kwargs) -> CallbackQuery:
        return CallbackQuery.model_validate(callback_query_payload(**kwargs))
    return _make


# ============================================================================
# Core fixtures
# ============================================================================

@pytest.fixture
def bot_config() -> BotConfig:
    """Config without a webhook secret; only ALLOWED_USER_ID is authorized."""
    return BotConfig(
        telegram_bot_token="123456:TEST-TOKEN",
        allowed_user_ids=frozenset({ALLOWED_USER_ID}),
    )


@pytest.fixture
def secret_bot_config(bot_config) -> BotConfig:
    return BotConfig(
        telegram_bot_token=bot_config.telegram_bot_token,
        allowed_user_ids=bot_config.allowed_user_ids,
        webhook_secret=WEBHOOK_SECRET,
    )


@pytest.fixture
def fake_client() -> AsyncMock:
    """Telegram client double; every Bot API method is an AsyncMock."""
    client = AsyncMock(spec=TelegramClient)
    client.send_message.return_value = {"ok": True}
    client.answer_inline_query.return_value = {"ok": True}
    client.answer_callback_query.return_value = {"ok": True}
    return client


@pytest.fixture
def registry():
    return build_registry()


# ============================================================================
# API fixtures
# ============================================================================

def _build_app(config: BotConfig, fake_client: AsyncMock, registry=None):
    app = create_app(registry=registry)

    async def override_client():
        yield fake_client

    app.dependency_overrides[get_bot_config] = lambda: config
    app.dependency_overrides[get_telegram_client] = override_client
    return app


@pytest.fixture
def app(bot_config, fake_client):
    """App wired to the fake client and the default handler registry."""
    return _build_app(bot_config, fake_client)


@pytest.fixture
def client(app):
    """Provide FastAPI test client; server errors become HTTP 500 responses."""
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


@pytest.fixture
def secret_client(secret_bot_config, fake_client):
    """Test client for an app configured with a webhook secret."""
    app = _build_app(secret_bot_config, fake_client)
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


@pytest.fixture
def app_factory(bot_config, fake_client):
    """Build an app around a custom registry and/or config."""
    def _factory(registry=None, config: Optional[BotConfig] = None):
        return _build_app(config or bot_config, fake_client, registry=registry)
    return _factory
