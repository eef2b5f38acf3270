"""
Schema definitions for Telegram updates.

Provides validation models for the webhook payload and for the inline
query results sent back to the Bot API.
"""
from __future__ import annotations
from typing import Optional, List, Dict, Any, Union
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class UpdateKind(str, Enum):
    """Event kinds an update can carry."""
    MESSAGE = "message"
    CHANNEL_POST = "channel_post"
    INLINE_QUERY = "inline_query"
    CALLBACK_QUERY = "callback_query"
    CHOSEN_INLINE_RESULT = "chosen_inline_result"


class TelegramModel(BaseModel):
    """Base for all inbound Telegram objects: immutable, unknown keys kept."""

    model_config = ConfigDict(extra="allow", frozen=True, populate_by_name=True)


class User(TelegramModel):
    """Sender identity."""
    id: int
    first_name: Optional[str] = None
    username: Optional[str] = None
    is_bot: bool = False


class Chat(TelegramModel):
    """Chat a message belongs to."""
    id: int
    type: str

    @property
    def is_private(self) -> bool:
        return self.type == "private"


class FileRef(TelegramModel):
    """Minimal view of an attached file."""
    file_id: str
    file_size: Optional[int] = None


class Message(TelegramModel):
    """Chat message; text is absent for attachment-only messages."""
    message_id: int
    chat: Chat
    from_user: Optional[User] = Field(None, alias="from")
    text: Optional[str] = None
    document: Optional[FileRef] = None
    photo: Optional[List[FileRef]] = None
    video: Optional[FileRef] = None
    audio: Optional[FileRef] = None
    voice: Optional[FileRef] = None

    @property
    def has_attachment(self) -> bool:
        return any(
            getattr(self, attr) is not None
            for attr in ("document", "photo", "video", "audio", "voice")
        )


class InlineQuery(TelegramModel):
    """Inline query typed after the bot's handle in any chat."""
    id: str
    from_user: Optional[User] = Field(None, alias="from")
    query: str = ""
    offset: str = ""


class ChosenInlineResult(TelegramModel):
    """Inline result the user picked."""
    result_id: str
    from_user: Optional[User] = Field(None, alias="from")
    query: str = ""
    inline_message_id: Optional[str] = None


class CallbackQuery(TelegramModel):
    """Tap on an inline keyboard button."""
    id: str
    from_user: Optional[User] = Field(None, alias="from")
    message: Optional[Message] = None
    inline_message_id: Optional[str] = None
    chat_instance: str = ""
    data: Optional[str] = None


Event = Union[Message, InlineQuery, CallbackQuery, ChosenInlineResult]


class Update(TelegramModel):
    """One webhook delivery."""
    update_id: int
    message: Optional[Message] = None
    channel_post: Optional[Message] = None
    inline_query: Optional[InlineQuery] = None
    chosen_inline_result: Optional[ChosenInlineResult] = None
    callback_query: Optional[CallbackQuery] = None

    @property
    def kinds(self) -> List[UpdateKind]:
        """All event kinds present, in processing order."""
        return [kind for kind in UpdateKind if getattr(self, kind.value) is not None]

    @property
    def kind(self) -> Optional[UpdateKind]:
        """The first event kind present, or None for an unsupported update."""
        kinds = self.kinds
        return kinds[0] if kinds else None


# ----------------------------------------------------------------------------
# Outbound models
# ----------------------------------------------------------------------------

class InlineKeyboardButton(BaseModel):
    text: str
    callback_data: str


class InlineKeyboardMarkup(BaseModel):
    inline_keyboard: List[List[InlineKeyboardButton]]


class InputTextMessageContent(BaseModel):
    message_text: str
    parse_mode: Optional[str] = None


class InlineQueryResultArticle(BaseModel):
    """Article result for answerInlineQuery."""
    type: str = "article"
    id: str
    title: str
    description: str
    input_message_content: InputTextMessageContent
    reply_markup: Optional[InlineKeyboardMarkup] = None

    def to_payload(self) -> Dict[str, Any]:
        """Serialize for the Bot API, dropping unset optional fields."""
        return self.model_dump(exclude_none=True)
