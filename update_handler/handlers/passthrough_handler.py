"""
Plain chat messages: sends the dotless version of the text back.
"""
from update_handler.handlers.start_handler import is_start_command
from update_handler.registry import message_handler
from update_handler.schemas import Message
from utils.text_transform import has_dots, remove_dots


def has_transformable_text(message: Message) -> bool:
    # Attachment-only messages have no text and never match
    return not is_start_command(message) and has_dots(message.text or "")


async def send_dotless_text(message: Message, client) -> None:
    if message.text:
        await client.send_message(message.chat.id, remove_dots(message.text))


passthrough_handler = message_handler(
    "passthrough-transform",
    can_handle=has_transformable_text,
    handle=send_dotless_text,
    required_auth=False,
)
