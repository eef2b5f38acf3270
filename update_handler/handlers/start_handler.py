"""
/start command: replies with the onboarding text.
"""
from update_handler.registry import message_handler
from update_handler.schemas import Message
from utils.text_transform import remove_dots

START_COMMAND = "/start"

START_MESSAGE = remove_dots(
    "سلام!\n"
    "من یه ربات ساده‌ام که نقطه‌های متنت رو پاک می‌کنه.\n"
    "برای استفاده، توی هر چتی اسم منو تایپ کن و بعدش متنت رو بنویس تا بدون نقطه تحویل بگیری."
)


def is_start_command(message: Message) -> bool:
    return (message.text or "").startswith(START_COMMAND)


async def send_onboarding(message: Message, client) -> None:
    await client.send_message(message.chat.id, START_MESSAGE)


start_handler = message_handler(
    "start",
    can_handle=is_start_command,
    handle=send_onboarding,
    required_auth=False,
)
