"""
Empty inline queries: a single static result explaining usage.
"""
from update_handler.registry import inline_query_handler
from update_handler.schemas import (
    InlineQuery, InlineQueryResultArticle, InputTextMessageContent
)
from utils.text_transform import remove_dots

RESULT_ID = "default"

USAGE_RESULT = InlineQueryResultArticle(
    id=RESULT_ID,
    title=remove_dots("شروع به تایپ کن تا نقطه‌ها رو حذف کنم"),
    description=remove_dots("هرچی اینجا بنویسی، من نقطه‌هاشو برات پاک می‌کنم."),
    input_message_content=InputTextMessageContent(
        message_text=remove_dots("برای استفاده از ربات، بعد از اسم من، متنت رو بنویس تا بدون نقطه تحویل بگیری."),
    ),
)


def is_empty_query(query: InlineQuery) -> bool:
    return query.query.strip() == ""


async def answer_usage(query: InlineQuery, client) -> None:
    await client.answer_inline_query(query.id, [USAGE_RESULT])


default_inline_handler = inline_query_handler(
    "default-inline",
    can_handle=is_empty_query,
    handle=answer_usage,
    required_auth=False,
)
