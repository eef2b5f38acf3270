"""
Non-empty inline queries: offers the dotless text as a single result.
"""
from update_handler.registry import inline_query_handler
from update_handler.schemas import (
    InlineQuery, InlineQueryResultArticle, InputTextMessageContent
)
from utils.text_transform import remove_dots

RESULT_ID = "replacer"
RESULT_TITLE = remove_dots("متن بدون نقطه")
RESULT_DESCRIPTION = remove_dots("رو این کلیک کن تا متنت رو بدون نقطه ببینی!")


def has_query(query: InlineQuery) -> bool:
    return query.query.strip() != ""


async def answer_dotless(query: InlineQuery, client) -> None:
    result = InlineQueryResultArticle(
        id=RESULT_ID,
        title=RESULT_TITLE,
        description=RESULT_DESCRIPTION,
        # No parse_mode: user text is sent verbatim
        input_message_content=InputTextMessageContent(message_text=remove_dots(query.query)),
    )
    await client.answer_inline_query(query.id, [result])


replacer_handler = inline_query_handler(
    "transform-inline",
    can_handle=has_query,
    handle=answer_dotless,
    required_auth=False,
)
