"""
Handler registry and dispatch.

Handlers are predicate/action pairs grouped by event category. For each
event the registry runs the first handler, in registration order, whose
predicate accepts it:

- once a predicate matches, no later handler is consulted, whatever the
  outcome;
- a handler that requires auth only runs for a sender whose id is in the
  allowed set; otherwise dispatch ends silently with no side effect;
- errors raised by a handler are not caught here. The caller isolates
  failures per event category.
"""
from dataclasses import dataclass
from enum import Enum
from typing import (
    Any, Awaitable, Callable, Dict, FrozenSet, Generic, Iterable, List,
    Optional, Tuple, TypeVar
)

from update_handler.schemas import CallbackQuery, InlineQuery, Message
from update_handler.utils.logging import get_context_logger

logger = get_context_logger("handler_registry")

E = TypeVar("E")


class HandlerCategory(str, Enum):
    """Event categories with their own handler list."""
    MESSAGE = "message"
    INLINE_QUERY = "inline_query"
    CALLBACK_QUERY = "callback_query"


@dataclass(frozen=True)
class Handler(Generic[E]):
    """
    A named, stateless predicate/action pair.

    Attributes:
        name: Identifier used in logs
        category: Which registry list the handler belongs to
        can_handle: Predicate over the event
        handle: Coroutine function taking (event, client)
        required_auth: When True the sender must be in the allowed ids
    """
    name: str
    category: HandlerCategory
    can_handle: Callable[[E], bool]
    handle: Callable[[E, Any], Awaitable[None]]
    required_auth: bool = True


def message_handler(name: str, can_handle: Callable[[Message], bool],
                    handle: Callable[[Message, Any], Awaitable[None]],
                    required_auth: bool = True) -> Handler[Message]:
    return Handler(name, HandlerCategory.MESSAGE, can_handle, handle, required_auth)


def inline_query_handler(name: str, can_handle: Callable[[InlineQuery], bool],
                         handle: Callable[[InlineQuery, Any], Awaitable[None]],
                         required_auth: bool = True) -> Handler[InlineQuery]:
    return Handler(name, HandlerCategory.INLINE_QUERY, can_handle, handle, required_auth)


def callback_query_handler(name: str, can_handle: Callable[[CallbackQuery], bool],
                           handle: Callable[[CallbackQuery, Any], Awaitable[None]],
                           required_auth: bool = True) -> Handler[CallbackQuery]:
    return Handler(name, HandlerCategory.CALLBACK_QUERY, can_handle, handle, required_auth)


def is_authorized(event: Any, allowed_ids: FrozenSet[int]) -> bool:
    """Whether the event carries a sender whose id is allowed."""
    sender = getattr(event, "from_user", None)
    return sender is not None and sender.id in allowed_ids


class HandlerRegistry:
    """Ordered handler lists, one per category."""

    def __init__(self, handlers: Iterable[Handler] = ()):
        self._handlers: Dict[HandlerCategory, List[Handler]] = {
            category: [] for category in HandlerCategory
        }
        for handler in handlers:
            self.register(handler)

    def register(self, handler: Handler) -> None:
        """Append a handler to the list of its category."""
        self._handlers[handler.category].append(handler)

    def handlers(self, category: HandlerCategory) -> Tuple[Handler, ...]:
        return tuple(self._handlers[category])

    async def dispatch(
        self,
        category: HandlerCategory,
        event: Any,
        client: Any,
        allowed_ids: FrozenSet[int]
    ) -> Optional[str]:
        """
        Run the first handler of `category` whose predicate accepts the event.

        Args:
            category: Handler list to consult
            event: Message, InlineQuery or CallbackQuery
            client: Platform client passed to the handler
            allowed_ids: User ids allowed to trigger auth-required handlers

        Returns:
            Name of the handler that ran, or None when nothing ran
            (no match, or the match was denied)
        """
        for handler in self._handlers[category]:
            if not handler.can_handle(event):
                continue

            if handler.required_auth is not False and not is_authorized(event, allowed_ids):
                sender = getattr(event, "from_user", None)
                logger.debug(
                    f"Handler {handler.name} denied",
                    extra={"handler": handler.name, "user_id": sender.id if sender else None}
                )
                return None

            await handler.handle(event, client)
            return handler.name

        return None

    async def process_message(self, message: Message, client: Any, allowed_ids: FrozenSet[int]) -> Optional[str]:
        return await self.dispatch(HandlerCategory.MESSAGE, message, client, allowed_ids)

    async def process_inline_query(self, query: InlineQuery, client: Any, allowed_ids: FrozenSet[int]) -> Optional[str]:
        return await self.dispatch(HandlerCategory.INLINE_QUERY, query, client, allowed_ids)

    async def process_callback_query(self, callback_query: CallbackQuery, client: Any,
                                     allowed_ids: FrozenSet[int]) -> Optional[str]:
        return await self.dispatch(HandlerCategory.CALLBACK_QUERY, callback_query, client, allowed_ids)
