# ============================================================================
# FILE: test/update_handler_core/test_registry.py
# Tests for update_handler/registry.py (dispatch core)
# ============================================================================

import pytest
from unittest.mock import AsyncMock, Mock

from conftest import ALLOWED_USER_ID, STRANGER_USER_ID
from update_handler.registry import (
    Handler,
    HandlerCategory,
    HandlerRegistry,
    callback_query_handler,
    inline_query_handler,
    is_authorized,
    message_handler,
)


def recording_handler(name, predicate=lambda event: True, required_auth=True, factory=message_handler):
    """Handler whose action is an AsyncMock so calls can be asserted."""
    action = AsyncMock(return_value=None)
    return factory(name, can_handle=predicate, handle=action, required_auth=required_auth), action


# ============================================================================
# SECTION 1: Registration
# ============================================================================

class TestRegistration:
    """Test handler registration."""

    def test_register_appends_in_order(self):
        """✓ Registration order is preserved per category"""
        registry = HandlerRegistry()
        first, _ = recording_handler("first")
        second, _ = recording_handler("second")

        registry.register(first)
        registry.register(second)

        assert [h.name for h in registry.handlers(HandlerCategory.MESSAGE)] == ["first", "second"]

    def test_register_routes_by_category(self):
        """✓ Each handler lands in its own category list"""
        msg, _ = recording_handler("msg")
        inline, _ = recording_handler("inline", factory=inline_query_handler)
        callback, _ = recording_handler("callback", factory=callback_query_handler)

        registry = HandlerRegistry([msg, inline, callback])

        assert registry.handlers(HandlerCategory.MESSAGE) == (msg,)
        assert registry.handlers(HandlerCategory.INLINE_QUERY) == (inline,)
        assert registry.handlers(HandlerCategory.CALLBACK_QUERY) == (callback,)

    def test_handlers_returns_snapshot(self):
        """✓ handlers() cannot be used to mutate the registry"""
        registry = HandlerRegistry()
        snapshot = registry.handlers(HandlerCategory.MESSAGE)

        assert isinstance(snapshot, tuple)
        assert snapshot == ()

    def test_required_auth_defaults_to_true(self):
        """✓ Handlers require auth unless told otherwise"""
        handler = Handler("h", HandlerCategory.MESSAGE, lambda e: True, AsyncMock())
        assert handler.required_auth is True


# ============================================================================
# SECTION 2: First-match dispatch
# ============================================================================

class TestFirstMatch:
    """Test ordered predicate matching."""

    @pytest.mark.asyncio
    async def test_first_matching_handler_runs(self, make_message, fake_client):
        """✓ Only the first matching handler runs"""
        first, first_action = recording_handler("first", required_auth=False)
        second, second_action = recording_handler("second", required_auth=False)
        registry = HandlerRegistry([first, second])
        message = make_message()

        handled_by = await registry.process_message(message, fake_client, frozenset())

        assert handled_by == "first"
        first_action.assert_awaited_once_with(message, fake_client)
        second_action.assert_not_called()

    @pytest.mark.asyncio
    async def test_non_matching_handlers_are_skipped(self, make_message, fake_client):
        """✓ Predicates returning False are passed over"""
        skipped, skipped_action = recording_handler("skipped", predicate=lambda e: False, required_auth=False)
        chosen, chosen_action = recording_handler("chosen", required_auth=False)
        registry = HandlerRegistry([skipped, chosen])

        handled_by = await registry.process_message(make_message(), fake_client, frozenset())

        assert handled_by == "chosen"
        skipped_action.assert_not_called()
        chosen_action.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_later_predicates_not_consulted_after_match(self, make_message, fake_client):
        """✓ Scanning stops at the first match"""
        later_predicate = Mock(return_value=True)
        first, _ = recording_handler("first", required_auth=False)
        later = message_handler("later", can_handle=later_predicate, handle=AsyncMock(), required_auth=False)
        registry = HandlerRegistry([first, later])

        await registry.process_message(make_message(), fake_client, frozenset())

        later_predicate.assert_not_called()

    @pytest.mark.asyncio
    async def test_no_match_is_silent_noop(self, make_message, fake_client):
        """✓ No matching handler → None, no outbound call"""
        never, action = recording_handler("never", predicate=lambda e: False)
        registry = HandlerRegistry([never])

        handled_by = await registry.process_message(make_message(), fake_client, frozenset({ALLOWED_USER_ID}))

        assert handled_by is None
        action.assert_not_called()
        assert fake_client.method_calls == []

    @pytest.mark.asyncio
    async def test_dispatch_takes_category_first(self, make_message, fake_client):
        """✓ dispatch(category, event, client, allowed_ids)"""
        handler, action = recording_handler("msg", required_auth=False)
        registry = HandlerRegistry([handler])
        message = make_message()

        handled_by = await registry.dispatch(HandlerCategory.MESSAGE, message, fake_client, frozenset())

        assert handled_by == "msg"
        action.assert_awaited_once_with(message, fake_client)

    @pytest.mark.asyncio
    async def test_empty_category_is_noop(self, make_callback_query, fake_client):
        """✓ Category without handlers → None"""
        registry = HandlerRegistry()

        handled_by = await registry.process_callback_query(make_callback_query(), fake_client, frozenset())

        assert handled_by is None

    @pytest.mark.asyncio
    async def test_categories_are_independent(self, make_inline_query, fake_client):
        """✓ Message handlers are never consulted for inline queries"""
        msg, msg_action = recording_handler("msg", required_auth=False)
        inline, inline_action = recording_handler("inline", required_auth=False, factory=inline_query_handler)
        registry = HandlerRegistry([msg, inline])

        handled_by = await registry.process_inline_query(make_inline_query(query="x"), fake_client, frozenset())

        assert handled_by == "inline"
        msg_action.assert_not_called()
        inline_action.assert_awaited_once()


# ============================================================================
# SECTION 3: Authorization gating
# ============================================================================

class TestAuthorization:
    """Test auth-required handlers."""

    @pytest.mark.asyncio
    async def test_allowed_sender_runs_handler(self, make_message, fake_client):
        """✓ Sender in allowed ids → handler runs"""
        handler, action = recording_handler("secure")
        registry = HandlerRegistry([handler])

        handled_by = await registry.process_message(
            make_message(user_id=ALLOWED_USER_ID), fake_client, frozenset({ALLOWED_USER_ID})
        )

        assert handled_by == "secure"
        action.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_unknown_sender_is_denied_silently(self, make_message, fake_client):
        """✓ Sender not allowed → no action, no outbound call"""
        handler, action = recording_handler("secure")
        registry = HandlerRegistry([handler])

        handled_by = await registry.process_message(
            make_message(user_id=STRANGER_USER_ID), fake_client, frozenset({ALLOWED_USER_ID})
        )

        assert handled_by is None
        action.assert_not_called()
        assert fake_client.method_calls == []

    @pytest.mark.asyncio
    async def test_anonymous_sender_is_denied(self, make_message, fake_client):
        """✓ Event without sender → denied"""
        handler, action = recording_handler("secure")
        registry = HandlerRegistry([handler])

        await registry.process_message(make_message(user_id=None), fake_client, frozenset({ALLOWED_USER_ID}))

        action.assert_not_called()

    @pytest.mark.asyncio
    async def test_denial_does_not_fall_through(self, make_message, fake_client):
        """✓ A denied match ends dispatch; later handlers are not tried"""
        secure, secure_action = recording_handler("secure")
        fallback, fallback_action = recording_handler("fallback", required_auth=False)
        registry = HandlerRegistry([secure, fallback])

        handled_by = await registry.process_message(
            make_message(user_id=STRANGER_USER_ID), fake_client, frozenset({ALLOWED_USER_ID})
        )

        assert handled_by is None
        secure_action.assert_not_called()
        fallback_action.assert_not_called()

    @pytest.mark.asyncio
    async def test_public_handler_ignores_allowed_ids(self, make_message, fake_client):
        """✓ required_auth=False → runs for anyone, even anonymous"""
        handler, action = recording_handler("public", required_auth=False)
        registry = HandlerRegistry([handler])

        handled_by = await registry.process_message(make_message(user_id=None), fake_client, frozenset())

        assert handled_by == "public"
        action.assert_awaited_once()

    def test_is_authorized(self, make_message):
        """✓ is_authorized needs a sender and membership"""
        allowed = frozenset({ALLOWED_USER_ID})

        assert is_authorized(make_message(user_id=ALLOWED_USER_ID), allowed) is True
        assert is_authorized(make_message(user_id=STRANGER_USER_ID), allowed) is False
        assert is_authorized(make_message(user_id=None), allowed) is False


# ============================================================================
# SECTION 4: Failure propagation
# ============================================================================

class TestFailurePropagation:
    """The registry never swallows handler errors."""

    @pytest.mark.asyncio
    async def test_handler_error_propagates(self, make_message, fake_client):
        """✓ Handler exception reaches the caller"""
        failing = message_handler(
            "failing",
            can_handle=lambda e: True,
            handle=AsyncMock(side_effect=RuntimeError("boom")),
            required_auth=False,
        )
        fallback, fallback_action = recording_handler("fallback", required_auth=False)
        registry = HandlerRegistry([failing, fallback])

        with pytest.raises(RuntimeError, match="boom"):
            await registry.process_message(make_message(), fake_client, frozenset())

        fallback_action.assert_not_called()

    @pytest.mark.asyncio
    async def test_predicate_error_propagates(self, make_message, fake_client):
        """✓ Predicate exception reaches the caller"""
        def broken_predicate(event):
            raise ValueError("bad predicate")

        registry = HandlerRegistry([
            message_handler("broken", can_handle=broken_predicate, handle=AsyncMock(), required_auth=False)
        ])

        with pytest.raises(ValueError):
            await registry.process_message(make_message(), fake_client, frozenset())
