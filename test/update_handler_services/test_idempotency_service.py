# ============================================================================
# FILE: test/update_handler_services/test_idempotency_service.py
# Tests for update_handler/services/idempotency_service.py
# ============================================================================

import pytest

from update_handler.exceptions import ValidationError
from update_handler.services.idempotency_service import UpdateDeduplicator


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start=1000.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


# ============================================================================
# SECTION 1: Seen-set behaviour
# ============================================================================

class TestSeen:
    """Test duplicate detection."""

    def test_unknown_id_not_seen(self):
        """✓ New id → False"""
        dedup = UpdateDeduplicator()
        assert dedup.is_seen(1) is False

    def test_check_does_not_record(self):
        """✓ is_seen alone never records the id"""
        dedup = UpdateDeduplicator()
        dedup.is_seen(1)

        assert dedup.is_seen(1) is False
        assert len(dedup) == 0

    def test_marked_id_seen(self):
        """✓ mark_seen then is_seen → True"""
        dedup = UpdateDeduplicator()
        dedup.mark_seen(1)
        assert dedup.is_seen(1) is True

    def test_distinct_ids_independent(self):
        """✓ Different ids do not collide"""
        dedup = UpdateDeduplicator()
        dedup.mark_seen(1)
        dedup.mark_seen(2)

        assert dedup.is_seen(3) is False
        assert len(dedup) == 2

    def test_marking_twice_keeps_one_entry(self):
        """✓ Re-marking an id does not duplicate it"""
        dedup = UpdateDeduplicator()
        dedup.mark_seen(1)
        dedup.mark_seen(1)
        assert len(dedup) == 1

    def test_clear(self):
        """✓ clear() forgets everything"""
        dedup = UpdateDeduplicator()
        dedup.mark_seen(1)
        dedup.clear()

        assert len(dedup) == 0
        assert dedup.is_seen(1) is False


# ============================================================================
# SECTION 2: Expiry and bounds
# ============================================================================

class TestExpiry:
    """Test TTL and size limits."""

    def test_expired_entry_forgotten(self):
        """✓ After ttl_seconds the id counts as new"""
        clock = FakeClock()
        dedup = UpdateDeduplicator(ttl_seconds=60, clock=clock)
        dedup.mark_seen(1)

        clock.advance(61)

        assert dedup.is_seen(1) is False

    def test_entry_within_ttl_kept(self):
        """✓ Before ttl_seconds the id is still a duplicate"""
        clock = FakeClock()
        dedup = UpdateDeduplicator(ttl_seconds=60, clock=clock)
        dedup.mark_seen(1)

        clock.advance(59)

        assert dedup.is_seen(1) is True

    def test_max_entries_evicts_oldest(self):
        """✓ Oldest id dropped when the set is full"""
        dedup = UpdateDeduplicator(max_entries=2)
        dedup.mark_seen(1)
        dedup.mark_seen(2)
        dedup.mark_seen(3)

        assert len(dedup) == 2
        assert dedup.is_seen(1) is False
        assert dedup.is_seen(3) is True

    @pytest.mark.parametrize("kwargs", [{"ttl_seconds": 0}, {"ttl_seconds": -1}, {"max_entries": 0}])
    def test_invalid_arguments(self, kwargs):
        """✓ Non-positive limits → ValidationError"""
        with pytest.raises(ValidationError):
            UpdateDeduplicator(**kwargs)
