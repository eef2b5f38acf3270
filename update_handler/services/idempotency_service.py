"""
Update deduplication.

Telegram redelivers an update when the webhook does not answer with a
2xx status, so the same update_id can arrive more than once. When enabled
(DEDUP_UPDATES=true) this seen-set lets the processor skip repeats.
An id is only recorded after its update was processed, so a redelivery
that follows a failed attempt runs again.

SCOPING:
- Keys are update ids, which are unique per bot
- Entries expire after ttl_seconds
- State is process-local; separate workers do not share it
"""
import threading
import time
from collections import OrderedDict
from typing import Callable, Optional

from update_handler.exceptions import ValidationError, ErrorCode
from update_handler.utils.logging import get_context_logger

DEFAULT_TTL_SECONDS = 3600
DEFAULT_MAX_ENTRIES = 10000

logger = get_context_logger("idempotency_service")


class UpdateDeduplicator:
    """Thread-safe, bounded, expiring set of seen update ids."""

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        clock: Optional[Callable[[], float]] = None
    ):
        if ttl_seconds <= 0:
            raise ValidationError(
                "ttl_seconds must be positive",
                error_code=ErrorCode.VALIDATION_ERROR,
                field="ttl_seconds",
                value=ttl_seconds
            )
        if max_entries <= 0:
            raise ValidationError(
                "max_entries must be positive",
                error_code=ErrorCode.VALIDATION_ERROR,
                field="max_entries",
                value=max_entries
            )
        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self._clock = clock or time.monotonic
        self._seen: "OrderedDict[int, float]" = OrderedDict()
        self._lock = threading.Lock()

    def _evict(self, now: float) -> None:
        # Entries are kept in insertion order, so expired ones sit at the front
        while self._seen:
            update_id, seen_at = next(iter(self._seen.items()))
            if now - seen_at < self.ttl_seconds and len(self._seen) <= self.max_entries:
                break
            self._seen.popitem(last=False)

    def is_seen(self, update_id: int) -> bool:
        """
        Check an update id without recording it.

        Returns:
            True if the id was recorded and has not expired
        """
        with self._lock:
            self._evict(self._clock())
            if update_id in self._seen:
                logger.info("Duplicate update skipped", extra={"update_id": update_id})
                return True
            return False

    def mark_seen(self, update_id: int) -> None:
        """Record an update id once it has been processed."""
        with self._lock:
            now = self._clock()
            self._evict(now)
            self._seen.pop(update_id, None)
            self._seen[update_id] = now
            if len(self._seen) > self.max_entries:
                self._seen.popitem(last=False)

    def clear(self) -> None:
        with self._lock:
            self._seen.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._seen)
