"""
Services used around update processing.
"""

from .idempotency_service import UpdateDeduplicator

__all__ = ["UpdateDeduplicator"]
