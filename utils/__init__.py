# utils/__init__.py
"""
Utility functions for the dotless bot.
"""

# Datetime utilities
from .datetime_utils import utc_now, ensure_tz_aware, format_iso, iso_timestamp

# Logging
from .logging import get_logger

# Text transforms
from .text_transform import (
    remove_dots, has_dots, escape_markdown, escape_markdown_code,
    escape_html, cut_down_text
)

__all__ = [
    # Datetime
    "utc_now",
    "ensure_tz_aware",
    "format_iso",
    "iso_timestamp",

    # Logging
    "get_logger",

    # Text
    "remove_dots",
    "has_dots",
    "escape_markdown",
    "escape_markdown_code",
    "escape_html",
    "cut_down_text",
]
