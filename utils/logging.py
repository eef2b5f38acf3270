# utils/logging.py
import logging
import os
from datetime import datetime
from typing import Dict, Any

# Optional per-logger file output; unset means console only
LOGS_DIR = os.getenv("LOGS_DIR")

DEFAULT_FORMAT = '%(asctime)s | %(levelname)s | %(name)s | %(message)s'
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

def configure_logger(name: str, level: int = logging.INFO,
                     format_str: str = DEFAULT_FORMAT,
                     date_format: str = DEFAULT_DATE_FORMAT) -> logging.Logger:
    """
    Configure a logger, adding a dated file handler when LOGS_DIR is set.

    Console output goes through the root handler installed by
    update_handler.utils.logging.configure_logging.

    Args:
        name: Logger name
        level: Logging level
        format_str: Log format string
        date_format: Date format string

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    if LOGS_DIR and not logger.handlers:
        os.makedirs(LOGS_DIR, exist_ok=True)
        file_path = os.path.join(LOGS_DIR, f"{name}_{datetime.now().strftime('%Y-%m-%d')}.log")
        file_handler = logging.FileHandler(file_path)
        file_handler.setFormatter(logging.Formatter(format_str, date_format))
        logger.addHandler(file_handler)

    return logger

class ContextLogger:
    """Logger that appends key=value context to each message."""

    def __init__(self, name: str, level: int = logging.INFO):
        self.logger = configure_logger(name, level)

    def log(self, level: int, message: str, context: Dict[str, Any] = None, exc_info: bool = False, **kwargs):
        """Log a message with context."""
        extra_context = kwargs.get('extra')
        if extra_context and isinstance(extra_context, dict) and context is None:
            context = extra_context

        context_str = ""
        if context:
            context_filtered = {k: v for k, v in context.items() if v is not None}
            if context_filtered:
                context_str = " | " + " | ".join(f"{k}={v}" for k, v in context_filtered.items())

        self.logger.log(level, message + context_str, exc_info=exc_info)

    def debug(self, message: str, context: Dict[str, Any] = None, **kwargs):
        self.log(logging.DEBUG, message, context, **kwargs)

    def info(self, message: str, context: Dict[str, Any] = None, **kwargs):
        self.log(logging.INFO, message, context, **kwargs)

    def warning(self, message: str, context: Dict[str, Any] = None, **kwargs):
        self.log(logging.WARNING, message, context, **kwargs)

    def error(self, message: str, context: Dict[str, Any] = None, **kwargs):
        self.log(logging.ERROR, message, context, **kwargs)

    def exception(self, message: str, context: Dict[str, Any] = None, **kwargs):
        self.log(logging.ERROR, message, context, exc_info=True, **kwargs)

def get_logger(name: str, level: int = logging.INFO) -> ContextLogger:
    """Get a context logger."""
    return ContextLogger(name, level)
