"""Centralized error code to HTTP status mapping."""
from update_handler.exceptions import ErrorCode

# Map internal error codes to HTTP status codes and user-friendly messages.
# Anything the webhook cannot process is a 500 so that Telegram redelivers it.
ERROR_CODE_MAP = {
    ErrorCode.UNAUTHORIZED: {
        "status": 401,
        "message": "Unauthorized"
    },
    ErrorCode.VALIDATION_ERROR: {
        "status": 500,
        "message": "Invalid update"
    },
    ErrorCode.UPDATE_PARSE_ERROR: {
        "status": 500,
        "message": "Malformed update payload"
    },
    ErrorCode.CONFIGURATION_ERROR: {
        "status": 500,
        "message": "Bot is misconfigured"
    },
    ErrorCode.PLATFORM_ERROR: {
        "status": 500,
        "message": "Telegram API call failed"
    },
    ErrorCode.TIMEOUT_ERROR: {
        "status": 500,
        "message": "Telegram API call timed out"
    },
    ErrorCode.DISPATCH_ERROR: {
        "status": 500,
        "message": "Update processing failed"
    },
    ErrorCode.INTERNAL_ERROR: {
        "status": 500,
        "message": "Internal server error"
    },
}


def get_http_status(error_code: ErrorCode) -> tuple[int, str]:
    """
    Get HTTP status code and message for an error code.

    Args:
        error_code: Internal error code

    Returns:
        Tuple of (status_code, message)
    """
    mapping = ERROR_CODE_MAP.get(error_code, {
        "status": 500,
        "message": "Internal server error"
    })

    return mapping["status"], mapping["message"]
