"""
Exception definitions for update handling.
Defines custom exceptions used throughout the update handler.
"""
from enum import Enum
from typing import Optional, Dict, Any
import traceback

class ErrorCode(Enum):
    """Standardized error codes for application exceptions."""
    # Validation errors (1000-1999)
    VALIDATION_ERROR = 1000
    UPDATE_PARSE_ERROR = 1001

    # Authentication/Authorization errors (3000-3999)
    UNAUTHORIZED = 3000

    # Service errors (5000-5999)
    PLATFORM_ERROR = 5000
    TIMEOUT_ERROR = 5002

    # Dispatch errors (6000-6999)
    DISPATCH_ERROR = 6000

    # Configuration errors (7000-7999)
    CONFIGURATION_ERROR = 7000

    # System errors (9000-9999)
    INTERNAL_ERROR = 9000


class BaseAppException(Exception):
    """Base exception for all application exceptions."""
    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        original_exception: Optional[Exception] = None,
        details: Optional[Dict[str, Any]] = None,
        **kwargs
    ):
        self.message = message
        self.error_code = error_code
        self.original_exception = original_exception
        self.details = details or {}
        self.stack_trace = traceback.format_exc() if original_exception else None

        # Add additional kwargs to details
        for key, value in kwargs.items():
            self.details[key] = value

        if original_exception:
            self.details["original_error"] = str(original_exception)

        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to a dictionary for serialization."""
        result = {
            "error_code": self.error_code.value,
            "error_type": self.error_code.name,
            "message": self.message
        }

        if self.details:
            result["details"] = self.details

        # Only for logs, never sent to clients
        if self.stack_trace:
            result["stack_trace"] = self.stack_trace

        return result


class ValidationError(BaseAppException):
    """Exception raised for validation errors."""
    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        error_code: ErrorCode = ErrorCode.VALIDATION_ERROR,
        **kwargs
    ):
        details = kwargs.pop("details", {}) or {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = str(value)

        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
            **kwargs
        )


class UpdateParseError(ValidationError):
    """Raised when a webhook body cannot be decoded into an Update."""
    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.UPDATE_PARSE_ERROR,
        **kwargs
    ):
        super().__init__(message=message, error_code=error_code, **kwargs)


class UnauthorizedError(BaseAppException):
    """Exception raised for unauthorized access."""
    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.UNAUTHORIZED,
        **kwargs
    ):
        super().__init__(
            message=message,
            error_code=error_code,
            **kwargs
        )


class ConfigurationError(BaseAppException):
    """Exception raised for missing or malformed settings."""
    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        error_code: ErrorCode = ErrorCode.CONFIGURATION_ERROR,
        **kwargs
    ):
        details = kwargs.pop("details", {}) or {}
        if config_key:
            details["config_key"] = config_key

        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
            **kwargs
        )


class PlatformError(BaseAppException):
    """Exception raised when the Telegram Bot API cannot be reached."""
    def __init__(
        self,
        message: str,
        method: Optional[str] = None,
        status_code: Optional[int] = None,
        error_code: ErrorCode = ErrorCode.PLATFORM_ERROR,
        **kwargs
    ):
        details = kwargs.pop("details", {}) or {}
        if method:
            details["method"] = method
        if status_code is not None:
            details["status_code"] = status_code

        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
            **kwargs
        )


class UpdateProcessingError(BaseAppException):
    """Exception raised when an update fails outside of handler isolation."""
    def __init__(
        self,
        message: str,
        update_id: Optional[int] = None,
        error_code: ErrorCode = ErrorCode.DISPATCH_ERROR,
        **kwargs
    ):
        details = kwargs.pop("details", {}) or {}
        if update_id is not None:
            details["update_id"] = update_id

        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
            **kwargs
        )
