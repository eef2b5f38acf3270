"""Response builders for webhook endpoints."""
from typing import Optional
from fastapi.responses import JSONResponse

from utils import iso_timestamp


class WebhookResponse:
    """Standardized webhook acknowledgement builder."""

    @staticmethod
    def ok(status_code: int = 200) -> JSONResponse:
        """Acknowledge an update."""
        return JSONResponse(status_code=status_code, content={"ok": True})

    @staticmethod
    def error(
        message: str,
        status_code: int = 500,
        trace_id: Optional[str] = None
    ) -> JSONResponse:
        """Build an error response with an ISO-8601 timestamp."""
        content = {
            "ok": False,
            "error": message,
            "timestamp": iso_timestamp()
        }

        if trace_id:
            content["trace_id"] = trace_id

        return JSONResponse(status_code=status_code, content=content)
