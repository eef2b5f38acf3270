"""Response models for the API."""
from api.models.responses import WebhookResponse

__all__ = ["WebhookResponse"]
