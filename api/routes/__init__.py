"""Route modules for the API."""
from api.routes import health, webhook

__all__ = ["health", "webhook"]
