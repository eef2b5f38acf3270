"""Health check routes."""
from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter(tags=["health"])


@router.get("/", response_class=PlainTextResponse)
def healthcheck():
    """
    Health check endpoint.

    Plain-text OK with no side effects.
    """
    return "OK"


@router.get("/ready")
def readiness():
    """Simple check that the service is ready to handle requests."""
    return {"status": "ready"}


@router.get("/live")
def liveness():
    """Simple check that the service is alive."""
    return {"status": "alive"}
