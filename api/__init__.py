"""HTTP layer: FastAPI app, middleware, exception handlers and routes."""
