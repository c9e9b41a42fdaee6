"""HTTP API: FastAPI app factory, lifespan wiring and dependency injection."""
