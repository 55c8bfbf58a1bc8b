"""HTTP API: FastAPI application, lifespan and dependency wiring."""
