"""HTTP API (FastAPI) for linting and rendering posted documents."""
