"""HTTP API: FastAPI application exposing a single game session."""
