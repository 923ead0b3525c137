"""FastAPI application entry point."""

from store2u.application import create_app

app = create_app()

__all__ = ["app"]
