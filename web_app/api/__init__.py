"""JSON API for link mutation entry points."""

from .routes import router as api_router

__all__ = ["api_router"]
