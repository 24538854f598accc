"""API route modules."""
from .context import router as context_router
from .facts import router as facts_router

__all__ = [
    "context_router",
    "facts_router",
]
