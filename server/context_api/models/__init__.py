"""Pydantic models for context API requests and responses."""
from .context import (
    ScoreFactsRequest,
    BuildContextRequest,
    BuildContextResponse,
    ContextSectionsModel,
)

__all__ = [
    "ScoreFactsRequest",
    "BuildContextRequest",
    "BuildContextResponse",
    "ContextSectionsModel",
]
