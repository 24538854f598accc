"""AI context assembly API routes."""
from fastapi import APIRouter

from pet_context.builder import build_context

from ..config import get_settings
from ..database import diagnostics_db
from ..models.context import BuildContextRequest, BuildContextResponse

router = APIRouter(prefix="/api/context", tags=["Context"])


@router.post("/build", response_model=BuildContextResponse)
async def build(request: BuildContextRequest):
    """
    Assemble the prioritized system prompt for one chat turn.

    Premium builds include recent diagnostics when the diagnostics
    database exists.
    """
    settings = get_settings()
    source = diagnostics_db if diagnostics_db.available() else None

    context = build_context(
        dog=request.dog,
        observations=request.observations,
        is_premium=request.is_premium,
        conversation_tags=request.conversation_tags,
        photo_context=request.photo_context,
        diagnostics=source,
        word_budget=settings.word_budget,
    )
    return context.to_dict()
