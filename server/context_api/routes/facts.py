"""PetFact relevance scoring API routes."""
from fastapi import APIRouter

from pet_context.models import ScoredFact
from pet_context.scoring import get_top_facts

from ..config import get_settings
from ..models.context import ScoreFactsRequest

router = APIRouter(prefix="/api/facts", tags=["Facts"])


@router.post("/score", response_model=list[ScoredFact])
async def score_facts(request: ScoreFactsRequest):
    """
    Rank observations by relevance to the current conversation.

    Returns at most `limit` facts (default from settings), highest score first,
    each with a `_relevanceScore`.
    """
    limit = request.limit if request.limit is not None else get_settings().top_facts_limit
    return get_top_facts(request.observations, request.conversation_tags, limit)
