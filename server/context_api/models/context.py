"""Request and response models for the context endpoints."""
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional

from pet_context.models import DogProfile, PetFact, PhotoContext, to_camel


class ApiModel(BaseModel):
    """camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ScoreFactsRequest(ApiModel):
    """Observations to rank against the current conversation."""

    observations: list[PetFact] = []
    conversation_tags: list[str] = []
    limit: Optional[int] = Field(default=None, ge=0)


class BuildContextRequest(ApiModel):
    """Inputs for one context build."""

    dog: Optional[DogProfile] = None
    observations: list[PetFact] = []
    is_premium: bool = False
    conversation_tags: list[str] = []
    photo_context: Optional[PhotoContext] = None


class ContextSectionsModel(BaseModel):
    """Surviving prompt fragments per priority tier."""

    p0: list[str] = []
    p1: list[str] = []
    p2: list[str] = []
    p3: list[str] = []


class BuildContextResponse(ApiModel):
    """Assembled system prompt and its breakdown."""

    system_prompt: str
    context_sections: ContextSectionsModel
    word_count: int
    dropped_tiers: list[str] = []
