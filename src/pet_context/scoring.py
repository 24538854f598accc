"""
Health Observation Relevance Scoring.

Scores PetFacts against the current conversation so the most pertinent
observations reach the AI context first. Each fact is scored on three
independent axes (total 0-100):

    - Recency:   0-40 points, decays linearly to zero over 90 days
    - Severity:  0-30 points (severe=30, moderate=20, mild=10)
    - Tag match: 0-30 points, 10 per matching conversation tag, capped at 30
"""

import logging
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Optional

from pydantic import ValidationError

from .models import PetFact, ScoredFact, Timestamp

logger = logging.getLogger(__name__)

RECENCY_MAX = 40
RECENCY_DECAY_DAYS = 90
SEVERITY_SCORES = {"severe": 30, "moderate": 20, "mild": 10}
TAG_MATCH_POINTS = 10
TAG_MATCH_MAX = 30
DEFAULT_TOP_FACTS = 10

SECONDS_PER_DAY = 24 * 60 * 60


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def parse_timestamp(value: Optional[Timestamp]) -> Optional[datetime]:
    """
    Parse a datetime or ISO-8601 string into an aware datetime.

    Handles both 2025-01-01T00:00:00Z and 2025-01-01T00:00:00.
    Returns None for empty or unparsable values.
    """
    if not value:
        return None
    if isinstance(value, datetime):
        return as_utc(value)
    if not isinstance(value, str):
        return None
    try:
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        return None
    return as_utc(parsed)


def days_since(value: Optional[Timestamp], now: datetime) -> float:
    """Fractional days between `value` and `now`; absent or unparsable dates decay fully."""
    when = parse_timestamp(value)
    if when is None:
        return float(RECENCY_DECAY_DAYS)
    elapsed = (now - when).total_seconds() / SECONDS_PER_DAY
    return max(0.0, elapsed)


def recency_score(fact: PetFact, now: datetime) -> float:
    days = days_since(fact.effective_timestamp, now)
    return max(0.0, 1 - days / RECENCY_DECAY_DAYS) * RECENCY_MAX


def severity_score(fact: PetFact) -> int:
    return SEVERITY_SCORES.get(fact.severity or "", 0)


def tag_match_score(fact: PetFact, conversation_tags: list[str]) -> int:
    """
    Case-insensitive overlap between the fact's tags and the conversation tags.

    Repeated tags on the same fact each count as a match.
    """
    if not conversation_tags or not fact.tags:
        return 0

    tag_set = {tag.lower() for tag in conversation_tags}
    matches = sum(1 for tag in fact.tags if tag.lower() in tag_set)
    return min(matches * TAG_MATCH_POINTS, TAG_MATCH_MAX)


def compute_score(fact: PetFact, conversation_tags: list[str], now: datetime) -> float:
    """Unweighted sum of the recency, severity and tag-match components."""
    return (
        recency_score(fact, now)
        + severity_score(fact)
        + tag_match_score(fact, conversation_tags)
    )


def coerce_facts(observations) -> list[PetFact]:
    """
    Normalize caller input into PetFact models.

    Anything that is not a list or tuple counts as empty. Items that are
    neither PetFacts nor mappings, or that fail validation, are skipped.
    """
    if not isinstance(observations, (list, tuple)):
        if observations is not None:
            logger.warning(
                f"[SCORING] Ignoring observations of type {type(observations).__name__}"
            )
        return []

    facts: list[PetFact] = []
    for index, item in enumerate(observations):
        if isinstance(item, PetFact):
            facts.append(item)
            continue
        if not isinstance(item, Mapping):
            logger.warning(f"[SCORING] Skipping observation #{index}: not a mapping")
            continue
        try:
            facts.append(PetFact.model_validate(dict(item)))
        except ValidationError as e:
            logger.warning(f"[SCORING] Skipping malformed observation #{index}: {e}")
    return facts


def coerce_tags(conversation_tags) -> list[str]:
    """Conversation tags as a list of strings; anything but a list or tuple counts as no tags."""
    if not isinstance(conversation_tags, (list, tuple)):
        return []
    return [tag for tag in conversation_tags if isinstance(tag, str)]


def score_facts(
    observations,
    conversation_tags: Optional[list[str]] = None,
    now: Optional[datetime] = None,
) -> list[ScoredFact]:
    """
    Score and sort facts by relevance, highest first.

    Args:
        observations: PetFact models or dicts; None or a non-list yields []
        conversation_tags: Topic tags from the current conversation
        now: Reference time for recency (defaults to the current UTC time)

    Returns:
        New ScoredFact objects sorted descending by relevance_score.
        Ties keep their original relative order. Inputs are not mutated.
    """
    facts = coerce_facts(observations)
    if not facts:
        return []

    tags = coerce_tags(conversation_tags)
    now = as_utc(now) if now is not None else utc_now()

    scored = [
        ScoredFact.model_validate(
            {**fact.model_dump(), "relevance_score": compute_score(fact, tags, now)}
        )
        for fact in facts
    ]
    scored.sort(key=lambda f: f.relevance_score, reverse=True)

    logger.debug(
        f"[SCORING] Scored {len(scored)} facts against {len(tags)} tags, "
        f"top={scored[0].relevance_score:.1f}"
    )
    return scored


def get_top_facts(
    observations,
    conversation_tags: Optional[list[str]] = None,
    limit: int = DEFAULT_TOP_FACTS,
    now: Optional[datetime] = None,
) -> list[ScoredFact]:
    """Return at most `limit` facts by relevance score."""
    return score_facts(observations, conversation_tags, now=now)[: max(limit, 0)]
