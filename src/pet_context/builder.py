"""
Priority-based AI context assembly with a word budget.

Priority tiers:
    P0 (never dropped): base prompt, dog profile, allergies,
        medications and conditions (premium)
    P1: top 10 PetFacts, photo context, recent diagnostics (premium)
    P2 (premium): breed risk note, recurring symptom patterns
    P3 (premium): household context, reserved and currently empty

When the estimated size exceeds the budget, P3 is dropped first, then P2,
then P1. Tiers are dropped whole.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ValidationError

from .breed_risks import risks_for_age
from .diagnostics import DiagnosticsSource, summarize_recent_diagnostics
from .models import DogProfile, PetFact, PhotoContext
from .prompts import age_in_years, build_system_prompt
from .scoring import DEFAULT_TOP_FACTS, as_utc, coerce_facts, coerce_tags, get_top_facts, utc_now

logger = logging.getLogger(__name__)

TOKEN_BUDGET_WORDS = 2000
SECTION_SEPARATOR = "\n\n"
TIER_NAMES = ("p0", "p1", "p2", "p3")
DROP_ORDER = ("p3", "p2", "p1")


@dataclass(frozen=True)
class Entitlement:
    """Which tier-gated sections a build may include."""

    medications: bool = False
    conditions: bool = False
    detailed_facts: bool = False
    diagnostics: bool = False
    breed_risk: bool = False
    symptom_patterns: bool = False
    household: bool = False

    @classmethod
    def for_tier(cls, is_premium: bool) -> "Entitlement":
        if not is_premium:
            return cls()
        return cls(
            medications=True,
            conditions=True,
            detailed_facts=True,
            diagnostics=True,
            breed_risk=True,
            symptom_patterns=True,
            household=True,
        )


@dataclass
class ContextSections:
    """Surviving prompt fragments per priority tier."""

    p0: list[str] = field(default_factory=list)
    p1: list[str] = field(default_factory=list)
    p2: list[str] = field(default_factory=list)
    p3: list[str] = field(default_factory=list)

    def tiers(self) -> list[list[str]]:
        return [self.p0, self.p1, self.p2, self.p3]

    def to_dict(self) -> dict:
        return {"p0": list(self.p0), "p1": list(self.p1), "p2": list(self.p2), "p3": list(self.p3)}


@dataclass
class AIContext:
    """Assembled system prompt plus the breakdown of what went into it."""

    system_prompt: str
    context_sections: ContextSections
    word_count: int = 0
    dropped_tiers: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "systemPrompt": self.system_prompt,
            "contextSections": self.context_sections.to_dict(),
            "wordCount": self.word_count,
            "droppedTiers": list(self.dropped_tiers),
        }


def estimate_word_count(text: str) -> int:
    if not text:
        return 0
    return len(text.split())


# ---------------------------------------------------------------------------
# Section builders
# ---------------------------------------------------------------------------

def build_profile_section(dog: Optional[DogProfile]) -> str:
    if dog is None:
        return ""
    lines = [f"Dog: {dog.name or 'Unknown'}"]
    if dog.breed:
        lines.append(f"Breed: {dog.breed}")
    if dog.weight:
        lines.append(f"Weight: {dog.weight} {dog.weight_unit or 'lbs'}")
    if dog.date_of_birth:
        lines.append(f"DOB: {dog.date_of_birth}")
    if dog.sex:
        lines.append(f"Sex: {dog.sex}")
    return "\n".join(lines)


def build_allergy_section(dog: Optional[DogProfile]) -> str:
    if dog is None or not dog.allergies:
        return ""
    return f"ALLERGIES (critical): {', '.join(dog.allergies)}"


def build_medications_section(dog: Optional[DogProfile], included: bool) -> str:
    if not included or dog is None or not dog.medications:
        return ""
    rendered = [med if isinstance(med, str) else med.render() for med in dog.medications]
    return f"Current Medications: {', '.join(rendered)}"


def build_conditions_section(dog: Optional[DogProfile], included: bool) -> str:
    if not included or dog is None or not dog.known_conditions:
        return ""
    return f"Known Conditions: {', '.join(dog.known_conditions)}"


def format_fact_line(fact: PetFact, detailed: bool) -> str:
    if not detailed:
        return f"- {fact.fact}"
    return (
        f"- [{fact.severity or 'mild'}] {fact.fact} "
        f"({fact.category}, tags: {', '.join(fact.tags)})"
    )


def build_facts_section(
    facts: list[PetFact],
    conversation_tags: list[str],
    detailed: bool,
    now: datetime,
) -> str:
    top = get_top_facts(facts, conversation_tags, DEFAULT_TOP_FACTS, now=now)
    if not top:
        return ""
    lines = ["Recent Health Facts:"]
    lines.extend(format_fact_line(fact, detailed) for fact in top)
    return "\n".join(lines)


def build_photo_section(photo: Optional[PhotoContext]) -> str:
    if photo is None:
        return ""
    lines = []
    if photo.summary:
        lines.append(f"Summary: {photo.summary}")
    if photo.body_area:
        lines.append(f"Body area: {photo.body_area}")
    if photo.urgency_level:
        lines.append(f"Urgency: {photo.urgency_level}")
    if photo.possible_conditions:
        lines.append(f"Possible conditions: {', '.join(photo.possible_conditions)}")
    if not lines:
        return ""
    return "\n".join(["Photo Analysis Context:", *lines])


def build_breed_risk_section(dog: Optional[DogProfile], included: bool, now: datetime) -> str:
    if not included or dog is None or not dog.breed:
        return ""
    note = f"Breed-specific monitoring: Consider common {dog.breed} health risks for this dog's age"
    risks = risks_for_age(dog.breed, age_in_years(dog.date_of_birth, now))
    if risks:
        note += f" (watch for: {', '.join(risk.name for risk in risks)})"
    return note + "."


def build_symptom_patterns_section(facts: list[PetFact], included: bool) -> str:
    """Tags seen on two or more facts, case-insensitive, in order of first appearance."""
    if not included or len(facts) < 2:
        return ""
    counts: dict[str, int] = {}
    for fact in facts:
        for tag in fact.tags:
            key = tag.lower()
            counts[key] = counts.get(key, 0) + 1

    recurring = [f"{tag} ({count}x)" for tag, count in counts.items() if count >= 2]
    if not recurring:
        return ""
    return f"Recurring symptom patterns: {', '.join(recurring)}"


def build_household_section(included: bool) -> str:
    # TODO: multi-pet household context once profiles can be linked
    return ""


# ---------------------------------------------------------------------------
# Input normalization
# ---------------------------------------------------------------------------

def _coerce_model(value, model: type[BaseModel], label: str):
    if value is None or isinstance(value, model):
        return value
    if not isinstance(value, Mapping):
        logger.warning(f"[CONTEXT] Ignoring {label} of type {type(value).__name__}")
        return None
    try:
        return model.model_validate(dict(value))
    except ValidationError as e:
        logger.warning(f"[CONTEXT] Ignoring malformed {label}: {e}")
        return None


# ---------------------------------------------------------------------------
# Budget policy
# ---------------------------------------------------------------------------

def apply_budget(sections: ContextSections, word_budget: int) -> list[str]:
    """
    Drop whole tiers in DROP_ORDER until the total fits the budget.

    P0 is never in the drop order. Returns the names of the tiers that
    were dropped with content in them.
    """
    def total_words() -> int:
        return sum(
            estimate_word_count(SECTION_SEPARATOR.join(tier)) for tier in sections.tiers()
        )

    dropped = []
    for name in DROP_ORDER:
        words = total_words()
        if words <= word_budget:
            break
        if getattr(sections, name):
            dropped.append(name)
            logger.info(
                f"[CONTEXT] Over budget ({words}/{word_budget} words), dropping {name.upper()}"
            )
        setattr(sections, name, [])
    return dropped


# ---------------------------------------------------------------------------
# Main builder
# ---------------------------------------------------------------------------

def build_context(
    dog=None,
    observations=None,
    is_premium: bool = False,
    conversation_tags: Optional[list[str]] = None,
    photo_context=None,
    *,
    diagnostics: Optional[DiagnosticsSource] = None,
    now: Optional[datetime] = None,
    word_budget: int = TOKEN_BUDGET_WORDS,
) -> AIContext:
    """
    Build the prioritized AI context for one conversation turn.

    Args:
        dog: DogProfile or dict; None renders placeholders
        observations: PetFacts or dicts logged for the dog
        is_premium: Subscription tier flag, resolved once into an Entitlement
        conversation_tags: Topic tags of the current message
        photo_context: PhotoContext or dict from a just-finished photo analysis
        diagnostics: Source of stored X-ray, blood work and lab analyses
        now: Reference time (defaults to the current UTC time)
        word_budget: Maximum estimated words before lower tiers are shed

    Returns:
        AIContext with the system prompt and the surviving sections per tier.
    """
    now = as_utc(now) if now is not None else utc_now()
    entitlement = Entitlement.for_tier(bool(is_premium))
    dog = _coerce_model(dog, DogProfile, "dog profile")
    photo = _coerce_model(photo_context, PhotoContext, "photo context")
    facts = coerce_facts(observations)
    tags = coerce_tags(conversation_tags)

    p0 = [
        build_system_prompt(dog, now),
        build_profile_section(dog),
        build_allergy_section(dog),
        build_medications_section(dog, entitlement.medications),
        build_conditions_section(dog, entitlement.conditions),
    ]

    p1 = [
        build_facts_section(facts, tags, entitlement.detailed_facts, now),
        build_photo_section(photo),
    ]
    if entitlement.diagnostics:
        p1.append(summarize_recent_diagnostics(diagnostics, dog.id if dog else None, now))

    p2 = [
        build_breed_risk_section(dog, entitlement.breed_risk, now),
        build_symptom_patterns_section(facts, entitlement.symptom_patterns),
    ]

    p3 = [build_household_section(entitlement.household)]

    sections = ContextSections(
        p0=[s for s in p0 if s],
        p1=[s for s in p1 if s],
        p2=[s for s in p2 if s],
        p3=[s for s in p3 if s],
    )
    dropped = apply_budget(sections, word_budget)

    system_prompt = SECTION_SEPARATOR.join(
        section for tier in sections.tiers() for section in tier
    )
    word_count = estimate_word_count(system_prompt)

    logger.debug(
        f"[CONTEXT] Built context: premium={bool(is_premium)}, "
        f"facts={len(facts)}, words={word_count}, dropped={dropped}"
    )

    return AIContext(
        system_prompt=system_prompt,
        context_sections=sections,
        word_count=word_count,
        dropped_tiers=dropped,
    )
