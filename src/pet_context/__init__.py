"""
Pet Context Module.

Scores logged pet health observations and assembles the prioritized,
word-budgeted context block sent to the Pawsy AI assistant.
"""

from .builder import (
    AIContext,
    ContextSections,
    Entitlement,
    build_context,
)
from .diagnostics import DiagnosticsSource
from .models import (
    DiagnosticRecord,
    DogProfile,
    Medication,
    PetFact,
    PhotoContext,
    ScoredFact,
)
from .scoring import (
    get_top_facts,
    score_facts,
)

__all__ = [
    "AIContext",
    "ContextSections",
    "Entitlement",
    "build_context",
    "DiagnosticsSource",
    "DiagnosticRecord",
    "DogProfile",
    "Medication",
    "PetFact",
    "PhotoContext",
    "ScoredFact",
    "get_top_facts",
    "score_facts",
]
