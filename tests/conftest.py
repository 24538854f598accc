"""
Pytest fixtures for Pawsy context tests.
"""
import sys
import pytest
from pathlib import Path
from datetime import datetime, timedelta, timezone
from dotenv import load_dotenv

# Ensure src/ is on sys.path so tests can import pet_context.
ROOT = Path(__file__).resolve().parent.parent
SRC = ROOT / "src"
for path in (ROOT, SRC):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

# Load environment variables
load_dotenv()


# Fixed reference time so recency scores and ages are deterministic
NOW = datetime(2026, 10, 16, 12, 0, 0, tzinfo=timezone.utc)


def days_ago_iso(days: float, now: datetime = NOW) -> str:
    """ISO timestamp `days` before the reference time."""
    return (now - timedelta(days=days)).isoformat()


@pytest.fixture
def now():
    """Return the fixed reference time."""
    return NOW


@pytest.fixture
def make_dog():
    """
    Factory fixture for dog profile dicts in the app's camelCase shape.

    Keyword overrides replace the defaults.
    """
    def _make_dog(**overrides) -> dict:
        dog = {
            "id": "dog-1",
            "name": "Buddy",
            "breed": "Golden Retriever",
            "dateOfBirth": "2020-03-15",
            "weight": 70,
            "weightUnit": "lbs",
            "sex": "Male",
            "allergies": ["chicken"],
            "medications": [{"name": "Apoquel", "dosage": "16mg daily"}],
            "conditions": ["Hip Dysplasia"],
            "chronicConditions": [],
        }
        dog.update(overrides)
        return dog

    return _make_dog


@pytest.fixture
def make_fact():
    """Factory fixture for PetFact dicts logged at the reference time."""
    def _make_fact(**overrides) -> dict:
        fact = {
            "id": "fact-1",
            "dogId": "dog-1",
            "fact": "limping on left hind leg",
            "category": "symptom",
            "tags": ["limping"],
            "severity": "moderate",
            "status": "active",
            "occurredAt": NOW.isoformat(),
            "possibleConditions": ["Sprain"],
            "recommendedActions": ["Rest"],
            "resolvedAt": None,
            "createdAt": NOW.isoformat(),
        }
        fact.update(overrides)
        return fact

    return _make_fact
