"""Pet health data models consumed by the context pipeline."""
from datetime import datetime
from typing import Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationInfo, field_validator


def to_camel(string: str) -> str:
    """Convert snake_case to camelCase."""
    components = string.split("_")
    return components[0] + "".join(x.title() for x in components[1:])


Timestamp = Union[datetime, str]


class PetRecord(BaseModel):
    """Base for lenient input records: camelCase or snake_case keys, extras ignored."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class Medication(PetRecord):
    """A medication the dog is currently taking."""

    name: str = ""
    dosage: Optional[str] = None

    def render(self) -> str:
        return f"{self.name} ({self.dosage or 'dosage unknown'})"


class DogProfile(PetRecord):
    """Identity and clinical snapshot of one dog."""

    id: Optional[str] = None
    name: Optional[str] = None
    breed: Optional[str] = None
    date_of_birth: Optional[str] = None
    weight: Optional[Union[int, float, str]] = None
    weight_unit: Optional[str] = None
    sex: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("sex", "gender")
    )
    allergies: list[str] = []
    medications: list[Union[Medication, str]] = []
    conditions: list[str] = []
    chronic_conditions: list[str] = []

    @field_validator(
        "allergies", "medications", "conditions", "chronic_conditions", mode="before"
    )
    @classmethod
    def none_as_empty(cls, value):
        return [] if value is None else value

    @property
    def known_conditions(self) -> list[str]:
        return self.conditions or self.chronic_conditions


class PetFact(PetRecord):
    """One timestamped, categorized note about a dog's health."""

    id: Optional[str] = None
    dog_id: Optional[str] = None
    fact: str = ""
    category: str = "symptom"
    tags: list[str] = []
    severity: Optional[str] = None  # mild | moderate | severe
    status: str = "active"  # active | monitoring | resolved
    occurred_at: Optional[Timestamp] = None
    created_at: Optional[Timestamp] = None
    resolved_at: Optional[Timestamp] = None
    notes: Optional[str] = None
    possible_conditions: list[str] = []
    recommended_actions: list[str] = []
    pinned: bool = False

    @field_validator("possible_conditions", "recommended_actions", mode="before")
    @classmethod
    def none_as_empty(cls, value):
        return [] if value is None else value

    @field_validator("tags", mode="before")
    @classmethod
    def string_tags(cls, value):
        if value is None:
            return []
        if isinstance(value, (list, tuple)):
            return [tag for tag in value if isinstance(tag, str)]
        return value

    @field_validator("fact", "category", "status", "pinned", mode="before")
    @classmethod
    def none_as_default(cls, value, info: ValidationInfo):
        if value is None:
            return cls.model_fields[info.field_name].default
        return value

    @property
    def effective_timestamp(self) -> Optional[Timestamp]:
        """When the observation happened, falling back to when it was logged."""
        return self.occurred_at or self.created_at


class ScoredFact(PetFact):
    """A PetFact with its computed relevance score (0-100)."""

    relevance_score: float = Field(default=0.0, alias="_relevanceScore")


class PhotoContext(PetRecord):
    """Summary of a just-completed photo analysis."""

    summary: Optional[str] = None
    body_area: Optional[str] = None
    urgency_level: Optional[str] = None
    possible_conditions: list[str] = []

    @field_validator("possible_conditions", mode="before")
    @classmethod
    def none_as_empty(cls, value):
        return [] if value is None else value


class DiagnosticRecord(PetRecord):
    """A stored X-ray, blood work or lab analysis."""

    id: Optional[str] = None
    dog_id: Optional[str] = None
    created_at: Optional[Timestamp] = None
    summary: Optional[str] = None
    overall_assessment: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices(
            "overall_assessment",
            "overallAssessment",
            "overall_impression",
            "overallImpression",
        ),
    )
    body_region: Optional[str] = None
    lab_type: Optional[str] = None
    key_findings: list[str] = []

    @field_validator("key_findings", mode="before")
    @classmethod
    def none_as_empty(cls, value):
        return [] if value is None else value
