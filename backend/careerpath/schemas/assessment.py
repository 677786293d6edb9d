from pydantic import Field, ConfigDict
from datetime import datetime
from typing import Annotated, Any, Dict
from careerpath.schemas.base import CamelModel

Score = Annotated[int, Field(ge=1, le=5, strict=True)]


class PersonalityTraits(CamelModel):
    """Big Five scores, 1-5 each. All five keys are required."""

    model_config = ConfigDict(extra="forbid")

    openness: Score
    conscientiousness: Score
    extraversion: Score
    agreeableness: Score
    neuroticism: Score


class InterestAreas(CamelModel):
    """RIASEC scores, 1-5 each. All six keys are required."""

    model_config = ConfigDict(extra="forbid")

    realistic: Score
    investigative: Score
    artistic: Score
    social: Score
    enterprising: Score
    conventional: Score


class AssessmentCreate(CamelModel):
    personality_traits: PersonalityTraits
    interest_areas: InterestAreas
    work_values: Dict[str, Any] = Field(default_factory=dict)


class AssessmentResponse(CamelModel):
    id: str
    user_id: str
    personality_traits: Dict[str, int]
    interest_areas: Dict[str, int]
    work_values: Dict[str, Any]
    completed_at: datetime
