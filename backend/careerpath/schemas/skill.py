from pydantic import Field
from datetime import datetime
from typing import Optional
from careerpath.schemas.base import CamelModel


class SkillResponse(CamelModel):
    id: str
    name: str
    category: str
    description: Optional[str] = None


class UserSkillUpsert(CamelModel):
    skill_id: str = Field(..., min_length=1)
    current_level: int = Field(..., ge=1, le=5)
    target_level: Optional[int] = Field(None, ge=1, le=5)
    is_learning: bool = False


class UserSkillResponse(CamelModel):
    id: str
    user_id: str
    skill_id: str
    current_level: int
    target_level: Optional[int] = None
    is_learning: bool
    updated_at: Optional[datetime] = None


class SkillGapResponse(CamelModel):
    """A skill whose target level is above the current level."""

    skill_id: str
    name: str
    category: str
    current_level: int
    target_level: int
    gap: int
    is_learning: bool
