from datetime import datetime
from typing import List, Optional
from careerpath.schemas.base import CamelModel


class CareerPathResponse(CamelModel):
    id: str
    title: str
    description: Optional[str] = None
    salary_min: Optional[int] = None
    salary_max: Optional[int] = None
    demand_level: Optional[str] = None
    growth_outlook: Optional[str] = None
    required_skills: List[str] = []


class CareerRecommendationResponse(CamelModel):
    id: str
    user_id: str
    career_path_id: str
    match_score: float
    reasons: List[str]
    is_bookmarked: bool
    created_at: Optional[datetime] = None
    career_path: CareerPathResponse


class SuccessResponse(CamelModel):
    success: bool = True
