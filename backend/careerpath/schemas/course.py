from pydantic import Field
from datetime import datetime
from typing import List, Optional
from careerpath.schemas.base import CamelModel


class CourseResponse(CamelModel):
    id: str
    title: str
    provider: str
    description: Optional[str] = None
    url: Optional[str] = None
    duration: Optional[str] = None
    difficulty_level: Optional[str] = None
    cost: Optional[str] = None
    skills_covered: List[str] = []
    rating: Optional[float] = None


class EnrollmentResponse(CamelModel):
    id: str
    user_id: str
    course_id: str
    status: str
    progress: int
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None


class UserCourseResponse(EnrollmentResponse):
    course: CourseResponse


class ProgressUpdate(CamelModel):
    progress: int = Field(..., ge=0, le=100, strict=True)
