from pydantic import Field
from datetime import datetime
from typing import Optional
from careerpath.schemas.base import CamelModel


class ProfileUpdate(CamelModel):
    """
    Onboarding answers. Every field is optional; only fields present in the
    request body are written. completedOnboarding is owned by the server.
    """

    age: Optional[str] = Field(None, max_length=50)
    experience_level: Optional[str] = Field(None, max_length=100)
    education_level: Optional[str] = Field(None, max_length=100)
    current_field: Optional[str] = Field(None, max_length=255)
    career_goals: Optional[str] = None


class ProfileResponse(CamelModel):
    id: str
    user_id: str
    age: Optional[str] = None
    experience_level: Optional[str] = None
    education_level: Optional[str] = None
    current_field: Optional[str] = None
    career_goals: Optional[str] = None
    completed_onboarding: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class UserResponse(CamelModel):
    id: str
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_image_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class AuthUserResponse(UserResponse):
    profile: Optional[ProfileResponse] = None
