"""
User and UserProfile Models

A User row is created on first successful sign-in and refreshed on every
later sign-in. The profile holds the onboarding answers and is one-to-one
with its user (unique on user_id).

Onboarding gate:
    completed_onboarding=False -> client redirects to onboarding
    completed_onboarding=True  -> set once the user's first assessment lands
"""

from sqlalchemy import Column, String, Text, Boolean, DateTime, ForeignKey
from careerpath.database import Base, utcnow
import uuid


class User(Base):
    """
    Authenticated user identity.

    Attributes:
        id: Opaque identifier issued by the identity provider
        email: Unique when present
        first_name/last_name: Display name parts
        profile_image_url: Avatar URL from the provider
    """

    __tablename__ = "users"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    email = Column(String(320), unique=True, nullable=True)
    first_name = Column(String(255), nullable=True)
    last_name = Column(String(255), nullable=True)
    profile_image_url = Column(String(2000), nullable=True)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    def __repr__(self) -> str:
        return f"<User(id='{self.id}', email='{self.email}')>"


class UserProfile(Base):
    __tablename__ = "user_profiles"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String, ForeignKey("users.id"), nullable=False, unique=True)
    age = Column(String(50), nullable=True)
    experience_level = Column(String(100), nullable=True)
    education_level = Column(String(100), nullable=True)
    current_field = Column(String(255), nullable=True)
    career_goals = Column(Text, nullable=True)
    completed_onboarding = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)
