"""
Assessment Model - Psychometric results captured during onboarding

Rows are immutable: a retake inserts a new row and readers only ever look
at the latest one (max completed_at per user).

Payload shapes:
    personality_traits: Big Five -> {openness, conscientiousness,
        extraversion, agreeableness, neuroticism}, each 1-5
    interest_areas: RIASEC -> {realistic, investigative, artistic, social,
        enterprising, conventional}, each 1-5
    work_values: free-form mapping, stored as given
"""

from sqlalchemy import Column, String, DateTime, JSON, ForeignKey, Index
from careerpath.database import Base, utcnow
import uuid


class Assessment(Base):
    __tablename__ = "assessments"
    __table_args__ = (
        Index("ix_assessments_user_completed", "user_id", "completed_at"),
    )

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String, ForeignKey("users.id"), nullable=False)
    personality_traits = Column(JSON, nullable=False)
    interest_areas = Column(JSON, nullable=False)
    work_values = Column(JSON, nullable=False, default=dict)
    completed_at = Column(DateTime, nullable=False, default=utcnow)
