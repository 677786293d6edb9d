"""
Career Models - Career path catalog and per-user recommendations

CareerRecommendation rows are written by the recommendation generator with
insert-or-ignore semantics on (user_id, career_path_id): once a user has a
recommendation for a path, regeneration never changes its score or bookmark.
"""

from sqlalchemy import (
    Column,
    String,
    Text,
    Integer,
    Float,
    Boolean,
    DateTime,
    JSON,
    ForeignKey,
    UniqueConstraint,
    CheckConstraint,
)
from sqlalchemy.orm import relationship
from careerpath.database import Base, utcnow
import uuid


class CareerPath(Base):
    """
    Catalog career path.

    Attributes:
        title: Role title (e.g., "Data Scientist")
        salary_min/max: Annual salary range (nullable)
        demand_level: high, medium or low
        growth_outlook: growing, stable or declining
        required_skills: Ordered JSON list of skill names
    """

    __tablename__ = "career_paths"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    salary_min = Column(Integer, nullable=True)
    salary_max = Column(Integer, nullable=True)
    demand_level = Column(String(20), nullable=True)
    growth_outlook = Column(String(20), nullable=True)
    required_skills = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime, default=utcnow)


class CareerRecommendation(Base):
    __tablename__ = "career_recommendations"
    __table_args__ = (
        UniqueConstraint("user_id", "career_path_id", name="uq_career_recommendations_user_path"),
        CheckConstraint("match_score BETWEEN 0 AND 100", name="ck_career_recommendations_score"),
    )

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    career_path_id = Column(String, ForeignKey("career_paths.id"), nullable=False)
    match_score = Column(Float, nullable=False)
    reasons = Column(JSON, nullable=False, default=list)
    is_bookmarked = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=utcnow)

    career_path = relationship("CareerPath", lazy="raise")
