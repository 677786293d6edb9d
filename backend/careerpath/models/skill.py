"""
Skill Models - Global skill catalog and per-user proficiency

Skill is reference data shared by every user. UserSkill records one user's
level in one skill and is unique on (user_id, skill_id); writes go through an
upsert so resubmitting a skill updates the existing row.

Levels use a 1-5 scale:
    1 = aware, 3 = working knowledge, 5 = expert
"""

from sqlalchemy import (
    Column,
    String,
    Text,
    Integer,
    Boolean,
    DateTime,
    ForeignKey,
    UniqueConstraint,
    CheckConstraint,
)
from sqlalchemy.orm import relationship
from careerpath.database import Base, utcnow
import uuid


class Skill(Base):
    """
    Catalog skill.

    Attributes:
        name: Unique display name (e.g., "Python")
        category: technical, soft or domain-specific
        description: Optional long description
    """

    __tablename__ = "skills"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(255), nullable=False, unique=True)
    category = Column(String(50), nullable=False)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime, default=utcnow)

    def __repr__(self) -> str:
        return f"<Skill(name='{self.name}', category='{self.category}')>"


class UserSkill(Base):
    __tablename__ = "user_skills"
    __table_args__ = (
        UniqueConstraint("user_id", "skill_id", name="uq_user_skills_user_skill"),
        CheckConstraint("current_level BETWEEN 1 AND 5", name="ck_user_skills_current_level"),
        CheckConstraint(
            "target_level IS NULL OR target_level BETWEEN 1 AND 5",
            name="ck_user_skills_target_level",
        ),
    )

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    skill_id = Column(String, ForeignKey("skills.id"), nullable=False)
    current_level = Column(Integer, nullable=False)
    target_level = Column(Integer, nullable=True)
    is_learning = Column(Boolean, nullable=False, default=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    skill = relationship("Skill", lazy="raise")
