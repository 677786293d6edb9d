"""
Course Models - Learning catalog and enrollments

Status Flow (UserCourse.status):
    enrolled → in_progress → completed
    enrolled → completed
    dropped (terminal, reserved)

Invariant: status == "completed" ⇔ progress == 100 ⇔ completed_at is set.
"""

import enum
import uuid

from sqlalchemy import (
    Column,
    String,
    Text,
    Integer,
    Float,
    DateTime,
    JSON,
    ForeignKey,
    UniqueConstraint,
    CheckConstraint,
)
from sqlalchemy.orm import relationship
from careerpath.database import Base, utcnow


class EnrollmentStatus(str, enum.Enum):
    ENROLLED = "enrolled"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    DROPPED = "dropped"


class Course(Base):
    """
    Catalog course from an external provider.

    Attributes:
        provider: Coursera, edX, LinkedIn Learning, etc.
        difficulty_level: beginner, intermediate or advanced
        skills_covered: JSON list of Skill ids taught by the course
        rating: Provider rating (0-5, nullable)
    """

    __tablename__ = "courses"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    title = Column(String(500), nullable=False)
    provider = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    url = Column(String(2000), nullable=True)
    duration = Column(String(100), nullable=True)
    difficulty_level = Column(String(50), nullable=True)
    cost = Column(String(100), nullable=True)
    skills_covered = Column(JSON, nullable=False, default=list)
    rating = Column(Float, nullable=True)
    created_at = Column(DateTime, default=utcnow)


class UserCourse(Base):
    __tablename__ = "user_courses"
    __table_args__ = (
        UniqueConstraint("user_id", "course_id", name="uq_user_courses_user_course"),
        CheckConstraint("progress BETWEEN 0 AND 100", name="ck_user_courses_progress"),
    )

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    course_id = Column(String, ForeignKey("courses.id"), nullable=False)
    status = Column(String(20), nullable=False, default=EnrollmentStatus.ENROLLED.value)
    progress = Column(Integer, nullable=False, default=0)
    started_at = Column(DateTime, default=utcnow)
    completed_at = Column(DateTime, nullable=True)

    course = relationship("Course", lazy="raise")
