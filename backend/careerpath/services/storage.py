"""
Storage - Persistence gateway for every table

All reads and writes from the API, the recommendation generator and the
enrollment tracker go through this class. It owns the uniqueness contracts:

    users                  upsert on id, refreshes updated_at
    user_profiles          upsert on user_id (one profile per user)
    user_skills            upsert on (user_id, skill_id)
    career_recommendations insert-or-ignore on (user_id, career_path_id)
    user_courses           insert-or-ignore on (user_id, course_id)

Read-modify-write sequences are expressed as single statements
(INSERT .. ON CONFLICT, UPDATE .. SET x = NOT x) so concurrent requests for
the same user cannot interleave between the read and the write.

Failure Handling:
    IntegrityError -> rollback, SaveFailed("Failed to save <entity>")
    Any other DBAPIError propagates untouched (mapped to 503 by the app)
    Nothing is retried here

Usage:
    async with async_session() as session:
        storage = Storage(session)
        profile = await storage.upsert_user_profile(user_id, {"age": "25-34"})
"""

import logging
import uuid
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import select, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import contains_eager

from careerpath.database import utcnow
from careerpath.exceptions import SaveFailed
from careerpath.models import (
    User,
    UserProfile,
    Assessment,
    Skill,
    UserSkill,
    CareerPath,
    CareerRecommendation,
    Course,
    UserCourse,
    EnrollmentStatus,
)

logger = logging.getLogger(__name__)

_DIALECT_INSERTS = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}


class Storage:
    """
    Persistence gateway over one AsyncSession.

    Absence is reported as None or an empty list, never as an exception.

    Attributes:
        session: AsyncSession for database operations
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _insert(self, model):
        """Dialect insert construct that supports ON CONFLICT clauses."""
        return _DIALECT_INSERTS[self.session.bind.dialect.name](model)

    @asynccontextmanager
    async def _saving(self, entity: str):
        try:
            yield
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            logger.warning(f"Constraint violation saving {entity}: {e.orig}")
            raise SaveFailed(f"Failed to save {entity}") from e

    async def _one_or_none(self, query):
        result = await self.session.execute(query.execution_options(populate_existing=True))
        return result.scalar_one_or_none()

    async def _all(self, query) -> list:
        result = await self.session.execute(query.execution_options(populate_existing=True))
        return list(result.scalars().all())

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    async def get_user(self, user_id: str) -> Optional[User]:
        return await self._one_or_none(select(User).where(User.id == user_id))

    async def upsert_user(self, data: Dict[str, Any]) -> User:
        """Insert the user, or overwrite its mutable fields if the id exists."""
        now = utcnow()
        stmt = self._insert(User).values(**data, created_at=now, updated_at=now)
        changes = {key: stmt.excluded[key] for key in data if key != "id"}
        changes["updated_at"] = now
        stmt = stmt.on_conflict_do_update(index_elements=["id"], set_=changes)

        async with self._saving("user"):
            await self.session.execute(stmt)
        return await self.get_user(data["id"])

    # ------------------------------------------------------------------
    # Profiles
    # ------------------------------------------------------------------

    async def get_user_profile(self, user_id: str) -> Optional[UserProfile]:
        return await self._one_or_none(select(UserProfile).where(UserProfile.user_id == user_id))

    async def create_user_profile(self, user_id: str, data: Dict[str, Any]) -> UserProfile:
        profile = UserProfile(user_id=user_id, **data)
        async with self._saving("profile"):
            self.session.add(profile)
        return profile

    async def update_user_profile(self, user_id: str, data: Dict[str, Any]) -> Optional[UserProfile]:
        """Partial update; returns None when the user has no profile yet."""
        stmt = (
            update(UserProfile)
            .where(UserProfile.user_id == user_id)
            .values(**data, updated_at=utcnow())
            .execution_options(synchronize_session=False)
        )
        async with self._saving("profile"):
            result = await self.session.execute(stmt)
        if result.rowcount == 0:
            return None
        return await self.get_user_profile(user_id)

    async def upsert_user_profile(self, user_id: str, data: Dict[str, Any]) -> UserProfile:
        """
        Create or update the user's single profile in one statement.

        Only the keys present in data are written on update, so a partial
        submission leaves the other answers in place.
        """
        now = utcnow()
        stmt = self._insert(UserProfile).values(
            id=str(uuid.uuid4()),
            user_id=user_id,
            created_at=now,
            updated_at=now,
            **data,
        )
        changes = {key: stmt.excluded[key] for key in data}
        changes["updated_at"] = now
        stmt = stmt.on_conflict_do_update(index_elements=["user_id"], set_=changes)

        async with self._saving("profile"):
            await self.session.execute(stmt)
        return await self.get_user_profile(user_id)

    async def mark_onboarding_complete(self, user_id: str) -> UserProfile:
        return await self.upsert_user_profile(user_id, {"completed_onboarding": True})

    # ------------------------------------------------------------------
    # Assessments
    # ------------------------------------------------------------------

    async def create_assessment(
        self,
        user_id: str,
        personality_traits: Dict[str, int],
        interest_areas: Dict[str, int],
        work_values: Optional[Dict[str, Any]] = None,
    ) -> Assessment:
        assessment = Assessment(
            user_id=user_id,
            personality_traits=personality_traits,
            interest_areas=interest_areas,
            work_values=work_values or {},
            completed_at=utcnow(),
        )
        async with self._saving("assessment"):
            self.session.add(assessment)
        return assessment

    async def get_user_assessment(self, user_id: str) -> Optional[Assessment]:
        """Most recently completed assessment, or None."""
        query = (
            select(Assessment)
            .where(Assessment.user_id == user_id)
            .order_by(Assessment.completed_at.desc())
            .limit(1)
        )
        return await self._one_or_none(query)

    # ------------------------------------------------------------------
    # Skills
    # ------------------------------------------------------------------

    async def get_all_skills(self) -> List[Skill]:
        return await self._all(select(Skill).order_by(Skill.name))

    async def get_user_skills(self, user_id: str) -> List[UserSkill]:
        return await self._all(
            select(UserSkill).where(UserSkill.user_id == user_id).order_by(UserSkill.updated_at)
        )

    async def get_user_skill(self, user_id: str, skill_id: str) -> Optional[UserSkill]:
        return await self._one_or_none(
            select(UserSkill).where(UserSkill.user_id == user_id, UserSkill.skill_id == skill_id)
        )

    async def upsert_user_skill(
        self,
        user_id: str,
        skill_id: str,
        current_level: int,
        target_level: Optional[int] = None,
        is_learning: bool = False,
    ) -> UserSkill:
        now = utcnow()
        stmt = self._insert(UserSkill).values(
            id=str(uuid.uuid4()),
            user_id=user_id,
            skill_id=skill_id,
            current_level=current_level,
            target_level=target_level,
            is_learning=is_learning,
            updated_at=now,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["user_id", "skill_id"],
            set_={
                "current_level": stmt.excluded.current_level,
                "target_level": stmt.excluded.target_level,
                "is_learning": stmt.excluded.is_learning,
                "updated_at": now,
            },
        )

        async with self._saving("user skill"):
            await self.session.execute(stmt)
        return await self.get_user_skill(user_id, skill_id)

    async def get_skills_with_levels(self, user_id: str) -> List[UserSkill]:
        """User skills with their catalog Skill loaded."""
        query = (
            select(UserSkill)
            .join(UserSkill.skill)
            .options(contains_eager(UserSkill.skill))
            .where(UserSkill.user_id == user_id)
        )
        return await self._all(query)

    async def get_skill_gaps(self, user_id: str) -> List[UserSkill]:
        """
        Skills the user wants to improve, largest gap first.

        Only rows with a target above the current level count as a gap;
        ties are ordered by skill name.
        """
        query = (
            select(UserSkill)
            .join(UserSkill.skill)
            .options(contains_eager(UserSkill.skill))
            .where(
                UserSkill.user_id == user_id,
                UserSkill.target_level.is_not(None),
                UserSkill.target_level > UserSkill.current_level,
            )
        )
        gaps = await self._all(query)
        return sorted(gaps, key=lambda us: (-(us.target_level - us.current_level), us.skill.name))

    # ------------------------------------------------------------------
    # Career paths and recommendations
    # ------------------------------------------------------------------

    async def get_career_paths(self) -> List[CareerPath]:
        """Catalog in insertion order."""
        return await self._all(select(CareerPath).order_by(CareerPath.created_at, CareerPath.id))

    async def add_career_recommendations(self, user_id: str, rows: List[Dict[str, Any]]) -> int:
        """
        Insert recommendations, silently skipping pairs the user already has.

        Existing rows keep their match_score and is_bookmarked.

        Args:
            user_id: Owner of the recommendations
            rows: Dicts with career_path_id, match_score and reasons

        Returns:
            Number of rows actually inserted
        """
        if not rows:
            return 0

        now = utcnow()
        values = [
            {
                "id": str(uuid.uuid4()),
                "user_id": user_id,
                "career_path_id": row["career_path_id"],
                "match_score": row["match_score"],
                "reasons": list(row["reasons"]),
                "is_bookmarked": False,
                "created_at": now,
            }
            for row in rows
        ]
        stmt = (
            self._insert(CareerRecommendation)
            .values(values)
            .on_conflict_do_nothing(index_elements=["user_id", "career_path_id"])
        )

        async with self._saving("career recommendations"):
            result = await self.session.execute(stmt)
        return max(result.rowcount, 0)

    async def get_career_recommendations(self, user_id: str) -> List[CareerRecommendation]:
        """
        Recommendations joined with their career path, best match first.

        Inner join: a recommendation whose career path no longer exists is
        left out rather than reported.
        """
        query = (
            select(CareerRecommendation)
            .join(CareerRecommendation.career_path)
            .options(contains_eager(CareerRecommendation.career_path))
            .where(CareerRecommendation.user_id == user_id)
            .order_by(CareerRecommendation.match_score.desc(), CareerPath.title)
        )
        return await self._all(query)

    async def get_career_recommendation(
        self, user_id: str, career_path_id: str
    ) -> Optional[CareerRecommendation]:
        return await self._one_or_none(
            select(CareerRecommendation).where(
                CareerRecommendation.user_id == user_id,
                CareerRecommendation.career_path_id == career_path_id,
            )
        )

    async def toggle_bookmark(self, user_id: str, career_path_id: str) -> bool:
        """
        Flip is_bookmarked for the user's recommendation of a career path.

        Returns:
            True if a row was flipped, False when the user has no
            recommendation for that path (nothing is created)
        """
        stmt = (
            update(CareerRecommendation)
            .where(
                CareerRecommendation.user_id == user_id,
                CareerRecommendation.career_path_id == career_path_id,
            )
            .values(is_bookmarked=~CareerRecommendation.is_bookmarked)
            .execution_options(synchronize_session=False)
        )
        async with self._saving("bookmark"):
            result = await self.session.execute(stmt)
        return result.rowcount > 0

    # ------------------------------------------------------------------
    # Courses and enrollments
    # ------------------------------------------------------------------

    async def get_recommended_courses(self, skill_ids: List[str], limit: int = 10) -> List[Course]:
        """
        Up to `limit` catalog courses.

        The catalog is never filtered: courses covering any of `skill_ids`
        are listed first, then the rest, each group by rating.
        """
        if not skill_ids:
            query = select(Course).order_by(Course.rating.desc().nulls_last(), Course.title).limit(limit)
            return await self._all(query)

        wanted = set(skill_ids)
        courses = await self._all(select(Course))
        courses.sort(
            key=lambda c: (
                -len(wanted.intersection(c.skills_covered or [])),
                -(c.rating or 0.0),
                c.title,
            )
        )
        return courses[:limit]

    async def get_user_courses(self, user_id: str) -> List[UserCourse]:
        """Enrollments joined with their course (inner join), newest first."""
        query = (
            select(UserCourse)
            .join(UserCourse.course)
            .options(contains_eager(UserCourse.course))
            .where(UserCourse.user_id == user_id)
            .order_by(UserCourse.started_at.desc())
        )
        return await self._all(query)

    async def get_enrollment(self, user_id: str, course_id: str) -> Optional[UserCourse]:
        return await self._one_or_none(
            select(UserCourse).where(UserCourse.user_id == user_id, UserCourse.course_id == course_id)
        )

    async def create_enrollment(self, user_id: str, course_id: str) -> UserCourse:
        """
        Enroll the user unless an enrollment already exists.

        Insert-or-ignore on (user_id, course_id), then read back, so two
        concurrent enroll calls both see the same single row.
        """
        stmt = (
            self._insert(UserCourse)
            .values(
                id=str(uuid.uuid4()),
                user_id=user_id,
                course_id=course_id,
                status=EnrollmentStatus.ENROLLED.value,
                progress=0,
                started_at=utcnow(),
                completed_at=None,
            )
            .on_conflict_do_nothing(index_elements=["user_id", "course_id"])
        )
        async with self._saving("enrollment"):
            await self.session.execute(stmt)
        return await self.get_enrollment(user_id, course_id)

    async def set_enrollment_state(
        self,
        user_id: str,
        course_id: str,
        status: EnrollmentStatus,
        progress: int,
        completed_at: Optional[datetime],
        started_at: Optional[datetime] = None,
    ) -> Optional[UserCourse]:
        """Write status, progress and completed_at together; None if not enrolled."""
        values = {
            "status": status.value,
            "progress": progress,
            "completed_at": completed_at,
        }
        if started_at is not None:
            values["started_at"] = started_at

        stmt = (
            update(UserCourse)
            .where(UserCourse.user_id == user_id, UserCourse.course_id == course_id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        async with self._saving("course progress"):
            result = await self.session.execute(stmt)
        if result.rowcount == 0:
            return None
        return await self.get_enrollment(user_id, course_id)
