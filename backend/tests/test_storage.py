"""
Tests for the persistence gateway.

Run with: cd backend && pytest tests/test_storage.py -v

Tests cover:
- User upsert by id
- Profile create / update / atomic upsert
- Latest-assessment selection
- User skill upsert and skill gaps
- Recommendation insert-or-ignore, ordering and bookmark toggling
- Course listing and enrollment rows
- Constraint violations surfacing as SaveFailed
- Database URL driver selection
"""

import pytest
from sqlalchemy import select, func, text

from careerpath.database import async_database_url
from careerpath.exceptions import SaveFailed
from careerpath.models import (
    User,
    UserProfile,
    UserSkill,
    CareerPath,
    CareerRecommendation,
    UserCourse,
    EnrollmentStatus,
)


async def count_rows(session, model, **filters) -> int:
    query = select(func.count()).select_from(model)
    for column, value in filters.items():
        query = query.where(getattr(model, column) == value)
    result = await session.execute(query)
    return result.scalar()


# ==============================================================================
# Users
# ==============================================================================

class TestUsers:
    """Upsert-by-id semantics for users."""

    @pytest.mark.asyncio
    async def test_get_user_missing_returns_none(self, storage):
        assert await storage.get_user("nobody") is None

    @pytest.mark.asyncio
    async def test_upsert_user_inserts_then_updates(self, storage, session):
        created = await storage.upsert_user({"id": "u-9", "email": "old@example.com", "first_name": "Old"})
        first_updated_at = created.updated_at

        updated = await storage.upsert_user({"id": "u-9", "email": "new@example.com", "first_name": "New"})

        assert updated.email == "new@example.com"
        assert updated.first_name == "New"
        assert updated.updated_at >= first_updated_at
        assert await count_rows(session, User, id="u-9") == 1

    @pytest.mark.asyncio
    async def test_upsert_user_keeps_fields_not_supplied(self, storage):
        await storage.upsert_user({"id": "u-9", "email": "a@example.com", "last_name": "Byron"})
        updated = await storage.upsert_user({"id": "u-9", "email": "a@example.com"})

        assert updated.last_name == "Byron"

    @pytest.mark.asyncio
    async def test_duplicate_email_is_save_failed(self, storage, user):
        with pytest.raises(SaveFailed) as exc_info:
            await storage.upsert_user({"id": "someone-else", "email": user.email})

        assert exc_info.value.message == "Failed to save user"


# ==============================================================================
# Profiles
# ==============================================================================

class TestProfiles:
    """One profile per user, created or updated in place."""

    @pytest.mark.asyncio
    async def test_profile_absent_is_none(self, storage, user):
        assert await storage.get_user_profile(user.id) is None

    @pytest.mark.asyncio
    async def test_create_then_update_profile(self, storage, user):
        await storage.create_user_profile(user.id, {"age": "25-34", "current_field": "Technology"})

        updated = await storage.update_user_profile(user.id, {"current_field": "Finance"})

        assert updated.age == "25-34"
        assert updated.current_field == "Finance"
        assert updated.completed_onboarding is False

    @pytest.mark.asyncio
    async def test_update_missing_profile_returns_none(self, storage, user):
        assert await storage.update_user_profile(user.id, {"age": "18-24"}) is None

    @pytest.mark.asyncio
    async def test_second_create_is_save_failed(self, storage, user):
        await storage.create_user_profile(user.id, {"age": "25-34"})

        with pytest.raises(SaveFailed):
            await storage.create_user_profile(user.id, {"age": "35-44"})

    @pytest.mark.asyncio
    async def test_upsert_profile_keeps_single_row(self, storage, session, user):
        await storage.upsert_user_profile(user.id, {"age": "25-34", "career_goals": "Data science"})
        profile = await storage.upsert_user_profile(user.id, {"age": "35-44"})

        assert profile.age == "35-44"
        assert profile.career_goals == "Data science"
        assert await count_rows(session, UserProfile, user_id=user.id) == 1

    @pytest.mark.asyncio
    async def test_mark_onboarding_complete_creates_profile_if_missing(self, storage, user):
        profile = await storage.mark_onboarding_complete(user.id)

        assert profile.completed_onboarding is True
        assert profile.age is None

    @pytest.mark.asyncio
    async def test_profile_for_unknown_user_is_save_failed(self, storage):
        with pytest.raises(SaveFailed):
            await storage.upsert_user_profile("ghost", {"age": "25-34"})


# ==============================================================================
# Assessments
# ==============================================================================

class TestAssessments:

    TRAITS = {"openness": 4, "conscientiousness": 3, "extraversion": 2, "agreeableness": 5, "neuroticism": 1}
    INTERESTS = {"realistic": 2, "investigative": 5, "artistic": 3, "social": 1, "enterprising": 4, "conventional": 2}

    @pytest.mark.asyncio
    async def test_no_assessment_is_none(self, storage, user):
        assert await storage.get_user_assessment(user.id) is None

    @pytest.mark.asyncio
    async def test_latest_assessment_wins(self, storage, user):
        await storage.create_assessment(user.id, self.TRAITS, self.INTERESTS)
        retake = await storage.create_assessment(
            user.id, {**self.TRAITS, "openness": 1}, self.INTERESTS, {"autonomy": "high"}
        )

        latest = await storage.get_user_assessment(user.id)

        assert latest.id == retake.id
        assert latest.personality_traits["openness"] == 1
        assert latest.work_values == {"autonomy": "high"}

    @pytest.mark.asyncio
    async def test_work_values_default_to_empty(self, storage, user):
        assessment = await storage.create_assessment(user.id, self.TRAITS, self.INTERESTS)
        assert assessment.work_values == {}


# ==============================================================================
# Skills
# ==============================================================================

class TestUserSkills:

    @pytest.mark.asyncio
    async def test_all_skills_sorted_by_name(self, storage, skills):
        names = [s.name for s in await storage.get_all_skills()]
        assert names == sorted(names)
        assert len(names) == len(skills)

    @pytest.mark.asyncio
    async def test_upsert_same_pair_updates_single_row(self, storage, session, user, skills):
        python = skills["Python"]
        await storage.upsert_user_skill(user.id, python.id, current_level=2, target_level=4)
        updated = await storage.upsert_user_skill(
            user.id, python.id, current_level=3, target_level=5, is_learning=True
        )

        assert updated.current_level == 3
        assert updated.target_level == 5
        assert updated.is_learning is True
        assert await count_rows(session, UserSkill, user_id=user.id, skill_id=python.id) == 1

    @pytest.mark.asyncio
    async def test_upsert_can_clear_target(self, storage, user, skills):
        sql = skills["SQL"]
        await storage.upsert_user_skill(user.id, sql.id, current_level=2, target_level=4)
        updated = await storage.upsert_user_skill(user.id, sql.id, current_level=2)

        assert updated.target_level is None

    @pytest.mark.asyncio
    async def test_unknown_skill_is_save_failed(self, storage, user):
        with pytest.raises(SaveFailed) as exc_info:
            await storage.upsert_user_skill(user.id, "no-such-skill", current_level=3)

        assert exc_info.value.message == "Failed to save user skill"

    @pytest.mark.asyncio
    async def test_user_skills_are_per_user(self, storage, user, other_user, skills):
        await storage.upsert_user_skill(user.id, skills["Python"].id, current_level=3)
        await storage.upsert_user_skill(other_user.id, skills["SQL"].id, current_level=1)

        mine = await storage.get_user_skills(user.id)

        assert [us.skill_id for us in mine] == [skills["Python"].id]

    @pytest.mark.asyncio
    async def test_skill_gaps_largest_first(self, storage, user, skills):
        await storage.upsert_user_skill(user.id, skills["Python"].id, current_level=2, target_level=3)
        await storage.upsert_user_skill(user.id, skills["SQL"].id, current_level=1, target_level=5)
        await storage.upsert_user_skill(user.id, skills["Statistics"].id, current_level=4, target_level=4)
        await storage.upsert_user_skill(user.id, skills["Leadership"].id, current_level=3)

        gaps = await storage.get_skill_gaps(user.id)

        assert [g.skill.name for g in gaps] == ["SQL", "Python"]


# ==============================================================================
# Career recommendations
# ==============================================================================

class TestCareerRecommendations:

    @pytest.mark.asyncio
    async def test_career_paths_in_catalog_order(self, storage, career_paths):
        paths = await storage.get_career_paths()
        assert [p.id for p in paths] == [p.id for p in career_paths]

    @pytest.mark.asyncio
    async def test_insert_or_ignore_keeps_existing_score(self, storage, session, user, career_paths):
        path = career_paths[0]
        first = await storage.add_career_recommendations(
            user.id, [{"career_path_id": path.id, "match_score": 70, "reasons": ["a"]}]
        )
        second = await storage.add_career_recommendations(
            user.id, [{"career_path_id": path.id, "match_score": 99, "reasons": ["b"]}]
        )

        row = await storage.get_career_recommendation(user.id, path.id)
        assert first == 1
        assert second == 0
        assert row.match_score == 70
        assert row.reasons == ["a"]
        assert await count_rows(session, CareerRecommendation, user_id=user.id) == 1

    @pytest.mark.asyncio
    async def test_empty_rows_insert_nothing(self, storage, user):
        assert await storage.add_career_recommendations(user.id, []) == 0

    @pytest.mark.asyncio
    async def test_recommendations_sorted_by_score_desc(self, storage, user, career_paths):
        scores = [65, 92, 78]
        await storage.add_career_recommendations(
            user.id,
            [
                {"career_path_id": p.id, "match_score": s, "reasons": []}
                for p, s in zip(career_paths, scores)
            ],
        )

        recs = await storage.get_career_recommendations(user.id)

        assert [r.match_score for r in recs] == [92, 78, 65]
        assert recs[0].career_path.title == career_paths[1].title

    @pytest.mark.asyncio
    async def test_recommendation_for_deleted_path_is_excluded(self, storage, session, user, career_paths):
        kept, removed = career_paths[0], career_paths[1]
        await storage.add_career_recommendations(
            user.id,
            [
                {"career_path_id": kept.id, "match_score": 80, "reasons": []},
                {"career_path_id": removed.id, "match_score": 90, "reasons": []},
            ],
        )

        # Simulate a catalog deletion that bypassed referential checks
        await session.execute(text("PRAGMA foreign_keys=OFF"))
        await session.execute(text("DELETE FROM career_paths WHERE id = :id"), {"id": removed.id})
        await session.commit()

        recs = await storage.get_career_recommendations(user.id)

        assert [r.career_path_id for r in recs] == [kept.id]

    @pytest.mark.asyncio
    async def test_toggle_bookmark_flips_each_call(self, storage, user, career_paths):
        path = career_paths[0]
        await storage.add_career_recommendations(
            user.id, [{"career_path_id": path.id, "match_score": 75, "reasons": []}]
        )

        assert await storage.toggle_bookmark(user.id, path.id) is True
        assert (await storage.get_career_recommendation(user.id, path.id)).is_bookmarked is True

        assert await storage.toggle_bookmark(user.id, path.id) is True
        assert (await storage.get_career_recommendation(user.id, path.id)).is_bookmarked is False

    @pytest.mark.asyncio
    async def test_toggle_bookmark_without_recommendation_is_noop(self, storage, session, user, career_paths):
        assert await storage.toggle_bookmark(user.id, career_paths[0].id) is False
        assert await count_rows(session, CareerRecommendation) == 0


# ==============================================================================
# Courses
# ==============================================================================

class TestCourses:

    @pytest.mark.asyncio
    async def test_recommended_courses_without_skills_by_rating(self, storage, courses):
        listed = await storage.get_recommended_courses([])
        assert [c.title for c in listed] == ["SQL Basics", "Intro to Python", "Leading Teams", "Unrated Course"]

    @pytest.mark.asyncio
    async def test_recommended_courses_put_learning_skills_first(self, storage, courses, skills):
        listed = await storage.get_recommended_courses([skills["Leadership"].id])

        assert listed[0].title == "Leading Teams"
        assert len(listed) == len(courses)

    @pytest.mark.asyncio
    async def test_recommended_courses_respect_limit(self, storage, courses):
        assert len(await storage.get_recommended_courses([], limit=2)) == 2

    @pytest.mark.asyncio
    async def test_create_enrollment_is_insert_or_ignore(self, storage, session, user, courses):
        course = courses[0]
        first = await storage.create_enrollment(user.id, course.id)
        second = await storage.create_enrollment(user.id, course.id)

        assert first.id == second.id
        assert first.status == EnrollmentStatus.ENROLLED.value
        assert first.progress == 0
        assert first.completed_at is None
        assert await count_rows(session, UserCourse, user_id=user.id) == 1

    @pytest.mark.asyncio
    async def test_enrollment_in_unknown_course_is_save_failed(self, storage, user):
        with pytest.raises(SaveFailed):
            await storage.create_enrollment(user.id, "no-such-course")

    @pytest.mark.asyncio
    async def test_set_enrollment_state_without_enrollment(self, storage, user, courses):
        result = await storage.set_enrollment_state(
            user.id, courses[0].id, status=EnrollmentStatus.IN_PROGRESS, progress=10, completed_at=None
        )
        assert result is None

    @pytest.mark.asyncio
    async def test_user_courses_join_course(self, storage, user, courses):
        await storage.create_enrollment(user.id, courses[1].id)

        enrollments = await storage.get_user_courses(user.id)

        assert len(enrollments) == 1
        assert enrollments[0].course.title == "SQL Basics"


class TestDatabaseUrl:

    def test_sqlite_gets_async_driver(self):
        assert async_database_url("sqlite:///./data/app.db") == "sqlite+aiosqlite:///./data/app.db"

    def test_postgres_gets_async_driver(self):
        assert async_database_url("postgresql://u:p@db/app") == "postgresql+asyncpg://u:p@db/app"

    def test_explicit_async_driver_kept(self):
        assert async_database_url("sqlite+aiosqlite:///x.db") == "sqlite+aiosqlite:///x.db"

    def test_backend_without_upserts_rejected(self):
        with pytest.raises(ValueError):
            async_database_url("mysql://u:p@db/app")
