from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession
from careerpath.config import get_settings
from careerpath.database import get_db
from careerpath.services import Storage, RecommendationGenerator, CourseEnrollmentTracker


def get_storage(db: AsyncSession = Depends(get_db)) -> Storage:
    return Storage(db)


def get_recommendation_generator(storage: Storage = Depends(get_storage)) -> RecommendationGenerator:
    settings = get_settings()
    return RecommendationGenerator(
        storage,
        strategy=settings.recommendation_strategy,
        limit=settings.recommendation_limit,
    )


def get_enrollment_tracker(storage: Storage = Depends(get_storage)) -> CourseEnrollmentTracker:
    return CourseEnrollmentTracker(storage)
