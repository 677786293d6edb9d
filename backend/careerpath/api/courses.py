from typing import List
from fastapi import APIRouter, Depends
from careerpath.api.deps import get_storage, get_enrollment_tracker
from careerpath.auth import CurrentUser, get_current_user
from careerpath.config import get_settings
from careerpath.schemas import (
    CourseResponse,
    EnrollmentResponse,
    UserCourseResponse,
    ProgressUpdate,
    SuccessResponse,
)
from careerpath.services import Storage, CourseEnrollmentTracker

router = APIRouter()
settings = get_settings()


@router.get("/courses/recommended", response_model=List[CourseResponse])
async def list_recommended_courses(
    storage: Storage = Depends(get_storage),
    current_user: CurrentUser = Depends(get_current_user),
):
    user_skills = await storage.get_user_skills(current_user.id)
    learning = [us.skill_id for us in user_skills if us.is_learning]

    courses = await storage.get_recommended_courses(learning, limit=settings.recommended_course_limit)
    return [CourseResponse.model_validate(c) for c in courses]


@router.get("/user-courses", response_model=List[UserCourseResponse])
async def list_user_courses(
    storage: Storage = Depends(get_storage),
    current_user: CurrentUser = Depends(get_current_user),
):
    enrollments = await storage.get_user_courses(current_user.id)
    return [UserCourseResponse.model_validate(e) for e in enrollments]


@router.post("/courses/{course_id}/enroll", response_model=EnrollmentResponse)
async def enroll_in_course(
    course_id: str,
    tracker: CourseEnrollmentTracker = Depends(get_enrollment_tracker),
    current_user: CurrentUser = Depends(get_current_user),
):
    enrollment = await tracker.enroll(current_user.id, course_id)
    return EnrollmentResponse.model_validate(enrollment)


@router.patch("/courses/{course_id}/progress", response_model=SuccessResponse)
async def update_course_progress(
    course_id: str,
    update: ProgressUpdate,
    tracker: CourseEnrollmentTracker = Depends(get_enrollment_tracker),
    current_user: CurrentUser = Depends(get_current_user),
):
    await tracker.update_progress(current_user.id, course_id, update.progress)
    return SuccessResponse(success=True)
