"""
Course Enrollment Tracker

Creates enrollments and keeps status, progress and completed_at consistent.

Status Flow:
    enroll                      -> enrolled (progress 0)
    progress 1-99               -> in_progress, completed_at cleared
    progress 100                -> completed, completed_at = now
    progress 0                  -> enrolled stays enrolled, otherwise in_progress
    drop                        -> dropped (terminal)

Policy: one enrollment per (user, course). Enrolling again returns the
existing row untouched; a dropped enrollment is restarted from scratch.
"""

import logging
from typing import Optional

from careerpath.database import utcnow
from careerpath.exceptions import InvalidTransition, ValidationFailed
from careerpath.middleware.metrics import record_status_transition
from careerpath.models import EnrollmentStatus, UserCourse
from careerpath.services.storage import Storage

logger = logging.getLogger(__name__)

MIN_PROGRESS = 0
MAX_PROGRESS = 100


def validate_progress(progress: int) -> int:
    if isinstance(progress, bool) or not isinstance(progress, int):
        raise ValidationFailed("Progress must be an integer")
    if not MIN_PROGRESS <= progress <= MAX_PROGRESS:
        raise ValidationFailed(
            f"Progress must be between {MIN_PROGRESS} and {MAX_PROGRESS}",
            details={"progress": progress},
        )
    return progress


def status_for_progress(progress: int, current: EnrollmentStatus) -> EnrollmentStatus:
    if progress >= MAX_PROGRESS:
        return EnrollmentStatus.COMPLETED
    if progress == MIN_PROGRESS and current == EnrollmentStatus.ENROLLED:
        return EnrollmentStatus.ENROLLED
    return EnrollmentStatus.IN_PROGRESS


class CourseEnrollmentTracker:
    """Enrollment lifecycle on top of the persistence gateway."""

    def __init__(self, storage: Storage):
        self.storage = storage

    async def enroll(self, user_id: str, course_id: str) -> UserCourse:
        existing = await self.storage.get_enrollment(user_id, course_id)

        if existing is None:
            enrollment = await self.storage.create_enrollment(user_id, course_id)
            record_status_transition(EnrollmentStatus.ENROLLED.value)
            logger.info(f"User {user_id} enrolled in course {course_id}")
            return enrollment

        if existing.status == EnrollmentStatus.DROPPED.value:
            enrollment = await self.storage.set_enrollment_state(
                user_id,
                course_id,
                status=EnrollmentStatus.ENROLLED,
                progress=MIN_PROGRESS,
                completed_at=None,
                started_at=utcnow(),
            )
            record_status_transition(EnrollmentStatus.ENROLLED.value)
            logger.info(f"User {user_id} re-enrolled in dropped course {course_id}")
            return enrollment

        return existing

    async def update_progress(self, user_id: str, course_id: str, progress: int) -> Optional[UserCourse]:
        """
        Record progress and derive the status from it.

        Raises:
            ValidationFailed: progress outside 0-100 (checked before any
                store access)
            InvalidTransition: the enrollment was dropped

        Returns:
            The updated enrollment, or None when the user is not enrolled
        """
        validate_progress(progress)

        existing = await self.storage.get_enrollment(user_id, course_id)
        if existing is None:
            logger.info(f"Progress update ignored, user {user_id} not enrolled in {course_id}")
            return None

        current = EnrollmentStatus(existing.status)
        if current == EnrollmentStatus.DROPPED:
            raise InvalidTransition(
                "Cannot update progress of a dropped course",
                details={"course_id": course_id},
            )

        status = status_for_progress(progress, current)
        completed_at = utcnow() if status == EnrollmentStatus.COMPLETED else None

        updated = await self.storage.set_enrollment_state(
            user_id, course_id, status=status, progress=progress, completed_at=completed_at
        )
        if updated is not None and status != current:
            record_status_transition(status.value)
        return updated

    async def drop(self, user_id: str, course_id: str) -> Optional[UserCourse]:
        existing = await self.storage.get_enrollment(user_id, course_id)
        if existing is None:
            return None
        if existing.status == EnrollmentStatus.COMPLETED.value:
            raise InvalidTransition("Cannot drop a completed course", details={"course_id": course_id})

        dropped = await self.storage.set_enrollment_state(
            user_id,
            course_id,
            status=EnrollmentStatus.DROPPED,
            progress=existing.progress,
            completed_at=None,
        )
        record_status_transition(EnrollmentStatus.DROPPED.value)
        return dropped
