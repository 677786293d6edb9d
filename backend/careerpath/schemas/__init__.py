from careerpath.schemas.auth import LoginRequest, LoginResponse
from careerpath.schemas.user import ProfileUpdate, ProfileResponse, UserResponse, AuthUserResponse
from careerpath.schemas.assessment import (
    PersonalityTraits,
    InterestAreas,
    AssessmentCreate,
    AssessmentResponse,
)
from careerpath.schemas.skill import SkillResponse, UserSkillUpsert, UserSkillResponse, SkillGapResponse
from careerpath.schemas.career import CareerPathResponse, CareerRecommendationResponse, SuccessResponse
from careerpath.schemas.course import (
    CourseResponse,
    EnrollmentResponse,
    UserCourseResponse,
    ProgressUpdate,
)

__all__ = [
    "LoginRequest",
    "LoginResponse",
    "ProfileUpdate",
    "ProfileResponse",
    "UserResponse",
    "AuthUserResponse",
    "PersonalityTraits",
    "InterestAreas",
    "AssessmentCreate",
    "AssessmentResponse",
    "SkillResponse",
    "UserSkillUpsert",
    "UserSkillResponse",
    "SkillGapResponse",
    "CareerPathResponse",
    "CareerRecommendationResponse",
    "SuccessResponse",
    "CourseResponse",
    "EnrollmentResponse",
    "UserCourseResponse",
    "ProgressUpdate",
]
