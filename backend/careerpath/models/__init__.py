from careerpath.models.user import User, UserProfile
from careerpath.models.assessment import Assessment
from careerpath.models.skill import Skill, UserSkill
from careerpath.models.career import CareerPath, CareerRecommendation
from careerpath.models.course import Course, UserCourse, EnrollmentStatus

__all__ = [
    "User",
    "UserProfile",
    "Assessment",
    "Skill",
    "UserSkill",
    "CareerPath",
    "CareerRecommendation",
    "Course",
    "UserCourse",
    "EnrollmentStatus",
]
