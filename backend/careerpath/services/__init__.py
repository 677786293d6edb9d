from careerpath.services.storage import Storage
from careerpath.services.recommendations import RecommendationGenerator
from careerpath.services.enrollment import CourseEnrollmentTracker

__all__ = ["Storage", "RecommendationGenerator", "CourseEnrollmentTracker"]
