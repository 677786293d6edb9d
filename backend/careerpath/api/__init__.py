from fastapi import APIRouter
from careerpath.api import auth, profile, assessments, skills, careers, courses

api_router = APIRouter(prefix="/api")
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(profile.router, prefix="/profile", tags=["profile"])
api_router.include_router(assessments.router, prefix="/assessments", tags=["assessments"])
api_router.include_router(skills.router, tags=["skills"])
api_router.include_router(careers.router, prefix="/career-recommendations", tags=["careers"])
api_router.include_router(courses.router, tags=["courses"])
