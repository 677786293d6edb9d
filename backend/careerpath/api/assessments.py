from typing import Optional
from fastapi import APIRouter, Depends
from careerpath.api.deps import get_storage, get_recommendation_generator
from careerpath.auth import CurrentUser, get_current_user
from careerpath.schemas import AssessmentCreate, AssessmentResponse
from careerpath.services import Storage, RecommendationGenerator

router = APIRouter()


@router.post("", response_model=AssessmentResponse)
async def submit_assessment(
    payload: AssessmentCreate,
    storage: Storage = Depends(get_storage),
    generator: RecommendationGenerator = Depends(get_recommendation_generator),
    current_user: CurrentUser = Depends(get_current_user),
):
    """
    Store a new assessment and refresh the user's recommendations.

    Retakes add a new row; the latest one is what GET returns. Submitting
    also closes onboarding for the user.
    """
    data = payload.model_dump()
    assessment = await storage.create_assessment(
        current_user.id,
        personality_traits=data["personality_traits"],
        interest_areas=data["interest_areas"],
        work_values=data["work_values"],
    )

    await storage.mark_onboarding_complete(current_user.id)
    await generator.generate(current_user.id)

    return AssessmentResponse.model_validate(assessment)


@router.get("", response_model=Optional[AssessmentResponse])
async def get_latest_assessment(
    storage: Storage = Depends(get_storage),
    current_user: CurrentUser = Depends(get_current_user),
):
    assessment = await storage.get_user_assessment(current_user.id)
    return AssessmentResponse.model_validate(assessment) if assessment else None
