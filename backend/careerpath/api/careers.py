from typing import List
from fastapi import APIRouter, Depends
from careerpath.api.deps import get_storage
from careerpath.auth import CurrentUser, get_current_user
from careerpath.schemas import CareerRecommendationResponse, SuccessResponse
from careerpath.services import Storage

router = APIRouter()


@router.get("", response_model=List[CareerRecommendationResponse])
async def list_career_recommendations(
    storage: Storage = Depends(get_storage),
    current_user: CurrentUser = Depends(get_current_user),
):
    recommendations = await storage.get_career_recommendations(current_user.id)
    return [CareerRecommendationResponse.model_validate(r) for r in recommendations]


@router.post("/{career_path_id}/bookmark", response_model=SuccessResponse)
async def toggle_bookmark(
    career_path_id: str,
    storage: Storage = Depends(get_storage),
    current_user: CurrentUser = Depends(get_current_user),
):
    # Bookmarking a path the user was never recommended is a no-op
    await storage.toggle_bookmark(current_user.id, career_path_id)
    return SuccessResponse(success=True)
