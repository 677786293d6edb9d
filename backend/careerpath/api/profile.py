from typing import Optional
from fastapi import APIRouter, Depends
from careerpath.api.deps import get_storage
from careerpath.auth import CurrentUser, get_current_user
from careerpath.schemas import ProfileResponse, ProfileUpdate
from careerpath.services import Storage

router = APIRouter()


@router.get("", response_model=Optional[ProfileResponse])
async def get_profile(
    storage: Storage = Depends(get_storage),
    current_user: CurrentUser = Depends(get_current_user),
):
    profile = await storage.get_user_profile(current_user.id)
    return ProfileResponse.model_validate(profile) if profile else None


@router.post("", response_model=ProfileResponse)
async def save_profile(
    update: ProfileUpdate,
    storage: Storage = Depends(get_storage),
    current_user: CurrentUser = Depends(get_current_user),
):
    # One statement for create-or-update; two first saves cannot both insert
    profile = await storage.upsert_user_profile(current_user.id, update.model_dump(exclude_unset=True))
    return ProfileResponse.model_validate(profile)
