from typing import List
from fastapi import APIRouter, Depends
from careerpath.api.deps import get_storage
from careerpath.auth import CurrentUser, get_current_user
from careerpath.schemas import SkillResponse, UserSkillUpsert, UserSkillResponse, SkillGapResponse
from careerpath.services import Storage

router = APIRouter()


@router.get("/skills", response_model=List[SkillResponse])
async def list_skills(storage: Storage = Depends(get_storage)):
    skills = await storage.get_all_skills()
    return [SkillResponse.model_validate(s) for s in skills]


@router.get("/user-skills", response_model=List[UserSkillResponse])
async def list_user_skills(
    storage: Storage = Depends(get_storage),
    current_user: CurrentUser = Depends(get_current_user),
):
    user_skills = await storage.get_user_skills(current_user.id)
    return [UserSkillResponse.model_validate(us) for us in user_skills]


@router.post("/user-skills", response_model=UserSkillResponse)
async def save_user_skill(
    payload: UserSkillUpsert,
    storage: Storage = Depends(get_storage),
    current_user: CurrentUser = Depends(get_current_user),
):
    user_skill = await storage.upsert_user_skill(
        current_user.id,
        skill_id=payload.skill_id,
        current_level=payload.current_level,
        target_level=payload.target_level,
        is_learning=payload.is_learning,
    )
    return UserSkillResponse.model_validate(user_skill)


@router.get("/user-skills/gaps", response_model=List[SkillGapResponse])
async def list_skill_gaps(
    storage: Storage = Depends(get_storage),
    current_user: CurrentUser = Depends(get_current_user),
):
    gaps = await storage.get_skill_gaps(current_user.id)
    return [
        SkillGapResponse(
            skill_id=us.skill_id,
            name=us.skill.name,
            category=us.skill.category,
            current_level=us.current_level,
            target_level=us.target_level,
            gap=us.target_level - us.current_level,
            is_learning=us.is_learning,
        )
        for us in gaps
    ]
