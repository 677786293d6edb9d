from fastapi import APIRouter, Depends, Response, HTTPException, status
from careerpath.auth import CurrentUser, get_current_user, verify_password, create_session_token, COOKIE_NAME
from careerpath.api.deps import get_storage
from careerpath.config import get_settings
from careerpath.schemas import LoginRequest, LoginResponse, AuthUserResponse, ProfileResponse
from careerpath.services import Storage

router = APIRouter()
settings = get_settings()


@router.post("/login", response_model=LoginResponse)
async def login(
    request: LoginRequest,
    response: Response,
    storage: Storage = Depends(get_storage),
):
    if not verify_password(request.password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid password",
        )

    user = await storage.upsert_user(request.model_dump(exclude={"password"}, exclude_unset=True))

    token = create_session_token(user.id)
    response.set_cookie(
        key=COOKIE_NAME,
        value=token,
        httponly=True,
        max_age=settings.session_days * 24 * 60 * 60,
        samesite="lax",
    )
    return LoginResponse(success=True, message="Logged in successfully")


@router.post("/logout", response_model=LoginResponse)
async def logout(response: Response):
    response.delete_cookie(COOKIE_NAME)
    return LoginResponse(success=True, message="Logged out successfully")


@router.get("/user", response_model=AuthUserResponse)
async def get_auth_user(
    storage: Storage = Depends(get_storage),
    current_user: CurrentUser = Depends(get_current_user),
):
    user = await storage.get_user(current_user.id)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
        )

    profile = await storage.get_user_profile(current_user.id)
    result = AuthUserResponse.model_validate(user)
    result.profile = ProfileResponse.model_validate(profile) if profile else None
    return result
