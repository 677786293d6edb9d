from pydantic import Field
from typing import Optional
from careerpath.schemas.base import CamelModel


class LoginRequest(CamelModel):
    """Identity claims handed over by the sign-in provider, plus the app password."""

    password: str
    id: str = Field(..., min_length=1, max_length=255)
    email: Optional[str] = Field(None, max_length=320)
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_image_url: Optional[str] = None


class LoginResponse(CamelModel):
    success: bool
    message: str
