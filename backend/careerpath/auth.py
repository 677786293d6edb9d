from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional
from fastapi import Request, HTTPException, status
from jose import JWTError, jwt
from careerpath.config import get_settings

settings = get_settings()

ALGORITHM = "HS256"
COOKIE_NAME = "session_token"


@dataclass(frozen=True)
class CurrentUser:
    """Authenticated identity handed to every protected handler."""

    id: str


def create_session_token(user_id: str) -> str:
    expire = datetime.now(timezone.utc) + timedelta(days=settings.session_days)
    to_encode = {"sub": user_id, "exp": expire}
    return jwt.encode(to_encode, settings.secret_key, algorithm=ALGORITHM)


def verify_session_token(token: str) -> Optional[str]:
    """User id from a valid token, None for a bad or expired one."""
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[ALGORITHM])
    except JWTError:
        return None
    subject = payload.get("sub")
    return subject if isinstance(subject, str) and subject else None


def verify_password(password: str) -> bool:
    return password == settings.app_password


def _token_from_request(request: Request) -> Optional[str]:
    token = request.cookies.get(COOKIE_NAME)
    if token:
        return token
    header = request.headers.get("Authorization", "")
    scheme, _, credentials = header.partition(" ")
    if scheme.lower() == "bearer" and credentials:
        return credentials
    return None


async def get_current_user(request: Request) -> CurrentUser:
    token = _token_from_request(request)
    user_id = verify_session_token(token) if token else None
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
        )
    return CurrentUser(id=user_id)
