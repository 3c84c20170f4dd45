"""
Dashboard authentication: a single operator, HS256 JWT in an HttpOnly cookie.
"""

import hmac
from datetime import datetime, timedelta, timezone

from fastapi import HTTPException, Request, Response
from jose import JWTError, jwt

from lead_qualifier.config import settings

COOKIE_NAME = "lead-system-auth"
TOKEN_TTL_SECONDS = 60 * 60 * 24
ALGORITHM = "HS256"


def _secret() -> str:
    if not settings.jwt_secret:
        raise RuntimeError("JWT_SECRET env var not set")
    return settings.jwt_secret


def sign_token(username: str) -> str:
    expire = datetime.now(timezone.utc) + timedelta(seconds=TOKEN_TTL_SECONDS)
    return jwt.encode({"username": username, "exp": expire}, _secret(), algorithm=ALGORITHM)


def verify_token(token: str) -> str | None:
    """Return the username carried by a valid token, else None."""
    try:
        payload = jwt.decode(token, _secret(), algorithms=[ALGORITHM])
    except JWTError:
        return None
    username = payload.get("username")
    return username if isinstance(username, str) else None


def check_credentials(username: str, password: str) -> bool:
    user_ok = hmac.compare_digest(username.encode(), settings.dashboard_username.encode())
    pass_ok = hmac.compare_digest(password.encode(), settings.dashboard_password.encode())
    return user_ok and pass_ok


def set_auth_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        COOKIE_NAME,
        token,
        max_age=TOKEN_TTL_SECONDS,
        path="/",
        httponly=True,
        secure=settings.environment == "production",
        samesite="lax",
    )


def clear_auth_cookie(response: Response) -> None:
    response.delete_cookie(COOKIE_NAME, path="/")


async def require_user(request: Request) -> str:
    """FastAPI dependency: the authenticated username or 401."""
    token = request.cookies.get(COOKIE_NAME)
    username = verify_token(token) if token else None
    if not username:
        raise HTTPException(status_code=401, detail="Not authenticated.")
    return username
