"""/auth: dashboard login and logout."""

import logging

from fastapi import APIRouter, HTTPException, Request, Response
from pydantic import ValidationError

from lead_qualifier.schemas.auth import LoginRequest
from lead_qualifier.services.auth import (
    check_credentials,
    clear_auth_cookie,
    set_auth_cookie,
    sign_token,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login")
async def login(request: Request, response: Response):
    """Check operator credentials and set the session cookie."""
    try:
        payload = await request.json()
    except Exception:
        raise HTTPException(status_code=400, detail="Invalid JSON body.")

    try:
        data = LoginRequest.model_validate(payload)
    except ValidationError:
        raise HTTPException(status_code=400, detail="Username and password are required.")

    if not check_credentials(data.username, data.password):
        logger.warning(f"Failed login attempt for {data.username!r}")
        raise HTTPException(status_code=401, detail="Invalid username or password.")

    set_auth_cookie(response, sign_token(data.username))
    return {"success": True}


@router.post("/logout")
async def logout(response: Response):
    clear_auth_cookie(response)
    return {"success": True}
