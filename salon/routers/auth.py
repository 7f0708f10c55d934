import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from salon.schemas.auth import LoginRequest, SessionTokenResponse, SessionStatusResponse
from salon.utils.security import verify_shared_password, create_session_token, require_session
from salon.config import settings

from salon.utils.rate_limit import limiter

logger = logging.getLogger("salon.routers.auth")

router = APIRouter(prefix="/auth", tags=["auth"])


# Shared password gate, no user accounts
@router.post("/login", response_model=SessionTokenResponse)
@limiter.limit(settings.login_rate_limit)
def login(
        request: Request,
        credentials: LoginRequest
):
    if not verify_shared_password(credentials.password):
        logger.warning("Login with wrong password")
        raise HTTPException(status_code=401, detail="비밀번호가 일치하지 않습니다.")
    return SessionTokenResponse(access_token=create_session_token())


@router.get("/session", response_model=SessionStatusResponse)
def get_session(authenticated: bool = Depends(require_session)):
    return SessionStatusResponse(authenticated=authenticated)
