"""
Brokerage Back-Office - Authentication Routes

API endpoints for authentication:
- GET  /auth/email-exists               - Is an email registered
- POST /auth/signup                     - First-admin signup
- POST /auth/login                      - Authenticate and create session
- GET  /auth/me                         - Current admin (null if signed out)
- POST /auth/logout                     - Delete current session
- GET  /auth/sessions                   - List the caller's active sessions
- POST /auth/password-reset/request     - Issue a reset token
- POST /auth/password-reset/confirm     - Redeem a reset token

Error responses come from the app-level BrokerageError handler.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session as DBSession

from brokerage.auth import credentials, password_reset, service, sessions as session_service
from brokerage.auth.dependencies import get_db, get_principal, get_session_token, require_admin
from brokerage.auth.principal import Authenticated, Principal
from brokerage.auth.rbac import RBACPolicy
from brokerage.auth.schemas import (
    ActiveSessionsResponse,
    AdminResponse,
    CurrentAdminResponse,
    EmailExistsResponse,
    LoginRequest,
    LoginResponse,
    ResetConfirmRequest,
    ResetRequest,
    ResetRequestResponse,
    SessionInfo,
    SignupRequest,
    SignupResponse,
    SuccessResponse,
)
from brokerage.config import settings


router = APIRouter(prefix="/auth", tags=["authentication"])


@router.get("/email-exists", response_model=EmailExistsResponse)
async def email_exists(
    email: str = Query(..., min_length=1),
    db: DBSession = Depends(get_db),
):
    return EmailExistsResponse(exists=await credentials.email_exists(db, email))


@router.post(
    "/signup",
    response_model=SignupResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create the first admin account",
)
async def signup(body: SignupRequest, db: DBSession = Depends(get_db)):
    """
    Self-service signup, open only while no admin exists.

    The created admin is a super_admin. Afterwards, admins are invited.
    """
    admin = await service.signup(db, email=body.email, password=body.password, name=body.name)
    return SignupResponse(admin_id=admin.id)


@router.post(
    "/login",
    response_model=LoginResponse,
    summary="Authenticate admin and create session",
)
async def login(body: LoginRequest, db: DBSession = Depends(get_db)):
    """
    Authenticate with email and password.

    Returns:
        LoginResponse with the session token and admin profile

    Raises:
        401: Invalid email or password
    """
    token, admin = await service.login(db, email=body.email, password=body.password)
    return LoginResponse(
        session_token=token,
        expires_in=int(session_service.session_ttl().total_seconds()),
        admin=AdminResponse.model_validate(admin),
    )


@router.get(
    "/me",
    response_model=Optional[CurrentAdminResponse],
    summary="Get the current admin",
)
async def get_me(principal: Principal = Depends(get_principal)):
    """Returns null rather than 401 when the caller is not signed in."""
    if isinstance(principal, Authenticated):
        me = CurrentAdminResponse.model_validate(principal.admin)
        me.permissions = sorted(RBACPolicy().get_role_permissions(principal.role.value))
        return me
    return None


@router.post("/logout", response_model=SuccessResponse)
async def logout(
    token: Optional[str] = Depends(get_session_token),
    db: DBSession = Depends(get_db),
):
    """Idempotent: unknown or expired tokens still report success."""
    await service.logout(db, token)
    return SuccessResponse(message="Logged out")


@router.get("/sessions", response_model=ActiveSessionsResponse)
async def list_sessions(
    principal: Authenticated = Depends(require_admin),
    db: DBSession = Depends(get_db),
):
    active = await session_service.get_active_sessions(db, principal.admin.id)
    items = [
        SessionInfo(
            id=s.id,
            created_at=s.created_at,
            expires_at=s.expires_at,
            is_current=(s.token == principal.token),
        )
        for s in active
    ]
    return ActiveSessionsResponse(sessions=items, total=len(items))


@router.post("/password-reset/request", response_model=ResetRequestResponse)
async def request_password_reset(body: ResetRequest, db: DBSession = Depends(get_db)):
    """
    Issue a reset token.

    Always reports success. The token is only echoed back when
    EXPOSE_RESET_TOKENS is on; otherwise it must be delivered out of band.
    """
    token = await password_reset.request_reset(db, body.email)
    if settings.EXPOSE_RESET_TOKENS:
        return ResetRequestResponse(token=token)
    return ResetRequestResponse()


@router.post("/password-reset/confirm", response_model=SuccessResponse)
async def confirm_password_reset(body: ResetConfirmRequest, db: DBSession = Depends(get_db)):
    """
    Redeem a reset token.

    Raises:
        400: Invalid or expired reset token
    """
    await password_reset.reset_password(db, body.token, body.new_password)
    return SuccessResponse(message="Password updated")
