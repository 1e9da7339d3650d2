"""
Brokerage Back-Office - Authentication Request/Response Schemas

Pydantic models for API request validation and response serialization.
Separates API contracts from database models.
"""

import re
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from brokerage.auth.models import Role


EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9_.+-]+@[a-zA-Z0-9-]+\.[a-zA-Z0-9-.]+$")
MIN_PASSWORD_LENGTH = 8


def check_email(value: str) -> str:
    # Emails are compared case-sensitively, so no normalization here
    value = value.strip()
    if not EMAIL_PATTERN.match(value):
        raise ValueError("Invalid email format")
    return value


class AdminResponse(BaseModel):
    """Public view of an admin record (never includes the hash)."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    name: str
    role: Role
    created_at: datetime
    last_login: Optional[datetime] = None


class CurrentAdminResponse(AdminResponse):
    """The signed-in admin plus the permissions their role grants."""
    permissions: List[str] = []


class SignupRequest(BaseModel):
    """Request body for POST /auth/signup."""
    email: str
    password: str = Field(..., min_length=MIN_PASSWORD_LENGTH)
    name: str = Field(..., min_length=1, max_length=255)

    @field_validator("email")
    @classmethod
    def email_format(cls, v):
        return check_email(v)


class SignupResponse(BaseModel):
    admin_id: UUID
    success: bool = True


class LoginRequest(BaseModel):
    """Request body for POST /auth/login."""
    email: str
    password: str


class LoginResponse(BaseModel):
    """Response body for successful login."""
    session_token: str = Field(..., description="Send as 'Authorization: Bearer <token>'")
    token_type: str = "bearer"
    expires_in: int = Field(..., description="Seconds until the session expires")
    admin: AdminResponse


class SuccessResponse(BaseModel):
    success: bool = True
    message: Optional[str] = None


class EmailExistsResponse(BaseModel):
    exists: bool


class ResetRequest(BaseModel):
    """Request body for POST /auth/password-reset/request."""
    email: str


class ResetRequestResponse(BaseModel):
    success: bool = True
    # Only populated when EXPOSE_RESET_TOKENS is enabled (development)
    token: Optional[str] = None


class ResetConfirmRequest(BaseModel):
    """Request body for POST /auth/password-reset/confirm."""
    token: str
    new_password: str = Field(..., min_length=MIN_PASSWORD_LENGTH)


class SessionInfo(BaseModel):
    """Session information for display (the token itself is not echoed)."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    created_at: datetime
    expires_at: datetime
    is_current: bool = False


class ActiveSessionsResponse(BaseModel):
    sessions: List[SessionInfo]
    total: int


class InviteRequest(BaseModel):
    """Request body for POST /admins (super admin only)."""
    email: str
    name: str = Field(..., min_length=1, max_length=255)
    role: Role = Role.ADMIN

    @field_validator("email")
    @classmethod
    def email_format(cls, v):
        return check_email(v)


class InviteResponse(BaseModel):
    admin_id: UUID
    temp_password: str


class UpdateRoleRequest(BaseModel):
    role: Role


class AdminListResponse(BaseModel):
    admins: List[AdminResponse]
    total: int


class PurgeResponse(BaseModel):
    sessions: int
    reset_tokens: int
