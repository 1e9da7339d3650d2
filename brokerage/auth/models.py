"""
Brokerage Back-Office - Authentication Database Models

SQLModel-based models for admin accounts, sessions and password resets.

Security:
- Passwords stored as bcrypt hashes only
- Session and reset tokens are opaque random strings, looked up by unique index
- All timestamps are naive UTC

admin_id columns carry no foreign-key constraint: removing an admin leaves its
sessions and reset tokens behind, and lookups treat them as dangling.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import Boolean, Column, DateTime, Enum as SQLEnum, Integer, String
from sqlmodel import Field, SQLModel

from brokerage.database import utcnow


class Role(str, Enum):
    """
    Admin roles for RBAC.

    Permissions are deny-by-default; see policies.yaml.
    """
    ADMIN = "admin"
    SUPER_ADMIN = "super_admin"


class Admin(SQLModel, table=True):
    """
    Admin account for the back-office.

    Attributes:
        id: Unique identifier (UUIDv4)
        email: Login identifier (unique, case-sensitive)
        name: Display name
        role: RBAC role determining permissions
        password_hash: bcrypt hash (never store plaintext)
        created_at: Account creation timestamp (UTC)
        last_login: Last successful login (UTC), if any
        signup_slot: 1 for the admin created by self-service signup, else NULL.
            Unique, so a second concurrent signup fails at insert time.
    """
    __tablename__ = "admins"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(
        sa_column=Column(String(255), unique=True, index=True, nullable=False),
        description="Admin email address (login identifier)",
    )
    name: str = Field(sa_column=Column(String(255), nullable=False))
    role: Role = Field(
        sa_column=Column(SQLEnum(Role), nullable=False, default=Role.ADMIN),
        description="Admin role for RBAC",
    )
    password_hash: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="bcrypt password hash",
    )
    created_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime, nullable=False),
    )
    last_login: Optional[datetime] = Field(
        default=None,
        sa_column=Column(DateTime, nullable=True),
    )
    signup_slot: Optional[int] = Field(
        default=None,
        sa_column=Column(Integer, unique=True, nullable=True),
    )


class AdminSession(SQLModel, table=True):
    """
    Server-side session issued at login.

    A session is valid while now < expires_at. There is no refresh; logout
    deletes the row.
    """
    __tablename__ = "sessions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    token: str = Field(
        sa_column=Column(String(128), unique=True, index=True, nullable=False),
    )
    admin_id: UUID = Field(index=True, nullable=False)
    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))
    created_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime, nullable=False),
    )


class PasswordResetToken(SQLModel, table=True):
    """
    Single-use password reset token.

    Redeemable while unused and now < expires_at.
    """
    __tablename__ = "password_reset_tokens"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    token: str = Field(
        sa_column=Column(String(128), unique=True, index=True, nullable=False),
    )
    admin_id: UUID = Field(index=True, nullable=False)
    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))
    used: bool = Field(
        default=False,
        sa_column=Column(Boolean, nullable=False, default=False),
    )
    created_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime, nullable=False),
    )
