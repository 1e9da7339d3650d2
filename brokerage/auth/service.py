"""
Brokerage Back-Office - Authentication Service

Signup, login, logout and current-admin resolution, composed from the
credential store and the session store.
"""

import logging
from datetime import datetime
from typing import Optional, Tuple

from sqlmodel import Session as DBSession

from brokerage.auth import credentials, sessions as session_service
from brokerage.auth.models import Admin
from brokerage.auth.password import dummy_verify, hash_password, needs_rehash, verify_password
from brokerage.database import utcnow
from brokerage.errors import AuthError


logger = logging.getLogger(__name__)


async def signup(db: DBSession, email: str, password: str, name: str) -> Admin:
    """Self-service signup; only allowed while no admin exists."""
    return await credentials.create_first_admin(db, email=email, name=name, password=password)


async def login(
    db: DBSession,
    email: str,
    password: str,
    now: Optional[datetime] = None,
) -> Tuple[str, Admin]:
    """
    Authenticate an admin and open a session.

    Returns:
        (session_token, admin). The token resolves as soon as this returns.

    Raises:
        AuthError: Unknown email or wrong password (same message for both)
    """
    now = now or utcnow()

    admin = await credentials.get_admin_by_email(db, email)
    if admin is None:
        dummy_verify(password)
        logger.warning("Login failed: unknown email")
        raise AuthError()

    if not verify_password(password, admin.password_hash):
        logger.warning("Login failed: bad password for admin %s", admin.id)
        raise AuthError()

    if needs_rehash(admin.password_hash):
        admin.password_hash = hash_password(password)

    session = await session_service.create_session(db, admin.id, now=now)
    admin.last_login = now
    db.add(admin)
    db.commit()
    db.refresh(admin)

    logger.info("Admin %s logged in", admin.id)
    return session.token, admin


async def get_current_admin(
    db: DBSession,
    token: Optional[str],
    now: Optional[datetime] = None,
) -> Optional[Admin]:
    """The admin owning a valid session token, or None. Never writes."""
    return await session_service.resolve_session(db, token, now=now)


async def logout(db: DBSession, token: Optional[str]) -> bool:
    """Delete the session for this token. Always succeeds."""
    if token and await session_service.delete_session(db, token):
        logger.info("Session closed")
    return True
