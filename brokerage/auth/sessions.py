"""
Brokerage Back-Office - Session Management

Server-side sessions for admin authentication.

Security:
- Session tokens are opaque random strings, unique per session
- Sessions have a fixed lifetime (SESSION_TTL_DAYS); there is no renewal
- Expiry is evaluated lazily at read time; resolution never writes
- Logout deletes the session row
"""

from datetime import datetime, timedelta
from typing import List, Optional
from uuid import UUID

from sqlmodel import Session as DBSession, select

from brokerage.auth.models import Admin, AdminSession
from brokerage.auth.tokens import generate_token
from brokerage.config import settings
from brokerage.database import utcnow


def session_ttl() -> timedelta:
    return timedelta(days=settings.SESSION_TTL_DAYS)


async def create_session(
    db: DBSession,
    admin_id: UUID,
    now: Optional[datetime] = None,
) -> AdminSession:
    """
    Stage a new session for an admin.

    The row is added to the unit of work but not committed, so the caller can
    commit it together with related writes (last_login on login).
    """
    now = now or utcnow()

    session = AdminSession(
        token=generate_token(),
        admin_id=admin_id,
        expires_at=now + session_ttl(),
        created_at=now,
    )
    db.add(session)

    return session


async def find_session(db: DBSession, token: str) -> Optional[AdminSession]:
    statement = select(AdminSession).where(AdminSession.token == token)
    return db.exec(statement).first()


def is_session_valid(session: AdminSession, now: Optional[datetime] = None) -> bool:
    """A session is valid strictly before its expiry instant."""
    return (now or utcnow()) < session.expires_at


async def resolve_session(
    db: DBSession,
    token: str,
    now: Optional[datetime] = None,
) -> Optional[Admin]:
    """
    Resolve a session token to its admin.

    Returns None when the token is unknown, expired, or belongs to a removed
    admin. Read-only: expired rows are left for purge_expired_sessions.
    """
    if not token:
        return None

    session = await find_session(db, token)
    if session is None or not is_session_valid(session, now):
        return None

    return db.get(Admin, session.admin_id)


async def delete_session(db: DBSession, token: str) -> bool:
    """
    Delete a session by token (logout).

    Returns:
        True if a row was deleted, False if there was nothing to delete
    """
    session = await find_session(db, token)
    if session is None:
        return False

    db.delete(session)
    db.commit()
    return True


async def revoke_admin_sessions(db: DBSession, admin_id: UUID) -> int:
    """
    Stage deletion of every session of an admin. The caller commits.

    Returns:
        Number of sessions removed
    """
    statement = select(AdminSession).where(AdminSession.admin_id == admin_id)
    sessions = db.exec(statement).all()

    for session in sessions:
        db.delete(session)

    return len(sessions)


async def get_active_sessions(
    db: DBSession,
    admin_id: UUID,
    now: Optional[datetime] = None,
) -> List[AdminSession]:
    """All unexpired sessions of an admin, newest first."""
    now = now or utcnow()

    statement = (
        select(AdminSession)
        .where(AdminSession.admin_id == admin_id, AdminSession.expires_at > now)
        .order_by(AdminSession.created_at.desc())
    )
    return list(db.exec(statement).all())


async def purge_expired_sessions(db: DBSession, now: Optional[datetime] = None) -> int:
    """
    Delete sessions whose expiry has passed.

    Meant for a periodic job (see scripts/purge_expired.py).

    Returns:
        Number of sessions purged
    """
    now = now or utcnow()

    statement = select(AdminSession).where(AdminSession.expires_at <= now)
    sessions = db.exec(statement).all()

    for session in sessions:
        db.delete(session)
    db.commit()

    return len(sessions)
