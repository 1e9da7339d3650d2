"""
Brokerage Back-Office - Password Reset Flow

Issues and redeems single-use, time-limited reset tokens.

Token lifecycle:
    issued -> redeemed          (reset_password)
    issued -> expired-unredeemed (implicit, once RESET_TOKEN_TTL_MINUTES pass)

Security:
- Requests for unknown emails succeed silently (no account enumeration)
- Every redemption failure uses the same message
- Marking the token used and rewriting the hash commit together
"""

import logging
from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy import update
from sqlmodel import Session as DBSession, select

from brokerage.auth import credentials, sessions as session_service
from brokerage.auth.models import Admin, PasswordResetToken
from brokerage.auth.tokens import generate_token
from brokerage.config import settings
from brokerage.database import utcnow
from brokerage.errors import InvalidTokenError


logger = logging.getLogger(__name__)


def reset_token_ttl() -> timedelta:
    return timedelta(minutes=settings.RESET_TOKEN_TTL_MINUTES)


async def request_reset(
    db: DBSession,
    email: str,
    now: Optional[datetime] = None,
) -> Optional[str]:
    """
    Issue a reset token for the admin with this email.

    Returns:
        The token, or None when no admin has the email. Callers must report
        success either way.
    """
    admin = await credentials.get_admin_by_email(db, email)
    if admin is None:
        logger.info("Password reset requested for unknown email")
        return None

    now = now or utcnow()
    reset_token = PasswordResetToken(
        token=generate_token(),
        admin_id=admin.id,
        expires_at=now + reset_token_ttl(),
        used=False,
        created_at=now,
    )
    db.add(reset_token)
    db.commit()

    logger.info("Password reset token issued for admin %s", admin.id)
    return reset_token.token


def is_redeemable(reset_token: PasswordResetToken, now: Optional[datetime] = None) -> bool:
    return not reset_token.used and (now or utcnow()) < reset_token.expires_at


async def reset_password(
    db: DBSession,
    token: str,
    new_password: str,
    now: Optional[datetime] = None,
) -> None:
    """
    Redeem a reset token and set a new password.

    Raises:
        InvalidTokenError: Token unknown, already used, expired, or its admin
            no longer exists

    The used flag is flipped with a conditional UPDATE so that of two
    concurrent redemptions only one matches a row.
    """
    statement = select(PasswordResetToken).where(PasswordResetToken.token == token)
    reset_token = db.exec(statement).first()

    if reset_token is None or not is_redeemable(reset_token, now):
        raise InvalidTokenError()

    claimed = db.exec(
        update(PasswordResetToken)
        .where(
            PasswordResetToken.id == reset_token.id,
            PasswordResetToken.used == False,  # noqa: E712
        )
        .values(used=True)
    )
    if claimed.rowcount != 1:
        db.rollback()
        raise InvalidTokenError()

    admin = db.get(Admin, reset_token.admin_id)
    if admin is None:
        db.rollback()
        raise InvalidTokenError()

    await credentials.set_password(db, admin, new_password)

    revoked = 0
    if settings.REVOKE_SESSIONS_ON_PASSWORD_RESET:
        revoked = await session_service.revoke_admin_sessions(db, admin.id)

    db.commit()

    logger.info(
        "Password reset redeemed for admin %s (sessions revoked: %d)",
        admin.id,
        revoked,
    )


async def purge_spent_tokens(db: DBSession, now: Optional[datetime] = None) -> int:
    """
    Delete reset tokens that are used or expired.

    Returns:
        Number of tokens purged
    """
    now = now or utcnow()

    statement = select(PasswordResetToken).where(
        (PasswordResetToken.used == True) | (PasswordResetToken.expires_at <= now)  # noqa: E712
    )
    tokens = db.exec(statement).all()

    for reset_token in tokens:
        db.delete(reset_token)
    db.commit()

    return len(tokens)
