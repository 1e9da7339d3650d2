"""
Brokerage Back-Office - Credential Store

Admin identity records: first-admin signup, invitations, role changes and
removal. Authorization is the caller's job; nothing here checks who is asking.
"""

import logging
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session as DBSession, select

from brokerage.auth.models import Admin, Role
from brokerage.auth.password import hash_password
from brokerage.auth.tokens import generate_temp_password
from brokerage.database import utcnow
from brokerage.errors import ConflictError, NotFoundError


logger = logging.getLogger(__name__)

SIGNUP_SLOT = 1
SIGNUP_DISABLED = "Admin signup is disabled. Please contact an existing admin."


async def get_admin_by_email(db: DBSession, email: str) -> Optional[Admin]:
    """Exact (case-sensitive) lookup on the unique email index."""
    statement = select(Admin).where(Admin.email == email)
    return db.exec(statement).first()


async def email_exists(db: DBSession, email: str) -> bool:
    return await get_admin_by_email(db, email) is not None


async def _insert_admin(
    db: DBSession,
    admin: Admin,
    email_taken: str,
    slot_taken: Optional[str] = None,
) -> Admin:
    email = admin.email
    db.add(admin)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race with a concurrent insert of the same email or signup slot
        db.rollback()
        if slot_taken and not await email_exists(db, email):
            raise ConflictError(slot_taken)
        raise ConflictError(email_taken)
    db.refresh(admin)
    return admin


async def create_first_admin(
    db: DBSession,
    email: str,
    name: str,
    password: str,
) -> Admin:
    """
    Create the very first admin through self-service signup.

    Raises:
        ConflictError: Any admin already exists, or the email is taken

    The new admin is always a super_admin. It takes SIGNUP_SLOT, whose unique
    index rejects a concurrent signup that also saw an empty table.
    """
    if db.exec(select(Admin)).first() is not None:
        raise ConflictError(SIGNUP_DISABLED)

    if await email_exists(db, email):
        raise ConflictError("Email already registered")

    admin = Admin(
        email=email,
        name=name,
        role=Role.SUPER_ADMIN,
        password_hash=hash_password(password),
        created_at=utcnow(),
        signup_slot=SIGNUP_SLOT,
    )
    admin = await _insert_admin(db, admin, "Email already registered", SIGNUP_DISABLED)
    logger.info("First admin created: %s", admin.id)
    return admin


async def invite_admin(
    db: DBSession,
    email: str,
    name: str,
    role: Role,
) -> Tuple[Admin, str]:
    """
    Create an admin with a generated temporary password.

    Returns:
        (admin, temp_password). The plaintext password is returned once for
        out-of-band delivery and never stored.

    Raises:
        ConflictError: The email is already registered
    """
    if await email_exists(db, email):
        raise ConflictError("Admin with this email already exists")

    temp_password = generate_temp_password()
    admin = Admin(
        email=email,
        name=name,
        role=Role(role),
        password_hash=hash_password(temp_password),
        created_at=utcnow(),
    )
    admin = await _insert_admin(db, admin, "Admin with this email already exists")
    logger.info("Admin invited: %s (role=%s)", admin.id, admin.role.value)
    return admin, temp_password


async def remove_admin(db: DBSession, admin_id: UUID) -> bool:
    """
    Delete an admin record. Missing ids are a no-op.

    Sessions and reset tokens of the removed admin are left in place; they
    no longer resolve to an identity.
    """
    admin = db.get(Admin, admin_id)
    if admin is None:
        return True

    db.delete(admin)
    db.commit()
    logger.info("Admin removed: %s", admin_id)
    return True


async def update_role(db: DBSession, admin_id: UUID, role: Role) -> Admin:
    """Change an admin's role. Raises NotFoundError for unknown ids."""
    admin = db.get(Admin, admin_id)
    if admin is None:
        raise NotFoundError(f"Admin {admin_id} not found")

    admin.role = Role(role)
    db.add(admin)
    db.commit()
    db.refresh(admin)
    logger.info("Admin %s role set to %s", admin_id, admin.role.value)
    return admin


async def list_admins(db: DBSession) -> List[Admin]:
    """All admins, oldest first."""
    statement = select(Admin).order_by(Admin.created_at)
    return list(db.exec(statement).all())


async def set_password(db: DBSession, admin: Admin, new_password: str) -> None:
    """Replace the stored hash. The caller commits."""
    admin.password_hash = hash_password(new_password)
    db.add(admin)
