"""Representatives shown on the public about page."""

from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlmodel import Session as DBSession, select

from brokerage.content.models import Representative
from brokerage.database import utcnow
from brokerage.errors import NotFoundError


async def list_representatives(db: DBSession) -> List[Representative]:
    statement = select(Representative).order_by(Representative.order, Representative.created_at)
    return list(db.exec(statement).all())


async def get_representative(db: DBSession, rep_id: UUID) -> Optional[Representative]:
    return db.get(Representative, rep_id)


async def create_representative(db: DBSession, data: Dict[str, Any]) -> Representative:
    rep = Representative(**data, created_at=utcnow())
    db.add(rep)
    db.commit()
    db.refresh(rep)
    return rep


async def update_representative(
    db: DBSession,
    rep_id: UUID,
    updates: Dict[str, Any],
) -> Representative:
    rep = db.get(Representative, rep_id)
    if rep is None:
        raise NotFoundError(f"Representative {rep_id} not found")

    for field, value in updates.items():
        setattr(rep, field, value)

    db.add(rep)
    db.commit()
    db.refresh(rep)
    return rep


async def remove_representative(db: DBSession, rep_id: UUID) -> bool:
    rep = db.get(Representative, rep_id)
    if rep is None:
        return False

    db.delete(rep)
    db.commit()
    return True
