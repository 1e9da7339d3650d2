"""
Editable site copy (hero title, hot-sales blurb, ...), keyed by name.

Writes are upserts on the unique key and record the admin who made them.
"""

import logging
from typing import Dict, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session as DBSession, select

from brokerage.content.models import SiteContent
from brokerage.database import utcnow


logger = logging.getLogger(__name__)


async def _find(db: DBSession, key: str) -> Optional[SiteContent]:
    return db.exec(select(SiteContent).where(SiteContent.key == key)).first()


async def get_value(db: DBSession, key: str) -> Optional[str]:
    entry = await _find(db, key)
    return entry.value if entry else None


async def get_all(db: DBSession) -> Dict[str, str]:
    return {entry.key: entry.value for entry in db.exec(select(SiteContent)).all()}


async def set_value(db: DBSession, key: str, value: str, updated_by: UUID) -> SiteContent:
    """Insert or overwrite the value for key."""
    entry = await _find(db, key)
    if entry is None:
        entry = SiteContent(key=key, value=value)

    entry.value = value
    entry.updated_at = utcnow()
    entry.updated_by = updated_by
    db.add(entry)

    try:
        db.commit()
    except IntegrityError:
        # A concurrent writer inserted the key first; overwrite theirs
        db.rollback()
        entry = await _find(db, key)
        entry.value = value
        entry.updated_at = utcnow()
        entry.updated_by = updated_by
        db.add(entry)
        db.commit()

    db.refresh(entry)
    logger.info("Site content %r updated by admin %s", key, updated_by)
    return entry
