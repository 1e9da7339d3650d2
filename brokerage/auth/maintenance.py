"""
Storage reclamation for lazily-expired auth rows.

Expired sessions and spent reset tokens are ignored at read time but never
deleted by the request path. purge_expired() removes them; run it from cron
(scripts/purge_expired.py) or through the admin maintenance endpoint.
"""

import logging
from datetime import datetime
from typing import Dict, Optional

from sqlmodel import Session as DBSession

from brokerage.auth import password_reset, sessions as session_service
from brokerage.database import utcnow


logger = logging.getLogger(__name__)


async def purge_expired(db: DBSession, now: Optional[datetime] = None) -> Dict[str, int]:
    now = now or utcnow()

    result = {
        "sessions": await session_service.purge_expired_sessions(db, now=now),
        "reset_tokens": await password_reset.purge_spent_tokens(db, now=now),
    }
    logger.info(
        "Purged %d expired sessions and %d spent reset tokens",
        result["sessions"],
        result["reset_tokens"],
    )
    return result
