"""
Contact form submissions.

Each submission tracks two flags: read and replied. Marking replied also
marks read.
"""

import logging
from typing import Dict, List
from uuid import UUID

from sqlmodel import Session as DBSession, select

from brokerage.content.models import ContactSubmission
from brokerage.database import utcnow
from brokerage.errors import NotFoundError


logger = logging.getLogger(__name__)


async def submit(db: DBSession, name: str, email: str, phone: str, message: str) -> ContactSubmission:
    submission = ContactSubmission(
        name=name,
        email=email,
        phone=phone,
        message=message,
        read=False,
        replied=False,
        created_at=utcnow(),
    )
    db.add(submission)
    db.commit()
    db.refresh(submission)

    logger.info("Contact submission received: %s", submission.id)
    return submission


async def list_submissions(db: DBSession, unread_only: bool = False) -> List[ContactSubmission]:
    """Submissions, newest first."""
    statement = select(ContactSubmission)
    if unread_only:
        statement = statement.where(ContactSubmission.read == False)  # noqa: E712
    statement = statement.order_by(ContactSubmission.created_at.desc())
    return list(db.exec(statement).all())


async def _get_or_raise(db: DBSession, submission_id: UUID) -> ContactSubmission:
    submission = db.get(ContactSubmission, submission_id)
    if submission is None:
        raise NotFoundError(f"Contact submission {submission_id} not found")
    return submission


async def mark_as_read(db: DBSession, submission_id: UUID) -> ContactSubmission:
    submission = await _get_or_raise(db, submission_id)
    submission.read = True

    db.add(submission)
    db.commit()
    db.refresh(submission)
    return submission


async def mark_as_replied(db: DBSession, submission_id: UUID) -> ContactSubmission:
    submission = await _get_or_raise(db, submission_id)
    submission.replied = True
    submission.read = True

    db.add(submission)
    db.commit()
    db.refresh(submission)
    return submission


async def remove_submission(db: DBSession, submission_id: UUID) -> bool:
    submission = db.get(ContactSubmission, submission_id)
    if submission is None:
        return False

    db.delete(submission)
    db.commit()
    return True


async def contact_stats(db: DBSession) -> Dict[str, int]:
    submissions = db.exec(select(ContactSubmission)).all()
    return {
        "total": len(submissions),
        "unread": sum(1 for s in submissions if not s.read),
        "replied": sum(1 for s in submissions if s.replied),
    }
