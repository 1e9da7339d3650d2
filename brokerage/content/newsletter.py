"""
Newsletter subscriptions.

subscribe/unsubscribe are upserts keyed on email: a returning subscriber
reactivates their existing row instead of creating a second one.
"""

import logging
from typing import Dict, List, Optional, Tuple
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session as DBSession, select

from brokerage.content.models import NewsletterSubscription
from brokerage.database import utcnow


logger = logging.getLogger(__name__)

SUBSCRIBED = "Successfully subscribed!"
RESUBSCRIBED = "Successfully resubscribed!"
ALREADY_SUBSCRIBED = "You're already subscribed!"
UNSUBSCRIBED = "Successfully unsubscribed!"
NOT_SUBSCRIBED = "Email not found or already unsubscribed."


async def find_subscription(db: DBSession, email: str) -> Optional[NewsletterSubscription]:
    statement = select(NewsletterSubscription).where(NewsletterSubscription.email == email)
    return db.exec(statement).first()


async def subscribe(db: DBSession, email: str) -> Tuple[bool, str]:
    """
    Subscribe an email.

    Returns:
        (success, message). Subscribing an active email is a successful no-op.
    """
    existing = await find_subscription(db, email)

    if existing is not None:
        if existing.subscribed:
            return True, ALREADY_SUBSCRIBED

        existing.subscribed = True
        existing.unsubscribed_at = None
        db.add(existing)
        db.commit()
        logger.info("Newsletter resubscription: %s", existing.id)
        return True, RESUBSCRIBED

    subscription = NewsletterSubscription(email=email, subscribed=True, created_at=utcnow())
    db.add(subscription)
    try:
        db.commit()
    except IntegrityError:
        # Same email inserted concurrently; that row is active
        db.rollback()
        return True, ALREADY_SUBSCRIBED

    logger.info("Newsletter subscription: %s", subscription.id)
    return True, SUBSCRIBED


async def unsubscribe(db: DBSession, email: str) -> Tuple[bool, str]:
    subscription = await find_subscription(db, email)

    if subscription is None or not subscription.subscribed:
        return False, NOT_SUBSCRIBED

    subscription.subscribed = False
    subscription.unsubscribed_at = utcnow()
    db.add(subscription)
    db.commit()
    return True, UNSUBSCRIBED


async def list_subscriptions(
    db: DBSession,
    subscribed: Optional[bool] = None,
) -> List[NewsletterSubscription]:
    """Subscriptions, newest first, optionally filtered by active flag."""
    statement = select(NewsletterSubscription)
    if subscribed is not None:
        statement = statement.where(NewsletterSubscription.subscribed == subscribed)
    statement = statement.order_by(NewsletterSubscription.created_at.desc())
    return list(db.exec(statement).all())


async def newsletter_stats(db: DBSession) -> Dict[str, int]:
    subscriptions = db.exec(select(NewsletterSubscription)).all()
    active = sum(1 for s in subscriptions if s.subscribed)
    return {
        "total": len(subscriptions),
        "subscribed": active,
        "unsubscribed": len(subscriptions) - active,
    }


async def remove_subscription(db: DBSession, subscription_id: UUID) -> bool:
    subscription = db.get(NewsletterSubscription, subscription_id)
    if subscription is None:
        return False

    db.delete(subscription)
    db.commit()
    return True
