"""
Property listings: filtered listing, CRUD and dashboard counts.
"""

import logging
from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlmodel import Session as DBSession, select

from brokerage.content.models import Property, PropertyCategory, PropertyType
from brokerage.database import utcnow
from brokerage.errors import NotFoundError


logger = logging.getLogger(__name__)


async def list_properties(
    db: DBSession,
    category: Optional[str] = None,
    property_type: Optional[str] = None,
    featured: Optional[bool] = None,
) -> List[Property]:
    """
    Listings matching every given filter, newest first.

    Filters combine with AND; one that is not given matches everything.
    """
    statement = select(Property)

    if featured is not None:
        statement = statement.where(Property.featured == featured)
    if category:
        statement = statement.where(Property.category == category)
    if property_type:
        statement = statement.where(Property.property_type == property_type)

    statement = statement.order_by(Property.created_at.desc())
    return list(db.exec(statement).all())


async def get_property(db: DBSession, property_id: UUID) -> Optional[Property]:
    return db.get(Property, property_id)


async def create_property(db: DBSession, data: Dict[str, Any]) -> Property:
    now = utcnow()
    listing = Property(**data, created_at=now, updated_at=now)

    db.add(listing)
    db.commit()
    db.refresh(listing)

    logger.info("Property created: %s", listing.id)
    return listing


async def update_property(db: DBSession, property_id: UUID, updates: Dict[str, Any]) -> Property:
    """
    Patch the given fields and bump updated_at.

    Raises:
        NotFoundError: No property with this id
    """
    listing = db.get(Property, property_id)
    if listing is None:
        raise NotFoundError(f"Property {property_id} not found")

    for field, value in updates.items():
        setattr(listing, field, value)
    listing.updated_at = utcnow()

    db.add(listing)
    db.commit()
    db.refresh(listing)
    return listing


async def remove_property(db: DBSession, property_id: UUID) -> bool:
    """Delete a property. Missing ids are a no-op."""
    listing = db.get(Property, property_id)
    if listing is None:
        return False

    db.delete(listing)
    db.commit()
    logger.info("Property removed: %s", property_id)
    return True


async def property_stats(db: DBSession) -> Dict[str, int]:
    """Counts by category, type and featured flag for the dashboard."""
    listings = db.exec(select(Property)).all()

    def count(predicate) -> int:
        return sum(1 for p in listings if predicate(p))

    return {
        "total": len(listings),
        "for_sale": count(lambda p: p.category == PropertyCategory.FOR_SALE.value),
        "for_rent": count(lambda p: p.category == PropertyCategory.FOR_RENT.value),
        "land": count(lambda p: p.property_type == PropertyType.LAND.value),
        "carcass": count(lambda p: p.property_type == PropertyType.CARCASS.value),
        "pre_finish": count(lambda p: p.property_type == PropertyType.PRE_FINISH.value),
        "finished": count(lambda p: p.property_type == PropertyType.FINISHED.value),
        "featured": count(lambda p: p.featured),
    }
