"""
Brokerage Back-Office - Content Routes

Public read endpoints for the marketing site and admin write endpoints:
- /properties        listings (writes need manage:content)
- /representatives   staff (writes need manage:content)
- /site-content      editable copy (writes need manage:content)
- /contact           form submissions (inbox needs manage:inbox)
- /newsletter        subscriptions (admin views need manage:inbox)
"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Query, status
from sqlmodel import Session as DBSession

from brokerage.auth.dependencies import get_db, require_permission
from brokerage.auth.principal import Authenticated
from brokerage.auth.rbac import Permission
from brokerage.auth.schemas import SuccessResponse
from brokerage.content import contacts, newsletter, properties, representatives, site_content
from brokerage.content.models import PropertyCategory, PropertyType
from brokerage.content.schemas import (
    ContactCreate,
    ContactResponse,
    ContactStats,
    ContactSubmitted,
    NewsletterRequest,
    NewsletterResult,
    NewsletterStats,
    PropertyCreate,
    PropertyResponse,
    PropertyStats,
    PropertyUpdate,
    RepresentativeCreate,
    RepresentativeResponse,
    RepresentativeUpdate,
    SiteContentMap,
    SiteContentUpdate,
    SiteContentValue,
    SubscriptionResponse,
)
from brokerage.errors import NotFoundError


content_editor = require_permission(Permission.MANAGE_CONTENT)
inbox_reader = require_permission(Permission.MANAGE_INBOX)


# =============================================================================
# Properties
# =============================================================================

properties_router = APIRouter(prefix="/properties", tags=["properties"])


@properties_router.get("", response_model=List[PropertyResponse])
async def list_properties(
    category: Optional[PropertyCategory] = Query(None),
    property_type: Optional[PropertyType] = Query(None),
    featured: Optional[bool] = Query(None),
    db: DBSession = Depends(get_db),
):
    return await properties.list_properties(
        db,
        category=category.value if category else None,
        property_type=property_type.value if property_type else None,
        featured=featured,
    )


@properties_router.get("/stats", response_model=PropertyStats)
async def get_property_stats(db: DBSession = Depends(get_db)):
    return PropertyStats(**await properties.property_stats(db))


@properties_router.get("/{property_id}", response_model=PropertyResponse)
async def get_property(property_id: UUID = Path(...), db: DBSession = Depends(get_db)):
    listing = await properties.get_property(db, property_id)
    if listing is None:
        raise NotFoundError(f"Property {property_id} not found")
    return listing


@properties_router.post("", response_model=PropertyResponse, status_code=status.HTTP_201_CREATED)
async def create_property(
    body: PropertyCreate,
    principal: Authenticated = Depends(content_editor),
    db: DBSession = Depends(get_db),
):
    return await properties.create_property(db, body.model_dump())


@properties_router.patch("/{property_id}", response_model=PropertyResponse)
async def update_property(
    body: PropertyUpdate,
    property_id: UUID = Path(...),
    principal: Authenticated = Depends(content_editor),
    db: DBSession = Depends(get_db),
):
    return await properties.update_property(db, property_id, body.model_dump(exclude_unset=True))


@properties_router.delete("/{property_id}", response_model=SuccessResponse)
async def delete_property(
    property_id: UUID = Path(...),
    principal: Authenticated = Depends(content_editor),
    db: DBSession = Depends(get_db),
):
    await properties.remove_property(db, property_id)
    return SuccessResponse()


# =============================================================================
# Representatives
# =============================================================================

representatives_router = APIRouter(prefix="/representatives", tags=["representatives"])


@representatives_router.get("", response_model=List[RepresentativeResponse])
async def list_representatives(db: DBSession = Depends(get_db)):
    return await representatives.list_representatives(db)


@representatives_router.get("/{rep_id}", response_model=RepresentativeResponse)
async def get_representative(rep_id: UUID = Path(...), db: DBSession = Depends(get_db)):
    rep = await representatives.get_representative(db, rep_id)
    if rep is None:
        raise NotFoundError(f"Representative {rep_id} not found")
    return rep


@representatives_router.post(
    "",
    response_model=RepresentativeResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_representative(
    body: RepresentativeCreate,
    principal: Authenticated = Depends(content_editor),
    db: DBSession = Depends(get_db),
):
    return await representatives.create_representative(db, body.model_dump())


@representatives_router.patch("/{rep_id}", response_model=RepresentativeResponse)
async def update_representative(
    body: RepresentativeUpdate,
    rep_id: UUID = Path(...),
    principal: Authenticated = Depends(content_editor),
    db: DBSession = Depends(get_db),
):
    return await representatives.update_representative(
        db, rep_id, body.model_dump(exclude_unset=True)
    )


@representatives_router.delete("/{rep_id}", response_model=SuccessResponse)
async def delete_representative(
    rep_id: UUID = Path(...),
    principal: Authenticated = Depends(content_editor),
    db: DBSession = Depends(get_db),
):
    await representatives.remove_representative(db, rep_id)
    return SuccessResponse()


# =============================================================================
# Site content
# =============================================================================

site_content_router = APIRouter(prefix="/site-content", tags=["site-content"])


@site_content_router.get("", response_model=SiteContentMap)
async def get_all_content(db: DBSession = Depends(get_db)):
    return SiteContentMap(content=await site_content.get_all(db))


@site_content_router.get("/{key}", response_model=SiteContentValue)
async def get_content(key: str = Path(...), db: DBSession = Depends(get_db)):
    """Unknown keys return a null value, not 404."""
    return SiteContentValue(key=key, value=await site_content.get_value(db, key))


@site_content_router.put("/{key}", response_model=SiteContentValue)
async def set_content(
    body: SiteContentUpdate,
    key: str = Path(..., min_length=1, max_length=128),
    principal: Authenticated = Depends(content_editor),
    db: DBSession = Depends(get_db),
):
    entry = await site_content.set_value(db, key, body.value, updated_by=principal.admin.id)
    return SiteContentValue(key=entry.key, value=entry.value)


# =============================================================================
# Contact submissions
# =============================================================================

contact_router = APIRouter(prefix="/contact", tags=["contact"])


@contact_router.post("", response_model=ContactSubmitted, status_code=status.HTTP_201_CREATED)
async def submit_contact(body: ContactCreate, db: DBSession = Depends(get_db)):
    submission = await contacts.submit(
        db, name=body.name, email=body.email, phone=body.phone, message=body.message
    )
    return ContactSubmitted(submission_id=submission.id)


@contact_router.get("", response_model=List[ContactResponse])
async def list_contacts(
    unread_only: bool = Query(False),
    principal: Authenticated = Depends(inbox_reader),
    db: DBSession = Depends(get_db),
):
    return await contacts.list_submissions(db, unread_only=unread_only)


@contact_router.get("/stats", response_model=ContactStats)
async def get_contact_stats(
    principal: Authenticated = Depends(inbox_reader),
    db: DBSession = Depends(get_db),
):
    return ContactStats(**await contacts.contact_stats(db))


@contact_router.post("/{submission_id}/read", response_model=ContactResponse)
async def mark_contact_read(
    submission_id: UUID = Path(...),
    principal: Authenticated = Depends(inbox_reader),
    db: DBSession = Depends(get_db),
):
    return await contacts.mark_as_read(db, submission_id)


@contact_router.post("/{submission_id}/replied", response_model=ContactResponse)
async def mark_contact_replied(
    submission_id: UUID = Path(...),
    principal: Authenticated = Depends(inbox_reader),
    db: DBSession = Depends(get_db),
):
    return await contacts.mark_as_replied(db, submission_id)


@contact_router.delete("/{submission_id}", response_model=SuccessResponse)
async def delete_contact(
    submission_id: UUID = Path(...),
    principal: Authenticated = Depends(inbox_reader),
    db: DBSession = Depends(get_db),
):
    await contacts.remove_submission(db, submission_id)
    return SuccessResponse()


# =============================================================================
# Newsletter
# =============================================================================

newsletter_router = APIRouter(prefix="/newsletter", tags=["newsletter"])


@newsletter_router.post("/subscribe", response_model=NewsletterResult)
async def subscribe(body: NewsletterRequest, db: DBSession = Depends(get_db)):
    success, message = await newsletter.subscribe(db, body.email)
    return NewsletterResult(success=success, message=message)


@newsletter_router.post("/unsubscribe", response_model=NewsletterResult)
async def unsubscribe(body: NewsletterRequest, db: DBSession = Depends(get_db)):
    success, message = await newsletter.unsubscribe(db, body.email)
    return NewsletterResult(success=success, message=message)


@newsletter_router.get("/subscriptions", response_model=List[SubscriptionResponse])
async def list_subscriptions(
    subscribed: Optional[bool] = Query(None),
    principal: Authenticated = Depends(inbox_reader),
    db: DBSession = Depends(get_db),
):
    return await newsletter.list_subscriptions(db, subscribed=subscribed)


@newsletter_router.get("/stats", response_model=NewsletterStats)
async def get_newsletter_stats(
    principal: Authenticated = Depends(inbox_reader),
    db: DBSession = Depends(get_db),
):
    return NewsletterStats(**await newsletter.newsletter_stats(db))


@newsletter_router.delete("/subscriptions/{subscription_id}", response_model=SuccessResponse)
async def delete_subscription(
    subscription_id: UUID = Path(...),
    principal: Authenticated = Depends(inbox_reader),
    db: DBSession = Depends(get_db),
):
    await newsletter.remove_subscription(db, subscription_id)
    return SuccessResponse()


routers = [
    properties_router,
    representatives_router,
    site_content_router,
    contact_router,
    newsletter_router,
]
