"""
Brokerage Back-Office - Content Database Models

Site content collections: property listings, representatives, editable site
copy, contact form submissions and newsletter subscriptions.

Image and photo fields hold opaque storage ids; resolving them to URLs is the
file store's job.
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional
from uuid import UUID, uuid4

from sqlalchemy import JSON, Boolean, Column, DateTime, Float, Integer, String, Text
from sqlmodel import Field, SQLModel

from brokerage.database import utcnow


class PropertyCategory(str, Enum):
    FOR_SALE = "For Sale"
    FOR_RENT = "For Rent"


class PropertyType(str, Enum):
    LAND = "Land"
    CARCASS = "Carcass"
    PRE_FINISH = "Pre-Finish"
    FINISHED = "Finished"


class Property(SQLModel, table=True):
    """
    A listing shown on the public site.

    featured listings appear in the "Hot Sales" section.
    """
    __tablename__ = "properties"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    title: str = Field(sa_column=Column(String(255), nullable=False))
    price: float = Field(sa_column=Column(Float, nullable=False))
    location: str = Field(sa_column=Column(String(255), nullable=False))
    address: str = Field(sa_column=Column(String(512), nullable=False))
    size: str = Field(sa_column=Column(String(64), nullable=False), description='e.g. "350 sqm"')
    bedrooms: int = Field(sa_column=Column(Integer, nullable=False, default=0))
    property_type: str = Field(sa_column=Column(String(32), index=True, nullable=False))
    category: str = Field(sa_column=Column(String(32), index=True, nullable=False))
    building_type: str = Field(sa_column=Column(String(64), nullable=False))
    images: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    features: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    description: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    featured: bool = Field(
        default=False,
        sa_column=Column(Boolean, index=True, nullable=False, default=False),
    )
    created_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime, index=True, nullable=False),
    )
    updated_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime, nullable=False),
    )


class Representative(SQLModel, table=True):
    """Staff member shown on the about page, sorted by order."""
    __tablename__ = "representatives"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(sa_column=Column(String(255), nullable=False))
    role: str = Field(sa_column=Column(String(255), nullable=False))
    phone: str = Field(sa_column=Column(String(64), nullable=False))
    photo: Optional[str] = Field(default=None, sa_column=Column(String(255), nullable=True))
    email: Optional[str] = Field(default=None, sa_column=Column(String(255), nullable=True))
    order: int = Field(sa_column=Column(Integer, index=True, nullable=False, default=0))
    created_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime, nullable=False),
    )


class SiteContent(SQLModel, table=True):
    """Editable site copy keyed by name, e.g. hero_title."""
    __tablename__ = "site_content"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    key: str = Field(sa_column=Column(String(128), unique=True, index=True, nullable=False))
    value: str = Field(sa_column=Column(Text, nullable=False))
    updated_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime, nullable=False),
    )
    updated_by: UUID = Field(nullable=False, description="Admin who last wrote the value")


class ContactSubmission(SQLModel, table=True):
    """
    Message sent through the public contact form.

    replied implies read.
    """
    __tablename__ = "contact_submissions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(sa_column=Column(String(255), nullable=False))
    email: str = Field(sa_column=Column(String(255), nullable=False))
    phone: str = Field(sa_column=Column(String(64), nullable=False))
    message: str = Field(sa_column=Column(Text, nullable=False))
    read: bool = Field(
        default=False,
        sa_column=Column(Boolean, index=True, nullable=False, default=False),
    )
    replied: bool = Field(
        default=False,
        sa_column=Column(Boolean, nullable=False, default=False),
    )
    created_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime, index=True, nullable=False),
    )


class NewsletterSubscription(SQLModel, table=True):
    """One row per email; unsubscribing flips the flag instead of deleting."""
    __tablename__ = "newsletter_subscriptions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(sa_column=Column(String(255), unique=True, index=True, nullable=False))
    subscribed: bool = Field(
        default=True,
        sa_column=Column(Boolean, index=True, nullable=False, default=True),
    )
    created_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime, index=True, nullable=False),
    )
    unsubscribed_at: Optional[datetime] = Field(
        default=None,
        sa_column=Column(DateTime, nullable=True),
    )
