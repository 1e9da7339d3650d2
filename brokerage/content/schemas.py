"""
Brokerage Back-Office - Content Request/Response Schemas
"""

from datetime import datetime
from typing import Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from brokerage.auth.schemas import check_email
from brokerage.content.models import PropertyCategory, PropertyType


# =============================================================================
# Properties
# =============================================================================

class PropertyCreate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    title: str = Field(..., min_length=1, max_length=255)
    price: float = Field(..., ge=0)
    location: str = Field(..., min_length=1)
    address: str = Field(..., min_length=1)
    size: str
    bedrooms: int = Field(0, ge=0)
    property_type: PropertyType
    category: PropertyCategory
    building_type: str
    images: List[str] = Field(default_factory=list, description="Storage ids")
    features: List[str] = Field(default_factory=list)
    description: Optional[str] = None
    featured: bool = False


class PropertyUpdate(BaseModel):
    """Partial update; only fields that are sent are written."""
    model_config = ConfigDict(use_enum_values=True)

    title: Optional[str] = Field(None, min_length=1, max_length=255)
    price: Optional[float] = Field(None, ge=0)
    location: Optional[str] = None
    address: Optional[str] = None
    size: Optional[str] = None
    bedrooms: Optional[int] = Field(None, ge=0)
    property_type: Optional[PropertyType] = None
    category: Optional[PropertyCategory] = None
    building_type: Optional[str] = None
    images: Optional[List[str]] = None
    features: Optional[List[str]] = None
    description: Optional[str] = None
    featured: Optional[bool] = None

    @field_validator(
        "title", "price", "location", "address", "size", "bedrooms",
        "property_type", "category", "building_type", "images", "features", "featured",
    )
    @classmethod
    def not_null(cls, v):
        # May be omitted, but only description can be cleared
        if v is None:
            raise ValueError("field cannot be null")
        return v


class PropertyResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    price: float
    location: str
    address: str
    size: str
    bedrooms: int
    property_type: str
    category: str
    building_type: str
    images: List[str]
    features: List[str]
    description: Optional[str] = None
    featured: bool
    created_at: datetime
    updated_at: datetime


class PropertyStats(BaseModel):
    total: int
    for_sale: int
    for_rent: int
    land: int
    carcass: int
    pre_finish: int
    finished: int
    featured: int


# =============================================================================
# Representatives
# =============================================================================

class RepresentativeCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    role: str = Field(..., min_length=1, max_length=255)
    phone: str = Field(..., min_length=1, max_length=64)
    photo: Optional[str] = Field(None, description="Storage id")
    email: Optional[str] = None
    order: int = 0


class RepresentativeUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    role: Optional[str] = None
    phone: Optional[str] = None
    photo: Optional[str] = None
    email: Optional[str] = None
    order: Optional[int] = None

    @field_validator("name", "role", "phone", "order")
    @classmethod
    def not_null(cls, v):
        # May be omitted, but only photo and email can be cleared
        if v is None:
            raise ValueError("field cannot be null")
        return v


class RepresentativeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    role: str
    phone: str
    photo: Optional[str] = None
    email: Optional[str] = None
    order: int
    created_at: datetime


# =============================================================================
# Site content
# =============================================================================

class SiteContentUpdate(BaseModel):
    value: str


class SiteContentValue(BaseModel):
    key: str
    value: Optional[str] = None


class SiteContentMap(BaseModel):
    content: Dict[str, str]


# =============================================================================
# Contact submissions
# =============================================================================

class ContactCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: str
    phone: str = Field(..., max_length=64)
    message: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def email_format(cls, v):
        return check_email(v)


class ContactResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    email: str
    phone: str
    message: str
    read: bool
    replied: bool
    created_at: datetime


class ContactSubmitted(BaseModel):
    submission_id: UUID
    success: bool = True


class ContactStats(BaseModel):
    total: int
    unread: int
    replied: int


# =============================================================================
# Newsletter
# =============================================================================

class NewsletterRequest(BaseModel):
    email: str

    @field_validator("email")
    @classmethod
    def email_format(cls, v):
        return check_email(v)


class NewsletterResult(BaseModel):
    success: bool
    message: str


class SubscriptionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    subscribed: bool
    created_at: datetime
    unsubscribed_at: Optional[datetime] = None


class NewsletterStats(BaseModel):
    total: int
    subscribed: int
    unsubscribed: int
