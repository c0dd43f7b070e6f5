from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import datetime
from uuid import UUID
from decimal import Decimal

from domain.enums import AuthProvider, Theme


def _normalize_email(value):
    if isinstance(value, str):
        value = value.strip().lower()
        if "@" not in value:
            raise ValueError("Invalid email address")
    return value


class UserCreate(BaseModel):
    """Schema for creating a user account"""

    email: str = Field(..., max_length=320)
    name: Optional[str] = None
    avatar_url: Optional[str] = None
    provider: AuthProvider = AuthProvider.EMAIL
    provider_id: Optional[str] = None
    password_hash: Optional[str] = None
    email_verified: bool = False
    is_active: bool = True

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v):
        return _normalize_email(v)


class UserUpdate(BaseModel):
    """Partial user update; only explicitly set fields are applied"""

    email: Optional[str] = Field(None, max_length=320)
    name: Optional[str] = None
    avatar_url: Optional[str] = None
    email_verified: Optional[bool] = None
    is_active: Optional[bool] = None

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v):
        return _normalize_email(v)


class PreferencesUpdate(BaseModel):
    """Partial update of user preferences (created on first write)"""

    default_budget_warning: Optional[Decimal] = Field(None, gt=0, decimal_places=2)
    default_currency: Optional[str] = Field(None, min_length=3, max_length=3)
    notifications_enabled: Optional[bool] = None
    location_reminders: Optional[bool] = None
    theme: Optional[Theme] = None

    @field_validator("default_currency")
    @classmethod
    def upper_currency(cls, v):
        return v.upper() if v else v


class PreferencesResponse(BaseModel):
    id: UUID
    default_budget_warning: Optional[Decimal] = None
    default_currency: str
    notifications_enabled: bool
    location_reminders: bool
    theme: Theme

    model_config = {"from_attributes": True}


class UserWithPreferences(BaseModel):
    """User plus their preferences row, if any"""

    id: UUID
    email: str
    name: Optional[str] = None
    avatar_url: Optional[str] = None
    provider: AuthProvider
    is_active: bool
    created_at: datetime
    preferences: Optional[PreferencesResponse] = None

    model_config = {"from_attributes": True}


class UserSummary(BaseModel):
    """Public subset of a user returned by searches"""

    id: UUID
    email: str
    name: Optional[str] = None
    avatar_url: Optional[str] = None

    model_config = {"from_attributes": True}


class UserStats(BaseModel):
    list_count: int = 0
    item_count: int = 0
    collaboration_count: int = 0
