from pydantic import BaseModel, Field, field_validator
from typing import Optional
from uuid import UUID
import re


_SLUG_STRIP = re.compile(r"[^a-z0-9]+")


def slugify(value: str) -> str:
    """Lower-case ``value`` and join its alphanumeric runs with dashes"""
    return _SLUG_STRIP.sub("-", value.lower()).strip("-")


class CategoryCreate(BaseModel):
    """Schema for creating a category; the slug is derived from the name when omitted"""

    name: str = Field(..., min_length=1, max_length=100)
    slug: Optional[str] = Field(None, min_length=1, max_length=120)
    description: Optional[str] = None
    icon: Optional[str] = None
    color: Optional[str] = None
    sort_order: int = 0
    is_default: bool = False

    @field_validator("slug")
    @classmethod
    def normalize_slug(cls, v):
        return slugify(v) if v else v

    def resolved_slug(self) -> str:
        return self.slug or slugify(self.name)


class CategoryUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    slug: Optional[str] = Field(None, min_length=1, max_length=120)
    description: Optional[str] = None
    icon: Optional[str] = None
    color: Optional[str] = None
    sort_order: Optional[int] = None

    @field_validator("slug")
    @classmethod
    def normalize_slug(cls, v):
        return slugify(v) if v else v


class CategoryResponse(BaseModel):
    id: UUID
    name: str
    slug: str
    description: Optional[str] = None
    icon: Optional[str] = None
    color: Optional[str] = None
    sort_order: int
    is_default: bool

    model_config = {"from_attributes": True}


class StoreCategoryInput(BaseModel):
    """Override of one category for one store"""

    category_id: UUID
    custom_name: Optional[str] = None
    aisle_number: Optional[str] = Field(None, max_length=32)
    sort_order: int = 0


class StoreCategoryOverride(BaseModel):
    id: UUID
    custom_name: Optional[str] = None
    aisle_number: Optional[str] = None
    sort_order: int

    model_config = {"from_attributes": True}


class CategoryWithStore(CategoryResponse):
    """Default category with the store's override, or None when the store has none"""

    store_category: Optional[StoreCategoryOverride] = None


class CategoryWithCount(CategoryResponse):
    item_count: int = 0


class StoreCreate(BaseModel):
    name: str = Field(..., min_length=1)
    chain: Optional[str] = None
    address: Optional[str] = None
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)


class StoreUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    chain: Optional[str] = None
    address: Optional[str] = None
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
