"""
Category taxonomy and store models.
"""

from sqlalchemy import (
    Boolean,
    Column,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    TIMESTAMP,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import relationship
import uuid

from domain.models.database import Base, utcnow


class Category(Base):
    """Global item category. Default categories are seed data and read-only."""

    __tablename__ = "category"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(Text, nullable=False)
    slug = Column(String(120), unique=True, nullable=False)
    description = Column(Text)
    icon = Column(String(16))
    color = Column(String(16))
    sort_order = Column(Integer, nullable=False, default=0)
    is_default = Column(Boolean, nullable=False, default=False)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(
        TIMESTAMP(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    store_categories = relationship(
        "StoreCategory", back_populates="category", cascade="all, delete-orphan"
    )
    # Items keep existing when their category goes away; the FK is nulled
    list_items = relationship("ListItem", back_populates="category")


class Store(Base):
    """Grocery store, optionally geolocated"""

    __tablename__ = "store"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(Text, nullable=False)
    chain = Column(Text)
    address = Column(Text)
    latitude = Column(Float)
    longitude = Column(Float)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(
        TIMESTAMP(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    store_categories = relationship(
        "StoreCategory", back_populates="store", cascade="all, delete-orphan"
    )
    favorited_by = relationship(
        "UserFavoriteStore", back_populates="store", cascade="all, delete-orphan"
    )
    shopping_lists = relationship("ShoppingList", back_populates="store")


class StoreCategory(Base):
    """Per-store override of a category's display name, aisle and ordering"""

    __tablename__ = "store_category"
    __table_args__ = (
        UniqueConstraint("store_id", "category_id", name="uq_store_category"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    store_id = Column(
        Uuid, ForeignKey("store.id", ondelete="CASCADE"), nullable=False
    )
    category_id = Column(
        Uuid, ForeignKey("category.id", ondelete="CASCADE"), nullable=False
    )
    custom_name = Column(Text)
    aisle_number = Column(String(32))
    sort_order = Column(Integer, nullable=False, default=0)

    store = relationship("Store", back_populates="store_categories")
    category = relationship("Category", back_populates="store_categories")
