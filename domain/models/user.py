"""
User-related database models.
"""

from sqlalchemy import (
    Boolean,
    Column,
    Enum as SQLEnum,
    ForeignKey,
    Numeric,
    String,
    Text,
    TIMESTAMP,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import relationship
import uuid

from domain.models.database import Base, utcnow
from domain.enums import AuthProvider, Theme


class User(Base):
    """User account model"""

    __tablename__ = "app_user"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    email = Column(String(320), unique=True, nullable=False)
    name = Column(Text)
    avatar_url = Column(Text)
    provider = Column(SQLEnum(AuthProvider), nullable=False, default=AuthProvider.EMAIL)
    provider_id = Column(String(255))
    password_hash = Column(Text)
    email_verified = Column(Boolean, nullable=False, default=False)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(
        TIMESTAMP(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    # Relationships
    preferences = relationship(
        "UserPreferences",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
    )
    shopping_lists = relationship(
        "ShoppingList", back_populates="owner", cascade="all, delete-orphan"
    )
    collaborations = relationship(
        "ListCollaborator", back_populates="user", cascade="all, delete-orphan"
    )
    favorite_stores = relationship(
        "UserFavoriteStore", back_populates="user", cascade="all, delete-orphan"
    )
    meal_plans = relationship(
        "MealPlan", back_populates="user", cascade="all, delete-orphan"
    )
    recipes = relationship(
        "Recipe", back_populates="user", cascade="all, delete-orphan"
    )
    added_items = relationship("ListItem", back_populates="added_by")


class UserPreferences(Base):
    """Per-user application preferences (1:1 with User)"""

    __tablename__ = "user_preferences"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(
        Uuid,
        ForeignKey("app_user.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    default_budget_warning = Column(Numeric(10, 2))
    default_currency = Column(String(3), nullable=False, default="USD")
    notifications_enabled = Column(Boolean, nullable=False, default=True)
    location_reminders = Column(Boolean, nullable=False, default=False)
    theme = Column(SQLEnum(Theme), nullable=False, default=Theme.SYSTEM)
    updated_at = Column(
        TIMESTAMP(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    user = relationship("User", back_populates="preferences")


class UserFavoriteStore(Base):
    """Stores a user marked as favorite"""

    __tablename__ = "user_favorite_store"
    __table_args__ = (UniqueConstraint("user_id", "store_id", name="uq_favorite_user_store"),)

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(
        Uuid, ForeignKey("app_user.id", ondelete="CASCADE"), nullable=False
    )
    store_id = Column(
        Uuid, ForeignKey("store.id", ondelete="CASCADE"), nullable=False
    )
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)

    user = relationship("User", back_populates="favorite_stores")
    store = relationship("Store", back_populates="favorited_by")
