"""
Shopping list, list item and collaboration models.
"""

from sqlalchemy import (
    Boolean,
    Column,
    Enum as SQLEnum,
    ForeignKey,
    Integer,
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
from domain.enums import CollaboratorRole, ListStatus


class ShoppingList(Base):
    """A shopping list owned by exactly one user"""

    __tablename__ = "shopping_list"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(Text, nullable=False)
    description = Column(Text)
    status = Column(SQLEnum(ListStatus), nullable=False, default=ListStatus.ACTIVE)
    owner_id = Column(
        Uuid, ForeignKey("app_user.id", ondelete="CASCADE"), nullable=False
    )
    store_id = Column(Uuid, ForeignKey("store.id", ondelete="SET NULL"))
    budget = Column(Numeric(10, 2))
    color = Column(String(16))
    icon = Column(String(16))
    is_template = Column(Boolean, nullable=False, default=False)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(
        TIMESTAMP(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    owner = relationship("User", back_populates="shopping_lists")
    store = relationship("Store", back_populates="shopping_lists")
    items = relationship(
        "ListItem",
        back_populates="list",
        cascade="all, delete-orphan",
        order_by="ListItem.sort_order",
    )
    collaborators = relationship(
        "ListCollaborator", back_populates="list", cascade="all, delete-orphan"
    )


class ListItem(Base):
    """A line on a shopping list"""

    __tablename__ = "list_item"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    list_id = Column(
        Uuid, ForeignKey("shopping_list.id", ondelete="CASCADE"), nullable=False
    )
    name = Column(Text, nullable=False)
    quantity = Column(Numeric(10, 3), nullable=False, default=1)
    unit = Column(String(32))
    notes = Column(Text)
    priority = Column(Integer, nullable=False, default=0)
    is_checked = Column(Boolean, nullable=False, default=False)
    checked_at = Column(TIMESTAMP(timezone=True))
    estimated_price = Column(Numeric(10, 2))
    category_id = Column(Uuid, ForeignKey("category.id", ondelete="SET NULL"))
    sort_order = Column(Integer, nullable=False, default=0)
    added_by_id = Column(Uuid, ForeignKey("app_user.id", ondelete="SET NULL"))
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(
        TIMESTAMP(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    list = relationship("ShoppingList", back_populates="items")
    category = relationship("Category", back_populates="list_items")
    added_by = relationship("User", back_populates="added_items")


class ListCollaborator(Base):
    """A user granted access to a list they do not own"""

    __tablename__ = "list_collaborator"
    __table_args__ = (
        UniqueConstraint("list_id", "user_id", name="uq_list_collaborator"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    list_id = Column(
        Uuid, ForeignKey("shopping_list.id", ondelete="CASCADE"), nullable=False
    )
    user_id = Column(
        Uuid, ForeignKey("app_user.id", ondelete="CASCADE"), nullable=False
    )
    role = Column(
        SQLEnum(CollaboratorRole), nullable=False, default=CollaboratorRole.VIEWER
    )
    joined_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)

    list = relationship("ShoppingList", back_populates="collaborators")
    user = relationship("User", back_populates="collaborations")
