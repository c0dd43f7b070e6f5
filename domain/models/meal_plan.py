"""
Meal planning and recipe-related models.
"""

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    Enum as SQLEnum,
    ForeignKey,
    Integer,
    Text,
    TIMESTAMP,
    Uuid,
)
from sqlalchemy.orm import relationship
import uuid

from domain.models.database import Base, utcnow
from domain.enums import MealType


class Recipe(Base):
    """Recipe a meal plan entry points at"""

    __tablename__ = "recipe"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(
        Uuid, ForeignKey("app_user.id", ondelete="CASCADE"), nullable=False
    )
    name = Column(Text, nullable=False)
    servings = Column(Integer, nullable=False, default=1)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)

    user = relationship("User", back_populates="recipes")
    meal_plans = relationship(
        "MealPlan", back_populates="recipe", cascade="all, delete-orphan"
    )


class MealPlan(Base):
    """A recipe scheduled for one meal slot on one day"""

    __tablename__ = "meal_plan"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(
        Uuid, ForeignKey("app_user.id", ondelete="CASCADE"), nullable=False
    )
    recipe_id = Column(
        Uuid, ForeignKey("recipe.id", ondelete="CASCADE"), nullable=False
    )
    date = Column(Date, nullable=False)
    meal_type = Column(SQLEnum(MealType), nullable=False)
    servings = Column(Integer, nullable=False, default=1)
    notes = Column(Text)
    is_completed = Column(Boolean, nullable=False, default=False)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(
        TIMESTAMP(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    user = relationship("User", back_populates="meal_plans")
    recipe = relationship("Recipe", back_populates="meal_plans")
