"""
Domain models package - SQLAlchemy ORM models.
"""

from domain.models.database import (
    Base,
    Database,
    SessionHandle,
    build_engine,
    utcnow,
)
from domain.models.user import User, UserPreferences, UserFavoriteStore
from domain.models.catalog import Category, Store, StoreCategory
from domain.models.shopping import ShoppingList, ListItem, ListCollaborator
from domain.models.meal_plan import Recipe, MealPlan

__all__ = [
    # Database
    "Base",
    "Database",
    "SessionHandle",
    "build_engine",
    "utcnow",
    # User models
    "User",
    "UserPreferences",
    "UserFavoriteStore",
    # Catalog models
    "Category",
    "Store",
    "StoreCategory",
    # Shopping models
    "ShoppingList",
    "ListItem",
    "ListCollaborator",
    # Meal plan models
    "Recipe",
    "MealPlan",
]
