"""
Domain schemas package - Pydantic models for repository input and aggregate results.
"""

from domain.schemas.common import QueryOptions
from domain.schemas.user_schemas import (
    UserCreate,
    UserUpdate,
    PreferencesUpdate,
    PreferencesResponse,
    UserWithPreferences,
    UserSummary,
    UserStats,
)
from domain.schemas.catalog_schemas import (
    slugify,
    CategoryCreate,
    CategoryUpdate,
    CategoryResponse,
    CategoryWithStore,
    CategoryWithCount,
    StoreCategoryInput,
    StoreCategoryOverride,
    StoreCreate,
    StoreUpdate,
)
from domain.schemas.list_schemas import (
    MAX_LIST_NAME_LENGTH,
    ShoppingListCreate,
    ShoppingListUpdate,
    ListItemCreate,
    ListItemUpdate,
    ItemPosition,
    CollaboratorCreate,
    CollaboratorWithUser,
    CollaborationWithList,
    ListWithDetails,
    ItemWithDetails,
)
from domain.schemas.meal_plan_schemas import (
    MealPlanCreate,
    MealPlanUpdate,
    MealPlanQueryOptions,
    MealPlanWithDetails,
)

__all__ = [
    "QueryOptions",
    # Users
    "UserCreate",
    "UserUpdate",
    "PreferencesUpdate",
    "PreferencesResponse",
    "UserWithPreferences",
    "UserSummary",
    "UserStats",
    # Catalog
    "slugify",
    "CategoryCreate",
    "CategoryUpdate",
    "CategoryResponse",
    "CategoryWithStore",
    "CategoryWithCount",
    "StoreCategoryInput",
    "StoreCategoryOverride",
    "StoreCreate",
    "StoreUpdate",
    # Lists
    "MAX_LIST_NAME_LENGTH",
    "ShoppingListCreate",
    "ShoppingListUpdate",
    "ListItemCreate",
    "ListItemUpdate",
    "ItemPosition",
    "CollaboratorCreate",
    "CollaboratorWithUser",
    "CollaborationWithList",
    "ListWithDetails",
    "ItemWithDetails",
    # Meal plans
    "MealPlanCreate",
    "MealPlanUpdate",
    "MealPlanQueryOptions",
    "MealPlanWithDetails",
]
