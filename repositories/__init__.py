"""
Repositories package - Data access layer.
"""

from repositories.base import DataHandle, EntityStore, paginate, patch_values
from repositories.user_repository import UserRepository
from repositories.category_repository import CategoryRepository
from repositories.store_repository import StoreRepository
from repositories.list_repository import ListRepository
from repositories.item_repository import ItemRepository
from repositories.collaboration_repository import CollaborationRepository
from repositories.meal_plan_repository import MealPlanRepository
from repositories.interfaces import (
    UserRepositoryProtocol,
    CategoryRepositoryProtocol,
    StoreRepositoryProtocol,
    ListRepositoryProtocol,
    ItemRepositoryProtocol,
    CollaborationRepositoryProtocol,
    MealPlanRepositoryProtocol,
    AccessGateProtocol,
)

__all__ = [
    "DataHandle",
    "EntityStore",
    "paginate",
    "patch_values",
    "UserRepository",
    "CategoryRepository",
    "StoreRepository",
    "ListRepository",
    "ItemRepository",
    "CollaborationRepository",
    "MealPlanRepository",
    "UserRepositoryProtocol",
    "CategoryRepositoryProtocol",
    "StoreRepositoryProtocol",
    "ListRepositoryProtocol",
    "ItemRepositoryProtocol",
    "CollaborationRepositoryProtocol",
    "MealPlanRepositoryProtocol",
    "AccessGateProtocol",
]
