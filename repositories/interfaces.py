"""
Repository contracts.

One Protocol per repository. The service layer types its dependencies
against these so a fake or an alternative storage backend can stand in
for the SQLAlchemy implementations. All of them are runtime checkable.
"""

from __future__ import annotations

import datetime as dt
from decimal import Decimal
from typing import List, Optional, Protocol, Sequence, runtime_checkable
from uuid import UUID

from domain.enums import AuthProvider, CollaboratorRole, MealType
from domain.models import (
    Category,
    ListCollaborator,
    ListItem,
    MealPlan,
    ShoppingList,
    Store,
    StoreCategory,
    User,
    UserFavoriteStore,
    UserPreferences,
)
from domain.schemas import (
    CategoryCreate,
    CategoryUpdate,
    CategoryWithCount,
    CategoryWithStore,
    CollaborationWithList,
    CollaboratorCreate,
    CollaboratorWithUser,
    ItemPosition,
    ItemWithDetails,
    ListItemCreate,
    ListItemUpdate,
    ListWithDetails,
    MealPlanCreate,
    MealPlanQueryOptions,
    MealPlanUpdate,
    MealPlanWithDetails,
    PreferencesUpdate,
    QueryOptions,
    ShoppingListCreate,
    ShoppingListUpdate,
    StoreCategoryInput,
    StoreCreate,
    StoreUpdate,
    UserCreate,
    UserStats,
    UserSummary,
    UserUpdate,
    UserWithPreferences,
)
from services.store_locator import StoreWithDistance


@runtime_checkable
class UserRepositoryProtocol(Protocol):
    def create(self, data: UserCreate) -> User: ...

    def find_by_id(self, user_id: UUID) -> Optional[User]: ...

    def find_by_id_with_preferences(self, user_id: UUID) -> Optional[UserWithPreferences]: ...

    def find_by_email(self, email: str) -> Optional[User]: ...

    def find_by_provider(self, provider: AuthProvider, provider_id: str) -> Optional[User]: ...

    def update(self, user_id: UUID, patch: UserUpdate) -> User: ...

    def delete(self, user_id: UUID) -> None: ...

    def update_preferences(self, user_id: UUID, patch: PreferencesUpdate) -> UserPreferences: ...

    def get_stats(self, user_id: UUID) -> UserStats: ...

    def search_by_email(self, query: str, limit: int = ...) -> List[UserSummary]: ...


@runtime_checkable
class CategoryRepositoryProtocol(Protocol):
    def create(self, data: CategoryCreate) -> Category: ...

    def find_by_id(self, category_id: UUID) -> Optional[Category]: ...

    def find_by_slug(self, slug: str) -> Optional[Category]: ...

    def update(self, category_id: UUID, patch: CategoryUpdate) -> Category: ...

    def delete(self, category_id: UUID) -> None: ...

    def find_defaults(self) -> List[Category]: ...

    def find_by_store(self, store_id: UUID) -> List[CategoryWithStore]: ...

    def find_with_usage_count(self) -> List[CategoryWithCount]: ...

    def get_usage_stats(self, user_id: UUID) -> List[CategoryWithCount]: ...

    def search(self, query: str, limit: int = ...) -> List[Category]: ...

    def find_best_match(self, item_name: str) -> Optional[Category]: ...

    def create_store_category(self, store_id: UUID, data: StoreCategoryInput) -> StoreCategory: ...

    def upsert_store_category(self, store_id: UUID, data: StoreCategoryInput) -> StoreCategory: ...

    def delete_store_category(self, store_id: UUID, category_id: UUID) -> None: ...

    def customize_for_store(
        self, store_id: UUID, overrides: Sequence[StoreCategoryInput]
    ) -> List[StoreCategory]: ...

    def update_store_order(self, store_id: UUID, category_ids: Sequence[UUID]) -> int: ...


@runtime_checkable
class StoreRepositoryProtocol(Protocol):
    def create(self, data: StoreCreate) -> Store: ...

    def find_by_id(self, store_id: UUID) -> Optional[Store]: ...

    def update(self, store_id: UUID, patch: StoreUpdate) -> Store: ...

    def delete(self, store_id: UUID) -> None: ...

    def find_all(self, options: Optional[QueryOptions] = None) -> List[Store]: ...

    def find_by_chain(self, chain: str) -> List[Store]: ...

    def search(self, query: str, options: Optional[QueryOptions] = None) -> List[Store]: ...

    def find_nearby(self, latitude: float, longitude: float, radius_km: float) -> List[StoreWithDistance]: ...

    def find_favorites(self, user_id: UUID) -> List[Store]: ...

    def is_favorite(self, store_id: UUID, user_id: UUID) -> bool: ...

    def add_favorite(self, store_id: UUID, user_id: UUID) -> UserFavoriteStore: ...

    def remove_favorite(self, store_id: UUID, user_id: UUID) -> None: ...

    def count(self) -> int: ...


@runtime_checkable
class ListRepositoryProtocol(Protocol):
    def create(self, data: ShoppingListCreate) -> ShoppingList: ...

    def find_by_id(self, list_id: UUID) -> Optional[ShoppingList]: ...

    def find_by_id_with_details(self, list_id: UUID) -> Optional[ListWithDetails]: ...

    def update(self, list_id: UUID, patch: ShoppingListUpdate) -> ShoppingList: ...

    def delete(self, list_id: UUID) -> None: ...

    def find_by_owner(self, owner_id: UUID, options: Optional[QueryOptions] = None) -> List[ShoppingList]: ...

    def find_shared_with_user(self, user_id: UUID) -> List[ShoppingList]: ...

    def count_by_owner(self, owner_id: UUID) -> int: ...

    def count_collaborators(self, list_id: UUID) -> int: ...

    def get_item_count(self, list_id: UUID) -> int: ...

    def get_checked_item_count(self, list_id: UUID) -> int: ...

    def get_estimated_total(self, list_id: UUID) -> Decimal: ...


@runtime_checkable
class ItemRepositoryProtocol(Protocol):
    def create(self, data: ListItemCreate) -> ListItem: ...

    def create_many(self, items: Sequence[ListItemCreate]) -> List[ListItem]: ...

    def find_by_id(self, item_id: UUID) -> Optional[ListItem]: ...

    def find_by_id_with_details(self, item_id: UUID) -> Optional[ItemWithDetails]: ...

    def update(self, item_id: UUID, patch: ListItemUpdate) -> ListItem: ...

    def delete(self, item_id: UUID) -> None: ...

    def find_by_list(self, list_id: UUID, options: Optional[QueryOptions] = None) -> List[ListItem]: ...

    def find_by_category(self, category_id: UUID) -> List[ListItem]: ...

    def count_by_list(self, list_id: UUID) -> int: ...

    def count_checked_by_list(self, list_id: UUID) -> int: ...

    def get_estimated_total_by_list(self, list_id: UUID) -> Decimal: ...

    def toggle_checked(self, item_id: UUID) -> ListItem: ...

    def bulk_update(self, item_ids: Sequence[UUID], patch: ListItemUpdate) -> int: ...

    def bulk_delete(self, item_ids: Sequence[UUID]) -> int: ...

    def update_positions(self, positions: Sequence[ItemPosition]) -> None: ...


@runtime_checkable
class CollaborationRepositoryProtocol(Protocol):
    def create(self, data: CollaboratorCreate) -> ListCollaborator: ...

    def find_by_id(self, collaborator_id: UUID) -> Optional[ListCollaborator]: ...

    def find_by_list_and_user(self, list_id: UUID, user_id: UUID) -> Optional[ListCollaborator]: ...

    def update_role(self, collaborator_id: UUID, role: CollaboratorRole) -> ListCollaborator: ...

    def delete(self, collaborator_id: UUID) -> None: ...

    def find_by_list(self, list_id: UUID) -> List[CollaboratorWithUser]: ...

    def find_by_user(self, user_id: UUID) -> List[CollaborationWithList]: ...

    def count_by_list(self, list_id: UUID) -> int: ...

    def is_collaborator(self, list_id: UUID, user_id: UUID) -> bool: ...

    def get_role(self, list_id: UUID, user_id: UUID) -> Optional[CollaboratorRole]: ...


@runtime_checkable
class MealPlanRepositoryProtocol(Protocol):
    def create(self, data: MealPlanCreate) -> MealPlan: ...

    def create_many(self, plans: Sequence[MealPlanCreate]) -> List[MealPlan]: ...

    def find_by_id(self, plan_id: UUID) -> Optional[MealPlan]: ...

    def find_by_id_with_details(self, plan_id: UUID) -> Optional[MealPlanWithDetails]: ...

    def update(self, plan_id: UUID, patch: MealPlanUpdate) -> MealPlan: ...

    def delete(self, plan_id: UUID) -> None: ...

    def find_by_user(
        self, user_id: UUID, options: Optional[MealPlanQueryOptions] = None
    ) -> List[MealPlanWithDetails]: ...

    def count_by_user(self, user_id: UUID, options: Optional[MealPlanQueryOptions] = None) -> int: ...

    def find_conflicting_non_completed(
        self, user_id: UUID, day: dt.date, meal_type: MealType
    ) -> List[MealPlan]: ...

    def is_owner(self, plan_id: UUID, user_id: UUID) -> bool: ...


@runtime_checkable
class AccessGateProtocol(Protocol):
    def has_access(self, list_id: UUID, user_id: UUID) -> bool: ...

    def is_owner(self, list_id: UUID, user_id: UUID) -> bool: ...

    def get_role(self, list_id: UUID, user_id: UUID) -> Optional[CollaboratorRole]: ...

    def require_access(self, list_id: UUID, user_id: UUID) -> None: ...

    def require_owner(self, list_id: UUID, user_id: UUID) -> None: ...
