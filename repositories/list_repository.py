"""
Shopping List Repository - Data access layer for shopping list operations
"""

import logging
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.orm import selectinload

from repositories.base import DataHandle, EntityStore, paginate, patch_values
from domain.models import ListCollaborator, ListItem, ShoppingList
from domain.schemas import (
    ListWithDetails,
    QueryOptions,
    ShoppingListCreate,
    ShoppingListUpdate,
)

logger = logging.getLogger("listly.repositories.lists")

DEFAULT_PAGE_SIZE = 50


class ListRepository:
    """Repository for shopping list data access.

    Authorization is not checked here; callers consult ``ListAccessGate``
    before mutating a shared list.
    """

    def __init__(self, handle: DataHandle):
        self._store = EntityStore(handle, ShoppingList, "Shopping list")

    def create(self, data: ShoppingListCreate) -> ShoppingList:
        shopping_list = self._store.insert(data.model_dump())
        logger.info("Created list %s for owner %s", shopping_list.id, shopping_list.owner_id)
        return shopping_list

    def find_by_id(self, list_id: UUID) -> Optional[ShoppingList]:
        return self._store.find_by_id(list_id)

    def find_by_id_with_details(self, list_id: UUID) -> Optional[ListWithDetails]:
        """Get a list with items (by sort order), collaborators and store"""
        with self._store.session() as session:
            shopping_list = session.execute(
                select(ShoppingList)
                .options(
                    selectinload(ShoppingList.items),
                    selectinload(ShoppingList.collaborators).selectinload(ListCollaborator.user),
                    selectinload(ShoppingList.store),
                )
                .where(ShoppingList.id == list_id)
            ).scalar_one_or_none()
            if shopping_list is None:
                return None
            return ListWithDetails.model_validate(shopping_list)

    def update(self, list_id: UUID, patch: ShoppingListUpdate) -> ShoppingList:
        """Update a list. Passing ``owner_id`` reassigns ownership."""
        values = patch_values(patch)
        if values.get("owner_id") is None:
            # a list always has exactly one owner
            values.pop("owner_id", None)
        return self._store.patch(list_id, values)

    def delete(self, list_id: UUID) -> None:
        """Delete a list together with its items and collaborators"""
        self._store.remove(list_id)
        logger.info("Deleted list %s", list_id)

    def find_by_owner(self, owner_id: UUID, options: Optional[QueryOptions] = None) -> List[ShoppingList]:
        """Lists owned by a user, most recently updated first by default"""
        statement = paginate(
            select(ShoppingList).where(ShoppingList.owner_id == owner_id),
            ShoppingList,
            options,
            default_order_by="updated_at",
            default_order="desc",
            default_take=DEFAULT_PAGE_SIZE,
        )
        return self._store.scalars(statement)

    def find_shared_with_user(self, user_id: UUID) -> List[ShoppingList]:
        """Lists where the user holds a collaborator row"""
        return self._store.scalars(
            select(ShoppingList)
            .join(ListCollaborator, ListCollaborator.list_id == ShoppingList.id)
            .where(ListCollaborator.user_id == user_id)
            .order_by(ShoppingList.updated_at.desc())
        )

    def count_by_owner(self, owner_id: UUID) -> int:
        return self._store.scalar(
            select(func.count()).select_from(ShoppingList).where(ShoppingList.owner_id == owner_id)
        ) or 0

    def count_collaborators(self, list_id: UUID) -> int:
        return self._store.scalar(
            select(func.count()).select_from(ListCollaborator).where(ListCollaborator.list_id == list_id)
        ) or 0

    def get_item_count(self, list_id: UUID) -> int:
        return self._store.scalar(
            select(func.count()).select_from(ListItem).where(ListItem.list_id == list_id)
        ) or 0

    def get_checked_item_count(self, list_id: UUID) -> int:
        return self._store.scalar(
            select(func.count())
            .select_from(ListItem)
            .where(ListItem.list_id == list_id, ListItem.is_checked.is_(True))
        ) or 0

    def get_estimated_total(self, list_id: UUID) -> Decimal:
        """Sum of estimated prices on a list; items without a price count as 0"""
        total = self._store.scalar(
            select(func.sum(ListItem.estimated_price)).where(ListItem.list_id == list_id)
        )
        return Decimal(str(total)) if total is not None else Decimal("0")
