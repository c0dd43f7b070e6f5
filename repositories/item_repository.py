"""
List Item Repository - Data access layer for list item operations
"""

import logging
from decimal import Decimal
from typing import List, Optional, Sequence
from uuid import UUID

from sqlalchemy import delete, func, select, update
from sqlalchemy.orm import selectinload

from repositories.base import DataHandle, EntityStore, paginate, patch_values
from domain.models import ListItem, utcnow
from domain.schemas import (
    ItemPosition,
    ItemWithDetails,
    ListItemCreate,
    ListItemUpdate,
    QueryOptions,
)

logger = logging.getLogger("listly.repositories.items")

LIST_PAGE_SIZE = 500


def _checked_values(values: dict) -> dict:
    """Keep ``checked_at`` in step with ``is_checked`` when the flag is written"""
    if "is_checked" in values:
        values["checked_at"] = utcnow() if values["is_checked"] else None
    return values


class ItemRepository:
    """Repository for list item data access"""

    def __init__(self, handle: DataHandle):
        self._store = EntityStore(handle, ListItem, "List item")

    def create(self, data: ListItemCreate) -> ListItem:
        return self._store.insert(_checked_values(data.model_dump()))

    def create_many(self, items: Sequence[ListItemCreate]) -> List[ListItem]:
        return self._store.insert_many([_checked_values(item.model_dump()) for item in items])

    def find_by_id(self, item_id: UUID) -> Optional[ListItem]:
        return self._store.find_by_id(item_id)

    def find_by_id_with_details(self, item_id: UUID) -> Optional[ItemWithDetails]:
        """Get an item with its category, author and parent list"""
        with self._store.session() as session:
            item = session.execute(
                select(ListItem)
                .options(
                    selectinload(ListItem.category),
                    selectinload(ListItem.added_by),
                    selectinload(ListItem.list),
                )
                .where(ListItem.id == item_id)
            ).scalar_one_or_none()
            return ItemWithDetails.model_validate(item) if item else None

    def update(self, item_id: UUID, patch: ListItemUpdate) -> ListItem:
        return self._store.patch(item_id, _checked_values(patch_values(patch)))

    def delete(self, item_id: UUID) -> None:
        self._store.remove(item_id)

    def find_by_list(self, list_id: UUID, options: Optional[QueryOptions] = None) -> List[ListItem]:
        statement = paginate(
            select(ListItem).where(ListItem.list_id == list_id),
            ListItem,
            options,
            default_order_by="sort_order",
            default_order="asc",
            default_take=LIST_PAGE_SIZE,
        )
        return self._store.scalars(statement)

    def find_by_category(self, category_id: UUID) -> List[ListItem]:
        return self._store.scalars(
            select(ListItem)
            .where(ListItem.category_id == category_id)
            .order_by(ListItem.created_at.desc())
        )

    def count_by_list(self, list_id: UUID) -> int:
        return self._store.scalar(
            select(func.count()).select_from(ListItem).where(ListItem.list_id == list_id)
        ) or 0

    def count_checked_by_list(self, list_id: UUID) -> int:
        return self._store.scalar(
            select(func.count())
            .select_from(ListItem)
            .where(ListItem.list_id == list_id, ListItem.is_checked.is_(True))
        ) or 0

    def get_estimated_total_by_list(self, list_id: UUID) -> Decimal:
        total = self._store.scalar(
            select(func.sum(ListItem.estimated_price)).where(ListItem.list_id == list_id)
        )
        return Decimal(str(total)) if total is not None else Decimal("0")

    def toggle_checked(self, item_id: UUID) -> ListItem:
        """Flip the checked flag, stamping or clearing ``checked_at``"""
        with self._store.session() as session:
            item = self._store.require(session, item_id)
            item.is_checked = not item.is_checked
            item.checked_at = utcnow() if item.is_checked else None
            session.flush()
            return item

    def bulk_update(self, item_ids: Sequence[UUID], patch: ListItemUpdate) -> int:
        """Apply the same patch to many items; returns the number of rows changed"""
        values = _checked_values(patch_values(patch))
        if not item_ids or not values:
            return 0
        values["updated_at"] = utcnow()
        with self._store.session() as session:
            result = session.execute(
                update(ListItem)
                .where(ListItem.id.in_(list(item_ids)))
                .values(**values)
                .execution_options(synchronize_session="fetch")
            )
            changed = result.rowcount
        logger.debug("Bulk updated %d of %d items (%s)", changed, len(item_ids), ", ".join(values))
        return changed

    def bulk_delete(self, item_ids: Sequence[UUID]) -> int:
        if not item_ids:
            return 0
        with self._store.session() as session:
            result = session.execute(
                delete(ListItem)
                .where(ListItem.id.in_(list(item_ids)))
                .execution_options(synchronize_session="fetch")
            )
            removed = result.rowcount
        logger.debug("Bulk deleted %d of %d items", removed, len(item_ids))
        return removed

    def update_positions(self, positions: Sequence[ItemPosition]) -> None:
        """Rewrite sort orders; all positions land in one session scope"""
        with self._store.session() as session:
            for position in positions:
                item = self._store.require(session, position.id)
                item.sort_order = position.sort_order
            session.flush()
