"""
Category Repository - Data access layer for the category taxonomy and
per-store category overrides
"""

import logging
from typing import List, Optional, Sequence
from uuid import UUID

from sqlalchemy import and_, delete, exists, func, or_, select

from app.exceptions import ValidationError
from repositories.base import DataHandle, EntityStore, patch_values
from domain.models import (
    Category,
    ListCollaborator,
    ListItem,
    ShoppingList,
    Store,
    StoreCategory,
)
from domain.schemas import (
    CategoryCreate,
    CategoryResponse,
    CategoryUpdate,
    CategoryWithCount,
    CategoryWithStore,
    StoreCategoryInput,
    StoreCategoryOverride,
)
from services.category_classifier import find_best_match

logger = logging.getLogger("listly.repositories.categories")

SEARCH_LIMIT = 10


class CategoryRepository:
    """Repository for categories and store-specific overrides"""

    def __init__(self, handle: DataHandle):
        self._store = EntityStore(handle, Category, "Category")
        self._overrides = EntityStore(handle, StoreCategory, "Store category")
        self._stores = EntityStore(handle, Store, "Store")

    def _reject_default(self, category: Category, action: str) -> None:
        if category.is_default:
            raise ValidationError(
                f"Cannot {action} default categories",
                details={"id": str(category.id), "slug": category.slug},
                code="default_category",
            )

    def create(self, data: CategoryCreate) -> Category:
        """Create a category (ConflictError when the slug is taken)"""
        values = data.model_dump(exclude={"slug"})
        values["slug"] = data.resolved_slug()
        return self._store.insert(values)

    def find_by_id(self, category_id: UUID) -> Optional[Category]:
        return self._store.find_by_id(category_id)

    def find_by_slug(self, slug: str) -> Optional[Category]:
        return self._store.scalar(select(Category).where(Category.slug == slug))

    def update(self, category_id: UUID, patch: CategoryUpdate) -> Category:
        """Update a user-created category; default categories are read-only"""
        values = patch_values(patch)
        with self._store.session() as session:
            category = self._store.require(session, category_id)
            self._reject_default(category, "update")
            for key, value in values.items():
                setattr(category, key, value)
            session.flush()
            return category

    def delete(self, category_id: UUID) -> None:
        """Delete a user-created category; its items become uncategorized"""
        with self._store.session() as session:
            category = self._store.require(session, category_id)
            self._reject_default(category, "delete")
            session.delete(category)
        logger.info("Deleted category %s", category_id)

    def find_defaults(self) -> List[Category]:
        """Default categories in their canonical sort order"""
        return self._store.scalars(
            select(Category)
            .where(Category.is_default.is_(True))
            .order_by(Category.sort_order.asc(), Category.name.asc())
        )

    def find_by_store(self, store_id: UUID) -> List[CategoryWithStore]:
        """Every default category with the store's override, if it has one"""
        statement = (
            select(Category, StoreCategory)
            .outerjoin(
                StoreCategory,
                and_(
                    StoreCategory.category_id == Category.id,
                    StoreCategory.store_id == store_id,
                ),
            )
            .where(Category.is_default.is_(True))
            .order_by(Category.sort_order.asc(), Category.name.asc())
        )
        with self._store.session() as session:
            rows = session.execute(statement).all()
            return [
                CategoryWithStore(
                    **CategoryResponse.model_validate(category).model_dump(),
                    store_category=(
                        StoreCategoryOverride.model_validate(override)
                        if override is not None
                        else None
                    ),
                )
                for category, override in rows
            ]

    def find_with_usage_count(self) -> List[CategoryWithCount]:
        """All categories with the number of list items filed under each"""
        item_count = func.count(ListItem.id).label("item_count")
        statement = (
            select(Category, item_count)
            .outerjoin(ListItem, ListItem.category_id == Category.id)
            .group_by(Category.id)
            .order_by(Category.sort_order.asc(), Category.name.asc())
        )
        with self._store.session() as session:
            rows = session.execute(statement).all()
            return [
                CategoryWithCount(
                    **CategoryResponse.model_validate(category).model_dump(),
                    item_count=count or 0,
                )
                for category, count in rows
            ]

    def get_usage_stats(self, user_id: UUID) -> List[CategoryWithCount]:
        """Default categories counted over items on lists the user owns or collaborates on.

        Sorted by item count, most used first.
        """
        collaborates = exists().where(
            ListCollaborator.list_id == ShoppingList.id,
            ListCollaborator.user_id == user_id,
        )
        accessible_items = (
            select(ListItem.id, ListItem.category_id)
            .join(ShoppingList, ShoppingList.id == ListItem.list_id)
            .where(or_(ShoppingList.owner_id == user_id, collaborates))
            .subquery()
        )
        item_count = func.count(accessible_items.c.id).label("item_count")
        statement = (
            select(Category, item_count)
            .outerjoin(accessible_items, accessible_items.c.category_id == Category.id)
            .where(Category.is_default.is_(True))
            .group_by(Category.id)
            .order_by(item_count.desc(), Category.sort_order.asc())
        )
        with self._store.session() as session:
            rows = session.execute(statement).all()
            return [
                CategoryWithCount(
                    **CategoryResponse.model_validate(category).model_dump(),
                    item_count=count or 0,
                )
                for category, count in rows
            ]

    def search(self, query: str, limit: int = SEARCH_LIMIT) -> List[Category]:
        """Case-insensitive substring search over category names"""
        return self._store.scalars(
            select(Category)
            .where(func.lower(Category.name).contains(query.strip().lower(), autoescape=True))
            .order_by(Category.name.asc())
            .limit(limit)
        )

    def find_best_match(self, item_name: str) -> Optional[Category]:
        """Default category whose name shares a keyword with ``item_name``"""
        return find_best_match(item_name, self.find_defaults())

    # ------------------------------------------------------------------
    # Store overrides
    # ------------------------------------------------------------------

    def create_store_category(self, store_id: UUID, data: StoreCategoryInput) -> StoreCategory:
        """Create an override (ConflictError if the store already overrides the category)"""
        return self._overrides.insert({"store_id": store_id, **data.model_dump()})

    def upsert_store_category(self, store_id: UUID, data: StoreCategoryInput) -> StoreCategory:
        """Create the override or update the existing one in place"""
        values = data.model_dump(exclude={"category_id"})
        with self._overrides.session() as session:
            override = session.execute(
                select(StoreCategory).where(
                    StoreCategory.store_id == store_id,
                    StoreCategory.category_id == data.category_id,
                )
            ).scalar_one_or_none()
            if override is None:
                override = StoreCategory(store_id=store_id, category_id=data.category_id, **values)
                session.add(override)
            else:
                for key, value in values.items():
                    setattr(override, key, value)
            session.flush()
            return override

    def delete_store_category(self, store_id: UUID, category_id: UUID) -> None:
        with self._overrides.session() as session:
            override = session.execute(
                select(StoreCategory).where(
                    StoreCategory.store_id == store_id,
                    StoreCategory.category_id == category_id,
                )
            ).scalar_one_or_none()
            if override is None:
                raise self._overrides.not_found(f"{category_id} for store {store_id}")
            session.delete(override)

    def customize_for_store(
        self, store_id: UUID, overrides: Sequence[StoreCategoryInput]
    ) -> List[StoreCategory]:
        """Replace every override of a store with ``overrides``.

        Runs inside one session scope, so on the top-level handle the delete
        and the inserts commit together.
        """
        with self._overrides.session() as session:
            self._stores.require(session, store_id)
            session.execute(delete(StoreCategory).where(StoreCategory.store_id == store_id))
            created = [
                StoreCategory(store_id=store_id, **override.model_dump())
                for override in overrides
            ]
            session.add_all(created)
            session.flush()
        logger.info("Replaced overrides of store %s with %d entries", store_id, len(created))
        return created

    def update_store_order(self, store_id: UUID, category_ids: Sequence[UUID]) -> int:
        """Set override sort order to each category's position in ``category_ids``.

        Override rows are locked first where the dialect supports it.
        Categories without an override are skipped. Returns the number of
        overrides changed.
        """
        positions = {category_id: index for index, category_id in enumerate(category_ids)}
        with self._overrides.session() as session:
            rows = session.execute(
                select(StoreCategory)
                .where(
                    StoreCategory.store_id == store_id,
                    StoreCategory.category_id.in_(list(positions)),
                )
                .with_for_update()
            ).scalars().all()
            for override in rows:
                override.sort_order = positions[override.category_id]
            session.flush()
        return len(rows)
