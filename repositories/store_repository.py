"""
Store Repository - Data access layer for stores and favorites
"""

import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy import func, or_, select

from repositories.base import DataHandle, EntityStore, paginate, patch_values
from domain.models import Store, UserFavoriteStore
from domain.schemas import QueryOptions, StoreCreate, StoreUpdate
from services.store_locator import StoreWithDistance, find_nearby

logger = logging.getLogger("listly.repositories.stores")

DEFAULT_PAGE_SIZE = 50


class StoreRepository:
    """Repository for store data access"""

    def __init__(self, handle: DataHandle):
        self._store = EntityStore(handle, Store, "Store")
        self._favorites = EntityStore(handle, UserFavoriteStore, "Favorite store")

    def create(self, data: StoreCreate) -> Store:
        return self._store.insert(data.model_dump())

    def find_by_id(self, store_id: UUID) -> Optional[Store]:
        return self._store.find_by_id(store_id)

    def update(self, store_id: UUID, patch: StoreUpdate) -> Store:
        return self._store.patch(store_id, patch_values(patch))

    def delete(self, store_id: UUID) -> None:
        """Delete a store with its overrides and favorites; lists targeting it keep existing"""
        self._store.remove(store_id)

    def find_all(self, options: Optional[QueryOptions] = None) -> List[Store]:
        statement = paginate(
            select(Store),
            Store,
            options,
            default_order_by="name",
            default_order="asc",
            default_take=DEFAULT_PAGE_SIZE,
        )
        return self._store.scalars(statement)

    def find_by_chain(self, chain: str) -> List[Store]:
        return self._store.scalars(
            select(Store).where(Store.chain == chain).order_by(Store.name.asc())
        )

    def search(self, query: str, options: Optional[QueryOptions] = None) -> List[Store]:
        """Case-insensitive substring search over store name and chain"""
        needle = query.strip().lower()
        statement = select(Store).where(
            or_(
                func.lower(Store.name).contains(needle, autoescape=True),
                func.lower(Store.chain).contains(needle, autoescape=True),
            )
        )
        statement = paginate(
            statement,
            Store,
            options,
            default_order_by="name",
            default_order="asc",
            default_take=DEFAULT_PAGE_SIZE,
        )
        return self._store.scalars(statement)

    def find_nearby(self, latitude: float, longitude: float, radius_km: float) -> List[StoreWithDistance]:
        """Stores within ``radius_km`` of a point, nearest first"""
        candidates = self._store.scalars(
            select(Store).where(Store.latitude.is_not(None), Store.longitude.is_not(None))
        )
        results = find_nearby(candidates, latitude, longitude, radius_km)
        logger.debug(
            "find_nearby(%s, %s, %skm): %d of %d geolocated stores",
            latitude,
            longitude,
            radius_km,
            len(results),
            len(candidates),
        )
        return results

    def find_favorites(self, user_id: UUID) -> List[Store]:
        """User's favorite stores, most recently added first"""
        return self._store.scalars(
            select(Store)
            .join(UserFavoriteStore, UserFavoriteStore.store_id == Store.id)
            .where(UserFavoriteStore.user_id == user_id)
            .order_by(UserFavoriteStore.created_at.desc())
        )

    def is_favorite(self, store_id: UUID, user_id: UUID) -> bool:
        favorite = self._favorites.scalar(
            select(UserFavoriteStore.id).where(
                UserFavoriteStore.store_id == store_id,
                UserFavoriteStore.user_id == user_id,
            )
        )
        return favorite is not None

    def add_favorite(self, store_id: UUID, user_id: UUID) -> UserFavoriteStore:
        """Mark a store as favorite (ConflictError if it already is)"""
        return self._favorites.insert({"store_id": store_id, "user_id": user_id})

    def remove_favorite(self, store_id: UUID, user_id: UUID) -> None:
        with self._favorites.session() as session:
            favorite = session.execute(
                select(UserFavoriteStore).where(
                    UserFavoriteStore.store_id == store_id,
                    UserFavoriteStore.user_id == user_id,
                )
            ).scalar_one_or_none()
            if favorite is None:
                raise self._favorites.not_found(f"{store_id} for user {user_id}")
            session.delete(favorite)

    def count(self) -> int:
        return self._store.scalar(select(func.count()).select_from(Store)) or 0
