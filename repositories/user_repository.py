"""
User Repository - Data access layer for user-related operations
"""

import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.orm import selectinload

from repositories.base import DataHandle, EntityStore, patch_values
from domain.enums import AuthProvider
from domain.models import (
    ListCollaborator,
    ListItem,
    ShoppingList,
    User,
    UserPreferences,
)
from domain.schemas import (
    PreferencesUpdate,
    UserCreate,
    UserStats,
    UserSummary,
    UserUpdate,
    UserWithPreferences,
)

logger = logging.getLogger("listly.repositories.users")

SEARCH_LIMIT = 10


class UserRepository:
    """Repository for user data access"""

    def __init__(self, handle: DataHandle):
        self._store = EntityStore(handle, User, "User")

    def create(self, data: UserCreate) -> User:
        """Create a new user (ConflictError when the email is taken)"""
        user = self._store.insert(data.model_dump())
        logger.info("Created user %s", user.id)
        return user

    def find_by_id(self, user_id: UUID) -> Optional[User]:
        return self._store.find_by_id(user_id)

    def find_by_id_with_preferences(self, user_id: UUID) -> Optional[UserWithPreferences]:
        """Get user with the preferences row eagerly loaded"""
        with self._store.session() as session:
            user = session.execute(
                select(User)
                .options(selectinload(User.preferences))
                .where(User.id == user_id)
            ).scalar_one_or_none()
            return UserWithPreferences.model_validate(user) if user else None

    def find_by_email(self, email: str) -> Optional[User]:
        """Get user by email (emails are stored lower-cased)"""
        return self._store.scalar(
            select(User).where(User.email == email.strip().lower())
        )

    def find_by_provider(self, provider: AuthProvider, provider_id: str) -> Optional[User]:
        """Get user by identity provider and the provider's user id"""
        return self._store.scalar(
            select(User).where(
                User.provider == AuthProvider(provider),
                User.provider_id == provider_id,
            )
        )

    def update(self, user_id: UUID, patch: UserUpdate) -> User:
        return self._store.patch(user_id, patch_values(patch))

    def delete(self, user_id: UUID) -> None:
        """Delete user and all owned data (cascade)"""
        self._store.remove(user_id)
        logger.info("Deleted user %s", user_id)

    def update_preferences(self, user_id: UUID, patch: PreferencesUpdate) -> UserPreferences:
        """Create or update the user's preferences row"""
        values = patch_values(patch)
        with self._store.session() as session:
            self._store.require(session, user_id)
            prefs = session.execute(
                select(UserPreferences).where(UserPreferences.user_id == user_id)
            ).scalar_one_or_none()
            if prefs is None:
                prefs = UserPreferences(user_id=user_id, **values)
                session.add(prefs)
            else:
                for key, value in values.items():
                    setattr(prefs, key, value)
            session.flush()
            return prefs

    def get_stats(self, user_id: UUID) -> UserStats:
        """Count owned lists, items added and collaborations for a user"""
        with self._store.session() as session:
            list_count = session.execute(
                select(func.count()).select_from(ShoppingList).where(ShoppingList.owner_id == user_id)
            ).scalar()
            item_count = session.execute(
                select(func.count()).select_from(ListItem).where(ListItem.added_by_id == user_id)
            ).scalar()
            collaboration_count = session.execute(
                select(func.count()).select_from(ListCollaborator).where(ListCollaborator.user_id == user_id)
            ).scalar()
        return UserStats(
            list_count=list_count or 0,
            item_count=item_count or 0,
            collaboration_count=collaboration_count or 0,
        )

    def search_by_email(self, query: str, limit: int = SEARCH_LIMIT) -> List[UserSummary]:
        """Case-insensitive email substring search over active users"""
        users = self._store.scalars(
            select(User)
            .where(
                func.lower(User.email).contains(query.strip().lower(), autoescape=True),
                User.is_active.is_(True),
            )
            .order_by(User.email.asc())
            .limit(limit)
        )
        return [UserSummary.model_validate(user) for user in users]
