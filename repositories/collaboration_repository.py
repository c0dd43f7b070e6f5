"""
Collaboration Repository - Data access layer for list sharing
"""

import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.orm import selectinload

from repositories.base import DataHandle, EntityStore
from domain.enums import CollaboratorRole
from domain.models import ListCollaborator, ShoppingList
from domain.schemas import CollaborationWithList, CollaboratorCreate, CollaboratorWithUser

logger = logging.getLogger("listly.repositories.collaborations")


class CollaborationRepository:
    """Repository for list collaborator rows.

    A user appears at most once per list; the list owner is never stored
    here.
    """

    def __init__(self, handle: DataHandle):
        self._store = EntityStore(handle, ListCollaborator, "Collaborator")

    def create(self, data: CollaboratorCreate) -> ListCollaborator:
        """Share a list (ConflictError if the user already collaborates on it)"""
        collaborator = self._store.insert(data.model_dump())
        logger.info(
            "User %s joined list %s as %s",
            collaborator.user_id,
            collaborator.list_id,
            collaborator.role.value,
        )
        return collaborator

    def find_by_id(self, collaborator_id: UUID) -> Optional[ListCollaborator]:
        return self._store.find_by_id(collaborator_id)

    def find_by_list_and_user(self, list_id: UUID, user_id: UUID) -> Optional[ListCollaborator]:
        return self._store.scalar(
            select(ListCollaborator).where(
                ListCollaborator.list_id == list_id,
                ListCollaborator.user_id == user_id,
            )
        )

    def update_role(self, collaborator_id: UUID, role: CollaboratorRole) -> ListCollaborator:
        return self._store.patch(collaborator_id, {"role": role})

    def delete(self, collaborator_id: UUID) -> None:
        self._store.remove(collaborator_id)

    def find_by_list(self, list_id: UUID) -> List[CollaboratorWithUser]:
        """Collaborators of a list with their user summary, earliest joiner first"""
        with self._store.session() as session:
            rows = session.execute(
                select(ListCollaborator)
                .options(selectinload(ListCollaborator.user))
                .where(ListCollaborator.list_id == list_id)
                .order_by(ListCollaborator.joined_at.asc())
            ).scalars().all()
            return [CollaboratorWithUser.model_validate(row) for row in rows]

    def find_by_user(self, user_id: UUID) -> List[CollaborationWithList]:
        """Lists shared with a user, each with its owner, most recent first"""
        with self._store.session() as session:
            rows = session.execute(
                select(ListCollaborator)
                .options(selectinload(ListCollaborator.list).selectinload(ShoppingList.owner))
                .where(ListCollaborator.user_id == user_id)
                .order_by(ListCollaborator.joined_at.desc())
            ).scalars().all()
            return [CollaborationWithList.model_validate(row) for row in rows]

    def count_by_list(self, list_id: UUID) -> int:
        return self._store.scalar(
            select(func.count()).select_from(ListCollaborator).where(ListCollaborator.list_id == list_id)
        ) or 0

    def is_collaborator(self, list_id: UUID, user_id: UUID) -> bool:
        return self.find_by_list_and_user(list_id, user_id) is not None

    def get_role(self, list_id: UUID, user_id: UUID) -> Optional[CollaboratorRole]:
        return self._store.scalar(
            select(ListCollaborator.role).where(
                ListCollaborator.list_id == list_id,
                ListCollaborator.user_id == user_id,
            )
        )
