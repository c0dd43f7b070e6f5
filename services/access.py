"""
List access gate.

Read-only predicates over list ownership and collaborator rows. A user can
access a list when they own it or hold a collaborator row on it. The gate
never mutates anything; callers decide what to do with the answer.
"""

import logging
from typing import Optional
from uuid import UUID

from sqlalchemy import select

from app.exceptions import ForbiddenError
from repositories.base import DataHandle, EntityStore
from domain.enums import CollaboratorRole
from domain.models import ListCollaborator, ShoppingList

logger = logging.getLogger("listly.access")


class ListAccessGate:
    def __init__(self, handle: DataHandle):
        self._lists = EntityStore(handle, ShoppingList, "Shopping list")

    def _owner_id(self, list_id: UUID) -> Optional[UUID]:
        return self._lists.scalar(select(ShoppingList.owner_id).where(ShoppingList.id == list_id))

    def is_owner(self, list_id: UUID, user_id: UUID) -> bool:
        owner_id = self._owner_id(list_id)
        return owner_id is not None and owner_id == user_id

    def get_role(self, list_id: UUID, user_id: UUID) -> Optional[CollaboratorRole]:
        """Collaborator role of ``user_id`` on the list.

        The owner holds no collaborator row, so this is None for the owner
        as well as for strangers.
        """
        return self._lists.scalar(
            select(ListCollaborator.role).where(
                ListCollaborator.list_id == list_id,
                ListCollaborator.user_id == user_id,
            )
        )

    def has_access(self, list_id: UUID, user_id: UUID) -> bool:
        """True for the owner and for collaborators; False for missing lists"""
        if self.is_owner(list_id, user_id):
            return True
        return self.get_role(list_id, user_id) is not None

    def require_access(self, list_id: UUID, user_id: UUID) -> None:
        if not self.has_access(list_id, user_id):
            logger.info("User %s denied access to list %s", user_id, list_id)
            raise ForbiddenError(
                "You do not have access to this list",
                details={"list_id": str(list_id), "user_id": str(user_id)},
                code="list_access_denied",
            )

    def require_owner(self, list_id: UUID, user_id: UUID) -> None:
        if not self.is_owner(list_id, user_id):
            logger.info("User %s is not the owner of list %s", user_id, list_id)
            raise ForbiddenError(
                "Only the list owner can do this",
                details={"list_id": str(list_id), "user_id": str(user_id)},
                code="list_owner_required",
            )
