"""
Transaction coordinator.

``with_transaction`` runs a callback against one session and one database
transaction. The callback receives a ``TransactionContext`` holding a fresh
instance of every repository and of the access gate, all bound to that
session. Work done through the context commits together when the callback
returns and is rolled back together when it raises.

    def move_item(ctx):
        ctx.access.require_access(target_list_id, user_id)
        ctx.item_repo.update(item_id, ListItemUpdate(...))
        return ctx.list_repo.get_item_count(target_list_id)

    count = with_transaction(database, move_item)

Repositories constructed from the top-level ``Database`` inside a callback
run outside the transaction and are not rolled back with it.

There are no savepoints. A ``ConflictError`` or ``NotFoundError`` raised by a
failed flush leaves the transaction unusable: a callback that catches it
gets ``TransactionStateError`` from every later repository call, and the
coordinator rolls back instead of committing.
"""

import logging
import uuid
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Generator, TypeVar

from app.exceptions import TransactionStateError
from domain.models import Database, SessionHandle
from repositories.category_repository import CategoryRepository
from repositories.interfaces import (
    AccessGateProtocol,
    CategoryRepositoryProtocol,
    CollaborationRepositoryProtocol,
    ItemRepositoryProtocol,
    ListRepositoryProtocol,
    MealPlanRepositoryProtocol,
    StoreRepositoryProtocol,
    UserRepositoryProtocol,
)
from repositories.collaboration_repository import CollaborationRepository
from repositories.item_repository import ItemRepository
from repositories.list_repository import ListRepository
from repositories.meal_plan_repository import MealPlanRepository
from repositories.store_repository import StoreRepository
from repositories.user_repository import UserRepository
from services.access import ListAccessGate

logger = logging.getLogger("listly.transaction")

T = TypeVar("T")


class TransactionState(str, Enum):
    OPEN = "open"
    COMMITTING = "committing"
    ROLLING_BACK = "rolling_back"
    CLOSED = "closed"


class UnitOfWork:
    """One session and its transaction.

    Moves OPEN -> COMMITTING or ROLLING_BACK -> CLOSED exactly once. Every
    operation after that raises ``TransactionStateError``, including
    repository calls made through ``handle``.
    """

    def __init__(self, database: Database):
        self.id = uuid.uuid4().hex[:8]
        self._session = database.create_session()
        self._state = TransactionState.OPEN
        self.handle = SessionHandle(self._session, guard=self.ensure_usable)
        logger.debug("Transaction %s opened", self.id)

    @property
    def state(self) -> TransactionState:
        return self._state

    def ensure_open(self) -> None:
        if self._state is not TransactionState.OPEN:
            raise TransactionStateError(
                f"Transaction {self.id} is {self._state.value}",
                details={"transaction": self.id, "state": self._state.value},
                code="transaction_closed",
            )

    def ensure_usable(self) -> None:
        """Guard for repository calls: open, and no failed flush pending rollback"""
        self.ensure_open()
        if not self._session.is_active:
            raise self._failed_error()

    def _failed_error(self) -> TransactionStateError:
        return TransactionStateError(
            f"Transaction {self.id} failed on an earlier write and must be rolled back",
            details={"transaction": self.id, "state": self._state.value},
            code="transaction_failed",
        )

    def commit(self) -> None:
        self.ensure_open()
        self._state = TransactionState.COMMITTING
        try:
            if not self._session.is_active:
                raise self._failed_error()
            self._session.commit()
        except Exception:
            logger.warning("Transaction %s failed to commit, rolling back", self.id)
            self._session.rollback()
            raise
        finally:
            self._close()
        logger.info("Transaction %s committed", self.id)

    def rollback(self) -> None:
        self.ensure_open()
        self._state = TransactionState.ROLLING_BACK
        try:
            self._session.rollback()
        finally:
            self._close()
        logger.info("Transaction %s rolled back", self.id)

    def _close(self) -> None:
        self._session.close()
        self._state = TransactionState.CLOSED


@dataclass(frozen=True)
class TransactionContext:
    """Transaction-scoped repositories handed to a ``with_transaction`` callback"""

    unit_of_work: UnitOfWork
    list_repo: ListRepositoryProtocol
    item_repo: ItemRepositoryProtocol
    user_repo: UserRepositoryProtocol
    category_repo: CategoryRepositoryProtocol
    store_repo: StoreRepositoryProtocol
    collaboration_repo: CollaborationRepositoryProtocol
    meal_plan_repo: MealPlanRepositoryProtocol
    access: AccessGateProtocol

    @classmethod
    def bind(cls, unit_of_work: UnitOfWork) -> "TransactionContext":
        handle = unit_of_work.handle
        return cls(
            unit_of_work=unit_of_work,
            list_repo=ListRepository(handle),
            item_repo=ItemRepository(handle),
            user_repo=UserRepository(handle),
            category_repo=CategoryRepository(handle),
            store_repo=StoreRepository(handle),
            collaboration_repo=CollaborationRepository(handle),
            meal_plan_repo=MealPlanRepository(handle),
            access=ListAccessGate(handle),
        )


def _check_database(database) -> None:
    if isinstance(database, (TransactionContext, UnitOfWork, SessionHandle)):
        raise TransactionStateError(
            "Nested transactions are not supported; use the repositories of the current context",
            code="nested_transaction",
        )
    if not isinstance(database, Database):
        raise TypeError(f"Expected a Database, got {type(database).__name__}")


@contextmanager
def transaction(database: Database) -> Generator[TransactionContext, None, None]:
    """Context-manager form of ``with_transaction``.

    Commits when the block exits normally; rolls back and re-raises when it
    raises.
    """
    _check_database(database)
    unit_of_work = UnitOfWork(database)
    try:
        yield TransactionContext.bind(unit_of_work)
    except BaseException:
        if unit_of_work.state is TransactionState.OPEN:
            unit_of_work.rollback()
        raise
    unit_of_work.commit()


def with_transaction(database: Database, callback: Callable[[TransactionContext], T]) -> T:
    """Run ``callback`` atomically and return its result.

    The exception raised by the callback propagates unchanged after the
    rollback.
    """
    with transaction(database) as context:
        return callback(context)
