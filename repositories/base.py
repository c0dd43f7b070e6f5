"""
Shared persistence helper for the data access layer.

Repositories do not inherit from a base class. Each one composes an
``EntityStore`` bound to its model and to the data handle it was
constructed with, either the top-level ``Database`` or the
transaction-scoped ``SessionHandle`` handed out by the coordinator.
"""

import logging
from contextlib import contextmanager
from typing import (
    Any,
    ContextManager,
    Dict,
    Generator,
    Generic,
    Mapping,
    Optional,
    Protocol,
    Sequence,
    Type,
    TypeVar,
    runtime_checkable,
)
from uuid import UUID

from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.exceptions import ConflictError, NotFoundError, ValidationError
from domain.schemas.common import QueryOptions

ModelType = TypeVar("ModelType")

logger = logging.getLogger("listly.repositories")


@runtime_checkable
class DataHandle(Protocol):
    """Anything that can hand out a session for the duration of one operation."""

    def session_scope(self) -> ContextManager[Session]:
        ...


def patch_values(patch: BaseModel) -> Dict[str, Any]:
    """Return only the fields the caller explicitly set on ``patch``."""
    return patch.model_dump(exclude_unset=True)


def is_foreign_key_violation(exc: IntegrityError) -> bool:
    return "foreign key" in str(exc.orig).lower()


class EntityStore(Generic[ModelType]):
    """CRUD primitives for one model over one data handle."""

    def __init__(self, handle: DataHandle, model: Type[ModelType], label: Optional[str] = None):
        self.handle = handle
        self.model = model
        self.label = label or model.__name__

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """Open a session scope, translating constraint violations.

        A foreign key violation means a referenced row does not exist and
        becomes ``NotFoundError``; every other integrity error is a
        uniqueness clash and becomes ``ConflictError``.
        """
        try:
            with self.handle.session_scope() as session:
                yield session
        except IntegrityError as exc:
            if is_foreign_key_violation(exc):
                logger.warning("%s references a missing row: %s", self.label, exc.orig)
                raise NotFoundError(
                    f"{self.label} references a record that does not exist",
                    details={"error": str(exc.orig)},
                    code="reference_not_found",
                ) from exc
            logger.warning("%s conflicts with an existing row: %s", self.label, exc.orig)
            raise ConflictError(
                f"{self.label} already exists",
                details={"error": str(exc.orig)},
                code="duplicate",
            ) from exc

    def not_found(self, entity_id: Any) -> NotFoundError:
        return NotFoundError(
            f"{self.label} {entity_id} not found",
            details={"id": str(entity_id)},
            code="not_found",
        )

    def get(self, session: Session, entity_id: UUID) -> Optional[ModelType]:
        return session.get(self.model, entity_id)

    def require(self, session: Session, entity_id: UUID) -> ModelType:
        entity = session.get(self.model, entity_id)
        if entity is None:
            raise self.not_found(entity_id)
        return entity

    def find_by_id(self, entity_id: UUID) -> Optional[ModelType]:
        with self.session() as session:
            return self.get(session, entity_id)

    def insert(self, values: Mapping[str, Any]) -> ModelType:
        entity = self.model(**values)
        with self.session() as session:
            session.add(entity)
            session.flush()
        logger.debug("Created %s %s", self.label, entity.id)
        return entity

    def insert_many(self, rows: Sequence[Mapping[str, Any]]) -> list:
        entities = [self.model(**row) for row in rows]
        with self.session() as session:
            session.add_all(entities)
            session.flush()
        logger.debug("Created %d %s rows", len(entities), self.label)
        return entities

    def patch(self, entity_id: UUID, values: Mapping[str, Any]) -> ModelType:
        with self.session() as session:
            entity = self.require(session, entity_id)
            for key, value in values.items():
                setattr(entity, key, value)
            session.flush()
        logger.debug("Updated %s %s (%s)", self.label, entity_id, ", ".join(values) or "no fields")
        return entity

    def remove(self, entity_id: UUID) -> None:
        with self.session() as session:
            entity = self.require(session, entity_id)
            session.delete(entity)
            session.flush()
        logger.debug("Deleted %s %s", self.label, entity_id)

    def scalar(self, statement) -> Any:
        with self.session() as session:
            return session.execute(statement).scalar()

    def scalars(self, statement) -> list:
        with self.session() as session:
            return list(session.execute(statement).scalars().all())


def paginate(
    statement,
    model: Type[Any],
    options: Optional[QueryOptions],
    *,
    default_order_by: str,
    default_order: str,
    default_take: Optional[int],
    max_take: Optional[int] = None,
):
    """Apply ``QueryOptions`` ordering and pagination to a select statement.

    Only real column names are accepted for ``order_by``.
    """
    options = options or QueryOptions()
    order_by = options.order_by or default_order_by
    order = options.order or default_order

    columns = model.__table__.columns
    if order_by not in columns:
        raise ValidationError(
            f"Cannot order {model.__name__} by '{order_by}'",
            details={"order_by": order_by},
            code="invalid_order_by",
        )
    column = getattr(model, order_by)
    statement = statement.order_by(column.asc() if order == "asc" else column.desc())

    take = options.take if options.take is not None else default_take
    if take is not None and max_take is not None:
        take = min(take, max_take)
    if options.skip:
        statement = statement.offset(options.skip)
    if take is not None:
        statement = statement.limit(take)
    return statement