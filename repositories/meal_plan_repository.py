"""
Meal Plan Repository - Data access layer for meal plan operations
"""

import datetime as dt
import logging
from typing import List, Optional, Sequence
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.orm import selectinload

from repositories.base import DataHandle, EntityStore, paginate, patch_values
from domain.enums import MealType
from domain.models import MealPlan
from domain.schemas import (
    MealPlanCreate,
    MealPlanQueryOptions,
    MealPlanUpdate,
    MealPlanWithDetails,
)

logger = logging.getLogger("listly.repositories.meal_plans")

DEFAULT_PAGE_SIZE = 50


class MealPlanRepository:
    """Repository for meal plan data access"""

    def __init__(self, handle: DataHandle):
        self._store = EntityStore(handle, MealPlan, "Meal plan")

    def create(self, data: MealPlanCreate) -> MealPlan:
        return self._store.insert(data.model_dump())

    def create_many(self, plans: Sequence[MealPlanCreate]) -> List[MealPlan]:
        """Schedule several meals at once; all rows land in one session scope"""
        return self._store.insert_many([plan.model_dump() for plan in plans])

    def find_by_id(self, plan_id: UUID) -> Optional[MealPlan]:
        return self._store.find_by_id(plan_id)

    def find_by_id_with_details(self, plan_id: UUID) -> Optional[MealPlanWithDetails]:
        with self._store.session() as session:
            plan = session.execute(
                select(MealPlan)
                .options(selectinload(MealPlan.recipe))
                .where(MealPlan.id == plan_id)
            ).scalar_one_or_none()
            return MealPlanWithDetails.model_validate(plan) if plan else None

    def update(self, plan_id: UUID, patch: MealPlanUpdate) -> MealPlan:
        return self._store.patch(plan_id, patch_values(patch))

    def delete(self, plan_id: UUID) -> None:
        self._store.remove(plan_id)

    def _filtered(self, statement, user_id: UUID, options: MealPlanQueryOptions):
        statement = statement.where(MealPlan.user_id == user_id)
        if options.start_date is not None:
            statement = statement.where(MealPlan.date >= options.start_date)
        if options.end_date is not None:
            statement = statement.where(MealPlan.date <= options.end_date)
        if options.meal_type is not None:
            statement = statement.where(MealPlan.meal_type == options.meal_type)
        if options.is_completed is not None:
            statement = statement.where(MealPlan.is_completed.is_(options.is_completed))
        return statement

    def find_by_user(
        self, user_id: UUID, options: Optional[MealPlanQueryOptions] = None
    ) -> List[MealPlanWithDetails]:
        """A user's calendar, earliest day first by default.

        ``start_date`` and ``end_date`` are both inclusive.
        """
        options = options or MealPlanQueryOptions()
        statement = paginate(
            self._filtered(select(MealPlan).options(selectinload(MealPlan.recipe)), user_id, options),
            MealPlan,
            options,
            default_order_by="date",
            default_order="asc",
            default_take=DEFAULT_PAGE_SIZE,
        )
        with self._store.session() as session:
            plans = session.execute(statement).scalars().all()
            return [MealPlanWithDetails.model_validate(plan) for plan in plans]

    def count_by_user(self, user_id: UUID, options: Optional[MealPlanQueryOptions] = None) -> int:
        options = options or MealPlanQueryOptions()
        statement = self._filtered(select(func.count()).select_from(MealPlan), user_id, options)
        return self._store.scalar(statement) or 0

    def find_conflicting_non_completed(
        self, user_id: UUID, day: dt.date, meal_type: MealType
    ) -> List[MealPlan]:
        """Open plans already occupying the same slot.

        Rows are locked where the dialect supports it, so a caller inside a
        transaction can check and insert without a competing writer
        slipping in between.
        """
        return self._store.scalars(
            select(MealPlan)
            .where(
                MealPlan.user_id == user_id,
                MealPlan.date == day,
                MealPlan.meal_type == meal_type,
                MealPlan.is_completed.is_(False),
            )
            .order_by(MealPlan.created_at.asc())
            .with_for_update()
        )

    def is_owner(self, plan_id: UUID, user_id: UUID) -> bool:
        owner_id = self._store.scalar(select(MealPlan.user_id).where(MealPlan.id == plan_id))
        return owner_id is not None and owner_id == user_id
