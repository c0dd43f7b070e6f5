from __future__ import annotations

import datetime as dt
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field, model_validator

from domain.enums import MealType
from domain.schemas.common import QueryOptions


class MealPlanCreate(BaseModel):
    user_id: UUID
    recipe_id: UUID
    date: dt.date
    meal_type: MealType
    servings: int = Field(default=1, ge=1)
    notes: Optional[str] = None
    is_completed: bool = False


class MealPlanUpdate(BaseModel):
    recipe_id: Optional[UUID] = None
    date: Optional[dt.date] = None
    meal_type: Optional[MealType] = None
    servings: Optional[int] = Field(default=None, ge=1)
    notes: Optional[str] = None
    is_completed: Optional[bool] = None


class MealPlanQueryOptions(QueryOptions):
    """Calendar filters on top of the usual pagination"""

    start_date: Optional[dt.date] = None
    end_date: Optional[dt.date] = None
    meal_type: Optional[MealType] = None
    is_completed: Optional[bool] = None

    @model_validator(mode="after")
    def check_range(self):
        if self.start_date and self.end_date and self.start_date > self.end_date:
            raise ValueError("start_date must not be after end_date")
        return self


class RecipeSummary(BaseModel):
    id: UUID
    name: str
    servings: int

    model_config = {"from_attributes": True}


class MealPlanWithDetails(BaseModel):
    id: UUID
    user_id: UUID
    recipe_id: UUID
    date: dt.date
    meal_type: MealType
    servings: int
    notes: Optional[str] = None
    is_completed: bool
    recipe: RecipeSummary

    model_config = {"from_attributes": True}
