"""
Shared test fixtures and utilities for the Listly test suite.

Every test gets its own in-memory SQLite database (StaticPool, foreign
keys enforced) with the full schema created, plus small helpers that
persist realistic rows through the real repositories.
"""

import uuid
from decimal import Decimal
from typing import Generator, Optional

import pytest

from app.config import Environment, Settings
from domain.models import Database
from domain.schemas import (
    CategoryCreate,
    ListItemCreate,
    ShoppingListCreate,
    StoreCreate,
    UserCreate,
)
from repositories import (
    CategoryRepository,
    ItemRepository,
    ListRepository,
    StoreRepository,
    UserRepository,
)


# Helper function to generate unique emails
def unique_email(prefix: str = "test") -> str:
    """Generate unique email address using UUID to avoid conflicts"""
    return f"{prefix}-{uuid.uuid4()}@example.com"


# Realistic default user profiles
REALISTIC_USERS = {
    "default": {"name": "Sarah Martinez", "email_prefix": "sarah.martinez"},
    "partner": {"name": "Michael Chen", "email_prefix": "michael.chen"},
    "roommate": {"name": "Emma Johnson", "email_prefix": "emma.johnson"},
    "stranger": {"name": "Raj Patel", "email_prefix": "raj.patel"},
}


def make_settings(**overrides) -> Settings:
    values = {
        "database_url": "sqlite://",
        "environment": Environment.TESTING,
        "log_level": "DEBUG",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture(scope="function")
def database() -> Generator[Database, None, None]:
    """
    Create a fresh in-memory database for one test.

    Yields:
        Database: top-level handle with all tables created
    """
    db = Database.from_settings(make_settings())
    db.init_schema()
    try:
        yield db
    finally:
        db.close()


def make_user(database: Database, profile_type: str = "default", **fields):
    """
    Persist a user with realistic data.

    Args:
        database: handle to write through
        profile_type: key of REALISTIC_USERS (default, partner, roommate, stranger)
        **fields: any UserCreate field to override

    Example:
        >>> owner = make_user(database)
        >>> owner.name
        'Sarah Martinez'
    """
    profile = REALISTIC_USERS[profile_type]
    values = {"email": unique_email(profile["email_prefix"]), "name": profile["name"]}
    values.update(fields)
    return UserRepository(database).create(UserCreate(**values))


def make_list(database: Database, owner_id: uuid.UUID, name: str = "Weekly groceries", **fields):
    return ListRepository(database).create(ShoppingListCreate(name=name, owner_id=owner_id, **fields))


def make_item(
    database: Database,
    list_id: uuid.UUID,
    name: str = "Bananas",
    price: Optional[str] = None,
    **fields,
):
    estimated_price = Decimal(price) if price is not None else None
    return ItemRepository(database).create(
        ListItemCreate(list_id=list_id, name=name, estimated_price=estimated_price, **fields)
    )


def make_store(database: Database, name: str = "Corner Market", **fields):
    return StoreRepository(database).create(StoreCreate(name=name, **fields))


def make_category(database: Database, name: str, sort_order: int = 0, is_default: bool = True, **fields):
    return CategoryRepository(database).create(
        CategoryCreate(name=name, sort_order=sort_order, is_default=is_default, **fields)
    )
