"""
Tests for settings, the error taxonomy, logging setup and the database handle.
"""

import logging

import pytest
from sqlalchemy import text

from test_fixtures import database, make_settings
from app.config import Environment, Settings
from app.exceptions import (
    ConflictError,
    ForbiddenError,
    ListlyError,
    NotFoundError,
    TransactionStateError,
    ValidationError,
)
from app.log_config import configure_logging, get_logger
from domain.models import Database


# =============================================================================
# SETTINGS
# =============================================================================


def test_settings_defaults():
    settings = Settings(_env_file=None)

    assert settings.database_url == "sqlite:///./listly.db"
    assert settings.environment == Environment.DEVELOPMENT
    assert settings.db_isolation_level is None
    assert settings.is_sqlite() is True
    assert settings.is_production() is False


def test_settings_read_prefixed_environment(monkeypatch):
    monkeypatch.setenv("LISTLY_DATABASE_URL", "postgresql+psycopg2://listly@db/listly")
    monkeypatch.setenv("LISTLY_ENVIRONMENT", "PRODUCTION")
    monkeypatch.setenv("LISTLY_DB_ISOLATION_LEVEL", "repeatable_read")
    monkeypatch.setenv("LISTLY_LOG_LEVEL", "WARNING")

    settings = Settings(_env_file=None)

    assert settings.is_production() is True
    assert settings.is_sqlite() is False
    assert settings.db_isolation_level == "REPEATABLE READ"
    assert settings.log_level == "WARNING"


def test_make_settings_targets_memory_database():
    settings = make_settings()

    assert settings.is_testing() is True
    assert settings.database_url == "sqlite://"


# =============================================================================
# ERRORS
# =============================================================================


@pytest.mark.parametrize(
    "error_class, status",
    [
        (ValidationError, 400),
        (ForbiddenError, 403),
        (NotFoundError, 404),
        (ConflictError, 409),
        (TransactionStateError, 500),
    ],
)
def test_error_statuses(error_class, status):
    error = error_class()

    assert isinstance(error, ListlyError)
    assert error.http_status == status
    assert str(error) == error_class.default_message


def test_error_to_dict():
    error = NotFoundError("Store 42 not found", details={"id": "42"}, code="not_found")

    assert error.to_dict() == {
        "message": "Store 42 not found",
        "code": "not_found",
        "details": {"id": "42"},
    }
    assert ConflictError("Taken").to_dict() == {"message": "Taken"}


# =============================================================================
# LOGGING
# =============================================================================


def test_configure_logging_sets_package_level():
    root = configure_logging(make_settings(log_level="warning"))

    assert root.name == "listly"
    assert root.level == logging.WARNING
    assert get_logger("repositories").name == "listly.repositories"
    assert get_logger().name == "listly"


# =============================================================================
# DATABASE HANDLE
# =============================================================================


def test_sqlite_foreign_keys_enforced(database):
    with database.session_scope() as session:
        assert session.execute(text("PRAGMA foreign_keys")).scalar() == 1


def test_session_scope_rolls_back_on_error(database):
    with pytest.raises(RuntimeError):
        with database.session_scope() as session:
            session.execute(text("INSERT INTO store (id, name, created_at, updated_at) "
                                 "VALUES ('0123456789abcdef0123456789abcdef', 'Temp', "
                                 "'2024-01-01 00:00:00', '2024-01-01 00:00:00')"))
            raise RuntimeError("abort")

    with database.session_scope() as session:
        assert session.execute(text("SELECT count(*) FROM store")).scalar() == 0


def test_closed_database_refuses_sessions():
    db = Database.from_settings(make_settings())
    db.close()

    assert db.closed is True
    with pytest.raises(RuntimeError):
        db.create_session()
    # Closing twice is harmless
    db.close()
