"""
Tests for the list access gate.
"""

import uuid

import pytest

from test_fixtures import database, make_list, make_user
from app.exceptions import ForbiddenError
from domain.enums import CollaboratorRole
from domain.schemas import CollaboratorCreate
from repositories import AccessGateProtocol, CollaborationRepository
from services.access import ListAccessGate


@pytest.fixture
def shared_list(database):
    owner = make_user(database)
    editor = make_user(database, "partner")
    stranger = make_user(database, "stranger")
    shopping_list = make_list(database, owner.id)
    CollaborationRepository(database).create(
        CollaboratorCreate(list_id=shopping_list.id, user_id=editor.id, role=CollaboratorRole.EDITOR)
    )
    return shopping_list, owner, editor, stranger


def test_gate_implements_protocol(database):
    assert isinstance(ListAccessGate(database), AccessGateProtocol)


def test_has_access(database, shared_list):
    """
    Verifies:
    - The owner and collaborators have access
    - Anyone else does not, and nobody has access to a missing list
    """
    shopping_list, owner, editor, stranger = shared_list
    gate = ListAccessGate(database)

    assert gate.has_access(shopping_list.id, owner.id) is True
    assert gate.has_access(shopping_list.id, editor.id) is True
    assert gate.has_access(shopping_list.id, stranger.id) is False
    assert gate.has_access(uuid.uuid4(), owner.id) is False


def test_is_owner_and_get_role(database, shared_list):
    shopping_list, owner, editor, stranger = shared_list
    gate = ListAccessGate(database)

    assert gate.is_owner(shopping_list.id, owner.id) is True
    assert gate.is_owner(shopping_list.id, editor.id) is False
    assert gate.is_owner(uuid.uuid4(), owner.id) is False

    assert gate.get_role(shopping_list.id, editor.id) == CollaboratorRole.EDITOR
    # The owner has no collaborator row
    assert gate.get_role(shopping_list.id, owner.id) is None
    assert gate.get_role(shopping_list.id, stranger.id) is None


def test_require_helpers_raise_forbidden(database, shared_list):
    shopping_list, owner, editor, stranger = shared_list
    gate = ListAccessGate(database)

    gate.require_access(shopping_list.id, editor.id)
    gate.require_owner(shopping_list.id, owner.id)

    with pytest.raises(ForbiddenError) as exc_info:
        gate.require_access(shopping_list.id, stranger.id)
    assert exc_info.value.http_status == 403
    assert exc_info.value.code == "list_access_denied"

    with pytest.raises(ForbiddenError):
        gate.require_owner(shopping_list.id, editor.id)
