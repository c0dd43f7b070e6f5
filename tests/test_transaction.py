"""
Tests for the transaction coordinator.

Verifies:
- Work done through the context commits atomically
- Any exception rolls everything back and propagates unchanged
- A closed unit of work refuses further use
- Reads inside a transaction see its own bulk writes
- A failed write leaves the transaction unusable until rolled back
- Nested transactions are rejected
"""

import uuid

import pytest

from test_fixtures import database, make_item, make_list, make_user
from app.exceptions import ConflictError, NotFoundError, TransactionStateError
from domain.enums import CollaboratorRole
from domain.schemas import CollaboratorCreate, ListItemCreate, ListItemUpdate, ShoppingListCreate
from repositories import (
    CollaborationRepository,
    ItemRepository,
    ListRepository,
    ListRepositoryProtocol,
)
from services.transaction import (
    TransactionContext,
    TransactionState,
    UnitOfWork,
    transaction,
    with_transaction,
)


class Boom(Exception):
    pass


def test_commit_on_success(database):
    owner = make_user(database)

    def create_list_with_items(ctx: TransactionContext):
        shopping_list = ctx.list_repo.create(ShoppingListCreate(name="Camping trip", owner_id=owner.id))
        ctx.item_repo.create_many([
            ListItemCreate(list_id=shopping_list.id, name="Marshmallows"),
            ListItemCreate(list_id=shopping_list.id, name="Firewood"),
        ])
        return shopping_list.id

    list_id = with_transaction(database, create_list_with_items)

    assert ListRepository(database).find_by_id(list_id).name == "Camping trip"
    assert ItemRepository(database).count_by_list(list_id) == 2


def test_rollback_on_error_reraises_callback_exception(database):
    """
    Verifies:
    - Rows written before the failure are gone afterwards
    - The callback's own exception object propagates
    """
    owner = make_user(database)
    error = Boom("halfway")
    created = {}

    def fail_halfway(ctx):
        shopping_list = ctx.list_repo.create(ShoppingListCreate(name="Never saved", owner_id=owner.id))
        ctx.item_repo.create(ListItemCreate(list_id=shopping_list.id, name="Lost item"))
        created["list_id"] = shopping_list.id
        raise error

    with pytest.raises(Boom) as exc_info:
        with_transaction(database, fail_halfway)

    assert exc_info.value is error
    assert ListRepository(database).find_by_id(created["list_id"]) is None
    assert ListRepository(database).count_by_owner(owner.id) == 0


def test_domain_error_rolls_back_earlier_writes(database):
    owner = make_user(database)
    partner = make_user(database, "partner")
    shopping_list = make_list(database, owner.id)
    CollaborationRepository(database).create(CollaboratorCreate(list_id=shopping_list.id, user_id=partner.id))

    def share_twice(ctx):
        ctx.item_repo.create(ListItemCreate(list_id=shopping_list.id, name="Coffee"))
        ctx.collaboration_repo.create(
            CollaboratorCreate(list_id=shopping_list.id, user_id=partner.id, role=CollaboratorRole.EDITOR)
        )

    with pytest.raises(ConflictError):
        with_transaction(database, share_twice)

    assert ItemRepository(database).count_by_list(shopping_list.id) == 0
    assert CollaborationRepository(database).get_role(shopping_list.id, partner.id) == CollaboratorRole.VIEWER


def test_context_manager_form(database):
    owner = make_user(database)

    with transaction(database) as ctx:
        shopping_list = ctx.list_repo.create(ShoppingListCreate(name="Dinner party", owner_id=owner.id))
        assert ctx.access.is_owner(shopping_list.id, owner.id)

    assert ctx.unit_of_work.state is TransactionState.CLOSED
    assert ListRepository(database).find_by_id(shopping_list.id) is not None

    with pytest.raises(Boom):
        with transaction(database) as ctx:
            ctx.list_repo.create(ShoppingListCreate(name="Abandoned", owner_id=owner.id))
            raise Boom()

    assert ListRepository(database).count_by_owner(owner.id) == 1


def test_context_repositories_share_one_transaction(database):
    owner = make_user(database)

    def check(ctx):
        shopping_list = ctx.list_repo.create(ShoppingListCreate(name="Visible inside", owner_id=owner.id))
        # Uncommitted writes are visible to every repository in the context
        assert ctx.access.has_access(shopping_list.id, owner.id)
        assert ctx.user_repo.get_stats(owner.id).list_count == 1
        return ctx

    ctx = with_transaction(database, check)

    assert isinstance(ctx.list_repo, ListRepositoryProtocol)


def test_closed_unit_of_work_refuses_use(database):
    owner = make_user(database)
    ctx = with_transaction(database, lambda ctx: ctx)

    assert ctx.unit_of_work.state is TransactionState.CLOSED
    with pytest.raises(TransactionStateError):
        ctx.list_repo.find_by_owner(owner.id)
    with pytest.raises(TransactionStateError):
        ctx.unit_of_work.commit()
    with pytest.raises(TransactionStateError):
        ctx.unit_of_work.rollback()


def test_unit_of_work_state_machine(database):
    committed = UnitOfWork(database)
    assert committed.state is TransactionState.OPEN
    committed.commit()
    assert committed.state is TransactionState.CLOSED

    rolled_back = UnitOfWork(database)
    rolled_back.rollback()
    assert rolled_back.state is TransactionState.CLOSED
    with pytest.raises(TransactionStateError):
        rolled_back.ensure_open()


def test_nested_transactions_are_rejected(database):
    def nest(ctx):
        return with_transaction(ctx, lambda inner: None)

    with pytest.raises(TransactionStateError):
        with_transaction(database, nest)

    with pytest.raises(TransactionStateError):
        with transaction(database) as ctx:
            with transaction(ctx.unit_of_work.handle):
                pass


def test_requires_database_handle():
    with pytest.raises(TypeError):
        with_transaction("sqlite://", lambda ctx: None)


def test_bulk_writes_are_visible_to_later_reads(database):
    owner = make_user(database)
    shopping_list = make_list(database, owner.id)
    milk = make_item(database, shopping_list.id, "Milk")
    bread = make_item(database, shopping_list.id, "Bread")

    def rename_and_prune(ctx):
        # Load both into the session first so stale copies would be served
        assert ctx.item_repo.find_by_id(milk.id).name == "Milk"
        assert ctx.item_repo.find_by_id(bread.id) is not None

        assert ctx.item_repo.bulk_update([milk.id], ListItemUpdate(name="Oat milk", is_checked=True)) == 1
        renamed = ctx.item_repo.find_by_id(milk.id)
        assert renamed.name == "Oat milk"
        assert renamed.is_checked is True
        assert renamed.checked_at is not None

        assert ctx.item_repo.bulk_delete([bread.id]) == 1
        assert ctx.item_repo.find_by_id(bread.id) is None
        assert ctx.item_repo.count_by_list(shopping_list.id) == 1

    with_transaction(database, rename_and_prune)

    items = ItemRepository(database)
    assert items.find_by_id(milk.id).name == "Oat milk"
    assert items.find_by_id(bread.id) is None


def test_caught_write_error_poisons_transaction(database):
    """
    Verifies:
    - Repository calls after a failed flush raise TransactionStateError
    - The coordinator rolls back instead of committing the earlier writes
    """
    owner = make_user(database)
    shopping_list = make_list(database, owner.id)

    def swallow_failure(ctx):
        ctx.item_repo.create(ListItemCreate(list_id=shopping_list.id, name="Coffee"))
        try:
            ctx.item_repo.create(ListItemCreate(list_id=uuid.uuid4(), name="Orphan"))
        except NotFoundError:
            pass
        with pytest.raises(TransactionStateError) as exc_info:
            ctx.item_repo.count_by_list(shopping_list.id)
        assert exc_info.value.code == "transaction_failed"

    with pytest.raises(TransactionStateError) as exc_info:
        with_transaction(database, swallow_failure)

    assert exc_info.value.code == "transaction_failed"
    assert ItemRepository(database).count_by_list(shopping_list.id) == 0
