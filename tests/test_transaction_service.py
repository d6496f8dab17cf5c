"""Tests for the owner-scoped TransactionService."""

from datetime import datetime

import pytest
from pydantic import ValidationError

from expenses_api.models.base import utcnow
from expenses_api.schemas.transaction import TransactionCreate, TransactionUpdate


def expense(amount=50.0, category="Food", **extra) -> TransactionCreate:
    return TransactionCreate(type="Expense", amount=amount, category=category, **extra)


class TestTransactionLifecycle:
    """Create, read, update and delete for a single owner."""

    async def test_create_then_get_then_update(self, transaction_service, alice):
        created = await transaction_service.create(
            TransactionCreate(type="Income", amount=1000, category="Salary"), alice.id
        )

        fetched = await transaction_service.get_by_id(created.id, alice.id)
        assert fetched.amount == 1000
        assert fetched.category == "Salary"
        assert fetched.user_id == alice.id
        created_at = fetched.created_at

        await transaction_service.update(
            created.id, TransactionUpdate(type="Income", amount=1200, category="Salary"), alice.id
        )

        refetched = await transaction_service.get_by_id(created.id, alice.id)
        assert refetched.amount == 1200
        assert refetched.created_at == created_at
        assert refetched.updated_at > created_at

    async def test_create_uses_supplied_creation_time(self, transaction_service, alice):
        created = await transaction_service.create(
            expense(created_at=datetime(2024, 1, 2, 3, 4, 5)), alice.id
        )

        assert created.created_at == datetime(2024, 1, 2, 3, 4, 5)
        assert created.updated_at > created.created_at

    def test_future_creation_time_is_rejected(self):
        with pytest.raises(ValidationError, match="cannot be in the future"):
            expense(created_at=datetime(2099, 1, 1))

    async def test_create_defaults_creation_time_to_now(self, transaction_service, alice):
        before = utcnow().replace(microsecond=0)
        created = await transaction_service.create(expense(), alice.id)

        assert created.created_at >= before
        assert created.updated_at == created.created_at

    async def test_negative_amounts_are_kept(self, transaction_service, alice):
        created = await transaction_service.create(expense(amount=-12.5), alice.id)

        assert created.amount == -12.5

    async def test_list_all_is_empty_list_for_new_user(self, transaction_service, alice):
        assert await transaction_service.list_all(alice.id) == []

    async def test_list_all_newest_first(self, transaction_service, alice):
        older = await transaction_service.create(expense(created_at=datetime(2024, 1, 1)), alice.id)
        newer = await transaction_service.create(expense(created_at=datetime(2024, 6, 1)), alice.id)

        listed = await transaction_service.list_all(alice.id)

        assert [tx.id for tx in listed] == [newer.id, older.id]

    async def test_delete_twice(self, transaction_service, alice):
        kept = await transaction_service.create(expense(category="Rent"), alice.id)
        doomed = await transaction_service.create(expense(), alice.id)

        assert await transaction_service.delete(doomed.id, alice.id) is True
        assert await transaction_service.delete(doomed.id, alice.id) is False
        assert [tx.id for tx in await transaction_service.list_all(alice.id)] == [kept.id]

    async def test_update_unknown_id_returns_none(self, transaction_service, alice):
        update = TransactionUpdate(type="Expense", amount=1, category="Food")
        assert await transaction_service.update(999, update, alice.id) is None


class TestOwnershipIsolation:
    """Every operation is scoped to the caller; other users' ids behave as unknown."""

    async def test_list_all_excludes_other_users(self, transaction_service, alice, bob):
        await transaction_service.create(expense(amount=50, category="Food"), alice.id)

        assert await transaction_service.list_all(bob.id) == []
        assert len(await transaction_service.list_all(alice.id)) == 1

    async def test_get_by_id_is_owner_scoped(self, transaction_service, alice, bob):
        tx = await transaction_service.create(expense(), alice.id)

        assert await transaction_service.get_by_id(tx.id, bob.id) is None
        assert await transaction_service.get_by_id(tx.id, alice.id) is not None

    async def test_update_is_owner_scoped(self, transaction_service, alice, bob):
        tx = await transaction_service.create(expense(amount=50), alice.id)

        result = await transaction_service.update(
            tx.id, TransactionUpdate(type="Income", amount=9999, category="Hijack"), bob.id
        )

        assert result is None
        unchanged = await transaction_service.get_by_id(tx.id, alice.id)
        assert unchanged.amount == 50
        assert unchanged.user_id == alice.id

    async def test_delete_is_owner_scoped(self, transaction_service, alice, bob):
        tx = await transaction_service.create(expense(), alice.id)

        assert await transaction_service.delete(tx.id, bob.id) is False
        assert await transaction_service.get_by_id(tx.id, alice.id) is not None

    async def test_update_never_moves_ownership(self, transaction_service, alice):
        tx = await transaction_service.create(expense(), alice.id)

        updated = await transaction_service.update(
            tx.id, TransactionUpdate(type="Expense", amount=75, category="Food"), alice.id
        )

        assert updated.user_id == alice.id
