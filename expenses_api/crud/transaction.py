# expenses_api/crud/transaction.py
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import desc
from typing import List, Optional

from expenses_api.models.base import utcnow
from expenses_api.models.transaction import Transaction
from expenses_api.schemas.transaction import TransactionCreate, TransactionUpdate


async def get_transactions_for_user(user_id: int, db: AsyncSession) -> List[Transaction]:
    result = await db.execute(
        select(Transaction)
        .where(Transaction.user_id == user_id)
        .order_by(desc(Transaction.created_at), desc(Transaction.id))
    )
    return list(result.scalars().all())


async def get_transaction_by_id(transaction_id: int, user_id: int, db: AsyncSession) -> Optional[Transaction]:
    result = await db.execute(
        select(Transaction).where(Transaction.id == transaction_id, Transaction.user_id == user_id)
    )
    return result.scalar_one_or_none()


async def create_transaction_for_user(user_id: int, tx_in: TransactionCreate, db: AsyncSession) -> Transaction:
    now = utcnow()
    new_tx = Transaction(
        type=tx_in.type,
        amount=tx_in.amount,
        category=tx_in.category,
        user_id=user_id,
        created_at=tx_in.created_at or now,
        updated_at=now,
    )
    db.add(new_tx)
    await db.commit()
    await db.refresh(new_tx)
    return new_tx


async def update_transaction(tx: Transaction, tx_in: TransactionUpdate, db: AsyncSession) -> Transaction:
    # The owner never changes on update
    for field, value in tx_in.model_dump(include={"type", "amount", "category"}).items():
        setattr(tx, field, value)
    tx.updated_at = utcnow()
    db.add(tx)
    await db.commit()
    await db.refresh(tx)
    return tx


async def delete_transaction(tx: Transaction, db: AsyncSession) -> None:
    await db.delete(tx)
    await db.commit()
