# expenses_api/services/transactions.py
import logging
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from expenses_api.crud import transaction as transaction_crud
from expenses_api.models.transaction import Transaction
from expenses_api.schemas.transaction import TransactionCreate, TransactionUpdate

logger = logging.getLogger(__name__)


class TransactionService:
    """Transaction CRUD where every read and write is restricted to the owner."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_all(self, owner_id: int) -> List[Transaction]:
        logger.info(f"Fetching all transactions for user {owner_id}")
        return await transaction_crud.get_transactions_for_user(owner_id, self.db)

    async def get_by_id(self, transaction_id: int, owner_id: int) -> Optional[Transaction]:
        return await transaction_crud.get_transaction_by_id(transaction_id, owner_id, self.db)

    async def create(self, payload: TransactionCreate, owner_id: int) -> Transaction:
        tx = await transaction_crud.create_transaction_for_user(owner_id, payload, self.db)
        logger.info(f"Transaction {tx.id} created for user {owner_id}")
        return tx

    async def update(
        self,
        transaction_id: int,
        payload: TransactionUpdate,
        owner_id: int,
    ) -> Optional[Transaction]:
        tx = await self.get_by_id(transaction_id, owner_id)
        if tx is None:
            logger.warning(f"Transaction {transaction_id} not found for user {owner_id}")
            return None
        return await transaction_crud.update_transaction(tx, payload, self.db)

    async def delete(self, transaction_id: int, owner_id: int) -> bool:
        tx = await self.get_by_id(transaction_id, owner_id)
        if tx is None:
            logger.warning(f"Transaction {transaction_id} not found for user {owner_id}")
            return False
        await transaction_crud.delete_transaction(tx, self.db)
        logger.info(f"Transaction {transaction_id} deleted")
        return True
