# expenses_api/api/routes/transactions.py
import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Response, status

from expenses_api.api.deps import get_current_user, get_transaction_service
from expenses_api.models.user import User
from expenses_api.schemas.transaction import TransactionCreate, TransactionRead, TransactionUpdate
from expenses_api.services.transactions import TransactionService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/Transactions", tags=["Transactions"])


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Transaction not found!")


@router.get(
    "/All",
    response_model=List[TransactionRead],
    summary="Obtain a list of all of the caller's transactions.",
    responses={status.HTTP_204_NO_CONTENT: {"description": "No transactions yet"}},
)
async def read_transactions(
    user: User = Depends(get_current_user),
    service: TransactionService = Depends(get_transaction_service),
):
    transactions = await service.list_all(user.id)
    if not transactions:
        logger.warning("No transactions found!")
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return transactions


@router.get(
    "/Details/{transaction_id}",
    response_model=TransactionRead,
    summary="Obtain a transaction by ID.",
)
async def read_transaction(
    transaction_id: int,
    user: User = Depends(get_current_user),
    service: TransactionService = Depends(get_transaction_service),
):
    logger.info(f"Fetching transaction with ID: {transaction_id}...")
    tx = await service.get_by_id(transaction_id, user.id)
    if tx is None:
        logger.warning(f"Transaction with ID: {transaction_id} not found!")
        raise _not_found()
    return tx


@router.post(
    "/Create",
    response_model=TransactionRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new transaction.",
)
async def create_transaction(
    tx_in: TransactionCreate,
    user: User = Depends(get_current_user),
    service: TransactionService = Depends(get_transaction_service),
):
    logger.info("Creating a new transaction...")
    return await service.create(tx_in, user.id)


@router.put(
    "/Update/{transaction_id}",
    response_model=TransactionRead,
    summary="Update an existing transaction.",
)
async def update_transaction(
    transaction_id: int,
    tx_in: TransactionUpdate,
    user: User = Depends(get_current_user),
    service: TransactionService = Depends(get_transaction_service),
):
    logger.info(f"Updating transaction with ID: {transaction_id}...")
    tx = await service.update(transaction_id, tx_in, user.id)
    if tx is None:
        raise _not_found()
    logger.info(f"Transaction with ID: {transaction_id} updated successfully.")
    return tx


@router.delete(
    "/Delete/{transaction_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a transaction by ID.",
)
async def delete_transaction(
    transaction_id: int,
    user: User = Depends(get_current_user),
    service: TransactionService = Depends(get_transaction_service),
):
    logger.info(f"Deleting transaction with ID: {transaction_id}...")
    if not await service.delete(transaction_id, user.id):
        raise _not_found()
    return None
