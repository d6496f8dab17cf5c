from fastapi import APIRouter

from expenses_api.api.routes import account, transactions

api_router = APIRouter()

api_router.include_router(account.router)
api_router.include_router(transactions.router)
