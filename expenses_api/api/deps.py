# expenses_api/api/deps.py
import logging
from typing import Optional
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from expenses_api.core.database import get_async_session
from expenses_api.core.exceptions import InvalidTokenError
from expenses_api.core.security import PasswordHasher, TokenIssuer, TokenValidator
from expenses_api.crud.user import get_user_by_id
from expenses_api.models.user import User
from expenses_api.services.account import AccountService
from expenses_api.services.transactions import TransactionService

logger = logging.getLogger(__name__)

# Security scheme; missing credentials are reported by get_current_user
bearer_scheme = HTTPBearer(auto_error=False)


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher


def get_token_issuer(request: Request) -> TokenIssuer:
    return request.app.state.token_issuer


def get_token_validator(request: Request) -> TokenValidator:
    return request.app.state.token_validator


def get_account_service(
    db: AsyncSession = Depends(get_async_session),
    hasher: PasswordHasher = Depends(get_password_hasher),
    token_issuer: TokenIssuer = Depends(get_token_issuer),
) -> AccountService:
    return AccountService(db, hasher, token_issuer)


def get_transaction_service(db: AsyncSession = Depends(get_async_session)) -> TransactionService:
    return TransactionService(db)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    db: AsyncSession = Depends(get_async_session),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    validator: TokenValidator = Depends(get_token_validator),
) -> User:
    """
    Resolve the caller from the `Authorization: Bearer <token>` header.

    Rejects the request with 401 when the token is missing, fails validation,
    or names a user that no longer exists.
    """
    if credentials is None or not credentials.credentials:
        raise _unauthorized("Not authenticated")

    try:
        claims = validator.validate(credentials.credentials)
    except InvalidTokenError as e:
        logger.warning(f"Rejected bearer token: {e}")
        raise _unauthorized(str(e))

    user = await get_user_by_id(claims.user_id, db)
    if user is None:
        raise _unauthorized("User not found")

    return user
