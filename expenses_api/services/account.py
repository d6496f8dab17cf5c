# expenses_api/services/account.py
import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from expenses_api.core.security import PasswordHasher, PasswordVerification, TokenIssuer
from expenses_api.crud import user as user_crud
from expenses_api.models.user import User
from expenses_api.schemas.account import AuthFailure, AuthResult, IdentityClaims

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Invalid Email or Password. Please try again."
EMAIL_TAKEN_MESSAGE = "A user with this email already exists."


class AccountService:
    """
    Registration, login and profile operations.

    Collaborators are passed in explicitly; one instance serves one request.
    Bcrypt work runs in the threadpool so it does not stall the event loop.
    """

    def __init__(self, db: AsyncSession, hasher: PasswordHasher, token_issuer: TokenIssuer):
        self.db = db
        self.hasher = hasher
        self.token_issuer = token_issuer

    async def is_email_available(self, email: str) -> bool:
        logger.info(f"Checking availability for email: {email}")
        return await user_crud.get_user_by_email(email, self.db) is None

    async def register(self, email: str, password: str) -> AuthResult:
        logger.info(f"Adding new user with email: {email}")

        if await user_crud.get_user_by_email(email, self.db) is not None:
            logger.warning(f"User with email {email} already exists.")
            return self._email_taken()

        hashed_password = await run_in_threadpool(self.hasher.hash, password)
        try:
            user = await user_crud.create_user(email, hashed_password, self.db)
        except IntegrityError:
            # Another request registered the same email between our check and insert
            await self.db.rollback()
            logger.warning(f"Duplicate registration for {email} rejected by the unique index.")
            return self._email_taken()

        logger.info(f"User with email {user.email} registered successfully.")
        return AuthResult(
            success=True,
            message="Registration successful.",
            token=self._issue_token(user),
        )

    async def login(self, email: str, password: str) -> AuthResult:
        logger.info(f"Identifying user with email: {email}")

        user = await user_crud.get_user_by_email(email, self.db)
        if user is None:
            await run_in_threadpool(self.hasher.dummy_verify)
            logger.warning(f"Invalid credentials for email: {email}.")
            return self._invalid_credentials()

        verification = await run_in_threadpool(self.hasher.verify, user.hashed_password, password)
        if verification is PasswordVerification.FAILED:
            logger.warning(f"Invalid credentials for email: {email}.")
            return self._invalid_credentials()

        if verification is PasswordVerification.SUCCESS_REHASH_NEEDED:
            new_hash = await run_in_threadpool(self.hasher.hash, password)
            user = await user_crud.update_password_hash(user, new_hash, self.db)
            logger.info(f"Password hash for {user.email} upgraded.")

        logger.info(f"User with email {user.email} logged in successfully.")
        return AuthResult(
            success=True,
            message="Login successful.",
            token=self._issue_token(user),
        )

    async def get_profile(self, email: str) -> Optional[User]:
        logger.info(f"Retrieving the user from email: {email}")
        return await user_crud.get_user_by_email(email, self.db)

    async def update_profile(
        self,
        user_id: int,
        email: str,
        first_name: str,
        last_name: str,
    ) -> Optional[User]:
        """Update name fields only when both id and email match a stored user."""
        logger.info(f"Updating user profile with ID: {user_id}")

        user = await user_crud.get_user_by_id_and_email(user_id, email, self.db)
        if user is None:
            logger.warning(f"No user with ID {user_id} and email {email}.")
            return None

        return await user_crud.update_user_names(user, first_name, last_name, self.db)

    def _issue_token(self, user: User) -> str:
        return self.token_issuer.issue(IdentityClaims(user_id=user.id, email=user.email))

    @staticmethod
    def _invalid_credentials() -> AuthResult:
        return AuthResult(
            success=False,
            message=INVALID_CREDENTIALS_MESSAGE,
            failure=AuthFailure.AUTHENTICATION,
        )

    @staticmethod
    def _email_taken() -> AuthResult:
        return AuthResult(
            success=False,
            message=EMAIL_TAKEN_MESSAGE,
            failure=AuthFailure.CONFLICT,
        )
