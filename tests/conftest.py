"""
Shared fixtures.

Service tests talk to a throwaway SQLite file through aiosqlite; API tests
build a fresh application per test with `create_app(settings)`.
"""

import os

import pytest
from fastapi.testclient import TestClient

from tests.helpers import AUDIENCE, ISSUER, SECRET

# Importing expenses_api.main builds a module-level app from the environment
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECURITY_KEY", SECRET)
os.environ.setdefault("JWT_ISSUER", ISSUER)
os.environ.setdefault("JWT_AUDIENCE", AUDIENCE)

from expenses_api.core.config import Settings
from expenses_api.core.database import build_engine, build_sessionmaker, create_db_and_tables
from expenses_api.core.security import PasswordHasher, TokenIssuer, TokenValidator
from expenses_api.crud import user as user_crud
from expenses_api.main import create_app
from expenses_api.services.account import AccountService
from expenses_api.services.transactions import TransactionService


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        _env_file=None,
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'api.db'}",
        JWT_SECURITY_KEY=SECRET,
        JWT_ISSUER=ISSUER,
        JWT_AUDIENCE=AUDIENCE,
        PASSWORD_HASH_ROUNDS=4,
        LOG_LEVEL="WARNING",
    )


@pytest.fixture
def hasher() -> PasswordHasher:
    return PasswordHasher(rounds=4)


@pytest.fixture
def token_issuer() -> TokenIssuer:
    return TokenIssuer(secret=SECRET, issuer=ISSUER, audience=AUDIENCE)


@pytest.fixture
def token_validator() -> TokenValidator:
    return TokenValidator(secret=SECRET, issuer=ISSUER, audience=AUDIENCE)


@pytest.fixture
async def session(tmp_path):
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'services.db'}")
    await create_db_and_tables(engine)
    async with build_sessionmaker(engine)() as db:
        yield db
    await engine.dispose()


@pytest.fixture
def account_service(session, hasher, token_issuer) -> AccountService:
    return AccountService(session, hasher, token_issuer)


@pytest.fixture
def transaction_service(session) -> TransactionService:
    return TransactionService(session)


@pytest.fixture
async def alice(session):
    return await user_crud.create_user("alice@example.com", "not-a-real-hash", session)


@pytest.fixture
async def bob(session):
    return await user_crud.create_user("bob@example.com", "not-a-real-hash", session)


@pytest.fixture
def client(settings):
    app = create_app(settings)
    with TestClient(app) as test_client:
        yield test_client

