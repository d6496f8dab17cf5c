# expenses_api/crud/user.py
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from typing import Optional

from expenses_api.models.base import utcnow
from expenses_api.models.user import User


def normalize_email(email: str) -> str:
    return email.strip().lower()


async def get_user_by_email(email: str, db: AsyncSession) -> Optional[User]:
    result = await db.execute(select(User).where(User.email == normalize_email(email)))
    return result.scalar_one_or_none()


async def get_user_by_id(user_id: int, db: AsyncSession) -> Optional[User]:
    result = await db.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


async def get_user_by_id_and_email(user_id: int, email: str, db: AsyncSession) -> Optional[User]:
    result = await db.execute(
        select(User).where(User.id == user_id, User.email == normalize_email(email))
    )
    return result.scalar_one_or_none()


async def create_user(email: str, hashed_password: str, db: AsyncSession) -> User:
    """Insert a user; a duplicate email surfaces as IntegrityError from the commit."""
    now = utcnow()
    user = User(
        email=normalize_email(email),
        hashed_password=hashed_password,
        created_at=now,
        updated_at=now,
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


async def update_user_names(user: User, first_name: str, last_name: str, db: AsyncSession) -> User:
    user.first_name = first_name
    user.last_name = last_name
    user.updated_at = utcnow()
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


async def update_password_hash(user: User, hashed_password: str, db: AsyncSession) -> User:
    user.hashed_password = hashed_password
    user.updated_at = utcnow()
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user
