# expenses_api/core/database.py
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import declarative_base
from fastapi import HTTPException, Request
import logging
from typing import AsyncGenerator

logger = logging.getLogger(__name__)

# Base class for all models
Base = declarative_base()


def build_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    engine_kwargs = {
        "echo": echo,
        "future": True,
    }

    if database_url.startswith("sqlite"):
        # aiosqlite runs the connection on its own thread
        engine_kwargs["connect_args"] = {"check_same_thread": False}
    else:
        engine_kwargs.update({
            "pool_size": 5,
            "max_overflow": 5,
            "pool_timeout": 30,       # Seconds to wait for a free connection
            "pool_pre_ping": True,    # Check connection before using
            "pool_recycle": 300,      # Recycle connections after 5 minutes
        })

    return create_async_engine(database_url, **engine_kwargs)


def build_sessionmaker(engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(
        bind=engine,
        expire_on_commit=False,
        class_=AsyncSession,
    )


async def create_db_and_tables(engine: AsyncEngine) -> None:
    # Register the models on Base.metadata before creating tables
    from expenses_api import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


# Dependency to get DB session with proper exception handling
async def get_async_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    session = request.app.state.sessionmaker()
    try:
        yield session
    except Exception as e:
        # 4xx responses raised by route code are not database failures
        if not isinstance(e, HTTPException):
            logger.error(f"Database session error: {str(e)}")
        await session.rollback()
        raise
    finally:
        await session.close()
        logger.debug("Database session closed")
