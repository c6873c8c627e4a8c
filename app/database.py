# app/database.py
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import NullPool

from .config import get_settings

# one engine per process: database_url is read once at import and is not
# affected by the settings passed to create_app
settings = get_settings()

# NullPool: every session opens its own connection and closes it on exit
engine = create_async_engine(settings.database_url, echo=settings.db_echo, poolclass=NullPool)

async_session_maker = sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)

Base = declarative_base()


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    async with async_session_maker() as session:
        yield session


async def migrate(bind: AsyncEngine = engine) -> None:
    """Create every table registered on Base (no-op for existing tables)."""
    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
