# transaction_cost/infrastructure/database/session.py

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base

from transaction_cost.config.settings import AppSettings

Base = declarative_base()


def build_engine(settings: AppSettings) -> AsyncEngine:
    pool_options = {}
    if not settings.database_url.startswith("sqlite"):
        pool_options = {
            "pool_size": settings.db_pool_size,
            "max_overflow": settings.db_max_overflow,
        }
    return create_async_engine(
        settings.database_url,
        echo=False,
        pool_pre_ping=True,
        **pool_options,
    )


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Sessions are short-lived: one per lookup or audit write, never shared."""
    return async_sessionmaker(
        bind=engine,
        expire_on_commit=False,
        autoflush=False,
        class_=AsyncSession,
    )
