"""Async SQLAlchemy engine and session factory."""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from bearingbot.configs.system import ThirdPartyConfig


def create_engine_and_factory(
    config: ThirdPartyConfig,
) -> tuple[AsyncEngine, async_sessionmaker[AsyncSession]]:
    engine = create_async_engine(
        config.postgres_uri,
        pool_pre_ping=True,
        pool_size=config.postgres_pool_size,
        max_overflow=config.postgres_max_overflow,
    )
    factory: async_sessionmaker[AsyncSession] = async_sessionmaker(
        engine, expire_on_commit=False
    )
    return engine, factory
