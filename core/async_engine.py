from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine

from core.settings import settings


def build_engine(database_uri: str = settings.SQLALCHEMY_DATABASE_URI) -> AsyncEngine:
    """Pooled psycopg engine with bounded connect and pool checkout waits."""
    return create_async_engine(
        database_uri,
        pool_pre_ping=True,
        pool_size=settings.POSTGRES_POOL_SIZE,
        max_overflow=settings.POSTGRES_MAX_OVERFLOW,
        pool_timeout=settings.POSTGRES_POOL_TIMEOUT_SECONDS,
        pool_recycle=600,
        pool_use_lifo=True,
        connect_args={"connect_timeout": settings.POSTGRES_CONNECT_TIMEOUT_SECONDS},
    )


async_engine = build_engine()
AsyncSessionLocal = async_sessionmaker(async_engine, expire_on_commit=False)
