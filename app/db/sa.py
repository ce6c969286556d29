from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from app.db.base import Base


logger = logging.getLogger("app.db")


def _to_sqlalchemy_async_dsn(dsn: str | None) -> str:
    if not dsn:
        raise RuntimeError("DATABASE_URL is not configured")
    # Ensure SQLAlchemy asyncpg dialect
    if dsn.startswith("postgresql+asyncpg://"):
        return dsn
    if dsn.startswith("postgresql://"):
        return dsn.replace("postgresql://", "postgresql+asyncpg://", 1)
    if dsn.startswith("postgres://"):
        return dsn.replace("postgres://", "postgresql+asyncpg://", 1)
    # Fallback: assume already usable
    return dsn


async def create_schema(dsn: Optional[str]) -> bool:
    """Create the news tables if they are missing.

    Returns True when ``create_all`` ran. Failures are logged and reported as
    False so that an externally managed schema does not block startup.
    """
    from app.models import tables  # noqa: F401 ensure model registration

    engine: Optional[AsyncEngine] = None
    try:
        engine = create_async_engine(_to_sqlalchemy_async_dsn(dsn), pool_pre_ping=True)
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    except Exception:
        logger.warning(
            "Schema creation skipped",
            extra={"event": "schema_create_failed"},
            exc_info=True,
        )
        return False
    finally:
        if engine is not None:
            await engine.dispose()
    logger.info("Schema ensured", extra={"event": "schema_created", "tables": sorted(Base.metadata.tables)})
    return True
