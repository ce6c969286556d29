# app/db/pool.py
import logging
from typing import Optional

import asyncpg

from app.config import DB_POOL_MAX_SIZE, DB_POOL_MIN_SIZE

logger = logging.getLogger("app.db")


async def connect_db(dsn: Optional[str]) -> asyncpg.pool.Pool:
    if not dsn:
        raise RuntimeError("DATABASE_URL is not configured")
    pool = await asyncpg.create_pool(dsn=dsn, min_size=DB_POOL_MIN_SIZE, max_size=DB_POOL_MAX_SIZE)
    logger.info(
        "Database pool opened",
        extra={"event": "db_pool_opened", "min_size": DB_POOL_MIN_SIZE, "max_size": DB_POOL_MAX_SIZE},
    )
    return pool


async def close_db(pool: Optional[asyncpg.pool.Pool]) -> None:
    if pool is not None:
        await pool.close()
        logger.info("Database pool closed", extra={"event": "db_pool_closed"})
