from __future__ import annotations

from typing import AsyncGenerator

import asyncpg
from fastapi import Request


async def get_conn(request: Request) -> AsyncGenerator[asyncpg.Connection, None]:
    """Acquire a pooled connection for the duration of one request."""
    pool = getattr(request.app.state, "db_pool", None)
    if pool is None:
        raise RuntimeError("Database pool is not initialized. Check the application lifespan.")
    async with pool.acquire() as conn:
        yield conn
