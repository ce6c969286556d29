from __future__ import annotations

import asyncpg

from app.core.errors import NotFound


# Primary keys and votes are int4 columns
INT4_MIN = -(2**31)
INT4_MAX = 2**31 - 1


def fits_int4(value: int) -> bool:
    return INT4_MIN <= value <= INT4_MAX


async def article_exists(conn: asyncpg.Connection, article_id: int) -> None:
    """Raise NotFound unless an article with ``article_id`` is stored."""
    found = fits_int4(article_id) and await conn.fetchval(
        "SELECT 1 FROM articles WHERE article_id = $1", article_id
    )
    if not found:
        raise NotFound(f"No articles has been found with id of {article_id}")


async def topic_exists(conn: asyncpg.Connection, slug: str) -> bool:
    return bool(await conn.fetchval("SELECT 1 FROM topics WHERE slug = $1", slug))


async def user_exists(conn: asyncpg.Connection, username: str) -> bool:
    return bool(await conn.fetchval("SELECT 1 FROM users WHERE username = $1", username))
