from __future__ import annotations

from typing import List

import asyncpg

from app.models.schemas import User


async def get_all_users(conn: asyncpg.Connection) -> List[User]:
    rows = await conn.fetch("SELECT username, name, avatar_url FROM users ORDER BY username")
    return [User(**dict(r)) for r in rows]
