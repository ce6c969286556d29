from __future__ import annotations

from typing import List

import asyncpg

from app.models.schemas import Topic


async def get_all_topics(conn: asyncpg.Connection) -> List[Topic]:
    rows = await conn.fetch("SELECT slug, description FROM topics ORDER BY slug")
    return [Topic(**dict(r)) for r in rows]
