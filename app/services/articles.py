from __future__ import annotations

import logging
from typing import List, Optional

import asyncpg

from app.core.errors import InvalidInput, InvalidQuery, NotFound
from app.models.schemas import Article, ArticleWithCommentCount
from app.services.articles_query import ArticlesQuery
from app.services.validators import article_exists, fits_int4, topic_exists


logger = logging.getLogger("app.articles")

ARTICLE_COLUMNS = "article_id, title, topic, author, body, created_at, votes, article_img_url"


async def get_article_by_id(conn: asyncpg.Connection, article_id: int) -> Article:
    if not fits_int4(article_id):
        raise NotFound("No articles has been found.")
    row = await conn.fetchrow(
        f"SELECT {ARTICLE_COLUMNS} FROM articles WHERE article_id = $1",
        article_id,
    )
    if not row:
        raise NotFound("No articles has been found.")
    return Article(**dict(row))


async def patch_article_votes(
    conn: asyncpg.Connection, article_id: int, inc_votes: Optional[int]
) -> Article:
    if inc_votes is None or isinstance(inc_votes, bool) or not isinstance(inc_votes, int):
        raise InvalidInput("Bad request.")
    if not fits_int4(inc_votes):
        # Larger steps cannot be encoded as an int4 parameter
        raise InvalidInput("Bad request.")
    await article_exists(conn, article_id)
    row = await conn.fetchrow(
        f"""
        UPDATE articles
        SET votes = votes + $1
        WHERE article_id = $2
        RETURNING {ARTICLE_COLUMNS}
        """,
        inc_votes,
        article_id,
    )
    if not row:
        # Deleted between the existence check and the update
        raise NotFound(f"No articles has been found with id of {article_id}")
    logger.info(
        "Article votes changed",
        extra={"event": "article_votes_patched", "article_id": article_id, "inc_votes": inc_votes, "votes": row["votes"]},
    )
    return Article(**dict(row))


async def list_articles(
    conn: asyncpg.Connection,
    topic: Optional[str] = None,
    sort_by: Optional[str] = None,
    order: Optional[str] = None,
) -> List[ArticleWithCommentCount]:
    query = ArticlesQuery.parse(topic=topic, sort_by=sort_by, order=order)
    if query.topic is not None and not await topic_exists(conn, query.topic):
        raise InvalidQuery("No articles has been found with selected topic")

    compiled = query.to_sql()
    rows = await conn.fetch(compiled.sql, *compiled.args)
    return [ArticleWithCommentCount(**dict(r)) for r in rows]
