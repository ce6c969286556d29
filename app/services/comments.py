from __future__ import annotations

import logging
from typing import List, Optional

import asyncpg

from app.core.errors import USER_NOT_FOUND_MESSAGE, InvalidInput, NotFound
from app.models.schemas import Comment
from app.services.validators import article_exists, fits_int4, user_exists


logger = logging.getLogger("app.comments")

COMMENT_COLUMNS = "comment_id, article_id, author, body, votes, created_at"


async def get_comments_by_article_id(conn: asyncpg.Connection, article_id: int) -> List[Comment]:
    await article_exists(conn, article_id)
    rows = await conn.fetch(
        f"""
        SELECT {COMMENT_COLUMNS} FROM comments
        WHERE article_id = $1
        ORDER BY created_at DESC
        """,
        article_id,
    )
    return [Comment(**dict(r)) for r in rows]


async def add_comment(
    conn: asyncpg.Connection,
    article_id: int,
    username: Optional[str],
    body: Optional[str],
) -> List[Comment]:
    if not body:
        raise InvalidInput("Your comment cannot be empty!")

    # The checks and the insert stand or fall together
    async with conn.transaction():
        await article_exists(conn, article_id)
        if not username or not await user_exists(conn, username):
            raise NotFound(USER_NOT_FOUND_MESSAGE)
        row = await conn.fetchrow(
            f"""
            INSERT INTO comments (article_id, author, body)
            VALUES ($1, $2, $3)
            RETURNING {COMMENT_COLUMNS}
            """,
            article_id,
            username,
            body,
        )

    comment = Comment(**dict(row))
    logger.info(
        "Comment created",
        extra={"event": "comment_created", "comment_id": comment.comment_id, "article_id": article_id, "author": username},
    )
    return [comment]


async def remove_comment_by_id(conn: asyncpg.Connection, comment_id: int) -> None:
    if not fits_int4(comment_id):
        raise NotFound(f"No comments has been found with id of {comment_id}")
    deleted = await conn.fetchval(
        "DELETE FROM comments WHERE comment_id = $1 RETURNING comment_id",
        comment_id,
    )
    if deleted is None:
        raise NotFound(f"No comments has been found with id of {comment_id}")
    logger.info("Comment deleted", extra={"event": "comment_deleted", "comment_id": comment_id})
