"""Article listing query: filter by topic, sort by a whitelisted column.

User input never reaches SQL syntax positions. ``sort_by`` and ``order`` are
parsed into closed enums first and each member maps to a fixed fragment; the
topic is sent as a bound parameter.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional

from app.core.errors import InvalidQuery


class SortColumn(str, Enum):
    TITLE = "title"
    TOPIC = "topic"
    AUTHOR = "author"
    CREATED_AT = "created_at"
    VOTES = "votes"
    COMMENT_COUNT = "comment_count"
    ARTICLE_ID = "article_id"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


DEFAULT_SORT_COLUMN = SortColumn.CREATED_AT
DEFAULT_SORT_ORDER = SortOrder.DESC

_COLUMN_SQL = {
    SortColumn.TITLE: "a.title",
    SortColumn.TOPIC: "a.topic",
    SortColumn.AUTHOR: "a.author",
    SortColumn.CREATED_AT: "a.created_at",
    SortColumn.VOTES: "a.votes",
    SortColumn.COMMENT_COUNT: "comment_count",
    SortColumn.ARTICLE_ID: "a.article_id",
}

_ORDER_SQL = {
    SortOrder.ASC: "ASC",
    SortOrder.DESC: "DESC",
}

_BASE_SQL = """
    SELECT
        a.article_id,
        a.title,
        a.topic,
        a.author,
        a.body,
        a.created_at,
        a.votes,
        a.article_img_url,
        COUNT(c.comment_id)::int AS comment_count
    FROM articles a
    LEFT JOIN comments c ON c.article_id = a.article_id
"""


def parse_sort_column(sort_by: Optional[str]) -> SortColumn:
    if not sort_by:
        return DEFAULT_SORT_COLUMN
    try:
        return SortColumn(sort_by)
    except ValueError:
        raise InvalidQuery("Bad 'sort_by' query") from None


def parse_sort_order(order: Optional[str]) -> SortOrder:
    if not order:
        return DEFAULT_SORT_ORDER
    try:
        return SortOrder(order.lower())
    except ValueError:
        raise InvalidQuery("Bad 'order' query") from None


@dataclass(frozen=True)
class ArticlesQuery:
    topic: Optional[str] = None
    sort_by: SortColumn = DEFAULT_SORT_COLUMN
    order: SortOrder = DEFAULT_SORT_ORDER

    @classmethod
    def parse(
        cls,
        topic: Optional[str] = None,
        sort_by: Optional[str] = None,
        order: Optional[str] = None,
    ) -> "ArticlesQuery":
        return cls(
            topic=topic or None,
            sort_by=parse_sort_column(sort_by),
            order=parse_sort_order(order),
        )

    def to_sql(self) -> "CompiledQuery":
        args: List[Any] = []
        where_sql = ""
        if self.topic is not None:
            args.append(self.topic)
            where_sql = "WHERE a.topic = $1"
        column = _COLUMN_SQL[self.sort_by]
        direction = _ORDER_SQL[self.order]
        sql = f"""{_BASE_SQL}
    {where_sql}
    GROUP BY a.article_id
    ORDER BY {column} {direction}, a.article_id {direction}
    """
        return CompiledQuery(sql=sql, args=args)


@dataclass(frozen=True)
class CompiledQuery:
    sql: str
    args: List[Any] = field(default_factory=list)
