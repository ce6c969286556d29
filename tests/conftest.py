from __future__ import annotations

import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, List, Optional, Tuple

import pytest

# Ensure repository root is on sys.path for `import app`
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))
from fastapi.testclient import TestClient


IMG_URL = "https://images.pexels.com/photos/158651/news-newsletter-newspaper-information-158651.jpeg?w=700&h=700"


def make_article(article_id: int = 3, **overrides: Any) -> dict:
    row = {
        "article_id": article_id,
        "title": "Eight pug gifs that remind me of mitch",
        "topic": "mitch",
        "author": "icellusedkars",
        "body": "some gifs",
        "created_at": datetime(2020, 11, 3, 9, 12, tzinfo=timezone.utc),
        "votes": 0,
        "article_img_url": IMG_URL,
    }
    row.update(overrides)
    return row


def make_comment(comment_id: int = 19, **overrides: Any) -> dict:
    row = {
        "comment_id": comment_id,
        "article_id": 1,
        "author": "rogersop",
        "body": "I'm the Sultan of Sentiment!",
        "votes": 0,
        "created_at": datetime.now(timezone.utc),
    }
    row.update(overrides)
    return row


class FakeTransaction:
    def __init__(self, conn: "FakeConnection") -> None:
        self.conn = conn

    async def __aenter__(self):
        self.conn.transactions.append("begin")
        return self

    async def __aexit__(self, exc_type, exc, tb):
        self.conn.transactions.append("rollback" if exc_type else "commit")
        return False


class FakeConnection:
    """Answers asyncpg calls by the first registered substring found in the SQL."""

    def __init__(self) -> None:
        self.handlers: List[Tuple[str, Any]] = []
        self.calls: List[Tuple[str, str, tuple]] = []
        self.transactions: List[str] = []

    def on(self, needle: str, result: Any) -> "FakeConnection":
        self.handlers.append((needle, result))
        return self

    def _answer(self, method: str, sql: str, args: tuple) -> Any:
        text = " ".join(sql.split())
        self.calls.append((method, text, args))
        for needle, result in self.handlers:
            if needle in text:
                if isinstance(result, Exception):
                    raise result
                return result(*args) if callable(result) else result
        return None

    def sql_calls(self, needle: str) -> List[Tuple[str, str, tuple]]:
        return [c for c in self.calls if needle in c[1]]

    async def fetch(self, sql: str, *args):
        res = self._answer("fetch", sql, args)
        return [] if res is None else res

    async def fetchrow(self, sql: str, *args):
        return self._answer("fetchrow", sql, args)

    async def fetchval(self, sql: str, *args):
        return self._answer("fetchval", sql, args)

    async def execute(self, sql: str, *args):
        return self._answer("execute", sql, args) or "OK"

    def transaction(self) -> FakeTransaction:
        return FakeTransaction(self)


@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


@pytest.fixture()
def conn() -> FakeConnection:
    return FakeConnection()


def _build_client(monkeypatch, conn: FakeConnection, *, raise_server_exceptions: bool = True):
    # Patch DB init/close in lifespan to no-op
    import app.db.pool as db_pool
    import app.db.sa as db_sa

    async def _fake_connect(*args, **kwargs):
        return object()

    async def _noop(*args, **kwargs):
        return None

    monkeypatch.setattr(db_pool, "connect_db", _fake_connect)
    monkeypatch.setattr(db_pool, "close_db", _noop)
    monkeypatch.setattr(db_sa, "create_schema", _noop)

    from app import main as main_mod
    from app.core.deps import get_conn

    async def fake_get_conn():
        yield conn

    app = main_mod.app
    app.dependency_overrides[get_conn] = fake_get_conn
    return TestClient(app, raise_server_exceptions=raise_server_exceptions)


@pytest.fixture()
def client(monkeypatch, conn):
    with _build_client(monkeypatch, conn) as test_client:
        yield test_client
    test_client.app.dependency_overrides.clear()


@pytest.fixture()
def lenient_client(monkeypatch, conn):
    """Client that returns 500 responses instead of re-raising server errors."""
    with _build_client(monkeypatch, conn, raise_server_exceptions=False) as test_client:
        yield test_client
    test_client.app.dependency_overrides.clear()
