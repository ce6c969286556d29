from __future__ import annotations

from datetime import datetime, timezone

import asyncpg

from conftest import make_comment


def _article_and_user_exist(conn):
    conn.on("SELECT 1 FROM articles", lambda article_id: 1 if article_id in (1, 2) else None)
    conn.on("SELECT 1 FROM users", lambda username: 1 if username == "rogersop" else None)


def test_get_comments_for_article(client, conn):
    _article_and_user_exist(conn)
    conn.on("FROM comments WHERE article_id", lambda article_id: [make_comment(i, article_id=article_id) for i in (5, 2)] if article_id == 1 else [])

    resp = client.get("/api/articles/1/comments")
    assert resp.status_code == 200
    comments = resp.json()["comments"]
    assert [c["comment_id"] for c in comments] == [5, 2]
    assert all(c["article_id"] == 1 for c in comments)

    resp = client.get("/api/articles/2/comments")
    assert resp.status_code == 200
    assert resp.json() == {"comments": []}


def test_get_comments_unknown_article(client):
    resp = client.get("/api/articles/998/comments")
    assert resp.status_code == 404
    assert resp.json() == {"message": "No articles has been found with id of 998"}


def test_post_comment_201(client, conn):
    _article_and_user_exist(conn)
    conn.on(
        "INSERT INTO comments",
        lambda article_id, author, body: make_comment(19, article_id=article_id, author=author, body=body),
    )
    resp = client.post(
        "/api/articles/1/comments",
        json={"username": "rogersop", "body": "I'm the Sultan of Sentiment!", "votes": ";DROP TABLE comments;"},
    )
    assert resp.status_code == 201
    body = resp.json()
    assert isinstance(body["comment"], list) and len(body["comment"]) == 1
    comment = body["comment"][0]
    assert comment["comment_id"] == 19
    assert comment["article_id"] == 1
    assert comment["author"] == "rogersop"
    assert comment["votes"] == 0
    created = datetime.fromisoformat(comment["created_at"].replace("Z", "+00:00"))
    assert abs((datetime.now(timezone.utc) - created).total_seconds()) < 5
    assert conn.transactions == ["begin", "commit"]


def test_post_comment_empty_body(client, conn):
    resp = client.post("/api/articles/1/comments", json={"username": "rogersop", "body": ""})
    assert resp.status_code == 400
    assert resp.json() == {"message": "Your comment cannot be empty!"}
    assert conn.calls == []


def test_post_comment_unknown_article(client, conn):
    _article_and_user_exist(conn)
    resp = client.post("/api/articles/997/comments", json={"username": "rogersop", "body": "x"})
    assert resp.status_code == 404
    assert resp.json() == {"message": "No articles has been found with id of 997"}


def test_post_comment_unknown_user(client, conn):
    _article_and_user_exist(conn)
    resp = client.post("/api/articles/1/comments", json={"username": "username123", "body": "x"})
    assert resp.status_code == 404
    assert resp.json() == {"message": "User with provided username is not found"}


def test_post_comment_author_removed_mid_request(client, conn):
    _article_and_user_exist(conn)
    err = asyncpg.ForeignKeyViolationError("insert or update on table \"comments\" violates foreign key constraint")
    err.constraint_name = "comments_author_fkey"
    conn.on("INSERT INTO comments", err)
    resp = client.post("/api/articles/1/comments", json={"username": "rogersop", "body": "x"})
    assert resp.status_code == 404
    assert resp.json() == {"message": "User with provided username is not found"}


def test_delete_comment_204(client, conn):
    conn.on("DELETE FROM comments", lambda comment_id: comment_id)
    resp = client.delete("/api/comments/5")
    assert resp.status_code == 204
    assert resp.content == b""


def test_delete_unknown_comment(client):
    resp = client.delete("/api/comments/998")
    assert resp.status_code == 404
    assert resp.json() == {"message": "No comments has been found with id of 998"}
