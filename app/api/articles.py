# app/api/articles.py
from typing import Optional

import asyncpg
from fastapi import APIRouter, Depends, Query

from app.api.params import article_id_param
from app.core.deps import get_conn
from app.models.schemas import (
    ArticleResponse, ArticlesResponse, CommentsResponse, ErrorResponse, NewComment, PostedCommentResponse, VotesUpdate,
)
from app.services import articles as svc
from app.services import comments as comments_svc

router = APIRouter(
    prefix="/api/articles",
    tags=["articles"],
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)

# -----------------------
#  Списки
# -----------------------

@router.get("", response_model=ArticlesResponse, summary="List articles with comment counts")
async def api_list_articles(
    topic: Optional[str] = Query(None, description="Topic slug to filter by"),
    sort_by: Optional[str] = Query(None, description="Column to sort by, created_at by default"),
    order: Optional[str] = Query(None, description="asc or desc, desc by default"),
    conn: asyncpg.Connection = Depends(get_conn),
):
    """
    Returns every matching article in one response, no pagination.
    An unknown topic is a 400, a known topic without articles gives an empty list.
    """
    articles = await svc.list_articles(conn, topic=topic, sort_by=sort_by, order=order)
    return {"articles": articles}

# -----------------------
#  Одиночные статьи
# -----------------------

@router.get("/{article_id}", response_model=ArticleResponse, summary="Single article by id")
async def api_get_article(
    article_id: int = Depends(article_id_param),
    conn: asyncpg.Connection = Depends(get_conn),
):
    article = await svc.get_article_by_id(conn, article_id)
    return {"article": article}


@router.patch("/{article_id}", response_model=ArticleResponse, summary="Increment article votes")
async def api_patch_article_votes(
    payload: VotesUpdate,
    article_id: int = Depends(article_id_param),
    conn: asyncpg.Connection = Depends(get_conn),
):
    article = await svc.patch_article_votes(conn, article_id, payload.inc_votes)
    return {"article": article}

# -----------------------
#  Комментарии статьи
# -----------------------

@router.get("/{article_id}/comments", response_model=CommentsResponse, summary="Comments of an article, newest first")
async def api_get_article_comments(
    article_id: int = Depends(article_id_param),
    conn: asyncpg.Connection = Depends(get_conn),
):
    comments = await comments_svc.get_comments_by_article_id(conn, article_id)
    return {"comments": comments}


@router.post("/{article_id}/comments", response_model=PostedCommentResponse, status_code=201,
             summary="Post a comment to an article")
async def api_post_comment(
    payload: NewComment,
    article_id: int = Depends(article_id_param),
    conn: asyncpg.Connection = Depends(get_conn),
):
    comment = await comments_svc.add_comment(conn, article_id, payload.username, payload.body)
    return {"comment": comment}
