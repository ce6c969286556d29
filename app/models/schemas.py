# app/models/schemas.py
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, StrictInt


# --- Справочники ---
class Topic(BaseModel):
    slug: str
    description: Optional[str] = None


class User(BaseModel):
    username: str
    name: str
    avatar_url: Optional[str] = None


# --- Статьи ---
class Article(BaseModel):
    article_id: int
    title: str
    topic: str
    author: str
    body: str
    created_at: datetime
    votes: int
    article_img_url: Optional[str] = None


# Used by the listing endpoint, comment_count is aggregated per request
class ArticleWithCommentCount(Article):
    comment_count: int = 0


# --- Комментарии ---
class Comment(BaseModel):
    comment_id: int
    article_id: int
    author: str
    body: str
    votes: int
    created_at: datetime


# --- Тела запросов ---
# Unknown keys are dropped, so only inc_votes / username+body reach the services
class VotesUpdate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    inc_votes: Optional[StrictInt] = None


class NewComment(BaseModel):
    model_config = ConfigDict(extra="ignore")

    username: Optional[str] = None
    body: Optional[str] = None


# --- Обёртки ответов ---
class TopicsResponse(BaseModel):
    topics: List[Topic]


class UsersResponse(BaseModel):
    users: List[User]


class ArticleResponse(BaseModel):
    article: Article


class ArticlesResponse(BaseModel):
    articles: List[ArticleWithCommentCount]


class CommentsResponse(BaseModel):
    comments: List[Comment]


class PostedCommentResponse(BaseModel):
    comment: List[Comment]


class ErrorResponse(BaseModel):
    message: str
