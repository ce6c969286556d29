from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base


DEFAULT_ARTICLE_IMG_URL = (
    "https://images.pexels.com/photos/97050/pexels-photo-97050.jpeg?w=700&h=700"
)


class Topic(Base):
    __tablename__ = "topics"

    slug: Mapped[str] = mapped_column(String, primary_key=True)
    description: Mapped[str] = mapped_column(String, nullable=False)


class User(Base):
    __tablename__ = "users"

    username: Mapped[str] = mapped_column(String, primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    avatar_url: Mapped[str | None] = mapped_column(String)


class Article(Base):
    __tablename__ = "articles"

    article_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String, nullable=False)
    topic: Mapped[str] = mapped_column(String, ForeignKey("topics.slug"), nullable=False)
    author: Mapped[str] = mapped_column(String, ForeignKey("users.username"), nullable=False)
    body: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    votes: Mapped[int] = mapped_column(Integer, server_default="0", nullable=False)
    article_img_url: Mapped[str] = mapped_column(
        String, server_default=DEFAULT_ARTICLE_IMG_URL, nullable=False
    )

    comments: Mapped[list[Comment]] = relationship(
        back_populates="article", cascade="all, delete-orphan"
    )


class Comment(Base):
    __tablename__ = "comments"

    comment_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    body: Mapped[str] = mapped_column(Text, nullable=False)
    article_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("articles.article_id", ondelete="CASCADE"), nullable=False, index=True
    )
    author: Mapped[str] = mapped_column(
        String, ForeignKey("users.username", name="comments_author_fkey"), nullable=False
    )
    votes: Mapped[int] = mapped_column(Integer, server_default="0", nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    article: Mapped[Article] = relationship(back_populates="comments")
