from __future__ import annotations

import asyncpg
from fastapi import APIRouter, Depends

from app.core.deps import get_conn
from app.models.schemas import TopicsResponse
from app.services import topics as svc


router = APIRouter(prefix="/api/topics", tags=["topics"])


@router.get("", response_model=TopicsResponse, summary="All topics")
async def api_get_topics(conn: asyncpg.Connection = Depends(get_conn)):
    return {"topics": await svc.get_all_topics(conn)}
