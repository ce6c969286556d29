from __future__ import annotations

import asyncpg
from fastapi import APIRouter, Depends

from app.core.deps import get_conn
from app.models.schemas import UsersResponse
from app.services import users as svc


router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("", response_model=UsersResponse, summary="All users")
async def api_get_users(conn: asyncpg.Connection = Depends(get_conn)):
    return {"users": await svc.get_all_users(conn)}
