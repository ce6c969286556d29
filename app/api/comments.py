from __future__ import annotations

import asyncpg
from fastapi import APIRouter, Depends, Response, status

from app.api.params import comment_id_param
from app.core.deps import get_conn
from app.models.schemas import ErrorResponse
from app.services import comments as svc


router = APIRouter(
    prefix="/api/comments",
    tags=["comments"],
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)


@router.delete("/{comment_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response,
               summary="Delete a comment")
async def api_delete_comment(
    comment_id: int = Depends(comment_id_param),
    conn: asyncpg.Connection = Depends(get_conn),
) -> Response:
    await svc.remove_comment_by_id(conn, comment_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
