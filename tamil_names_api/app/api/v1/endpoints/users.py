"""
Per-session lookups.

Clients use these lists to mark which names the visitor has already
voted for or saved.  The server stays the source of truth; clients
should refresh these lists rather than keep their own.
"""

from typing import List

from fastapi import APIRouter, HTTPException

from tamil_names_api.app.core.errors import ServiceError
from tamil_names_api.app.schemas.name import FavoriteNameRead
from tamil_names_api.app.services.favorite_service import FavoriteService
from tamil_names_api.app.services.vote_service import VoteService


router = APIRouter()


@router.get("/{session_id}/votes", response_model=List[int], summary="Names voted by a session")
async def list_votes(session_id: str) -> List[int]:
    try:
        return await VoteService.list_votes(session_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get(
    "/{session_id}/favorites",
    response_model=List[FavoriteNameRead],
    summary="Favorite names of a session",
)
async def list_favorites(session_id: str) -> List[FavoriteNameRead]:
    """Return the favorite names, most recently added first."""
    try:
        return await FavoriteService.list_favorites(session_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
