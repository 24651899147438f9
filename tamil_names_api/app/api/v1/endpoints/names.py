"""
API endpoints for names.

Visitors browse approved names, submit new ones and toggle their vote
or favorite on a name.  Votes and favorites are attributed to the
``sessionId`` sent in the request body.
"""

from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query, status

from tamil_names_api.app.core.errors import ServiceError
from tamil_names_api.app.schemas.name import NameCreate, NameCreated, NameRead
from tamil_names_api.app.schemas.session import FavoriteResult, SessionAction, VoteResult
from tamil_names_api.app.services.favorite_service import FavoriteService
from tamil_names_api.app.services.name_service import NameService
from tamil_names_api.app.services.vote_service import VoteService


router = APIRouter()


@router.get("", response_model=List[NameRead], summary="List names")
async def list_names(
    status_filter: Optional[str] = Query(
        None, alias="status", description="Exact status, or 'all' for every status"
    ),
    gender: Optional[str] = Query(None),
    category: Optional[str] = Query(None),
    letter: Optional[str] = Query(None, description="Leading letters of the name"),
    search: Optional[str] = Query(None, description="Substring of the name or its meaning"),
    limit: int = Query(50, ge=1, le=1000),
    offset: int = Query(0, ge=0),
) -> List[NameRead]:
    """List names ordered by votes, newest first on ties.

    Without ``status`` only approved names are returned.
    """
    try:
        return await NameService.list_names(
            status=status_filter,
            gender=gender,
            category=category,
            letter=letter,
            search=search,
            limit=limit,
            offset=offset,
        )
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("/{name_id}", response_model=NameRead, summary="Get a single name")
async def get_name(name_id: int) -> NameRead:
    try:
        return await NameService.get_name(name_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.post(
    "",
    response_model=NameCreated,
    status_code=status.HTTP_201_CREATED,
    summary="Submit a name",
)
async def submit_name(data: NameCreate) -> NameCreated:
    """Submit a new name for review.

    The name starts as ``pending`` with no votes.  Returns 400 for
    missing or invalid fields and 409 when the name already exists.
    """
    try:
        name_id = await NameService.submit(data)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return NameCreated(message="Name submitted successfully", id=name_id)


@router.post("/{name_id}/vote", response_model=VoteResult, summary="Toggle a vote")
async def vote_for_name(name_id: int, data: SessionAction) -> VoteResult:
    """Vote for a name, or take the vote back if the session already voted."""
    try:
        outcome = await VoteService.toggle_vote(name_id, data.session_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return VoteResult(
        message=outcome.message,
        votes=outcome.votes,
        has_voted=outcome.has_voted,
    )


@router.post("/{name_id}/favorite", response_model=FavoriteResult, summary="Toggle a favorite")
async def toggle_favorite(name_id: int, data: SessionAction) -> FavoriteResult:
    try:
        is_favorite = await FavoriteService.toggle_favorite(name_id, data.session_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return FavoriteResult(
        message="Added to favorites" if is_favorite else "Removed from favorites",
        is_favorite=is_favorite,
    )
