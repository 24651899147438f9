"""
Admin endpoints.

Moderators use these routes to review pending submissions.  All
routes depend on ``require_admin``, which enforces the static admin
token when one is configured.
"""

from fastapi import APIRouter, Depends, HTTPException

from tamil_names_api.app.core.errors import ServiceError
from tamil_names_api.app.core.security import require_admin
from tamil_names_api.app.schemas.name import MessageResponse, NameUpdate
from tamil_names_api.app.schemas.stats import StatsRead
from tamil_names_api.app.services.moderation_service import ModerationService


router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("/stats", response_model=StatsRead, summary="Dashboard counters")
async def get_stats() -> StatsRead:
    """Return pending/approved counts, total votes and distinct contributors.

    A counter whose query fails is reported as zero.
    """
    return await ModerationService.stats()


@router.post(
    "/names/{name_id}/approve",
    response_model=MessageResponse,
    summary="Approve a name",
)
async def approve_name(name_id: int) -> MessageResponse:
    try:
        await ModerationService.approve(name_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return MessageResponse(message="Name approved successfully")


@router.delete(
    "/names/{name_id}",
    response_model=MessageResponse,
    summary="Reject (delete) a name",
)
async def reject_name(name_id: int) -> MessageResponse:
    """Delete a name permanently along with its votes and favorites."""
    try:
        await ModerationService.reject(name_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return MessageResponse(message="Name deleted successfully")


@router.put(
    "/names/{name_id}",
    response_model=MessageResponse,
    summary="Update a name",
)
async def update_name(name_id: int, data: NameUpdate) -> MessageResponse:
    try:
        await ModerationService.update(name_id, data)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return MessageResponse(message="Name updated successfully")
