"""Session issuing endpoint."""

from fastapi import APIRouter

from tamil_names_api.app.schemas.session import SessionIssued
from tamil_names_api.app.services.session_service import SessionService


router = APIRouter()


@router.post("/session", response_model=SessionIssued, summary="Issue a session token")
async def create_session() -> SessionIssued:
    """Return a fresh opaque token for attributing votes and favorites."""
    session_id = await SessionService.issue_session()
    return SessionIssued(session_id=session_id)
