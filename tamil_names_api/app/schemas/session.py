"""
Pydantic schemas for session-scoped actions.

Votes and favorites are keyed on an opaque ``sessionId`` supplied by
the browser.  The wire format uses camelCase, which is mapped onto
snake_case attributes through aliases.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class SessionAction(BaseModel):
    """Body of a vote or favorite toggle."""

    model_config = ConfigDict(populate_by_name=True)

    session_id: Optional[str] = Field(None, alias="sessionId")


class VoteResult(BaseModel):
    """Outcome of a vote toggle."""

    model_config = ConfigDict(populate_by_name=True)

    message: str
    votes: int
    has_voted: bool = Field(..., alias="hasVoted")


class FavoriteResult(BaseModel):
    """Outcome of a favorite toggle."""

    model_config = ConfigDict(populate_by_name=True)

    message: str
    is_favorite: bool = Field(..., alias="isFavorite")


class SessionIssued(BaseModel):
    """A freshly issued session token."""

    model_config = ConfigDict(populate_by_name=True)

    session_id: str = Field(..., alias="sessionId")
