"""
Pydantic schemas for names.

Request bodies deliberately accept every field as optional: missing or
empty values are rejected by the service layer with a ``400`` and a
readable message instead of FastAPI's generic ``422`` payload.
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator


class NameCreate(BaseModel):
    """Schema for submitting a new name."""

    name: Optional[str] = Field(None, description="The proposed name")
    meaning: Optional[str] = Field(None, description="Meaning of the name")
    reference: Optional[str] = Field(None, description="Literary or historical reference")
    gender: Optional[str] = Field(None, description="ஆண்கள் or பெண்கள்")
    category: Optional[str] = Field(None, description="One of the four name categories")
    contributor: Optional[str] = Field(None, description="Who suggested the name")

    @field_validator("name", "meaning", "reference", "gender", "category", "contributor")
    @classmethod
    def strip_text(cls, v: Optional[str]) -> Optional[str]:
        """Trim surrounding whitespace and turn blank strings into ``None``."""
        if v is None:
            return None
        v = v.strip()
        return v or None


class NameUpdate(NameCreate):
    """Schema for an admin overwriting a name.

    Every editable column is overwritten, so the shape is the same as a
    submission.
    """


class NameRead(BaseModel):
    """Schema for reading a name from the API."""

    id: int
    name: str
    meaning: str
    reference: Optional[str]
    gender: str
    category: str
    contributor: Optional[str]
    status: str
    votes: int
    vote_count: int = 0
    favorite_count: int = 0
    created_at: Optional[str]
    updated_at: Optional[str]


class FavoriteNameRead(NameRead):
    """A name as it appears in a session's favorites list."""

    favorited_at: Optional[str]


class NameCreated(BaseModel):
    """Response for a successful submission."""

    message: str
    id: int


class MessageResponse(BaseModel):
    """Plain acknowledgement returned by admin mutations."""

    message: str
