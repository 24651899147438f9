"""
Business logic for submitting and browsing names.

New names enter the ``names`` table as ``pending`` and only become
publicly visible once approved, either by a moderator or by collecting
enough votes.  Listing queries compute vote and favorite relation
counts with correlated sub-selects so that the two joins never
multiply each other.

All queries use parameterized statements.  Text is returned exactly as
stored; escaping for display is left to whoever renders it.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import List, Optional

from tamil_names_api.app.core.constants import (
    ALL_STATUSES,
    CATEGORIES,
    GENDERS,
    PUBLIC_STATUSES,
    NameStatus,
)
from tamil_names_api.app.core.db import get_connection
from tamil_names_api.app.core.errors import (
    ConflictError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from tamil_names_api.app.schemas.name import NameCreate, NameRead


logger = logging.getLogger(__name__)

NAME_COLUMNS = (
    "n.id, n.name, n.meaning, n.reference, n.gender, n.category, n.contributor, "
    "n.status, n.votes, n.created_at, n.updated_at, "
    "(SELECT COUNT(*) FROM votes v WHERE v.name_id = n.id) AS vote_count, "
    "(SELECT COUNT(*) FROM favorites f WHERE f.name_id = n.id) AS favorite_count"
)


def validate_name_fields(data: NameCreate) -> None:
    """Raise ``ValidationError`` unless the required fields are usable."""
    if not data.name or not data.meaning or not data.gender or not data.category:
        raise ValidationError("Required fields missing")
    if data.gender not in GENDERS or data.category not in CATEGORIES:
        raise ValidationError("Invalid gender or category")


def _like_pattern(prefix: str, value: str, suffix: str) -> str:
    """Build a LIKE pattern that matches ``value`` literally."""
    escaped = value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"{prefix}{escaped}{suffix}"


def row_to_name_read(row: sqlite3.Row) -> NameRead:
    """Convert a ``names`` row (with computed counts) to ``NameRead``."""
    keys = row.keys()
    return NameRead(
        id=row["id"],
        name=row["name"],
        meaning=row["meaning"],
        reference=row["reference"],
        gender=row["gender"],
        category=row["category"],
        contributor=row["contributor"],
        status=row["status"],
        votes=row["votes"],
        vote_count=row["vote_count"] if "vote_count" in keys else 0,
        favorite_count=row["favorite_count"] if "favorite_count" in keys else 0,
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


class NameService:
    """Service for name submissions and public listings."""

    @classmethod
    async def submit(cls, data: NameCreate) -> int:
        """Insert a new ``pending`` name and return its id.

        Raises ``ValidationError`` for missing fields or values outside
        the gender/category enumerations and ``ConflictError`` when the
        exact same name text already exists.  The ``UNIQUE`` constraint
        on ``names.name`` catches a duplicate that slips in between the
        check and the insert.
        """
        validate_name_fields(data)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            existing = cursor.execute(
                "SELECT id FROM names WHERE name = ?",
                (data.name,),
            ).fetchone()
            if existing:
                raise ConflictError("Name already exists")
            try:
                cursor.execute(
                    """
                    INSERT INTO names (name, meaning, reference, gender, category, contributor, status)
                    VALUES (?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        data.name,
                        data.meaning,
                        data.reference,
                        data.gender,
                        data.category,
                        data.contributor,
                        NameStatus.PENDING.value,
                    ),
                )
            except sqlite3.IntegrityError:
                conn.rollback()
                raise ConflictError("Name already exists")
            name_id = cursor.lastrowid
            conn.commit()
            logger.info("Submitted name %s (%s)", name_id, data.name)
            return name_id
        except sqlite3.Error as e:
            conn.rollback()
            logger.error("Failed to submit name: %s", e)
            raise StoreError("Failed to submit name") from e
        finally:
            conn.close()

    @classmethod
    async def list_names(
        cls,
        status: Optional[str] = None,
        gender: Optional[str] = None,
        category: Optional[str] = None,
        letter: Optional[str] = None,
        search: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> List[NameRead]:
        """Return names matching the filters, most voted first.

        Without a ``status`` only approved and admin-approved names are
        returned; ``status="all"`` turns the status filter off.  Ties on
        the vote counter are broken by newest first.
        """
        where_clauses: list[str] = []
        params: list = []
        if status and status != ALL_STATUSES:
            where_clauses.append("n.status = ?")
            params.append(status)
        elif not status:
            where_clauses.append(f"n.status IN ({', '.join('?' for _ in PUBLIC_STATUSES)})")
            params.extend(PUBLIC_STATUSES)
        if gender:
            where_clauses.append("n.gender = ?")
            params.append(gender)
        if category:
            where_clauses.append("n.category = ?")
            params.append(category)
        if letter:
            where_clauses.append("n.name LIKE ? ESCAPE '\\'")
            params.append(_like_pattern("", letter, "%"))
        if search:
            where_clauses.append("(n.name LIKE ? ESCAPE '\\' OR n.meaning LIKE ? ESCAPE '\\')")
            pattern = _like_pattern("%", search, "%")
            params.extend([pattern, pattern])

        query = f"SELECT {NAME_COLUMNS} FROM names n"
        if where_clauses:
            query += " WHERE " + " AND ".join(where_clauses)
        query += " ORDER BY n.votes DESC, n.created_at DESC, n.id DESC LIMIT ? OFFSET ?"
        params.extend([limit, offset])

        conn = get_connection()
        try:
            rows = conn.execute(query, tuple(params)).fetchall()
            return [row_to_name_read(row) for row in rows]
        except sqlite3.Error as e:
            logger.error("Failed to list names: %s", e)
            raise StoreError() from e
        finally:
            conn.close()

    @classmethod
    async def get_name(cls, name_id: int) -> NameRead:
        """Retrieve a single name by id or raise ``NotFoundError``."""
        conn = get_connection()
        try:
            row = conn.execute(
                f"SELECT {NAME_COLUMNS} FROM names n WHERE n.id = ?",
                (name_id,),
            ).fetchone()
        except sqlite3.Error as e:
            logger.error("Failed to load name %s: %s", name_id, e)
            raise StoreError() from e
        finally:
            conn.close()
        if not row:
            raise NotFoundError("Name not found")
        return row_to_name_read(row)
