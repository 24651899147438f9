"""
Business logic for favorites.

Favorites follow the same toggle shape as votes, without a counter or
any status side effect: look up the current state first, then delete
or insert.  A duplicate insert rejected by the
``UNIQUE(user_session_id, name_id)`` constraint means a concurrent
request already saved the favorite.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import List, Optional

from tamil_names_api.app.core.db import get_connection
from tamil_names_api.app.core.errors import NotFoundError, StoreError, ValidationError
from tamil_names_api.app.schemas.name import FavoriteNameRead
from tamil_names_api.app.services.name_service import NAME_COLUMNS, row_to_name_read


logger = logging.getLogger(__name__)


class FavoriteService:
    """Service for toggling and listing per-session favorites."""

    @classmethod
    async def toggle_favorite(cls, name_id: int, session_id: Optional[str]) -> bool:
        """Add or remove a favorite and return whether it is now set."""
        if not session_id or not session_id.strip():
            raise ValidationError("Session ID required")
        conn = get_connection()
        try:
            cursor = conn.cursor()
            current = cursor.execute(
                """
                SELECT EXISTS(
                    SELECT 1 FROM favorites f
                    WHERE f.name_id = n.id AND f.user_session_id = ?
                ) AS saved
                FROM names n
                WHERE n.id = ?
                """,
                (session_id, name_id),
            ).fetchone()
            if not current:
                raise NotFoundError("Name not found")
            if current["saved"]:
                # A concurrent toggle may already have removed it.
                cursor.execute(
                    "DELETE FROM favorites WHERE user_session_id = ? AND name_id = ?",
                    (session_id, name_id),
                )
                is_favorite = False
            else:
                try:
                    cursor.execute(
                        "INSERT INTO favorites (user_session_id, name_id) VALUES (?, ?)",
                        (session_id, name_id),
                    )
                except sqlite3.IntegrityError:
                    conn.rollback()
                    if not cursor.execute(
                        "SELECT id FROM names WHERE id = ?", (name_id,)
                    ).fetchone():
                        raise NotFoundError("Name not found")
                is_favorite = True
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            logger.error("Failed to toggle favorite on name %s: %s", name_id, e)
            raise StoreError("Failed to update favorite") from e
        finally:
            conn.close()
        logger.debug(
            "Favorite %s for name %s (session %s)",
            "set" if is_favorite else "cleared",
            name_id,
            session_id,
        )
        return is_favorite

    @classmethod
    async def list_favorites(cls, session_id: str) -> List[FavoriteNameRead]:
        """Return the session's favorite names, most recently added first."""
        conn = get_connection()
        try:
            rows = conn.execute(
                f"""
                SELECT {NAME_COLUMNS}, fav.created_at AS favorited_at
                FROM names n
                JOIN favorites fav ON n.id = fav.name_id
                WHERE fav.user_session_id = ?
                ORDER BY fav.created_at DESC, fav.id DESC
                """,
                (session_id,),
            ).fetchall()
        except sqlite3.Error as e:
            logger.error("Failed to list favorites for session %s: %s", session_id, e)
            raise StoreError() from e
        finally:
            conn.close()
        return [
            FavoriteNameRead(
                **row_to_name_read(row).model_dump(),
                favorited_at=row["favorited_at"],
            )
            for row in rows
        ]
