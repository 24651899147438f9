"""
Business logic for votes.

A vote is a ``(session, name)`` row in the ``votes`` table, and each
name carries a denormalized ``votes`` counter that mirrors the number
of such rows.  Voting is a toggle: voting twice from the same session
takes the vote back.

The toggle never reads the counter and writes it back.  It first looks
up whether the session holds a vote, outside any write transaction,
and then either ``DELETE``s or ``INSERT``s.  The counter only moves when
the write actually changed a row: a delete that found nothing (another
request removed the vote first) leaves it alone, and an insert rejected
by ``UNIQUE(user_session_id, name_id)`` (another request recorded the
vote first) is reported as already voted.  The counter itself is moved
by a single relative ``UPDATE``, which on increment also performs the
auto-approval transition.
"""

from __future__ import annotations

import logging
import sqlite3
from dataclasses import dataclass
from typing import List, Optional

from tamil_names_api.app.core.config import settings
from tamil_names_api.app.core.constants import NameStatus
from tamil_names_api.app.core.db import get_connection
from tamil_names_api.app.core.errors import NotFoundError, StoreError, ValidationError


logger = logging.getLogger(__name__)


@dataclass
class VoteOutcome:
    """State of a name after a vote toggle."""

    votes: int
    has_voted: bool
    message: str
    status: str


class VoteService:
    """Service for toggling and listing per-session votes."""

    @classmethod
    async def toggle_vote(cls, name_id: int, session_id: Optional[str]) -> VoteOutcome:
        """Add or remove the session's vote for a name.

        Returns the resulting counter and whether the session now holds
        a vote.  After an increment, a ``pending`` name whose counter
        reached the auto-approval threshold becomes admin-approved.  A
        decrement never changes the status.

        Raises ``ValidationError`` when ``session_id`` is missing and
        ``NotFoundError`` when the name does not exist.
        """
        if not session_id or not session_id.strip():
            raise ValidationError("Session ID required")
        conn = get_connection()
        try:
            cursor = conn.cursor()
            before = cursor.execute(
                """
                SELECT n.status,
                       EXISTS(
                           SELECT 1 FROM votes v
                           WHERE v.name_id = n.id AND v.user_session_id = ?
                       ) AS voted
                FROM names n
                WHERE n.id = ?
                """,
                (session_id, name_id),
            ).fetchone()
            if not before:
                raise NotFoundError("Name not found")

            if before["voted"]:
                cursor.execute(
                    "DELETE FROM votes WHERE user_session_id = ? AND name_id = ?",
                    (session_id, name_id),
                )
                if cursor.rowcount > 0:
                    cursor.execute(
                        "UPDATE names SET votes = votes - 1 WHERE id = ? AND votes > 0",
                        (name_id,),
                    )
                    message = "Vote removed"
                else:
                    # Removed by a concurrent toggle for the same pair.
                    message = "Vote already removed"
                has_voted = False
            else:
                try:
                    cursor.execute(
                        "INSERT INTO votes (user_session_id, name_id) VALUES (?, ?)",
                        (session_id, name_id),
                    )
                except sqlite3.IntegrityError:
                    conn.rollback()
                    if not cursor.execute(
                        "SELECT id FROM names WHERE id = ?", (name_id,)
                    ).fetchone():
                        raise NotFoundError("Name not found")
                    # Recorded by a concurrent toggle for the same pair.
                    has_voted = True
                    message = "Vote already recorded"
                else:
                    cursor.execute(
                        """
                        UPDATE names
                        SET votes = votes + 1,
                            status = CASE
                                WHEN votes + 1 >= ? AND status = ? THEN ?
                                ELSE status
                            END
                        WHERE id = ?
                        """,
                        (
                            settings.auto_approve_threshold,
                            NameStatus.PENDING.value,
                            NameStatus.ADMIN_APPROVED.value,
                            name_id,
                        ),
                    )
                    has_voted = True
                    message = "Vote added"

            after = cursor.execute(
                "SELECT votes, status FROM names WHERE id = ?",
                (name_id,),
            ).fetchone()
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            logger.error("Failed to toggle vote on name %s: %s", name_id, e)
            raise StoreError("Failed to update vote") from e
        finally:
            conn.close()

        if after is None:
            raise NotFoundError("Name not found")
        if message == "Vote added" and before["status"] != after["status"]:
            logger.info(
                "Name %s auto-approved with %s votes", name_id, after["votes"]
            )
        logger.debug("%s for name %s (session %s)", message, name_id, session_id)
        return VoteOutcome(
            votes=after["votes"],
            has_voted=has_voted,
            message=message,
            status=after["status"],
        )

    @classmethod
    async def list_votes(cls, session_id: str) -> List[int]:
        """Return the ids of all names the session has voted for."""
        conn = get_connection()
        try:
            rows = conn.execute(
                "SELECT name_id FROM votes WHERE user_session_id = ? ORDER BY id",
                (session_id,),
            ).fetchall()
            return [row["name_id"] for row in rows]
        except sqlite3.Error as e:
            logger.error("Failed to list votes for session %s: %s", session_id, e)
            raise StoreError() from e
        finally:
            conn.close()
