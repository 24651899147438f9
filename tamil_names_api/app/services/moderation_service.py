"""
Service layer for moderators.

Moderators approve pending names, reject (delete) unwanted ones, fix
typos in existing entries and look at a handful of dashboard
counters.  Rejection removes the row; the foreign keys on ``votes``
and ``favorites`` cascade the delete.

Dashboard counters are independent read-only queries.  They run
concurrently, each on its own connection, and a failing counter is
logged and reported as zero instead of failing the whole response.
"""

from __future__ import annotations

import asyncio
import logging
import sqlite3
from typing import Dict

from tamil_names_api.app.core.constants import NameStatus
from tamil_names_api.app.core.db import get_connection
from tamil_names_api.app.core.errors import ConflictError, NotFoundError, StoreError
from tamil_names_api.app.schemas.name import NameUpdate
from tamil_names_api.app.schemas.stats import StatsRead
from tamil_names_api.app.services.name_service import validate_name_fields


logger = logging.getLogger(__name__)


class ModerationService:
    """Service providing admin operations on names."""

    STATS_QUERIES: Dict[str, str] = {
        "pending": f"SELECT COUNT(*) FROM names WHERE status = '{NameStatus.PENDING.value}'",
        "approved": f"SELECT COUNT(*) FROM names WHERE status = '{NameStatus.ADMIN_APPROVED.value}'",
        "total_votes": "SELECT COALESCE(SUM(votes), 0) FROM names",
        "contributors": "SELECT COUNT(DISTINCT contributor) FROM names WHERE contributor IS NOT NULL",
    }

    @classmethod
    async def approve(cls, name_id: int) -> None:
        """Mark a name as admin-approved regardless of its votes."""
        affected = cls._execute(
            "UPDATE names SET status = ?, updated_at = CURRENT_TIMESTAMP WHERE id = ?",
            (NameStatus.ADMIN_APPROVED.value, name_id),
            action="approve",
        )
        if not affected:
            raise NotFoundError("Name not found")
        logger.info("Approved name %s", name_id)

    @classmethod
    async def reject(cls, name_id: int) -> None:
        """Delete a name together with its votes and favorites."""
        affected = cls._execute(
            "DELETE FROM names WHERE id = ?",
            (name_id,),
            action="delete",
        )
        if not affected:
            raise NotFoundError("Name not found")
        logger.info("Rejected and deleted name %s", name_id)

    @classmethod
    async def update(cls, name_id: int, data: NameUpdate) -> None:
        """Overwrite the editable columns of a name.

        The same checks as a submission apply: required fields must be
        present, gender and category must be known values, and the new
        text may not belong to another name.
        """
        validate_name_fields(data)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            clash = cursor.execute(
                "SELECT id FROM names WHERE name = ? AND id != ?",
                (data.name, name_id),
            ).fetchone()
            if clash:
                raise ConflictError("Name already exists")
            cursor.execute(
                """
                UPDATE names
                SET name = ?, meaning = ?, reference = ?, gender = ?,
                    category = ?, contributor = ?, updated_at = CURRENT_TIMESTAMP
                WHERE id = ?
                """,
                (
                    data.name,
                    data.meaning,
                    data.reference,
                    data.gender,
                    data.category,
                    data.contributor,
                    name_id,
                ),
            )
            affected = cursor.rowcount
            conn.commit()
        except sqlite3.IntegrityError as e:
            conn.rollback()
            raise ConflictError("Name already exists") from e
        except sqlite3.Error as e:
            conn.rollback()
            logger.error("Failed to update name %s: %s", name_id, e)
            raise StoreError("Failed to update name") from e
        finally:
            conn.close()
        if not affected:
            raise NotFoundError("Name not found")
        logger.info("Updated name %s", name_id)

    @classmethod
    async def stats(cls) -> StatsRead:
        """Return the dashboard counters."""
        keys = list(cls.STATS_QUERIES)
        values = await asyncio.gather(
            *(asyncio.to_thread(cls._count, key, cls.STATS_QUERIES[key]) for key in keys)
        )
        return StatsRead(**dict(zip(keys, values)))

    @staticmethod
    def _count(key: str, sql: str) -> int:
        """Run one counter query; any database failure counts as zero."""
        try:
            conn = get_connection()
        except sqlite3.Error as e:
            logger.error("Error in %s query: %s", key, e)
            return 0
        try:
            row = conn.execute(sql).fetchone()
            return int(row[0] or 0) if row else 0
        except sqlite3.Error as e:
            logger.error("Error in %s query: %s", key, e)
            return 0
        finally:
            conn.close()

    @staticmethod
    def _execute(sql: str, params: tuple, action: str) -> int:
        """Run a single-row mutation and return the affected row count."""
        conn = get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(sql, params)
            affected = cursor.rowcount
            conn.commit()
            return affected
        except sqlite3.Error as e:
            conn.rollback()
            logger.error("Failed to %s name: %s", action, e)
            raise StoreError(f"Failed to {action} name") from e
        finally:
            conn.close()
