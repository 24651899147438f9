"""Issuing of anonymous visitor sessions."""

import logging

from tamil_names_api.app.core.security import generate_session_id


class SessionService:
    """Hands out session tokens.  Nothing is stored server-side."""

    @classmethod
    async def issue_session(cls) -> str:
        session_id = generate_session_id()
        logging.getLogger(__name__).debug("Issued session %s", session_id)
        return session_id
