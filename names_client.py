"""Tamil Names API client.

This module defines a small client wrapper around the Tamil Names REST
API.  It uses the ``requests`` library internally and exposes
high-level methods for every route:

* :meth:`TamilNamesAPI.list_names` / :meth:`get_name` – browse names.
* :meth:`TamilNamesAPI.submit_name` – propose a new name.
* :meth:`TamilNamesAPI.vote` / :meth:`toggle_favorite` – toggle the
  current session's vote or favorite.
* :meth:`TamilNamesAPI.get_user_votes` / :meth:`get_user_favorites` –
  the session's own lists.
* admin helpers for stats, approval, rejection and edits.

The client keeps a :class:`LocalCache` of the ids the session has voted
for and saved.  The cache only mirrors the server: it is filled by
:meth:`TamilNamesAPI.refresh` (run on the first :meth:`has_voted` or
:meth:`is_favorite` call) and updated from the state returned by
each toggle, never by flipping flags locally.

Every request method returns a tuple ``(data, error)``.  On success ``error``
is ``None``; on failure ``data`` is empty and ``error`` is a dictionary
with ``status_code`` and ``message`` keys.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set, Tuple

import requests


logger = logging.getLogger(__name__)

Error = Optional[Dict[str, Any]]


@dataclass
class LocalCache:
    """Client-side copy of the session's votes and favorites."""

    voted_ids: Set[int] = field(default_factory=set)
    favorite_ids: Set[int] = field(default_factory=set)
    loaded: bool = False

    def has_voted(self, name_id: int) -> bool:
        return name_id in self.voted_ids

    def is_favorite(self, name_id: int) -> bool:
        return name_id in self.favorite_ids

    def record_vote(self, name_id: int, has_voted: bool) -> None:
        if has_voted:
            self.voted_ids.add(name_id)
        else:
            self.voted_ids.discard(name_id)

    def record_favorite(self, name_id: int, is_favorite: bool) -> None:
        if is_favorite:
            self.favorite_ids.add(name_id)
        else:
            self.favorite_ids.discard(name_id)


class TamilNamesAPI:
    """Client for interacting with the Tamil Names API."""

    def __init__(
        self,
        *,
        base_url: str,
        session_id: Optional[str] = None,
        admin_token: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL of the API including the ``/api`` prefix,
                e.g. ``http://localhost:3000/api``.
            session_id: Visitor session token.  When omitted, one is
                requested from the server on first use.
            admin_token: Optional admin token sent as a bearer token on
                admin routes.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Per-request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.session_id = session_id
        self.admin_token = admin_token
        self.session = session or requests.Session()
        self.timeout = timeout
        self.cache = LocalCache()

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self,
        method: str,
        path: str,
        *,
        params: Dict[str, Any] | None = None,
        json_body: Any | None = None,
        admin: bool = False,
    ) -> Tuple[Optional[Any], Error]:
        """Perform an HTTP request to the API.

        Returns:
            A tuple ``(data, error)``.  ``data`` contains the parsed JSON
            response on success and ``error`` is ``None``.  On failure,
            ``data`` is ``None`` and ``error`` describes the issue.
        """
        url = f"{self.base_url}{path}"
        headers: Dict[str, str] = {}
        if admin and self.admin_token:
            headers["Authorization"] = f"Bearer {self.admin_token}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                params=params,
                json=json_body,
                headers=headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    message = err_json.get("detail") or err_json.get("error") or str(err_json)
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    def _ensure_session(self) -> Tuple[Optional[str], Error]:
        if self.session_id:
            return self.session_id, None
        data, error = self._request("POST", "/session")
        if error:
            return None, error
        self.session_id = data["sessionId"]
        return self.session_id, None

    # ------------------------------------------------------------------
    # Names
    # ------------------------------------------------------------------
    def list_names(self, **filters: Any) -> Tuple[List[Dict[str, Any]], Error]:
        """List names.  Accepts ``status``, ``gender``, ``category``,
        ``letter``, ``search``, ``limit`` and ``offset``; empty values are
        not sent."""
        params = {key: value for key, value in filters.items() if value not in (None, "")}
        data, error = self._request("GET", "/names", params=params)
        if error:
            return [], error
        return data or [], None

    def get_name(self, name_id: int) -> Tuple[Optional[Dict[str, Any]], Error]:
        return self._request("GET", f"/names/{name_id}")

    def submit_name(self, payload: Dict[str, Any]) -> Tuple[Optional[int], Error]:
        """Submit a new name and return its id."""
        data, error = self._request("POST", "/names", json_body=payload)
        if error:
            return None, error
        return data.get("id"), None

    # ------------------------------------------------------------------
    # Session-scoped actions
    # ------------------------------------------------------------------
    def vote(self, name_id: int) -> Tuple[Optional[Dict[str, Any]], Error]:
        """Toggle the session's vote and update the cache from the reply."""
        session_id, error = self._ensure_session()
        if error:
            return None, error
        data, error = self._request(
            "POST", f"/names/{name_id}/vote", json_body={"sessionId": session_id}
        )
        if error:
            return None, error
        self.cache.record_vote(name_id, bool(data.get("hasVoted")))
        return data, None

    def toggle_favorite(self, name_id: int) -> Tuple[Optional[Dict[str, Any]], Error]:
        """Toggle the session's favorite and update the cache from the reply."""
        session_id, error = self._ensure_session()
        if error:
            return None, error
        data, error = self._request(
            "POST", f"/names/{name_id}/favorite", json_body={"sessionId": session_id}
        )
        if error:
            return None, error
        self.cache.record_favorite(name_id, bool(data.get("isFavorite")))
        return data, None

    def get_user_votes(self) -> Tuple[List[int], Error]:
        session_id, error = self._ensure_session()
        if error:
            return [], error
        data, error = self._request("GET", f"/users/{session_id}/votes")
        if error:
            return [], error
        return data or [], None

    def get_user_favorites(self) -> Tuple[List[Dict[str, Any]], Error]:
        session_id, error = self._ensure_session()
        if error:
            return [], error
        data, error = self._request("GET", f"/users/{session_id}/favorites")
        if error:
            return [], error
        return data or [], None

    def refresh(self) -> Error:
        """Reload the cache from the server.

        On error the previous cache contents are kept untouched.
        """
        votes, error = self.get_user_votes()
        if error:
            return error
        favorites, error = self.get_user_favorites()
        if error:
            return error
        self.cache.voted_ids = set(votes)
        self.cache.favorite_ids = {item["id"] for item in favorites}
        self.cache.loaded = True
        return None

    def _ensure_cache(self) -> None:
        if not self.cache.loaded:
            error = self.refresh()
            if error:
                logger.warning("Could not load votes and favorites: %s", error["message"])

    def has_voted(self, name_id: int) -> bool:
        """Whether the session has voted for ``name_id``.

        The cache is loaded from the server on first use; if that fails
        the answer comes from whatever the cache already holds.
        """
        self._ensure_cache()
        return self.cache.has_voted(name_id)

    def is_favorite(self, name_id: int) -> bool:
        self._ensure_cache()
        return self.cache.is_favorite(name_id)

    # ------------------------------------------------------------------
    # Admin
    # ------------------------------------------------------------------
    def get_admin_stats(self) -> Tuple[Optional[Dict[str, Any]], Error]:
        return self._request("GET", "/admin/stats", admin=True)

    def approve_name(self, name_id: int) -> Tuple[Optional[Dict[str, Any]], Error]:
        return self._request("POST", f"/admin/names/{name_id}/approve", admin=True)

    def delete_name(self, name_id: int) -> Tuple[Optional[Dict[str, Any]], Error]:
        """Reject a name.  The server deletes it with its votes and favorites."""
        data, error = self._request("DELETE", f"/admin/names/{name_id}", admin=True)
        if not error:
            self.cache.voted_ids.discard(name_id)
            self.cache.favorite_ids.discard(name_id)
        return data, error

    def update_name(self, name_id: int, payload: Dict[str, Any]) -> Tuple[Optional[Dict[str, Any]], Error]:
        return self._request("PUT", f"/admin/names/{name_id}", json_body=payload, admin=True)
