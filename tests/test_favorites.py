"""Favorite toggle tests for the Tamil Names API."""

import asyncio

import pytest

from tamil_names_api.app.core.errors import NotFoundError, ValidationError
from tamil_names_api.app.services.favorite_service import FavoriteService


def toggle(name_id, session_id):
    return asyncio.run(FavoriteService.toggle_favorite(name_id, session_id))


class TestToggleFavorite:
    """Tests for FavoriteService.toggle_favorite."""

    def test_toggle_sets_and_clears(self, make_name, fetch_row):
        """Favoriting twice removes the favorite."""
        name_id = make_name()

        assert toggle(name_id, 's1') is True
        assert fetch_row("SELECT COUNT(*) AS c FROM favorites")['c'] == 1
        assert toggle(name_id, 's1') is False
        assert fetch_row("SELECT COUNT(*) AS c FROM favorites")['c'] == 0

    def test_does_not_touch_votes(self, make_name, fetch_row):
        """Favorites leave the vote counter and status alone."""
        name_id = make_name(votes=24)

        toggle(name_id, 's1')

        row = fetch_row("SELECT votes, status FROM names WHERE id = ?", (name_id,))
        assert row['votes'] == 24
        assert row['status'] == 'pending'

    def test_session_required(self, make_name):
        with pytest.raises(ValidationError):
            toggle(make_name(), None)

    def test_unknown_name(self, db_path):
        with pytest.raises(NotFoundError):
            toggle(4242, 's1')

    def test_concurrent_first_favorites_save_once(self, make_name, fetch_row, hold_before, run_together):
        """Two simultaneous saves from one session keep a single favorite."""
        from tamil_names_api.app.services import favorite_service

        name_id = make_name()
        hold_before(favorite_service, 'INSERT INTO favorites')

        results = run_together(FavoriteService.toggle_favorite, name_id, 's1')

        assert results == [True, True]
        assert fetch_row("SELECT COUNT(*) AS c FROM favorites")['c'] == 1


class TestListFavorites:
    """Tests for FavoriteService.list_favorites."""

    def test_lists_full_names_newest_first(self, make_name):
        """Favorites come back as names, most recently added first."""
        first = make_name(name='முல்லை')
        second = make_name(name='தென்றல்')
        toggle(first, 's1')
        toggle(second, 's1')

        favorites = asyncio.run(FavoriteService.list_favorites('s1'))

        assert [f.id for f in favorites] == [second, first]
        assert favorites[0].name == 'தென்றல்'
        assert favorites[0].favorited_at is not None
        assert favorites[0].favorite_count == 1

    def test_lists_pending_names_too(self, make_name):
        """A session sees its favorites regardless of moderation status."""
        name_id = make_name(status='pending')
        toggle(name_id, 's1')

        favorites = asyncio.run(FavoriteService.list_favorites('s1'))

        assert [f.status for f in favorites] == ['pending']

    def test_other_sessions_not_included(self, make_name):
        name_id = make_name()
        toggle(name_id, 's2')

        assert asyncio.run(FavoriteService.list_favorites('s1')) == []
