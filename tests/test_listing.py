"""Listing and lookup tests for the Tamil Names API."""

import asyncio

import pytest

from tamil_names_api.app.core.constants import CATEGORY_MODERN, CATEGORY_NATURE, FEMALE, MALE
from tamil_names_api.app.core.errors import NotFoundError
from tamil_names_api.app.services.favorite_service import FavoriteService
from tamil_names_api.app.services.name_service import NameService
from tamil_names_api.app.services.vote_service import VoteService


def list_names(**filters):
    return asyncio.run(NameService.list_names(**filters))


class TestDefaultListing:
    """Tests for the public default view."""

    def test_excludes_pending_and_rejected(self, make_name):
        """Without a status only approved names are listed."""
        make_name(name='அ', status='pending')
        make_name(name='ஆ', status='rejected')
        approved = make_name(name='இ', status='approved')
        admin = make_name(name='ஈ', status='admin')

        ids = {n.id for n in list_names()}

        assert ids == {approved, admin}

    def test_status_all_returns_everything(self, make_name):
        for status in ['pending', 'approved', 'admin', 'rejected']:
            make_name(status=status)

        assert len(list_names(status='all')) == 4

    def test_exact_status(self, make_name):
        pending = make_name(status='pending')
        make_name(status='admin')

        assert [n.id for n in list_names(status='pending')] == [pending]


class TestFilters:
    """Tests for gender, category, letter and search filters."""

    def test_gender_and_category(self, make_name):
        match = make_name(status='admin', gender=FEMALE, category=CATEGORY_NATURE)
        make_name(status='admin', gender=MALE, category=CATEGORY_NATURE)
        make_name(status='admin', gender=FEMALE, category=CATEGORY_MODERN)

        result = list_names(gender=FEMALE, category=CATEGORY_NATURE)

        assert [n.id for n in result] == [match]

    def test_letter_prefix(self, make_name):
        match = make_name(name='முல்லை', status='admin')
        make_name(name='தென்றல்', status='admin')

        assert [n.id for n in list_names(letter='மு')] == [match]

    def test_search_matches_name_or_meaning(self, make_name):
        by_name = make_name(name='கமலா', meaning='ஒன்று', status='admin')
        by_meaning = make_name(name='பூவழகி', meaning='கமலம் போன்றவள்', status='admin')
        make_name(name='வேல்', meaning='ஆயுதம்', status='admin')

        ids = {n.id for n in list_names(search='கமல')}

        assert ids == {by_name, by_meaning}

    def test_search_wildcards_are_literal(self, make_name):
        """A percent sign in the search text is not a wildcard."""
        make_name(name='abc', status='admin')

        assert list_names(search='%') == []


class TestOrderingAndCounts:
    """Tests for result ordering, pagination and computed counts."""

    def test_ordered_by_votes_then_newest(self, make_name):
        low = make_name(status='admin', votes=1)
        old_tie = make_name(status='admin', votes=5, created_at='2024-01-01 00:00:00')
        new_tie = make_name(status='admin', votes=5, created_at='2024-06-01 00:00:00')
        top = make_name(status='admin', votes=9)

        assert [n.id for n in list_names()] == [top, new_tie, old_tie, low]

    def test_pagination(self, make_name):
        ids = [make_name(status='admin', votes=v) for v in (5, 4, 3, 2, 1)]

        page = list_names(limit=2, offset=2)

        assert [n.id for n in page] == ids[2:4]

    def test_relation_counts(self, make_name):
        """Vote and favorite counts are computed independently."""
        name_id = make_name(status='admin')
        for session in ['s1', 's2', 's3']:
            asyncio.run(VoteService.toggle_vote(name_id, session))
        for session in ['s1', 's2']:
            asyncio.run(FavoriteService.toggle_favorite(name_id, session))

        (row,) = list_names()

        assert row.votes == 3
        assert row.vote_count == 3
        assert row.favorite_count == 2


class TestGetName:
    """Tests for NameService.get_name."""

    def test_get_any_status(self, make_name):
        name_id = make_name(name='செல்வன்', status='pending')

        result = asyncio.run(NameService.get_name(name_id))

        assert result.name == 'செல்வன்'
        assert result.status == 'pending'

    def test_get_missing(self, db_path):
        with pytest.raises(NotFoundError):
            asyncio.run(NameService.get_name(31337))

    def test_text_returned_as_stored(self, make_name):
        """Markup characters come back unchanged."""
        name_id = make_name(name="<b>A&B's</b>", meaning='"quoted"', status='admin')

        result = asyncio.run(NameService.get_name(name_id))

        assert result.name == "<b>A&B's</b>"
        assert result.meaning == '"quoted"'
