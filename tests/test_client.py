"""Tests for the requests-based API client."""

from unittest.mock import MagicMock

import pytest
import requests

from names_client import LocalCache, TamilNamesAPI


def make_response(payload=None, status_code=200):
    """Build a fake ``requests.Response``."""
    response = MagicMock()
    response.status_code = status_code
    response.content = b'{}' if payload is not None else b''
    response.json.return_value = payload
    response.text = str(payload)
    if status_code >= 400:
        error = requests.HTTPError(f'{status_code} Error')
        error.response = response
        response.raise_for_status.side_effect = error
    else:
        response.raise_for_status.return_value = None
    return response


@pytest.fixture
def http():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def api(http):
    return TamilNamesAPI(base_url='http://localhost:3000/api/', session_id='s1', session=http)


class TestLocalCache:
    """Tests for LocalCache."""

    def test_record_vote(self):
        cache = LocalCache()
        cache.record_vote(1, True)
        assert cache.has_voted(1)
        cache.record_vote(1, False)
        assert not cache.has_voted(1)

    def test_record_favorite_missing_is_noop(self):
        cache = LocalCache()
        cache.record_favorite(5, False)
        assert cache.favorite_ids == set()


class TestTamilNamesAPI:
    """Tests for TamilNamesAPI."""

    def test_list_names_drops_empty_filters(self, api, http):
        http.request.return_value = make_response([{'id': 1}])

        data, error = api.list_names(gender='பெண்கள்', search='', letter=None)

        assert error is None
        assert data == [{'id': 1}]
        kwargs = http.request.call_args.kwargs
        assert kwargs['url'] == 'http://localhost:3000/api/names'
        assert kwargs['params'] == {'gender': 'பெண்கள்'}

    def test_vote_updates_cache_from_reply(self, api, http):
        http.request.return_value = make_response(
            {'message': 'Vote added', 'votes': 3, 'hasVoted': True}
        )

        data, error = api.vote(7)

        assert error is None
        assert data['votes'] == 3
        assert api.cache.has_voted(7)
        assert http.request.call_args.kwargs['json'] == {'sessionId': 's1'}

    def test_failed_vote_leaves_cache(self, api, http):
        api.cache.record_vote(7, True)
        http.request.return_value = make_response({'detail': 'Name not found'}, 404)

        data, error = api.vote(7)

        assert data is None
        assert error == {'status_code': 404, 'message': 'Name not found'}
        assert api.cache.has_voted(7)

    def test_toggle_favorite_updates_cache(self, api, http):
        api.cache.record_favorite(2, True)
        http.request.return_value = make_response(
            {'message': 'Removed from favorites', 'isFavorite': False}
        )

        api.toggle_favorite(2)

        assert not api.cache.is_favorite(2)

    def test_requests_session_when_missing(self, http):
        api = TamilNamesAPI(base_url='http://x/api', session=http)
        http.request.side_effect = [
            make_response({'sessionId': 'abc'}),
            make_response([4, 5]),
        ]

        votes, error = api.get_user_votes()

        assert error is None
        assert votes == [4, 5]
        assert api.session_id == 'abc'
        assert http.request.call_args.kwargs['url'] == 'http://x/api/users/abc/votes'

    def test_refresh_replaces_cache(self, api, http):
        api.cache.record_vote(99, True)
        http.request.side_effect = [
            make_response([1, 2]),
            make_response([{'id': 3}]),
        ]

        assert api.refresh() is None

        assert api.cache.voted_ids == {1, 2}
        assert api.cache.favorite_ids == {3}
        assert api.cache.loaded is True

    def test_refresh_error_keeps_cache(self, api, http):
        api.cache.record_vote(99, True)
        http.request.side_effect = requests.ConnectionError('down')

        error = api.refresh()

        assert error['status_code'] is None
        assert api.cache.voted_ids == {99}
        assert api.cache.loaded is False

    def test_first_lookup_loads_cache(self, api, http):
        """The cache is filled from the server once, on the first question."""
        http.request.side_effect = [
            make_response([1]),
            make_response([{'id': 2}]),
        ]

        assert api.has_voted(1) is True
        assert api.is_favorite(2) is True
        assert api.has_voted(2) is False

        assert http.request.call_count == 2
        assert api.cache.loaded is True

    def test_lookup_retries_after_failed_load(self, api, http):
        http.request.side_effect = [
            requests.ConnectionError('down'),
            make_response([5]),
            make_response([]),
        ]

        assert api.has_voted(5) is False
        assert api.has_voted(5) is True
        assert http.request.call_count == 3

    def test_admin_calls_send_token(self, http):
        api = TamilNamesAPI(base_url='http://x/api', admin_token='tok', session=http)
        http.request.return_value = make_response({'message': 'Name approved successfully'})

        api.approve_name(3)

        kwargs = http.request.call_args.kwargs
        assert kwargs['method'] == 'POST'
        assert kwargs['headers'] == {'Authorization': 'Bearer tok'}

    def test_public_calls_send_no_token(self, http):
        api = TamilNamesAPI(base_url='http://x/api', admin_token='tok', session=http)
        http.request.return_value = make_response({'id': 1})

        api.get_name(1)

        assert http.request.call_args.kwargs['headers'] == {}

    def test_delete_drops_cached_ids(self, api, http):
        api.cache.record_vote(8, True)
        api.cache.record_favorite(8, True)
        http.request.return_value = make_response({'message': 'Name deleted successfully'})

        api.delete_name(8)

        assert not api.cache.has_voted(8)
        assert not api.cache.is_favorite(8)

    def test_submit_returns_id(self, api, http, name_payload):
        http.request.return_value = make_response(
            {'message': 'Name submitted successfully', 'id': 12}, 201
        )

        name_id, error = api.submit_name(name_payload)

        assert (name_id, error) == (12, None)
