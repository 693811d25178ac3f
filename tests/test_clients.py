"""Tests for the categories API client."""

from urllib.parse import urlsplit

import pytest
import requests
from unittest.mock import MagicMock

from blogfolio.clients.categories import CategoryClient, CategoryClientError
from blogfolio.utils.http_client import HTTPClient

from conftest import make_response


def make_client(response=None):
    session = MagicMock()
    if response is not None:
        session.request.return_value = response
    http = HTTPClient(base_url='http://testserver', timeout=5, session=session)
    return CategoryClient(http), session


class FlaskTestSession:
    """Sends requests.Session-style calls through a Flask test client."""

    def __init__(self, test_client):
        self.test_client = test_client

    def request(self, method, url, headers=None, timeout=None, params=None, json=None):
        response = self.test_client.open(urlsplit(url).path, method=method, headers=headers, json=json)
        stand_in = MagicMock()
        stand_in.status_code = response.status_code
        stand_in.json.return_value = response.get_json()
        return stand_in


class TestCategoryClient:
    """Test cases for CategoryClient against a mocked session."""

    def test_get_all(self):
        """Test that the list envelope is returned parsed."""
        client, session = make_client(make_response(200, {
            'code': 200, 'data': [{'id': 'a', 'name': 'Alpha'}], 'msg': 'Categories fetched successfully',
        }))

        envelope = client.get_all()

        assert envelope.ok
        assert envelope.data == [{'id': 'a', 'name': 'Alpha'}]
        args, kwargs = session.request.call_args
        assert args == ('GET', 'http://testserver/api/categories')
        assert kwargs['timeout'] == 5

    def test_create_sends_json(self):
        """Test that create posts name and description."""
        client, session = make_client(make_response(201, {
            'code': 201, 'data': {'id': 'n1'}, 'msg': 'Category created successfully',
        }))

        envelope = client.create('New Category', 'A freshly created category')

        assert envelope.code == 201
        args, kwargs = session.request.call_args
        assert args == ('POST', 'http://testserver/api/categories')
        assert kwargs['json'] == {'name': 'New Category', 'description': 'A freshly created category'}

    def test_update_sends_json(self):
        """Test that update puts to the id path."""
        client, session = make_client(make_response(200, {'code': 200, 'data': {}, 'msg': 'ok'}))

        client.update('abc', 'Renamed')

        args, kwargs = session.request.call_args
        assert args == ('PUT', 'http://testserver/api/categories/abc')
        assert kwargs['json'] == {'name': 'Renamed', 'description': None}

    def test_id_is_quoted(self):
        """Test that ids are escaped into a single path segment."""
        client, session = make_client(make_response(200, {'code': 200, 'msg': 'ok'}))

        client.delete('a/b')

        assert session.request.call_args.args[1] == 'http://testserver/api/categories/a%2Fb'

    def test_failure_envelope_is_returned(self):
        """Test that failures reported by the API come back as envelopes, not exceptions."""
        client, _ = make_client(make_response(404, {
            'code': 404, 'error_code': 'not_found', 'msg': 'Category not found',
        }))

        envelope = client.get_by_id('missing')

        assert not envelope.ok
        assert envelope.error_code == 'not_found'
        assert envelope.msg == 'Category not found'

    def test_transport_failure_raises(self):
        """Test that network failures raise CategoryClientError."""
        client, session = make_client()
        session.request.side_effect = requests.ConnectionError('Connection refused')

        with pytest.raises(CategoryClientError, match='Connection refused'):
            client.get_all()

    def test_non_json_reply_raises(self):
        """Test that a reply without an envelope raises CategoryClientError."""
        client, _ = make_client(make_response(502, text='<html>Bad Gateway</html>'))

        with pytest.raises(CategoryClientError, match='HTTP 502'):
            client.get_all()

    def test_json_without_envelope_shape_raises(self):
        """Test that arbitrary JSON is not mistaken for an envelope."""
        client, _ = make_client(make_response(200, {'unexpected': True}))

        with pytest.raises(CategoryClientError):
            client.get_all()


class TestCategoryClientAgainstApp:
    """Test cases running the client against the real API."""

    @pytest.fixture
    def api(self, client):
        http = HTTPClient(base_url='http://testserver', session=FlaskTestSession(client))
        return CategoryClient(http)

    def test_crud_round(self, api):
        """Test create, fetch, update, list and delete through the client."""
        created = api.create('Client Made', 'via client')
        assert created.code == 201
        category_id = created.data['id']

        fetched = api.get_by_id(category_id)
        assert fetched.data['slug'] == 'client-made'

        updated = api.update(category_id, 'Client Renamed', 'still here')
        assert updated.data['slug'] == 'client-renamed'

        listed = api.get_all()
        assert [row['id'] for row in listed.data] == [category_id]

        deleted = api.delete(category_id)
        assert deleted.ok
        assert deleted.data is None
        assert api.get_by_id(category_id).code == 404

    def test_validation_failure(self, api):
        """Test that validation failures arrive as envelopes."""
        envelope = api.create('   ')
        assert envelope.code == 400
        assert envelope.error_code == 'validation_failed'
