"""Test configuration and fixtures for the Blogfolio application."""

from datetime import datetime, timezone
from typing import Generator
from unittest.mock import MagicMock

import pytest
from flask import Flask
from flask.testing import FlaskClient
from sqlalchemy.pool import StaticPool

from blogfolio import create_app
from blogfolio.extensions import db
from blogfolio.models import Category
from blogfolio.repositories.base import StoreError


@pytest.fixture
def app() -> Generator[Flask, None, None]:
    """Create and configure a test Flask application."""
    # Use in-memory SQLite for each test
    test_config = {
        'TESTING': True,
        'WTF_CSRF_ENABLED': False,  # Disable CSRF for testing
        'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
        'SQLALCHEMY_TRACK_MODIFICATIONS': False,
        'SQLALCHEMY_ENGINE_OPTIONS': {
            'poolclass': StaticPool,
            'connect_args': {'check_same_thread': False}
        },
        'SECRET_KEY': 'test-secret-key',
        'RATELIMIT_ENABLED': False,  # Disable rate limiting for tests
        'CATEGORY_STORE_BACKEND': 'sql',
        'HTTP_CLIENT_BASE_URL': 'http://testserver',
        'WALLET_RPC_URL': 'http://rpc.test',
    }

    app = create_app(test_config)

    with app.app_context():
        db.create_all()
        yield app

        # Cleanup
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app: Flask) -> FlaskClient:
    """Create a test client."""
    return app.test_client()


@pytest.fixture
def runner(app: Flask):
    """Create a test CLI runner."""
    return app.test_cli_runner()


@pytest.fixture
def store(app: Flask):
    """The category store the app was built with."""
    return app.extensions['category_store']


@pytest.fixture
def test_category(app: Flask):
    """Create a test category."""
    with app.app_context():
        category = Category(
            name='Test Category',
            slug='test-category',
            description='A test category',
            created_at=datetime.now(timezone.utc)
        )
        db.session.add(category)
        db.session.commit()
        db.session.refresh(category)
        yield category


class FakeCategoryStore:
    """In-memory category store recording every call it receives."""

    def __init__(self):
        self.rows: dict[str, dict] = {}
        self.calls: list[str] = []
        self.fail_with: str | None = None
        self._next_id = 1

    def _record(self, operation: str) -> None:
        self.calls.append(operation)
        if self.fail_with:
            raise StoreError(self.fail_with)

    def list_all(self):
        self._record('list_all')
        return sorted((dict(r) for r in self.rows.values()), key=lambda r: r['name'])

    def get_by_id(self, category_id):
        self._record('get_by_id')
        row = self.rows.get(category_id)
        return dict(row) if row else None

    def insert(self, fields):
        self._record('insert')
        category_id = f'cat-{self._next_id}'
        self._next_id += 1
        self.rows[category_id] = {'id': category_id, 'created_at': None, **fields}
        return dict(self.rows[category_id])

    def update(self, category_id, fields):
        self._record('update')
        if category_id not in self.rows:
            return None
        self.rows[category_id].update(fields)
        return dict(self.rows[category_id])

    def delete(self, category_id):
        self._record('delete')
        self.rows.pop(category_id, None)


@pytest.fixture
def fake_store() -> FakeCategoryStore:
    return FakeCategoryStore()


def make_response(status_code: int = 200, json_data=None, text: str = ''):
    """Build a requests.Response stand-in."""
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 400
    response.text = text
    if json_data is None and not text:
        response.content = b''
        response.json.side_effect = ValueError('No JSON')
    elif json_data is None:
        response.content = text.encode()
        response.json.side_effect = ValueError('No JSON')
    else:
        response.content = b'{}'
        response.json.return_value = json_data
    return response
