"""Tests for utility functions."""

import pytest
from unittest.mock import MagicMock

from blogfolio.utils.slug import slugify
from blogfolio.utils.http_client import HTTPClient


class TestSlug:
    """Test cases for slug generation."""

    def test_slugify_basic(self):
        """Test basic slug creation."""
        assert slugify('Hello World!') == 'hello-world'
        assert slugify('Test Category') == 'test-category'

    def test_slugify_collapses_whitespace(self):
        """Test that whitespace runs and surrounding spaces collapse."""
        assert slugify('  multiple   spaces  ') == 'multiple-spaces'
        assert slugify('tabs\tand\nnewlines') == 'tabs-and-newlines'

    def test_slugify_special_characters(self):
        """Test slug creation with special characters."""
        assert slugify('Hello, World!') == 'hello-world'
        assert slugify('Test & Title') == 'test-title'
        assert slugify('Version 2.0') == 'version-20'

    def test_slugify_collapses_hyphens(self):
        """Test that runs of hyphens become one and edges are stripped."""
        assert slugify('--already--hyphenated--') == 'already-hyphenated'
        assert slugify('a - b') == 'a-b'

    def test_slugify_keeps_underscores(self):
        """Test that underscore counts as a word character."""
        assert slugify('snake_case name') == 'snake_case-name'

    def test_slugify_unicode_word_characters(self):
        """Test that non-Latin word characters survive without transliteration."""
        assert slugify('Café Ñandú') == 'café-ñandú'
        assert slugify('分类 一') == '分类-一'

    def test_slugify_only_disallowed_characters(self):
        """Test that names with no word characters collapse to empty."""
        assert slugify('!!!') == ''
        assert slugify('🎉 🎉') == ''

    def test_slugify_empty(self):
        """Test slug creation with empty input."""
        assert slugify('') == ''
        assert slugify('   ') == ''
        assert slugify(None) == ''

    @pytest.mark.parametrize('name', [
        'Hello World!',
        '  multiple   spaces  ',
        'Café Ñandú',
        'Ünïcödé -- Mixed__Case 42',
    ])
    def test_slugify_idempotent(self, name):
        """Test that slugifying a slug changes nothing."""
        once = slugify(name)
        assert slugify(once) == once


class TestHttpClient:
    """Test cases for the HTTP client."""

    def make_client(self, **kwargs):
        session = MagicMock()
        client = HTTPClient(base_url='http://testserver', timeout=5, session=session, **kwargs)
        return client, session

    def test_defaults_outside_app_context(self):
        """Test defaults when no Flask app is active."""
        client = HTTPClient(session=MagicMock())
        assert client.base_url == 'http://localhost:8000'
        assert client.timeout == 10
        assert client.allowed_domains == []

    def test_defaults_from_app_config(self, app):
        """Test that config values are used inside an app context."""
        client = HTTPClient(session=MagicMock())
        assert client.base_url == 'http://testserver'

    def test_base_url_gets_scheme(self):
        """Test that a bare host gets an http scheme."""
        client = HTTPClient(base_url='example.com', session=MagicMock())
        assert client.base_url == 'http://example.com'

    def test_build_url(self):
        """Test joining paths onto the base URL."""
        client, _ = self.make_client()
        assert client._build_url('/api/categories') == 'http://testserver/api/categories'
        assert client._build_url('api/categories/1') == 'http://testserver/api/categories/1'
        assert client._build_url('https://other.example.com/x') == 'https://other.example.com/x'

    def test_build_url_keeps_base_path(self):
        """Test that a base URL with a path prefix is preserved."""
        client = HTTPClient(base_url='http://testserver/prefix', session=MagicMock())
        assert client._build_url('/api/categories') == 'http://testserver/prefix/api/categories'

    def test_request_sends_headers_and_timeout(self):
        """Test that requests carry default headers and the timeout."""
        client, session = self.make_client()
        client.post('/api/categories', json={'name': 'x'})

        session.request.assert_called_once_with(
            'POST',
            'http://testserver/api/categories',
            headers={'Accept': 'application/json'},
            json={'name': 'x'},
            timeout=5,
        )

    def test_request_merges_custom_headers(self):
        """Test that custom headers are merged with defaults."""
        client, session = self.make_client()
        client.get('/api/categories', headers={'X-Request-ID': 'abc'})

        headers = session.request.call_args.kwargs['headers']
        assert headers == {'Accept': 'application/json', 'X-Request-ID': 'abc'}

    def test_rejects_non_http_scheme(self):
        """Test that only HTTP(S) URLs are allowed."""
        client, session = self.make_client()
        with pytest.raises(ValueError, match='Invalid scheme'):
            client.get('ftp://files.example.com/data')
        session.request.assert_not_called()

    def test_allowed_domains(self):
        """Test the domain allowlist including subdomains."""
        client, session = self.make_client(allowed_domains=['testserver', 'example.com'])
        client.get('https://api.example.com/x')
        client.get('/api/categories')
        assert session.request.call_count == 2

        with pytest.raises(ValueError, match='not in the allowed domains'):
            client.get('https://evil.test/x')
