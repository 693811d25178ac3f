from __future__ import annotations

from typing import Any
from urllib.parse import urljoin, urlparse

import requests
from flask import current_app, has_app_context


class HTTPClient:
    """HTTP client for calling the application's own JSON API."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        allowed_domains: list[str] | None = None,
        session: requests.Session | None = None,
    ):
        """Initialize the HTTP client.

        Args:
            base_url (str, optional): Base URL for all requests. Defaults to the
                HTTP_CLIENT_BASE_URL config value.
            timeout (float, optional): Per-request timeout in seconds. Defaults to
                the HTTP_CLIENT_TIMEOUT config value.
            allowed_domains (list, optional): List of allowed domains for requests.
                If provided, only these domains (and their subdomains) are allowed.
            session (requests.Session, optional): Session to send requests with.
        """
        config = current_app.config if has_app_context() else {}

        self.base_url = base_url or config.get('HTTP_CLIENT_BASE_URL', 'http://localhost:8000')
        if not self.base_url.startswith(('http://', 'https://')):
            self.base_url = f'http://{self.base_url}'

        self.timeout = timeout if timeout is not None else float(config.get('HTTP_CLIENT_TIMEOUT', 10))

        self.allowed_domains = allowed_domains
        if self.allowed_domains is None:
            self.allowed_domains = config.get('HTTP_CLIENT_ALLOWED_DOMAINS', [])

        self.session = session or requests.Session()

    def _get_headers(self, headers: dict[str, str] | None = None) -> dict[str, str]:
        default_headers = {
            'Accept': 'application/json'
        }
        if headers:
            default_headers.update(headers)
        return default_headers

    def _validate_url(self, url: str) -> bool:
        """Validate the URL scheme and, when configured, the domain allowlist.

        Raises:
            ValueError: If URL is blocked
        """
        parsed = urlparse(url)

        if parsed.scheme not in ('http', 'https'):
            raise ValueError(f"Blocked: Invalid scheme '{parsed.scheme}'. Only HTTP/HTTPS allowed.")

        hostname = parsed.hostname
        if not hostname:
            raise ValueError("Blocked: Invalid URL - no hostname found")

        if self.allowed_domains:
            hostname_lower = hostname.lower()
            allowed = any(
                hostname_lower == domain.lower() or
                hostname_lower.endswith('.' + domain.lower())
                for domain in self.allowed_domains
            )
            if not allowed:
                raise ValueError(f"Blocked: Domain '{hostname}' is not in the allowed domains list")

        return True

    def _build_url(self, path: str) -> str:
        """Build the full URL from a path."""
        if path.startswith(('http://', 'https://')):
            return path
        base = self.base_url if self.base_url.endswith('/') else self.base_url + '/'
        return urljoin(base, path.lstrip('/'))

    def request(self, method: str, path: str, headers: dict[str, str] | None = None, **kwargs: Any) -> requests.Response:
        """Send a request.

        Raises:
            ValueError: If URL fails validation
            requests.RequestException: If the transport fails
        """
        url = self._build_url(path)
        self._validate_url(url)
        kwargs.setdefault('timeout', self.timeout)
        return self.session.request(method, url, headers=self._get_headers(headers), **kwargs)

    def get(self, path: str, params: dict[str, Any] | None = None, **kwargs: Any) -> requests.Response:
        return self.request('GET', path, params=params, **kwargs)

    def post(self, path: str, **kwargs: Any) -> requests.Response:
        return self.request('POST', path, **kwargs)

    def put(self, path: str, **kwargs: Any) -> requests.Response:
        return self.request('PUT', path, **kwargs)

    def delete(self, path: str, **kwargs: Any) -> requests.Response:
        return self.request('DELETE', path, **kwargs)
