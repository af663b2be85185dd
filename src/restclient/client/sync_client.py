"""Synchronous REST client returning :class:`~restclient.client.result.Result` objects.

This module provides :class:`Client`, which wraps :class:`httpx.Client`
and layers on:

- **URL normalisation** -- request paths are joined to the base URL and
  cleaned by :class:`~restclient.client.builder.RequestBuilder`.
- **Payload mapping** -- GET/DELETE payloads become query parameters,
  POST payloads become the JSON body.
- **Auth injection** -- an optional default
  :class:`~restclient.auth.base.Auth` is applied to every request, before
  the per-call options.
- **Errors as values** -- nothing is raised from a verb.  URL, payload and
  option failures short-circuit without network I/O, transport failures
  are wrapped in :class:`~restclient.exceptions.TransportError`, and all
  of them are carried on the returned result.

There is no retry, caching, or streaming; callers decide whether to retry
a failed result.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from restclient.auth.base import Auth
from restclient.auth.manager import AuthManager, create_default_manager
from restclient.client.builder import RequestBuilder
from restclient.client.result import Result
from restclient.exceptions import RestClientError, TransportError
from restclient.models import ClientConfig
from restclient.options import Option, WithAuth

logger = logging.getLogger(__name__)


class Client:
    """REST client bound to one base URL.

    Args:
        base_url: Prefix for every request path, e.g.
            ``"https://api.example.com/v1/"``.
        auth: Optional default auth applied to every request.
        headers: Headers sent with every request.
        timeout: Transport timeout in seconds.
        verify_ssl: Verify TLS certificates.
        follow_redirects: Follow 3xx responses.
        transport: Optional :class:`httpx.BaseTransport`, e.g. an
            :class:`httpx.MockTransport` in tests.

    Example::

        with Client("https://api.example.com") as client:
            result = client.get("/users", {"page": 2}, with_jwt_token(token))
            users = result.value("users", list[User])
    """

    def __init__(
        self,
        base_url: str,
        auth: Optional[Auth] = None,
        *,
        headers: Optional[dict[str, str]] = None,
        timeout: float = 30.0,
        verify_ssl: bool = True,
        follow_redirects: bool = True,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._auth = auth
        self._builder = RequestBuilder(base_url, headers)
        self._client = httpx.Client(
            timeout=timeout,
            verify=verify_ssl,
            follow_redirects=follow_redirects,
            transport=transport,
        )

    @classmethod
    def from_config(
        cls,
        config: ClientConfig,
        auth_manager: Optional[AuthManager] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> Client:
        """Build a client from a :class:`~restclient.models.ClientConfig`.

        When the config has an ``auth`` section, credentials are resolved
        through *auth_manager* (default: :func:`create_default_manager`) on
        the first request.

        Raises:
            AuthError: If the configured auth type has no plugin.
        """
        auth: Optional[Auth] = None
        if config.auth is not None:
            manager = auth_manager or create_default_manager()
            auth = manager.auth_for(config.auth)
        return cls(
            config.base_url,
            auth,
            headers=config.headers,
            timeout=config.request.timeout,
            verify_ssl=config.request.verify_ssl,
            follow_redirects=config.request.follow_redirects,
            transport=transport,
        )

    @property
    def base_url(self) -> str:
        return self._builder.base_url

    @property
    def auth(self) -> Optional[Auth]:
        return self._auth

    # ------------------------------------------------------------------ #
    # Context manager
    # ------------------------------------------------------------------ #

    def __enter__(self) -> Client:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying :class:`httpx.Client` and its connections."""
        self._client.close()

    # ------------------------------------------------------------------ #
    # Public request methods
    # ------------------------------------------------------------------ #

    def request(self, method: str, path: str, payload: Any = None, *options: Option) -> Result:
        """Build, send and wrap one request.

        Args:
            method: HTTP method.
            path: Path appended to the base URL.
            payload: Query payload (GET/DELETE) or JSON body (POST).
            *options: Request options, applied in order after the default auth.

        Returns:
            A :class:`~restclient.client.result.Result`; never raises for
            URL, payload, auth or transport failures.
        """
        method = method.upper()
        if self._auth is not None:
            options = (WithAuth(self._auth), *options)

        try:
            request = self._builder.build(method, path, payload, options)
        except RestClientError as exc:
            logger.warning("%s %s not sent: %s", method, path, exc)
            return Result(error=exc)

        # Requests built outside httpx.Client.build_request carry no timeout.
        request.extensions["timeout"] = self._client.timeout.as_dict()

        target = _loggable_url(request.url)
        logger.debug("%s %s", method, target)
        try:
            response = self._client.send(request)
        except httpx.RequestError as exc:
            logger.warning("%s %s failed: %s", method, target, exc)
            error = TransportError(str(exc) or type(exc).__name__)
            error.__cause__ = exc
            return Result(error=error)

        logger.debug("%s %s -> %d", method, target, response.status_code)
        return Result(response=response)

    def post(self, path: str, payload: Any = None, *options: Option) -> Result:
        """Send a POST request with *payload* as the JSON body."""
        return self.request("POST", path, payload, *options)

    def get(self, path: str, payload: Any = None, *options: Option) -> Result:
        """Send a GET request with *payload* flattened into query parameters."""
        return self.request("GET", path, payload, *options)

    def delete(self, path: str, payload: Any = None, *options: Option) -> Result:
        """Send a DELETE request with *payload* flattened into query parameters."""
        return self.request("DELETE", path, payload, *options)

    def __repr__(self) -> str:
        return f"Client(base_url={self.base_url!r})"


def _loggable_url(url: httpx.URL) -> str:
    # Query strings may carry api keys.
    return str(url).split("?", 1)[0]


def new(base_url: str, **kwargs: Any) -> Client:
    """Create a :class:`Client` for *base_url*; keyword arguments are passed through."""
    return Client(base_url, **kwargs)
