"""Core types of the auth subsystem.

This module defines the three foundational types:

- :class:`Auth` -- the capability a client calls to apply credentials to
  an outgoing :class:`httpx.Request`.
- :class:`AuthResult` -- a plain container for the HTTP headers, query
  parameters, and cookies that carry credentials.  It is itself an
  :class:`Auth`, so static credentials can be passed straight to a client.
- :class:`AuthPlugin` -- the abstract base class that every
  configuration-driven authentication strategy must extend.

To implement a new auth strategy, subclass :class:`AuthPlugin`, set the
:attr:`~AuthPlugin.auth_type` property, and implement
:meth:`~AuthPlugin.authenticate`.

See Also:
    :mod:`restclient.auth.manager` for plugin registration and dispatch.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

import httpx

from restclient.models import AuthConfig


class Auth(ABC):
    """Something that knows how to put credentials on a request."""

    @abstractmethod
    def handle(self, request: httpx.Request) -> None:
        """Apply credentials to *request* in place."""
        ...


class AuthResult(Auth):
    """Container for authentication artifacts to inject into HTTP requests.

    Headers replace any existing header of the same name, params are merged
    into the query string, and cookies are appended to the ``Cookie``
    header.

    Args:
        headers: HTTP headers to add (e.g. ``{"Authorization": "Bearer ..."}``).
        params: Query-string parameters to add (e.g. ``{"api_key": "..."}``).
        cookies: Cookies to add (serialised into a ``Cookie`` header).

    Example::

        result = AuthResult(headers={"Authorization": "Bearer tok123"})
        client = Client("https://api.example.com", auth=result)
    """

    def __init__(
        self,
        headers: dict[str, str] | None = None,
        params: dict[str, str] | None = None,
        cookies: dict[str, str] | None = None,
    ):
        self.headers = headers or {}
        self.params = params or {}
        self.cookies = cookies or {}

    def handle(self, request: httpx.Request) -> None:
        for key, value in self.headers.items():
            request.headers[key] = value

        if self.params:
            request.url = request.url.copy_merge_params(self.params)

        if self.cookies:
            cookie_str = "; ".join(f"{k}={v}" for k, v in self.cookies.items())
            # Preserve any existing Cookie header from earlier options.
            existing = request.headers.get("Cookie")
            if existing:
                cookie_str = f"{existing}; {cookie_str}"
            request.headers["Cookie"] = cookie_str

    def __repr__(self) -> str:
        # Values are credentials; only show which names are set.
        return (
            f"AuthResult(headers={sorted(self.headers)}, "
            f"params={sorted(self.params)}, cookies={sorted(self.cookies)})"
        )


class AuthPlugin(ABC):
    """Abstract base class for authentication plugins.

    Every concrete auth strategy (API key, bearer token, basic) must
    subclass this and provide:

    1. An :attr:`auth_type` property returning a unique string identifier
       (e.g. ``"api_key"``, ``"bearer"``).
    2. An :meth:`authenticate` implementation that resolves credentials from
       the supplied :class:`~restclient.models.AuthConfig` and returns an
       :class:`AuthResult`.

    Plugins are registered with :class:`~restclient.auth.manager.AuthManager`
    and looked up by their ``auth_type`` at runtime.
    """

    @property
    @abstractmethod
    def auth_type(self) -> str:
        """Return the unique auth type identifier this plugin handles."""
        ...

    @abstractmethod
    def authenticate(self, auth_config: AuthConfig) -> AuthResult:
        """Resolve credentials and return auth artifacts for HTTP requests.

        Implementations should use
        :func:`~restclient.config.resolve_credential` to turn the
        configured ``source`` value into an actual credential string, then
        wrap the result in an :class:`AuthResult`.

        Args:
            auth_config: The authentication section of the client config.

        Returns:
            An :class:`AuthResult` containing headers, params, and/or cookies
            to inject into outgoing requests.

        Raises:
            AuthError: If credentials are invalid.
            ConfigError: If the credential source cannot be resolved.
        """
        ...

    def validate_config(self, auth_config: AuthConfig) -> list[str]:
        """Validate the auth configuration before use.

        Returns:
            A list of error message strings.  An empty list means the
            configuration is valid.
        """
        return []
