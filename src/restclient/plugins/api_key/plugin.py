"""API Key auth plugin -- supports header, query parameter, and cookie placement.

This module provides the :class:`APIKeyAuthPlugin`, which resolves a
credential from the configured ``source`` (e.g. ``env:MY_API_KEY``) and
injects it into requests at the configured ``location``.

See Also:
    :func:`restclient.config.resolve_credential` for how ``source`` values
    are resolved.
"""

from __future__ import annotations

from restclient.auth.base import AuthPlugin, AuthResult
from restclient.config import resolve_credential
from restclient.models import AuthConfig

_LOCATIONS = ("header", "query", "cookie")


class APIKeyAuthPlugin(AuthPlugin):
    """Authenticate via API key placed in a header, query parameter, or cookie.

    The key name is taken from ``auth_config.header`` (for header/cookie) or
    ``auth_config.param_name`` (for query), falling back to the other one.
    """

    @property
    def auth_type(self) -> str:
        return "api_key"

    def authenticate(self, auth_config: AuthConfig) -> AuthResult:
        """Resolve the API key and build an :class:`~restclient.auth.base.AuthResult`.

        The key is placed according to ``auth_config.location``:

        * ``"header"`` -- sent as a request header (default name ``X-API-Key``).
        * ``"query"``  -- sent as a query-string parameter (default name ``api_key``).
        * ``"cookie"`` -- sent as a cookie (default name ``api_key``).
        """
        credential = resolve_credential(auth_config.source)
        location = auth_config.location

        if location == "query":
            key_name = auth_config.param_name or auth_config.header or "api_key"
            return AuthResult(params={key_name: credential})

        if location == "cookie":
            key_name = auth_config.header or auth_config.param_name or "api_key"
            return AuthResult(cookies={key_name: credential})

        key_name = auth_config.header or auth_config.param_name or "X-API-Key"
        return AuthResult(headers={key_name: credential})

    def validate_config(self, auth_config: AuthConfig) -> list[str]:
        errors: list[str] = []
        if not auth_config.header and not auth_config.param_name:
            errors.append(
                "API key auth requires 'header' or 'param_name' to specify the key name"
            )
        if not auth_config.source:
            errors.append("API key auth requires a 'source' for the credential")
        if auth_config.location not in _LOCATIONS:
            errors.append(
                f"Invalid location '{auth_config.location}': "
                "must be 'header', 'query', or 'cookie'"
            )
        return errors
