"""restclient -- a small REST client that returns results instead of raising.

Wraps :mod:`httpx` to provide POST/GET/DELETE against a base URL,
composable request options (auth injection, headers), and a
:class:`~restclient.client.result.Result` that pulls named fields out of a
``{"code": ..., "msg": ..., "<field>": ...}`` JSON envelope.

Typical usage::

    import restclient

    client = restclient.new("https://api.example.com/")
    result = client.get("/v1/users", {"page": 2}, restclient.with_jwt_token(token))
    if result.ok():
        users = result.value("users", list[User])
    else:
        log.error("listing users failed: %s", result.error())

Modules:
    client: Client, request builder and result.
    options: Request options.
    auth: Auth capability, plugin registry and static credentials.
    config: Configuration files, environment overrides, credential sources.
    models: Pydantic models for configuration and the response envelope.
    exceptions: Exception hierarchy.
"""

import logging

from restclient.auth import Auth, AuthResult
from restclient.client import Client, Result, new
from restclient.options import (
    RequestOption,
    with_auth,
    with_authorization,
    with_basic_auth,
    with_header,
    with_headers,
    with_jwt_token,
    with_query,
)

__version__ = "0.1.0"

__all__ = [
    "Auth",
    "AuthResult",
    "Client",
    "RequestOption",
    "Result",
    "new",
    "with_auth",
    "with_authorization",
    "with_basic_auth",
    "with_header",
    "with_headers",
    "with_jwt_token",
    "with_query",
]

logging.getLogger(__name__).addHandler(logging.NullHandler())
