"""Request options -- composable mutations applied to an outgoing request.

An option is anything that accepts an :class:`httpx.Request` and changes
it in place: a :class:`RequestOption` subclass or a plain callable.  The
client applies options in the order they are passed, after the payload
is attached and before the request is sent, so a later option overwrites
what an earlier one set::

    client.get(
        "/users",
        {"page": 2},
        with_jwt_token("old"),
        with_jwt_token("new"),   # Authorization: Bearer new
    )
"""

from __future__ import annotations

import base64
from abc import ABC, abstractmethod
from typing import Callable, Mapping, Union

import httpx

from restclient.auth.base import Auth


class RequestOption(ABC):
    """A single request mutation."""

    @abstractmethod
    def apply(self, request: httpx.Request) -> None:
        """Mutate *request* in place."""
        ...

    def __call__(self, request: httpx.Request) -> None:
        self.apply(request)


Option = Union[RequestOption, Callable[[httpx.Request], None]]
"""Anything :meth:`~restclient.client.sync_client.Client.request` accepts as an option."""


class WithAuth(RequestOption):
    """Delegate to an :class:`~restclient.auth.base.Auth` capability."""

    def __init__(self, auth: Auth) -> None:
        self.auth = auth

    def apply(self, request: httpx.Request) -> None:
        self.auth.handle(request)

    def __repr__(self) -> str:
        return f"WithAuth({self.auth!r})"


class WithHeader(RequestOption):
    """Set a header, replacing any value already present."""

    def __init__(self, name: str, value: str) -> None:
        self.name = name
        self.value = value

    def apply(self, request: httpx.Request) -> None:
        request.headers[self.name] = self.value

    def __repr__(self) -> str:
        return f"WithHeader({self.name!r})"


class WithQuery(RequestOption):
    """Add query parameters on top of those built from the payload."""

    def __init__(self, params: Mapping[str, str]) -> None:
        self.params = dict(params)

    def apply(self, request: httpx.Request) -> None:
        request.url = request.url.copy_merge_params(self.params)


def with_auth(auth: Auth) -> RequestOption:
    """Apply *auth* to the request."""
    return WithAuth(auth)


def with_authorization(scheme: str, credentials: str) -> WithHeader:
    """Set ``Authorization: <scheme> <credentials>``."""
    return WithHeader("Authorization", f"{scheme} {credentials}")


def with_jwt_token(token: str) -> WithHeader:
    """Send *token* as ``Authorization: Bearer <token>``."""
    return with_authorization("Bearer", token)


def with_basic_auth(username: str, password: str) -> WithHeader:
    """Send HTTP Basic credentials (:rfc:`7617`)."""
    pair = f"{username}:{password}".encode("utf-8")
    return with_authorization("Basic", base64.b64encode(pair).decode("ascii"))


def with_header(name: str, value: str) -> RequestOption:
    return WithHeader(name, value)


def with_headers(headers: Mapping[str, str]) -> RequestOption:
    return _Chain([WithHeader(k, v) for k, v in headers.items()])


def with_query(name: str, value: str) -> RequestOption:
    return WithQuery({name: value})


def apply_options(request: httpx.Request, options: tuple[Option, ...] | list[Option]) -> None:
    """Apply *options* to *request* in order."""
    for option in options:
        option(request)


class _Chain(RequestOption):
    def __init__(self, options: list[RequestOption]) -> None:
        self.options = options

    def apply(self, request: httpx.Request) -> None:
        apply_options(request, self.options)
