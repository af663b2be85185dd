"""Exception hierarchy for restclient.

All exceptions inherit from :class:`RestClientError`.  The HTTP verbs on
:class:`~restclient.client.sync_client.Client` never raise these; they
are caught and carried on the returned
:class:`~restclient.client.result.Result`, where callers read them via
:meth:`~restclient.client.result.Result.error`.

Subclass hierarchy::

    RestClientError
    +-- InvalidURLError     malformed target URL (never sent)
    +-- PayloadError        payload could not be serialised (never sent)
    +-- AuthError           credentials could not be applied
    +-- ConfigError         invalid configuration or credential source
    +-- TransportError      connection, timeout or TLS failure
    +-- StatusError         response status other than 200
    +-- FieldError
        +-- FieldNotFoundError
        +-- FieldDecodeError
"""

from __future__ import annotations

from typing import Any, Optional


class RestClientError(Exception):
    """Base exception for all restclient errors."""


class InvalidURLError(RestClientError):
    """Raised when the joined base URL and path cannot be parsed or lack a scheme/host."""


class PayloadError(RestClientError):
    """Raised when a request payload cannot be converted to query parameters or a body."""


class AuthError(RestClientError):
    """Raised when authentication fails (unknown auth type, malformed credential)."""


class ConfigError(RestClientError):
    """Raised for configuration problems (invalid file, bad credential source)."""


class TransportError(RestClientError):
    """Raised on network-level failures (timeout, DNS resolution, connection refused).

    The original :mod:`httpx` exception is chained as ``__cause__``.
    """


class StatusError(RestClientError):
    """A response was received but its status code was not 200.

    Args:
        status_code: The HTTP status code.
        reason: The reason phrase (e.g. ``"Bad Request"``).
        body: The raw response body text.
        code: The envelope ``code`` field, if the body carried one.
        msg: The envelope ``msg`` field, if the body carried one.
    """

    def __init__(
        self,
        status_code: int,
        reason: str,
        body: str,
        code: Optional[Any] = None,
        msg: Optional[str] = None,
    ):
        super().__init__(f"status code({status_code} {reason}) {body}".rstrip())
        self.status_code = status_code
        self.reason = reason
        self.body = body
        self.code = code
        self.msg = msg


class FieldError(RestClientError):
    """Base class for envelope field extraction failures.

    Args:
        message: Human-readable error description.
        key: The envelope field that was requested.
    """

    def __init__(self, message: str, key: str):
        super().__init__(message)
        self.key = key


class FieldNotFoundError(FieldError):
    """Raised when the requested field is absent from the response envelope."""


class FieldDecodeError(FieldError):
    """Raised when a field's JSON shape does not match the requested type."""
