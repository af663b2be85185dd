"""Pydantic models shared across restclient modules.

**Configuration models** -- loaded from a JSON or YAML file by
:mod:`restclient.config`:
    :class:`AuthConfig`, :class:`RequestConfig`, and :class:`ClientConfig`.

**Wire models** -- describe what the server sends back:
    :class:`Envelope`.

All models use Pydantic v2. :class:`AuthConfig` and :class:`Envelope` use
``extra="allow"`` so that unknown keys are preserved in ``model_extra``.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


# --- Auth Config ---


class AuthConfig(BaseModel):
    """Authentication configuration embedded in a :class:`ClientConfig`.

    The ``type`` field selects the auth plugin (``api_key``, ``bearer``,
    ``basic``), and the remaining fields supply plugin-specific parameters.
    Extra fields are preserved and accessible via ``model_extra``.

    Example::

        AuthConfig(
            type="api_key",
            header="X-API-Key",
            location="header",
            source="env:MY_API_KEY",
        )
    """

    model_config = ConfigDict(extra="allow")

    type: str = Field(description="Auth type: api_key, bearer, basic")
    header: Optional[str] = Field(
        default=None, description="Header name for api_key auth"
    )
    param_name: Optional[str] = Field(
        default=None, description="Query parameter name for api_key auth"
    )
    location: str = Field(
        default="header", description="Where to send: header, query, cookie"
    )
    source: str = Field(
        default="prompt",
        description="Credential source: env:VAR, file:/path, prompt",
    )


class RequestConfig(BaseModel):
    """Transport settings applied to every request made by a client."""

    timeout: float = Field(default=30, description="Request timeout in seconds")
    verify_ssl: bool = Field(default=True, description="Verify SSL certificates")
    follow_redirects: bool = Field(default=True, description="Follow 3xx redirects")


class ClientConfig(BaseModel):
    """Everything needed to construct a :class:`~restclient.client.sync_client.Client`.

    Built by :func:`~restclient.config.load_config` or
    :func:`~restclient.config.resolve_config` and consumed by
    :meth:`~restclient.client.sync_client.Client.from_config`.
    """

    base_url: str = Field(description="Base URL every request path is joined to")
    headers: dict[str, str] = Field(
        default_factory=dict, description="Headers sent with every request"
    )
    auth: Optional[AuthConfig] = None
    request: RequestConfig = Field(default_factory=RequestConfig)


# --- Wire models ---


class Envelope(BaseModel):
    """The JSON object a server returns as the response body.

    Failure responses carry ``code`` and ``msg``; success responses carry
    named payload fields, which end up in ``model_extra``.
    """

    model_config = ConfigDict(extra="allow")

    code: Optional[Any] = None
    msg: Optional[Any] = None

    @property
    def payload(self) -> dict[str, Any]:
        """Named payload fields other than ``code`` and ``msg``."""
        return dict(self.model_extra or {})
