"""Request building -- from ``(base_url, path, payload, options)`` to an :class:`httpx.Request`.

:class:`RequestBuilder` does all the work that happens before any network
I/O, so every failure here is local and nothing is sent:

1. **URL** -- the base URL and path are concatenated, parsed, and the path
   is cleaned (repeated slashes collapsed, ``.`` and ``..`` resolved,
   trailing slash dropped).  Percent-escapes such as ``%2F`` are left
   encoded.  See :func:`join_url`.
2. **Payload** -- for GET/DELETE the payload is flattened into string query
   parameters (:func:`to_query_params`); for POST it is serialised as the
   JSON body (:func:`to_json_body`).
3. **Options** -- every :data:`~restclient.options.Option` is applied to the
   finished request, in order.
"""

from __future__ import annotations

import json
import posixpath
import re
from typing import Any, Iterable, Mapping, Optional

import httpx
import pydantic_core

from restclient.exceptions import InvalidURLError, PayloadError
from restclient.options import Option, apply_options

BODY_METHODS = frozenset({"POST", "PUT", "PATCH"})

_SCHEMES = ("http", "https")
_REPEATED_SLASHES = re.compile(r"/{2,}")


def clean_path(path: str) -> str:
    """Return the shortest path equivalent to *path*.

    ``/api//v1/./users/../groups/`` becomes ``/api/v1/groups``.  An empty
    path is returned unchanged.
    """
    if not path:
        return path
    # normpath keeps a leading "//", so collapse first.
    return posixpath.normpath(_REPEATED_SLASHES.sub("/", path))


def join_url(base_url: str, path: str) -> httpx.URL:
    """Concatenate *base_url* and *path* and normalise the result.

    Raises:
        InvalidURLError: If the result cannot be parsed or is not an
            absolute ``http``/``https`` URL.
    """
    raw = f"{base_url}{path}"
    try:
        url = httpx.URL(raw)
    except httpx.InvalidURL as exc:
        raise InvalidURLError(f"Invalid URL '{raw}': {exc}") from exc

    if url.scheme not in _SCHEMES or not url.host:
        raise InvalidURLError(
            f"Invalid URL '{raw}': expected an absolute http(s) URL with a host"
        )

    # Clean the still-encoded path so %2F and %3F keep their meaning.
    path, sep, query = url.raw_path.decode("ascii").partition("?")
    try:
        return url.copy_with(raw_path=f"{clean_path(path)}{sep}{query}".encode("ascii"))
    except httpx.InvalidURL as exc:
        raise InvalidURLError(f"Invalid URL '{raw}': {exc}") from exc


def _to_json_value(payload: Any) -> Any:
    """Serialise *payload* to JSON and decode it back to plain Python values."""
    try:
        return json.loads(pydantic_core.to_json(payload))
    except (pydantic_core.PydanticSerializationError, ValueError) as exc:
        raise PayloadError(
            f"Cannot serialise {type(payload).__name__} payload: {exc}"
        ) from exc


def render_param(value: Any) -> str:
    """Render one decoded JSON value as a query-string value.

    Strings are passed through, ``None`` becomes an empty string, and
    everything else (numbers, booleans, lists, objects) is written as
    compact JSON text, so ``True`` is ``"true"`` and ``[1, 2]`` is ``"[1,2]"``.
    """
    if isinstance(value, str):
        return value
    if value is None:
        return ""
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def to_query_params(payload: Any) -> dict[str, str]:
    """Flatten *payload* into a mapping of query parameters.

    *payload* may be anything :mod:`pydantic_core` can serialise (a dict, a
    Pydantic model, a dataclass).  It must serialise to a JSON object;
    ``None`` yields no parameters.

    Raises:
        PayloadError: If the payload cannot be serialised or is not an object.
    """
    data = _to_json_value(payload)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise PayloadError(
            f"Query payload must serialise to a JSON object, "
            f"got {type(data).__name__} from {type(payload).__name__}"
        )
    return {key: render_param(value) for key, value in data.items()}


def to_json_body(payload: Any) -> bytes:
    """Serialise *payload* as a JSON request body.

    Raises:
        PayloadError: If the payload cannot be serialised.
    """
    try:
        return pydantic_core.to_json(payload)
    except pydantic_core.PydanticSerializationError as exc:
        raise PayloadError(
            f"Cannot serialise {type(payload).__name__} payload: {exc}"
        ) from exc


class RequestBuilder:
    """Builds transport-ready requests against a fixed base URL.

    Args:
        base_url: Prefix every request path is appended to.
        headers: Headers set on every request before options run.
    """

    def __init__(self, base_url: str, headers: Optional[Mapping[str, str]] = None) -> None:
        self.base_url = base_url
        self.headers = dict(headers or {})

    def url(self, path: str) -> httpx.URL:
        return join_url(self.base_url, path)

    def build(
        self,
        method: str,
        path: str,
        payload: Any = None,
        options: Iterable[Option] = (),
    ) -> httpx.Request:
        """Build the request for *method* and *path*.

        Raises:
            InvalidURLError: If the URL is malformed.
            PayloadError: If the payload cannot be converted.
        """
        method = method.upper()
        url = self.url(path)
        headers: dict[str, str] = {"Accept": "application/json", **self.headers}

        if method in BODY_METHODS:
            content: Optional[bytes] = None
            if payload is not None:
                content = to_json_body(payload)
                headers["Content-Type"] = "application/json"
            request = httpx.Request(method, url, headers=headers, content=content)
        else:
            params = to_query_params(payload)
            request = httpx.Request(method, url, headers=headers, params=params or None)

        apply_options(request, list(options))
        return request
