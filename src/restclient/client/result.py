"""The outcome of one HTTP call, and typed access to its JSON envelope.

A :class:`Result` holds either a local error (the request was never sent
or never completed) or an :class:`httpx.Response`.  Success is strict:
only HTTP 200 counts.

Servers are expected to answer with a JSON object envelope::

    {"code": 0, "msg": "ok", "user": {"id": 42, "name": "ada"}}

Named fields are pulled out and validated into whatever type the caller
asks for::

    result = client.get("/users/42")
    if result.fail():
        raise result.error()
    user = result.value("user", User)

The body is parsed into a field mapping at most once per result, the
first time :meth:`Result.value` or :meth:`Result.values` needs it.
"""

from __future__ import annotations

import functools
import json
import logging
import threading
from typing import Any, Optional, TypeVar, overload

import httpx
from pydantic import TypeAdapter, ValidationError

from restclient.exceptions import FieldDecodeError, FieldNotFoundError, StatusError
from restclient.models import Envelope

logger = logging.getLogger(__name__)

T = TypeVar("T")

STATUS_OK = 200


@functools.lru_cache(maxsize=256)
def _cached_adapter(target: Any) -> TypeAdapter[Any]:
    return TypeAdapter(target)


def _adapter(target: Any) -> TypeAdapter[Any]:
    """Return a :class:`TypeAdapter` for *target*, built once per hashable target."""
    try:
        hash(target)
    except TypeError:
        return TypeAdapter(target)
    return _cached_adapter(target)


class Result:
    """Wraps a transport response or the error that prevented one.

    Args:
        error: A local or transport error.  When set, *response* is
            normally ``None``.
        response: The response received from the server.
    """

    def __init__(
        self,
        error: Optional[Exception] = None,
        response: Optional[httpx.Response] = None,
    ) -> None:
        self._error = error
        self._response = response
        self._values: Optional[dict[str, Any]] = None
        self._lock = threading.Lock()

    # ------------------------------------------------------------------ #
    # Classification
    # ------------------------------------------------------------------ #

    @property
    def response(self) -> Optional[httpx.Response]:
        """The raw :class:`httpx.Response`, or ``None`` if nothing was received."""
        return self._response

    @property
    def status_code(self) -> Optional[int]:
        return self._response.status_code if self._response is not None else None

    def ok(self) -> bool:
        """True only when there was no error and the server answered exactly 200."""
        return (
            self._error is None
            and self._response is not None
            and self._response.status_code == STATUS_OK
        )

    def fail(self) -> bool:
        return not self.ok()

    def error(self) -> Optional[Exception]:
        """Return why this result failed, or ``None`` if it did not.

        The local or transport error is returned as is.  A response with a
        status other than 200 becomes a
        :class:`~restclient.exceptions.StatusError` carrying the status
        line, the raw body, and the envelope's ``code``/``msg`` if present.
        """
        if self.ok():
            return None
        if self._error is not None:
            return self._error
        if self._response is not None:
            envelope = self.envelope()
            return StatusError(
                self._response.status_code,
                self._response.reason_phrase,
                self._body_text(),
                code=envelope.code if envelope else None,
                msg=envelope.msg if envelope else None,
            )
        return None

    def raise_for_error(self) -> Result:
        """Raise :meth:`error` if this result failed; return ``self`` otherwise."""
        error = self.error()
        if error is not None:
            raise error
        return self

    # ------------------------------------------------------------------ #
    # Envelope access
    # ------------------------------------------------------------------ #

    def values(self) -> dict[str, Any]:
        """Return every top-level field of the JSON envelope.

        Empty when there is no response or its body is not a JSON object.
        """
        return dict(self._extract())

    @overload
    def value(self, key: str) -> Any: ...

    @overload
    def value(self, key: str, target: type[T]) -> T: ...

    def value(self, key: str, target: Any = Any) -> Any:
        """Return envelope field *key* validated as *target*.

        The field is re-serialised to JSON and validated in strict mode with
        a :class:`pydantic.TypeAdapter`, so *target* can be a Pydantic model,
        a dataclass, a ``TypedDict`` or a plain annotation like
        ``list[int]``.  Strict means ``"42"`` is not an ``int`` and ``true``
        is not ``1``.  With no *target* the raw decoded value is returned.

        Raises:
            FieldNotFoundError: If the envelope has no field *key*.
            FieldDecodeError: If the field does not fit *target*.
        """
        values = self._extract()
        if key not in values:
            raise FieldNotFoundError(
                f"unknown field '{key}' in response body:\n{self._body_text()}", key
            )

        fragment = json.dumps(values[key])
        try:
            return _adapter(target).validate_json(fragment, strict=True)
        except ValidationError as exc:
            raise FieldDecodeError(
                f"cannot decode field '{key}': {exc}\n{fragment}", key
            ) from exc

    def envelope(self) -> Optional[Envelope]:
        """The body as an :class:`~restclient.models.Envelope`, or ``None`` without a response."""
        if self._response is None:
            return None
        return Envelope.model_validate(self._extract())

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    def _extract(self) -> dict[str, Any]:
        with self._lock:
            if self._values is None:
                self._values = self._parse_values()
            return self._values

    def _parse_values(self) -> dict[str, Any]:
        if self._response is None:
            return {}
        try:
            data = self._response.json()
        except ValueError:
            logger.debug("Response body is not JSON (status %s)", self._response.status_code)
            return {}
        if not isinstance(data, dict):
            logger.debug("Response body is JSON %s, not an object", type(data).__name__)
            return {}
        return data

    def _body_text(self) -> str:
        if self._response is None:
            return ""
        return self._response.text

    def __bool__(self) -> bool:
        return self.ok()

    def __repr__(self) -> str:
        if self._error is not None:
            return f"<Result error={self._error!r}>"
        if self._response is not None:
            return f"<Result status={self._response.status_code} ok={self.ok()}>"
        return "<Result empty>"
