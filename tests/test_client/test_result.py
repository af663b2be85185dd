"""Tests for Result classification and envelope field extraction."""

from __future__ import annotations

from typing import Any
from unittest.mock import patch

import httpx
import pytest
from pydantic import BaseModel

from restclient.client.result import Result, _cached_adapter
from restclient.exceptions import (
    FieldDecodeError,
    FieldNotFoundError,
    InvalidURLError,
    StatusError,
    TransportError,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _make_result(
    status_code: int = 200,
    json_data: Any = None,
    content: bytes | None = None,
) -> Result:
    request = httpx.Request("GET", "https://api.example.com/test")
    if content is not None:
        response = httpx.Response(status_code, content=content, request=request)
    else:
        response = httpx.Response(status_code, json=json_data, request=request)
    return Result(response=response)


class Item(BaseModel):
    id: int
    name: str = ""


# ---------------------------------------------------------------------------
# ok / fail
# ---------------------------------------------------------------------------


class TestClassification:
    def test_200_is_ok(self) -> None:
        result = _make_result(200, {"code": 0})
        assert result.ok()
        assert not result.fail()
        assert bool(result)

    @pytest.mark.parametrize("status", [201, 204, 301, 400, 404, 500])
    def test_any_other_status_fails(self, status: int) -> None:
        result = _make_result(status, content=b"")
        assert not result.ok()
        assert result.fail()

    def test_local_error_fails(self) -> None:
        result = Result(error=InvalidURLError("bad url"))
        assert result.fail()
        assert result.response is None
        assert result.status_code is None

    def test_error_with_200_response_still_fails(self) -> None:
        response = httpx.Response(200, json={})
        result = Result(error=TransportError("boom"), response=response)
        assert result.fail()

    def test_empty_result_fails(self) -> None:
        assert Result().fail()


# ---------------------------------------------------------------------------
# error()
# ---------------------------------------------------------------------------


class TestError:
    def test_none_when_ok(self) -> None:
        assert _make_result(200, {"code": 0}).error() is None

    def test_local_error_returned_verbatim(self) -> None:
        exc = InvalidURLError("bad url")
        assert Result(error=exc).error() is exc

    def test_status_error_includes_status_and_msg(self) -> None:
        result = _make_result(400, {"code": 1, "msg": "bad", "data": {"x": 1}})
        error = result.error()
        assert isinstance(error, StatusError)
        assert "400" in str(error)
        assert "bad" in str(error)
        assert error.status_code == 400
        assert error.reason == "Bad Request"
        assert error.code == 1
        assert error.msg == "bad"

    def test_status_error_for_201(self) -> None:
        error = _make_result(201, {"id": 5}).error()
        assert isinstance(error, StatusError)
        assert "201" in str(error)

    def test_status_error_with_plain_text_body(self) -> None:
        error = _make_result(502, content=b"upstream down").error()
        assert isinstance(error, StatusError)
        assert "upstream down" in str(error)
        assert error.code is None
        assert error.msg is None

    def test_none_without_error_or_response(self) -> None:
        assert Result().error() is None

    def test_raise_for_error(self) -> None:
        with pytest.raises(StatusError, match="500"):
            _make_result(500, {"code": 9, "msg": "oops"}).raise_for_error()

    def test_raise_for_error_returns_self_when_ok(self) -> None:
        result = _make_result(200, {"code": 0})
        assert result.raise_for_error() is result


# ---------------------------------------------------------------------------
# value() / values()
# ---------------------------------------------------------------------------


class TestValue:
    def test_model_target(self) -> None:
        result = _make_result(200, {"result": {"id": 42}})
        item = result.value("result", Item)
        assert isinstance(item, Item)
        assert item.id == 42

    def test_plain_annotation_target(self) -> None:
        result = _make_result(200, {"ids": [1, 2, 3]})
        assert result.value("ids", list[int]) == [1, 2, 3]

    def test_without_target_returns_raw_value(self) -> None:
        result = _make_result(200, {"result": {"id": 42}})
        assert result.value("result") == {"id": 42}

    def test_missing_field(self) -> None:
        result = _make_result(200, {"result": {"id": 42}})
        with pytest.raises(FieldNotFoundError, match="unknown field 'missing'") as exc_info:
            result.value("missing", Item)
        assert exc_info.value.key == "missing"
        assert '"result"' in str(exc_info.value)

    def test_shape_mismatch(self) -> None:
        result = _make_result(200, {"result": {"id": "not-a-number"}})
        with pytest.raises(FieldDecodeError, match="result") as exc_info:
            result.value("result", Item)
        assert "not-a-number" in str(exc_info.value)

    def test_numeric_string_not_coerced(self) -> None:
        result = _make_result(200, {"result": {"id": "42"}})
        with pytest.raises(FieldDecodeError, match="result"):
            result.value("result", Item)

    def test_bool_not_coerced_to_int(self) -> None:
        result = _make_result(200, {"count": True})
        with pytest.raises(FieldDecodeError, match="count"):
            result.value("count", int)

    def test_adapter_built_once_per_target(self) -> None:
        _cached_adapter.cache_clear()
        result = _make_result(200, {"result": {"id": 1}})
        result.value("result", Item)
        _make_result(200, {"result": {"id": 2}}).value("result", Item)
        info = _cached_adapter.cache_info()
        assert info.misses == 1
        assert info.hits == 1

    def test_envelope_fields_also_readable(self) -> None:
        result = _make_result(400, {"code": 7, "msg": "nope"})
        assert result.value("code", int) == 7
        assert result.value("msg", str) == "nope"

    def test_non_object_body_has_no_fields(self) -> None:
        result = _make_result(200, [1, 2, 3])
        assert result.values() == {}
        with pytest.raises(FieldNotFoundError):
            result.value("anything")

    def test_non_json_body_has_no_fields(self) -> None:
        result = _make_result(200, content=b"<html>hi</html>")
        assert result.values() == {}
        with pytest.raises(FieldNotFoundError, match="<html>"):
            result.value("anything")

    def test_no_response_has_no_fields(self) -> None:
        result = Result(error=TransportError("refused"))
        assert result.values() == {}
        with pytest.raises(FieldNotFoundError):
            result.value("result")

    def test_repeated_reads_parse_once(self) -> None:
        result = _make_result(200, {"result": {"id": 42}})
        with patch.object(httpx.Response, "json", autospec=True, side_effect=httpx.Response.json) as parse:
            first = result.value("result", Item)
            second = result.value("result", Item)
            result.values()
        assert first == second
        assert parse.call_count == 1

    def test_values_returns_all_fields(self) -> None:
        result = _make_result(200, {"code": 0, "msg": "ok", "user": {"id": 1}})
        assert result.values() == {"code": 0, "msg": "ok", "user": {"id": 1}}

    def test_values_is_a_copy(self) -> None:
        result = _make_result(200, {"user": {"id": 1}})
        result.values()["user"] = "changed"
        assert result.value("user") == {"id": 1}


class TestEnvelope:
    def test_envelope_splits_status_and_payload(self) -> None:
        envelope = _make_result(200, {"code": 0, "msg": "ok", "user": {"id": 1}}).envelope()
        assert envelope is not None
        assert envelope.code == 0
        assert envelope.msg == "ok"
        assert envelope.payload == {"user": {"id": 1}}

    def test_envelope_none_without_response(self) -> None:
        assert Result(error=TransportError("x")).envelope() is None


class TestRepr:
    def test_repr_ok(self) -> None:
        assert repr(_make_result(200, {})) == "<Result status=200 ok=True>"

    def test_repr_error(self) -> None:
        assert "InvalidURLError" in repr(Result(error=InvalidURLError("x")))
