"""Tests for restclient.models."""

from __future__ import annotations

from restclient.models import AuthConfig, ClientConfig, Envelope, RequestConfig


class TestClientConfig:
    def test_defaults(self) -> None:
        config = ClientConfig(base_url="https://api.example.com")
        assert config.headers == {}
        assert config.auth is None
        assert config.request == RequestConfig()
        assert config.request.timeout == 30
        assert config.request.verify_ssl is True
        assert config.request.follow_redirects is True

    def test_auth_extras_preserved(self) -> None:
        auth = AuthConfig(type="custom", source="env:X", realm="internal")
        assert auth.model_extra == {"realm": "internal"}
        assert auth.location == "header"


class TestEnvelope:
    def test_failure_envelope(self) -> None:
        envelope = Envelope.model_validate({"code": 1, "msg": "bad", "data": {"x": 1}})
        assert envelope.code == 1
        assert envelope.msg == "bad"
        assert envelope.payload == {"data": {"x": 1}}

    def test_success_envelope_without_status_fields(self) -> None:
        envelope = Envelope.model_validate({"result": {"id": 42}})
        assert envelope.code is None
        assert envelope.msg is None
        assert envelope.payload == {"result": {"id": 42}}
