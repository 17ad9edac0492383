"""Tests for ClientConfig."""

import pytest

from openvidu import ClientConfig


class TestClientConfig:
    def test_defaults(self):
        config = ClientConfig(secret="s")
        assert config.app == "OPENVIDUAPP"
        assert config.base_url == "https://localhost:4443"
        assert config.verify_ssl is True
        assert config.debug is False

    def test_env_defaults(self, monkeypatch):
        monkeypatch.setenv("OPENVIDU_DOMAIN", "https://ov.example.com/")
        monkeypatch.setenv("OPENVIDU_PORT", "")
        monkeypatch.setenv("OPENVIDU_APP", "app")

        config = ClientConfig(secret="s")

        assert config.base_url == "https://ov.example.com"
        assert config.app == "app"

    @pytest.mark.parametrize(
        "kwargs, match",
        [
            ({"secret": ""}, "secret is required"),
            ({"secret": "   "}, "secret cannot be empty"),
            ({"secret": "s", "domain": "ov.example.com"}, "http"),
            ({"secret": "s", "port": 70000}, "port"),
            ({"secret": "s", "timeout_s": 0}, "timeout_s"),
        ],
    )
    def test_invalid(self, kwargs, match):
        with pytest.raises(ValueError, match=match):
            ClientConfig(**kwargs)

    def test_secret_must_be_string(self):
        with pytest.raises(TypeError):
            ClientConfig(secret=123)

    def test_from_mapping(self):
        config = ClientConfig.from_mapping(
            {"app": "OPENVIDUAPP", "secret": "s", "domain": "http://ov", "port": "5443", "debug": True, "x": 1}
        )
        assert config.base_url == "http://ov:5443"
        assert config.debug is True

    @pytest.mark.parametrize(
        "flags, debug, verify_ssl",
        [
            ({"debug": "false"}, False, True),
            ({"debug": "true"}, True, True),
            ({"debug": "1", "verify_ssl": "0"}, True, False),
            ({"verify_ssl": "no"}, False, False),
        ],
    )
    def test_from_mapping_string_flags(self, flags, debug, verify_ssl):
        config = ClientConfig.from_mapping({"secret": "s", **flags})
        assert config.debug is debug
        assert config.verify_ssl is verify_ssl

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("OPENVIDU_SECRET", "env-secret")
        monkeypatch.setenv("OPENVIDU_DEBUG", "true")
        monkeypatch.setenv("OPENVIDU_VERIFY_SSL", "0")

        config = ClientConfig.from_env()

        assert config.secret == "env-secret"
        assert config.debug is True
        assert config.verify_ssl is False
