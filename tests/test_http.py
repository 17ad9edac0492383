"""Tests for the HTTP transport."""

import base64

import pytest
from conftest import SECRET

from openvidu import ClientConfig, OpenViduConnectionError
from openvidu._internal import HttpClient


class TestHttpClient:
    @pytest.mark.asyncio
    async def test_sends_basic_auth_and_json(self, server):
        http = HttpClient(ClientConfig(secret=SECRET, domain=f"http://{server.host}", port=server.port))
        server.respond("POST", "/api/tokens", 200, {"token": "t"})
        try:
            response = await http.post("/api/tokens", {"session": "ses_1"})
        finally:
            await http.close()

        expected = base64.b64encode(f"OPENVIDUAPP:{SECRET}".encode()).decode()
        assert server.last_request.authorization == f"Basic {expected}"
        assert server.last_request.payload == {"session": "ses_1"}
        assert response.status == 200
        assert response.ok is True
        assert response.body == {"token": "t"}

    @pytest.mark.asyncio
    async def test_non_json_body_decodes_to_none(self, server):
        http = HttpClient(ClientConfig(secret=SECRET, domain=f"http://{server.host}", port=server.port))
        server.respond("GET", "/api/recordings", 502, "<html>bad gateway</html>")
        try:
            response = await http.get("/api/recordings")
        finally:
            await http.close()

        assert response.status == 502
        assert response.ok is False
        assert response.body is None

    @pytest.mark.asyncio
    async def test_unreachable_server(self, unused_tcp_port):
        http = HttpClient(ClientConfig(secret=SECRET, domain="http://127.0.0.1", port=unused_tcp_port))
        try:
            with pytest.raises(OpenViduConnectionError):
                await http.get("/api/sessions")
        finally:
            await http.close()


class _RecordedResponse:
    status = 200

    async def text(self):
        return "{}"

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False


class _RecordingSession:
    """Stands in for aiohttp.ClientSession and keeps the request kwargs."""

    def __init__(self):
        self.calls = []
        self.closed = False

    def request(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        return _RecordedResponse()

    async def close(self):
        self.closed = True


class TestTlsVerification:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("verify_ssl", [True, False])
    async def test_ssl_flag_follows_config(self, monkeypatch, verify_ssl):
        http = HttpClient(ClientConfig(secret=SECRET, verify_ssl=verify_ssl))
        fake = _RecordingSession()

        async def get_session():
            return fake

        monkeypatch.setattr(http, "_get_http_session", get_session)

        response = await http.post("/api/sessions", {"customSessionId": "ses_1"})

        assert response.status == 200
        ((method, url, kwargs),) = fake.calls
        assert method == "POST"
        assert url == "https://localhost:4443/api/sessions"
        assert kwargs["json"] == {"customSessionId": "ses_1"}
        if verify_ssl:
            assert "ssl" not in kwargs
        else:
            assert kwargs["ssl"] is False
