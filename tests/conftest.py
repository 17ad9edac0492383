"""Shared pytest fixtures: an in-process fake OpenVidu server."""

import json
from dataclasses import dataclass
from typing import Any

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

from openvidu import OpenVidu

SECRET = "MY_SECRET"


@dataclass
class RecordedRequest:
    method: str
    path: str
    payload: Any
    authorization: str | None


class FakeOpenViduServer:
    """Answers every request with a canned response registered per method and path."""

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], tuple[int, Any]] = {}
        self.requests: list[RecordedRequest] = []
        self.host = ""
        self.port = 0

    def respond(self, method: str, path: str, status: int = 200, body: Any = None) -> None:
        self.routes[(method, path)] = (status, body)

    async def handle(self, request: web.Request) -> web.Response:
        text = await request.text()
        self.requests.append(
            RecordedRequest(
                method=request.method,
                path=request.path,
                payload=json.loads(text) if text else None,
                authorization=request.headers.get("Authorization"),
            )
        )
        status, body = self.routes.get((request.method, request.path), (500, None))
        if body is None:
            return web.Response(status=status)
        if isinstance(body, str):
            return web.Response(status=status, text=body)
        return web.json_response(body, status=status)

    @property
    def last_request(self) -> RecordedRequest:
        return self.requests[-1]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep OPENVIDU_* variables of the host out of the tests."""
    for name in (
        "OPENVIDU_APP",
        "OPENVIDU_SECRET",
        "OPENVIDU_DOMAIN",
        "OPENVIDU_PORT",
        "OPENVIDU_DEBUG",
        "OPENVIDU_VERIFY_SSL",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest_asyncio.fixture
async def server():
    """Start a fake OpenVidu server on a free local port."""
    fake = FakeOpenViduServer()
    app = web.Application()
    app.router.add_route("*", "/{tail:.*}", fake.handle)

    test_server = TestServer(app)
    await test_server.start_server()
    fake.host = test_server.host
    fake.port = test_server.port
    yield fake
    await test_server.close()


@pytest_asyncio.fixture
async def client(server: FakeOpenViduServer):
    """OpenVidu client pointed at the fake server."""
    openvidu = OpenVidu(secret=SECRET, domain=f"http://{server.host}", port=server.port, debug=True)
    yield openvidu
    await openvidu.close()


def recording_payload(
    recording_id: str = "ses_1",
    session_id: str = "ses_1",
    status: str = "started",
    **extra: Any,
) -> dict[str, Any]:
    """A recording as returned by the server."""
    payload = {
        "id": recording_id,
        "sessionId": session_id,
        "name": recording_id,
        "outputMode": "COMPOSED",
        "hasAudio": True,
        "hasVideo": True,
        "recordingLayout": "BEST_FIT",
        "resolution": "1920x1080",
        "createdAt": 1538483606521,
        "size": 0,
        "duration": 0,
        "url": None,
        "status": status,
    }
    payload.update(extra)
    return payload


def session_payload(session_id: str = "ses_1", recording: bool = False, connections: list | None = None) -> dict:
    """A session as returned by the server."""
    content = connections or []
    return {
        "sessionId": session_id,
        "createdAt": 1538481996019,
        "mediaMode": "ROUTED",
        "recordingMode": "MANUAL",
        "defaultOutputMode": "COMPOSED",
        "defaultRecordingLayout": "BEST_FIT",
        "customSessionId": session_id,
        "connections": {"numberOfElements": len(content), "content": content},
        "recording": recording,
    }


def connection_payload(connection_id: str, publishes: list[str] = (), subscribes: list[str] = ()) -> dict:
    """A connection entry of a session payload."""
    return {
        "connectionId": connection_id,
        "createdAt": 1538482002000,
        "location": "unknown",
        "platform": "Chrome 69.0.3497.100 on Linux 64-bit",
        "token": f"wss://localhost:4443?sessionId=ses_1&token={connection_id}",
        "role": "PUBLISHER",
        "serverData": "",
        "clientData": "",
        "publishers": [
            {
                "createdAt": 1538482002500,
                "streamId": stream_id,
                "mediaOptions": {
                    "hasAudio": True,
                    "audioActive": True,
                    "hasVideo": True,
                    "videoActive": True,
                    "typeOfVideo": "CAMERA",
                    "frameRate": 30,
                    "videoDimensions": '{"width":640,"height":480}',
                },
            }
            for stream_id in publishes
        ],
        "subscribers": [{"streamId": stream_id, "publisher": "other"} for stream_id in subscribes],
    }
