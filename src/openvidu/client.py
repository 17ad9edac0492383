"""Main OpenVidu client for controlling an OpenVidu media server."""

import logging
from typing import Any

from ._internal import HttpClient, expect
from .builders import build_recording
from .config import ClientConfig
from .events import EventDispatcher, SessionDeleted
from .exceptions import (
    OpenViduError,
    RecordingNotFoundError,
    RecordingResolutionInvalidError,
    RecordingStatusError,
    ServerRecordingDisabledError,
    SessionCannotCreateError,
    SessionCannotRecordError,
    SessionHasNoConnectedParticipantsError,
    SessionNotFoundError,
)
from .session import Session
from .types import Recording, RecordingProperties, SessionProperties, Uri

logger = logging.getLogger(__name__)


class OpenVidu:
    """Client for the REST API of an OpenVidu server.

    Keeps a local cache of active sessions. **The cache only changes when
    `fetch` is called**, with these exceptions:

    - `Session.fetch` refreshes that session
    - `Session.close` removes the session from the cache
    - `Session.force_disconnect` and `Session.force_unpublish` update the
      connections of that session
    - `start_recording` and `stop_recording` update
      `Session.is_being_recorded`
    - a `SessionDeleted` event removes the session

    Example:
        ```python
        from openvidu import OpenVidu, SessionProperties

        async with OpenVidu(secret="MY_SECRET", domain="https://openvidu.example.com") as client:
            session = await client.create_session(SessionProperties(custom_session_id="room-1"))
            token = await session.generate_token()
            recording = await client.start_recording(session.session_id)
            ...
            await client.stop_recording(recording.id)
        ```
    """

    def __init__(
        self,
        secret: str | None = None,
        events: EventDispatcher | None = None,
        config: ClientConfig | None = None,
        **kwargs: Any,
    ) -> None:
        """Create a new OpenVidu client.

        Args:
            secret: Shared secret of the OpenVidu server (required unless `config` is given).
            events: Dispatcher to subscribe to; a private one is created if omitted.
            config: Complete configuration; `secret` and `kwargs` are ignored when set.
            **kwargs: Additional configuration options passed to ClientConfig.

        Raises:
            ValueError: If the configuration is invalid.
        """
        self._config = config or ClientConfig(secret=secret or "", **kwargs)
        self._http = HttpClient(self._config)
        self._events = events or EventDispatcher()
        self._events.on(SessionDeleted, self.handle_session_deleted)

        # Last-known sessions, keyed by session id
        self._active_sessions: dict[str, Session] = {}

    def _log(self, msg: str) -> None:
        """Log a debug message."""
        if self._config.debug:
            logger.debug(f"[Client] {msg}")

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def events(self) -> EventDispatcher:
        return self._events

    def _new_session(self, session_id: str, properties: SessionProperties | None = None, created_at: int = 0) -> Session:
        return Session(
            self._http,
            self._events,
            session_id,
            properties=properties,
            created_at=created_at,
            debug=self._config.debug,
        )

    async def create_session(self, properties: SessionProperties | None = None) -> Session:
        """Create a session on the server and add it to the active sessions.

        Args:
            properties: Session configuration (defaults apply when omitted).

        Returns:
            The new Session.

        Raises:
            SessionCannotCreateError: If the server rejects the session.
        """
        properties = properties or SessionProperties()
        response = await self._http.post(Uri.SESSION_URI.value, properties.to_dict())

        if response.status == 200 and isinstance(response.body, dict) and response.body.get("id"):
            session_id = response.body["id"]
            created_at = response.body.get("createdAt", 0)
        elif response.status == 409 and properties.custom_session_id:
            # Session with this custom id already exists on the server
            session_id = properties.custom_session_id
            created_at = 0
        else:
            message = response.body.get("message") if isinstance(response.body, dict) else None
            if response.status == 200 and message is None:
                message = "Invalid session creation response: missing id"
            raise SessionCannotCreateError(message, response.status)

        session = self._active_sessions.get(session_id) or self._new_session(session_id, properties, created_at)
        self._active_sessions[session_id] = session
        self._log(f"Session {session_id} created")
        return session

    def get_session(self, session_id: str) -> Session:
        """Get an active session from the local cache.

        Does not contact the server; call `fetch` first for current state.

        Raises:
            SessionNotFoundError: If the session is not in the cache.
        """
        try:
            return self._active_sessions[session_id]
        except KeyError:
            raise SessionNotFoundError(f"Session {session_id} not found") from None

    def get_active_sessions(self) -> list[Session]:
        """Sessions in the local cache.

        **May be stale**: see the class docstring for what keeps it current.
        """
        return list(self._active_sessions.values())

    async def fetch(self) -> bool:
        """Synchronize the active sessions with the server.

        Sessions listed by the server are refreshed in place (or added),
        sessions the server no longer lists are dropped.

        Returns:
            True if any session was added, changed or dropped.
        """
        response = await self._http.get(Uri.SESSION_URI.value)
        data = expect(response)
        if data is not None and not isinstance(data, dict):
            raise OpenViduError("Invalid sessions response: expected an object", response.status)
        content = (data or {}).get("content") or []

        changed = False
        fetched: dict[str, Session] = {}
        for item in content:
            session_id = item["sessionId"]
            session = self._active_sessions.get(session_id)
            if session is None:
                session = self._new_session(session_id)
                changed = True
            if session.reset_with_payload(item):
                changed = True
            fetched[session_id] = session

        if set(self._active_sessions) - set(fetched):
            changed = True
        self._active_sessions = fetched
        self._log(f"Fetched {len(fetched)} active session(s) (changed={changed})")
        return changed

    def handle_session_deleted(self, event: SessionDeleted) -> None:
        """Drop a deleted session from the local cache."""
        if self._active_sessions.pop(event.session_id, None) is not None:
            self._log(f"Session {event.session_id} removed from active sessions")

    async def start_recording(self, session_id: str, properties: RecordingProperties | None = None) -> Recording:
        """Start recording a session.

        Args:
            session_id: Session to record.
            properties: Recording configuration (defaults apply when omitted).

        Returns:
            The new Recording (usually in `starting` status).

        Raises:
            SessionNotFoundError: If the session does not exist.
            SessionHasNoConnectedParticipantsError: If nobody is connected.
            SessionCannotRecordError: If the session is not ROUTED or already recorded.
            RecordingResolutionInvalidError: If the resolution is not valid.
            ServerRecordingDisabledError: If recording is disabled on the server.
            OpenViduError: On any other unexpected status.
        """
        properties = properties or RecordingProperties()
        payload = {"session": session_id, **properties.to_dict()}
        response = await self._http.post(Uri.RECORDINGS_START.value, payload)
        data = expect(
            response,
            errors={
                404: SessionNotFoundError,
                406: SessionHasNoConnectedParticipantsError,
                409: SessionCannotRecordError,
                422: RecordingResolutionInvalidError,
                501: ServerRecordingDisabledError,
            },
        )

        recording = build_recording(data)
        active_session = self._active_sessions.get(recording.session_id)
        if active_session is not None:
            active_session.is_being_recorded = True
        self._log(f"Recording {recording.id} started for session {recording.session_id}")
        return recording

    async def stop_recording(self, recording_id: str) -> Recording:
        """Stop a recording.

        Args:
            recording_id: The `id` of the Recording to stop.

        Raises:
            RecordingNotFoundError: If the recording does not exist.
            RecordingStatusError: If the recording is still `starting`.
            OpenViduError: On any other unexpected status.
        """
        response = await self._http.post(f"{Uri.RECORDINGS_STOP.value}/{recording_id}")
        data = expect(
            response,
            errors={
                404: RecordingNotFoundError,
                406: lambda: RecordingStatusError(
                    "The recording has `starting` status. Wait until `started` status before stopping the recording."
                ),
            },
        )

        recording = build_recording(data)
        active_session = self._active_sessions.get(recording.session_id)
        if active_session is not None:
            active_session.is_being_recorded = False
        self._log(f"Recording {recording.id} stopped")
        return recording

    async def get_recording(self, recording_id: str) -> Recording:
        """Get a recording.

        Raises:
            RecordingNotFoundError: If the recording does not exist.
            OpenViduError: On any other unexpected status.
        """
        response = await self._http.get(f"{Uri.RECORDINGS_URI.value}/{recording_id}")
        data = expect(response, errors={404: RecordingNotFoundError})
        return build_recording(data)

    async def get_recordings(self) -> list[Recording]:
        """List every recording on the server.

        Raises:
            OpenViduError: On any unexpected status.
        """
        response = await self._http.get(Uri.RECORDINGS_URI.value)
        data = expect(response)
        items = data.get("items", []) if isinstance(data, dict) else data or []
        return [build_recording(item) for item in items]

    async def delete_recording(self, recording_id: str) -> bool:
        """Delete a recording. It must be `stopped`, `ready` or `failed`.

        Returns:
            True once the recording is deleted.

        Raises:
            RecordingNotFoundError: If the recording does not exist.
            RecordingStatusError: If the recording is still `started`.
            OpenViduError: On any other unexpected status.
        """
        response = await self._http.delete(f"{Uri.RECORDINGS_URI.value}/{recording_id}")
        expect(
            response,
            errors={
                404: RecordingNotFoundError,
                409: lambda: RecordingStatusError("The recording has `started` status. Stop it before deletion"),
            },
        )
        self._log(f"Recording {recording_id} deleted")
        return True

    async def close(self) -> None:
        """Release the HTTP session. The client can still be used afterwards."""
        await self._http.close()

    async def __aenter__(self) -> "OpenVidu":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()
