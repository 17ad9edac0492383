"""Local mirror of an OpenVidu session."""

import logging
from typing import Any

from ._internal.http import HttpClient
from ._internal.responses import expect
from .builders import build_connections, build_session_properties
from .events import EventDispatcher, SessionDeleted
from .exceptions import (
    ConnectionNotFoundError,
    SessionNotFoundError,
    StreamNotFoundError,
    TokenCannotCreateError,
)
from .types import Connection, Publisher, SessionProperties, TokenOptions, Uri

logger = logging.getLogger(__name__)


class Session:
    """A session on the OpenVidu server, as last seen by this client.

    State is only refreshed by `fetch` (or `OpenVidu.fetch`). `close`,
    `force_disconnect`, `force_unpublish` and the recording operations of the
    facade update it as a side effect. Instances are created by
    `OpenVidu.create_session` and `OpenVidu.fetch`.
    """

    def __init__(
        self,
        http: HttpClient,
        events: EventDispatcher,
        session_id: str,
        properties: SessionProperties | None = None,
        created_at: int = 0,
        debug: bool = False,
    ) -> None:
        self._http = http
        self._events = events
        self._debug = debug

        self._session_id = session_id
        self._created_at = created_at
        self._properties = properties or SessionProperties()
        self._connections: dict[str, Connection] = {}
        self._is_being_recorded = False

    def _log(self, msg: str) -> None:
        """Log a debug message."""
        if self._debug:
            logger.debug(f"[Session {self._session_id}] {msg}")

    def __repr__(self) -> str:
        return (
            f"Session(session_id={self._session_id!r}, connections={len(self._connections)}, "
            f"is_being_recorded={self._is_being_recorded})"
        )

    @property
    def session_id(self) -> str:
        return self._session_id

    @property
    def created_at(self) -> int:
        """Creation time in UTC milliseconds."""
        return self._created_at

    @property
    def properties(self) -> SessionProperties:
        return self._properties

    @property
    def is_being_recorded(self) -> bool:
        """Whether the session is being recorded, as last seen by this client."""
        return self._is_being_recorded

    @is_being_recorded.setter
    def is_being_recorded(self, value: bool) -> None:
        self._is_being_recorded = value

    def get_active_connections(self) -> list[Connection]:
        """Connections as of the last fetch (or local update)."""
        return list(self._connections.values())

    def _path(self) -> str:
        return f"{Uri.SESSION_URI.value}/{self._session_id}"

    def _snapshot(self) -> tuple[Any, ...]:
        return (self._created_at, self._properties, self._is_being_recorded, repr(self._connections))

    def reset_with_payload(self, data: dict[str, Any]) -> bool:
        """Replace local state with a session payload from the server.

        Returns:
            True if anything changed.
        """
        before = self._snapshot()
        self._created_at = data.get("createdAt", self._created_at)
        self._properties = build_session_properties(data)
        self._connections = build_connections(data)
        self._is_being_recorded = bool(data.get("recording", False))
        return before != self._snapshot()

    async def fetch(self) -> bool:
        """Refresh this session from the server.

        Returns:
            True if the session changed since the last fetch.

        Raises:
            SessionNotFoundError: If the session no longer exists. The session
                is announced as deleted before raising.
            OpenViduError: On any other unexpected status.
        """
        response = await self._http.get(self._path())
        if response.status == 404:
            self._log("Session vanished from server")
            self._events.emit(SessionDeleted(self._session_id))
        data = expect(response, errors={404: SessionNotFoundError})
        changed = self.reset_with_payload(data)
        self._log(f"Fetched (changed={changed})")
        return changed

    async def close(self) -> None:
        """Close the session on the server, disconnecting every participant.

        Raises:
            SessionNotFoundError: If the session does not exist.
            OpenViduError: On any other unexpected status.
        """
        response = await self._http.delete(self._path())
        expect(response, ok=(200, 204), errors={404: SessionNotFoundError})
        self._log("Closed")
        self._events.emit(SessionDeleted(self._session_id))

    async def generate_token(self, options: TokenOptions | None = None) -> str:
        """Generate a participant token for this session.

        Args:
            options: Role, metadata and Kurento options of the token.

        Returns:
            The token to hand to the client application.

        Raises:
            TokenCannotCreateError: If the server rejects the token options.
            SessionNotFoundError: If the session does not exist.
            OpenViduError: On any other unexpected status.
        """
        options = options or TokenOptions()
        response = await self._http.post(Uri.TOKEN_URI.value, options.to_dict(self._session_id))
        data = expect(
            response,
            errors={400: TokenCannotCreateError, 404: SessionNotFoundError},
        )
        return str(data.get("token") or data["id"])

    async def force_disconnect(self, connection: Connection | str) -> None:
        """Force a participant to leave the session.

        Args:
            connection: Connection or connection id.

        Raises:
            SessionNotFoundError: If the session does not exist.
            ConnectionNotFoundError: If the connection does not exist.
            OpenViduError: On any other unexpected status.
        """
        connection_id = connection.connection_id if isinstance(connection, Connection) else connection
        response = await self._http.delete(f"{self._path()}/connection/{connection_id}")
        expect(
            response,
            ok=(200, 204),
            errors={400: SessionNotFoundError, 404: ConnectionNotFoundError},
        )

        removed = self._connections.pop(connection_id, None)
        if removed is not None:
            # Drop every subscription to the streams the connection published
            stream_ids = {p.stream_id for p in removed.publishers}
            for other in self._connections.values():
                other.subscribers = [s for s in other.subscribers if s not in stream_ids]
        self._log(f"Connection {connection_id} disconnected")

    async def force_unpublish(self, publisher: Publisher | str) -> None:
        """Force a stream to stop being published.

        Args:
            publisher: Publisher or stream id.

        Raises:
            SessionNotFoundError: If the session does not exist.
            StreamNotFoundError: If the stream does not exist.
            OpenViduError: On any other unexpected status.
        """
        stream_id = publisher.stream_id if isinstance(publisher, Publisher) else publisher
        response = await self._http.delete(f"{self._path()}/stream/{stream_id}")
        expect(
            response,
            ok=(200, 204),
            errors={400: SessionNotFoundError, 404: StreamNotFoundError},
        )

        for connection in self._connections.values():
            connection.publishers = [p for p in connection.publishers if p.stream_id != stream_id]
            connection.subscribers = [s for s in connection.subscribers if s != stream_id]
        self._log(f"Stream {stream_id} unpublished")
