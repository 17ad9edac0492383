"""Python client for the REST API of an OpenVidu media server.

Example:
    ```python
    from openvidu import OpenVidu, RecordingProperties, SessionNotFoundError

    client = OpenVidu(secret="MY_SECRET", domain="https://openvidu.example.com", port=4443)

    try:
        session = await client.create_session()
        token = await session.generate_token()
        recording = await client.start_recording(
            session.session_id,
            RecordingProperties(name="meeting", resolution="1280x720"),
        )
        await client.stop_recording(recording.id)
    except SessionNotFoundError:
        print("Session is gone")
    finally:
        await client.close()
    ```
"""

from .builders import build_recording, build_recording_properties, build_session_properties
from .client import OpenVidu
from .config import ClientConfig
from .events import EventDispatcher, SessionDeleted
from .exceptions import (
    ConnectionNotFoundError,
    OpenViduConnectionError,
    OpenViduError,
    RecordingNotFoundError,
    RecordingResolutionInvalidError,
    RecordingStatusError,
    ServerRecordingDisabledError,
    SessionCannotCreateError,
    SessionCannotRecordError,
    SessionHasNoConnectedParticipantsError,
    SessionNotFoundError,
    StreamNotFoundError,
    TokenCannotCreateError,
)
from .session import Session
from .types import (
    Connection,
    MediaMode,
    OpenViduRole,
    OutputMode,
    Publisher,
    Recording,
    RecordingLayout,
    RecordingMode,
    RecordingProperties,
    RecordingStatus,
    SessionProperties,
    TokenOptions,
    Uri,
)

__all__ = [
    # Main client
    "OpenVidu",
    "Session",
    # Events
    "EventDispatcher",
    "SessionDeleted",
    # Exceptions
    "OpenViduError",
    "OpenViduConnectionError",
    "SessionNotFoundError",
    "SessionCannotCreateError",
    "SessionHasNoConnectedParticipantsError",
    "SessionCannotRecordError",
    "RecordingResolutionInvalidError",
    "ServerRecordingDisabledError",
    "RecordingNotFoundError",
    "RecordingStatusError",
    "ConnectionNotFoundError",
    "StreamNotFoundError",
    "TokenCannotCreateError",
    # Configuration
    "ClientConfig",
    # Types
    "Connection",
    "Publisher",
    "Recording",
    "RecordingProperties",
    "SessionProperties",
    "TokenOptions",
    "MediaMode",
    "RecordingMode",
    "OutputMode",
    "RecordingLayout",
    "RecordingStatus",
    "OpenViduRole",
    "Uri",
    # Builders
    "build_recording",
    "build_recording_properties",
    "build_session_properties",
]

__version__ = "0.1.0"
