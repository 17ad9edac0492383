"""Type definitions for the OpenVidu client library."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class MediaMode(str, Enum):
    """How media streams are transmitted inside a session."""

    ROUTED = "ROUTED"
    """Streams go through the OpenVidu server (required for recording)."""

    RELAYED = "RELAYED"
    """Streams go peer to peer when possible."""


class RecordingMode(str, Enum):
    """When a session is recorded."""

    ALWAYS = "ALWAYS"
    """Recording starts automatically when the first participant publishes."""

    MANUAL = "MANUAL"
    """Recording is started and stopped through the REST API."""


class OutputMode(str, Enum):
    """Shape of the recorded output."""

    COMPOSED = "COMPOSED"
    """All streams are composed into a single file."""

    INDIVIDUAL = "INDIVIDUAL"
    """One file per published stream."""


class RecordingLayout(str, Enum):
    """Layout used for COMPOSED recordings."""

    BEST_FIT = "BEST_FIT"
    PICTURE_IN_PICTURE = "PICTURE_IN_PICTURE"
    VERTICAL_PRESENTATION = "VERTICAL_PRESENTATION"
    HORIZONTAL_PRESENTATION = "HORIZONTAL_PRESENTATION"
    CUSTOM = "CUSTOM"


class RecordingStatus(str, Enum):
    """Lifecycle status of a recording on the server."""

    STARTING = "starting"
    """Recording is being set up; it cannot be stopped yet."""

    STARTED = "started"
    """Recording is in progress; it cannot be deleted."""

    STOPPED = "stopped"
    """Recording is stopped and being processed."""

    READY = "ready"
    """Recording file is available."""

    FAILED = "failed"
    """Recording failed."""


class OpenViduRole(str, Enum):
    """Role granted to a participant by its token."""

    SUBSCRIBER = "SUBSCRIBER"
    PUBLISHER = "PUBLISHER"
    MODERATOR = "MODERATOR"


class Uri(str, Enum):
    """REST endpoints of the OpenVidu server."""

    SESSION_URI = "/api/sessions"
    TOKEN_URI = "/api/tokens"
    RECORDINGS_URI = "/api/recordings"
    RECORDINGS_START = "/api/recordings/start"
    RECORDINGS_STOP = "/api/recordings/stop"


@dataclass(frozen=True, slots=True)
class RecordingProperties:
    """Recording configuration sent when starting a recording.

    Attributes:
        has_audio: Record audio tracks.
        has_video: Record video tracks.
        name: File name of the recording, or None for the recording id.
        output_mode: COMPOSED or INDIVIDUAL.
        recording_layout: Layout used for COMPOSED recordings.
        custom_layout: Relative path of a custom layout, used with CUSTOM layout.
        resolution: "WIDTHxHEIGHT" of COMPOSED video recordings, or None for server default.
    """

    has_audio: bool = True
    has_video: bool = True
    name: str | None = None
    output_mode: OutputMode | str = OutputMode.COMPOSED
    recording_layout: RecordingLayout | str = RecordingLayout.BEST_FIT
    custom_layout: str = MediaMode.ROUTED.value
    resolution: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the JSON body expected by the server."""
        body: dict[str, Any] = {
            "hasAudio": self.has_audio,
            "hasVideo": self.has_video,
            "outputMode": _enum_value(self.output_mode),
            "recordingLayout": _enum_value(self.recording_layout),
            "customLayout": self.custom_layout,
        }
        if self.name is not None:
            body["name"] = self.name
        if self.resolution is not None:
            body["resolution"] = self.resolution
        return body


@dataclass(frozen=True, slots=True)
class SessionProperties:
    """Session configuration sent when creating a session.

    Attributes:
        media_mode: ROUTED or RELAYED.
        recording_mode: ALWAYS or MANUAL.
        default_output_mode: Output mode of automatic recordings.
        default_recording_layout: Layout of automatic recordings.
        default_custom_layout: Custom layout of automatic recordings.
        custom_session_id: Fixed session id to request, or "" for a server-generated one.
    """

    media_mode: MediaMode | str = MediaMode.ROUTED
    recording_mode: RecordingMode | str = RecordingMode.MANUAL
    default_output_mode: OutputMode | str = OutputMode.COMPOSED
    default_recording_layout: RecordingLayout | str = RecordingLayout.BEST_FIT
    default_custom_layout: str = ""
    custom_session_id: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the JSON body expected by the server."""
        return {
            "mediaMode": _enum_value(self.media_mode),
            "recordingMode": _enum_value(self.recording_mode),
            "defaultOutputMode": _enum_value(self.default_output_mode),
            "defaultRecordingLayout": _enum_value(self.default_recording_layout),
            "defaultCustomLayout": self.default_custom_layout,
            "customSessionId": self.custom_session_id,
        }


@dataclass(frozen=True, slots=True)
class TokenOptions:
    """Options for a participant token.

    Attributes:
        role: Role granted to the participant.
        data: Server-side metadata attached to the connection.
        kurento_options: Optional bandwidth/filter settings passed through as-is.
    """

    role: OpenViduRole | str = OpenViduRole.PUBLISHER
    data: str = ""
    kurento_options: dict[str, Any] | None = None

    def to_dict(self, session_id: str) -> dict[str, Any]:
        """Serialize to the JSON body expected by the server."""
        body: dict[str, Any] = {
            "session": session_id,
            "role": _enum_value(self.role),
            "data": self.data,
        }
        if self.kurento_options:
            body["kurentoOptions"] = self.kurento_options
        return body


@dataclass(frozen=True, slots=True)
class Recording:
    """A recording on the OpenVidu server.

    Attributes:
        id: Recording identifier.
        session_id: Session the recording belongs to.
        status: Current recording status.
        created_at: Creation time in UTC milliseconds.
        size: File size in bytes (0 until the recording is stopped).
        duration: Duration in seconds (0 until the recording is stopped).
        url: Download URL, or None until the recording is ready.
        properties: Properties the recording was started with.
    """

    id: str
    session_id: str
    status: RecordingStatus | str
    created_at: int = 0
    size: int = 0
    duration: float = 0.0
    url: str | None = None
    properties: RecordingProperties = field(default_factory=RecordingProperties)

    @property
    def name(self) -> str | None:
        return self.properties.name


@dataclass(frozen=True, slots=True)
class Publisher:
    """A stream published by a connection."""

    stream_id: str
    created_at: int = 0
    has_audio: bool = False
    has_video: bool = False
    audio_active: bool = False
    video_active: bool = False
    frame_rate: int | None = None
    type_of_video: str | None = None
    video_dimensions: str | None = None


@dataclass(slots=True)
class Connection:
    """A participant connection inside a session.

    `publishers` and `subscribers` are updated locally by
    `Session.force_disconnect` and `Session.force_unpublish`.
    """

    connection_id: str
    created_at: int = 0
    role: OpenViduRole | str | None = None
    token: str | None = None
    location: str | None = None
    platform: str | None = None
    server_data: str | None = None
    client_data: str | None = None
    publishers: list[Publisher] = field(default_factory=list)
    subscribers: list[str] = field(default_factory=list)
    """Stream ids this connection is subscribed to."""


def _enum_value(value: Enum | str) -> str:
    return value.value if isinstance(value, Enum) else value

