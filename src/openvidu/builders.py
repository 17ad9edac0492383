"""Builders mapping decoded server payloads to value objects.

Every builder is pure. Payload keys are the server's camelCase names; fields
missing from a payload take the default declared on the dataclass.
"""

from collections.abc import Mapping
from dataclasses import fields
from typing import Any

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
)

# Payload key -> dataclass field
_RECORDING_PROPERTIES_KEYS = {
    "hasAudio": "has_audio",
    "hasVideo": "has_video",
    "name": "name",
    "outputMode": "output_mode",
    "recordingLayout": "recording_layout",
    "customLayout": "custom_layout",
    "resolution": "resolution",
}

_SESSION_PROPERTIES_KEYS = {
    "mediaMode": "media_mode",
    "recordingMode": "recording_mode",
    "defaultOutputMode": "default_output_mode",
    "defaultRecordingLayout": "default_recording_layout",
    "defaultCustomLayout": "default_custom_layout",
    "customSessionId": "custom_session_id",
}

_PUBLISHER_MEDIA_KEYS = {
    "hasAudio": "has_audio",
    "hasVideo": "has_video",
    "audioActive": "audio_active",
    "videoActive": "video_active",
    "frameRate": "frame_rate",
    "typeOfVideo": "type_of_video",
    "videoDimensions": "video_dimensions",
}

_CONNECTION_KEYS = {
    "createdAt": "created_at",
    "role": "role",
    "token": "token",
    "location": "location",
    "platform": "platform",
    "serverData": "server_data",
    "clientData": "client_data",
}

_ENUM_FIELDS = {
    "output_mode": OutputMode,
    "recording_layout": RecordingLayout,
    "media_mode": MediaMode,
    "recording_mode": RecordingMode,
    "default_output_mode": OutputMode,
    "default_recording_layout": RecordingLayout,
    "role": OpenViduRole,
    "status": RecordingStatus,
}


def _coerce(name: str, value: Any) -> Any:
    """Turn known enum values into enum members; leave unknown values as sent."""
    enum_type = _ENUM_FIELDS.get(name)
    if enum_type is None or value is None:
        return value
    try:
        return enum_type(value)
    except ValueError:
        return value


def _pick(payload: Mapping[str, Any], keys: Mapping[str, str]) -> dict[str, Any]:
    return {field_name: _coerce(field_name, payload[key]) for key, field_name in keys.items() if key in payload}


def build_recording_properties(properties: Any) -> RecordingProperties | None:
    """Build RecordingProperties from a payload.

    Accepts a mapping with camelCase keys, or a sequence holding the values
    in field order (`has_audio`, `has_video`, `name`, ...). Any other input
    yields None.
    """
    if isinstance(properties, Mapping):
        return RecordingProperties(**_pick(properties, _RECORDING_PROPERTIES_KEYS))
    if isinstance(properties, list | tuple):
        names = [f.name for f in fields(RecordingProperties)]
        values = {name: _coerce(name, value) for name, value in zip(names, properties)}
        return RecordingProperties(**values)
    return None


def build_session_properties(properties: Mapping[str, Any]) -> SessionProperties:
    """Build SessionProperties from a session payload."""
    return SessionProperties(**_pick(properties, _SESSION_PROPERTIES_KEYS))


def build_recording(data: Mapping[str, Any]) -> Recording:
    """Build a Recording from a recording payload."""
    return Recording(
        id=data["id"],
        session_id=data["sessionId"],
        status=_coerce("status", data.get("status", RecordingStatus.STARTING)),
        created_at=data.get("createdAt", 0),
        size=data.get("size", 0),
        duration=data.get("duration", 0.0),
        url=data.get("url"),
        properties=build_recording_properties(data) or RecordingProperties(),
    )


def build_publisher(data: Mapping[str, Any]) -> Publisher:
    """Build a Publisher from a connection's `publishers` entry."""
    media = data.get("mediaOptions") or {}
    return Publisher(
        stream_id=data["streamId"],
        created_at=data.get("createdAt", 0),
        **_pick(media, _PUBLISHER_MEDIA_KEYS),
    )


def build_connection(data: Mapping[str, Any]) -> Connection:
    """Build a Connection from a session's `connections.content` entry."""
    return Connection(
        connection_id=data["connectionId"],
        publishers=[build_publisher(p) for p in data.get("publishers") or []],
        subscribers=[s["streamId"] for s in data.get("subscribers") or []],
        **_pick(data, _CONNECTION_KEYS),
    )


def build_connections(data: Mapping[str, Any]) -> dict[str, Connection]:
    """Build the connection map of a session payload, keyed by connection id."""
    content = (data.get("connections") or {}).get("content") or []
    connections = [build_connection(c) for c in content]
    return {c.connection_id: c for c in connections}
