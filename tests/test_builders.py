"""Tests for payload builders."""

import pytest

from openvidu import (
    OutputMode,
    RecordingLayout,
    RecordingProperties,
    RecordingStatus,
    build_recording,
    build_recording_properties,
    build_session_properties,
)
from openvidu.builders import build_connection


class TestRecordingPropertiesBuilder:
    def test_empty_mapping_gives_defaults(self):
        props = build_recording_properties({})

        assert props == RecordingProperties()
        assert props.has_audio is True
        assert props.has_video is True
        assert props.recording_layout == RecordingLayout.BEST_FIT
        assert props.output_mode == OutputMode.COMPOSED
        assert props.custom_layout == "ROUTED"
        assert props.resolution is None

    def test_mapping_overrides_defaults(self):
        props = build_recording_properties(
            {"hasAudio": False, "outputMode": "INDIVIDUAL", "resolution": "640x480", "ignored": 1}
        )

        assert props.has_audio is False
        assert props.output_mode == OutputMode.INDIVIDUAL
        assert props.resolution == "640x480"
        assert props.has_video is True

    def test_unknown_enum_value_is_kept(self):
        props = build_recording_properties({"recordingLayout": "FANCY"})
        assert props.recording_layout == "FANCY"

    def test_positional_sequence(self):
        props = build_recording_properties([False, True, "demo"])

        assert props.has_audio is False
        assert props.has_video is True
        assert props.name == "demo"
        assert props.output_mode == OutputMode.COMPOSED

    @pytest.mark.parametrize("value", [None, "COMPOSED", 42, 1.5, True])
    def test_scalar_input_gives_none(self, value):
        assert build_recording_properties(value) is None

    def test_to_dict_skips_unset_optionals(self):
        body = RecordingProperties().to_dict()
        assert body == {
            "hasAudio": True,
            "hasVideo": True,
            "outputMode": "COMPOSED",
            "recordingLayout": "BEST_FIT",
            "customLayout": "ROUTED",
        }


class TestRecordingBuilder:
    def test_build_recording(self):
        recording = build_recording(
            {
                "id": "rec_1",
                "sessionId": "ses_1",
                "status": "ready",
                "name": "meeting",
                "size": 2048,
                "duration": 12.5,
                "url": "https://x/rec_1.mp4",
                "outputMode": "INDIVIDUAL",
            }
        )

        assert recording.id == "rec_1"
        assert recording.session_id == "ses_1"
        assert recording.status == RecordingStatus.READY
        assert recording.name == "meeting"
        assert recording.size == 2048
        assert recording.duration == 12.5
        assert recording.properties.output_mode == OutputMode.INDIVIDUAL

    def test_missing_required_field(self):
        with pytest.raises(KeyError):
            build_recording({"id": "rec_1"})


class TestSessionPropertiesBuilder:
    def test_defaults(self):
        props = build_session_properties({"sessionId": "ses_1"})
        assert props.custom_session_id == ""
        assert props.default_recording_layout == RecordingLayout.BEST_FIT


class TestConnectionBuilder:
    def test_connection_without_streams(self):
        connection = build_connection({"connectionId": "con_a", "publishers": None})
        assert connection.connection_id == "con_a"
        assert connection.publishers == []
        assert connection.subscribers == []
