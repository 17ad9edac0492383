"""Exception classes for the OpenVidu client library."""


class OpenViduError(Exception):
    """Base exception for all OpenVidu client errors.

    Also raised directly when the server answers with a status code that the
    operation does not recognise.

    Attributes:
        message: Human-readable description (server-supplied when available).
        status_code: HTTP status code of the response, or None.
    """

    default_message = "OpenVidu request failed"

    def __init__(self, message: str | None = None, status_code: int | None = None) -> None:
        self.message = message if message is not None else self.default_message
        self.status_code = status_code
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, status_code={self.status_code!r})"


class OpenViduConnectionError(OpenViduError):
    """The OpenVidu server could not be reached.

    Raised when:
    - DNS resolution or TCP connection fails
    - TLS handshake fails
    - The request times out
    """

    default_message = "Failed to reach OpenVidu server"


class SessionNotFoundError(OpenViduError):
    """The session does not exist on the server or in the local cache."""

    default_message = "Session not found"


class SessionCannotCreateError(OpenViduError):
    """The server rejected the session creation request."""

    default_message = "The session could not be created"


class SessionHasNoConnectedParticipantsError(OpenViduError):
    """Recording was requested for a session with no connected participants."""

    default_message = "The session has no connected participants"


class SessionCannotRecordError(OpenViduError):
    """The session cannot be recorded.

    Raised when:
    - The session is not configured with media mode ROUTED
    - The session is already being recorded
    """

    default_message = "The session is not configured for using media routed or it is already being recorded"


class RecordingResolutionInvalidError(OpenViduError):
    """The requested recording resolution is not valid."""

    default_message = "The resolution is not valid. Use format WIDTHxHEIGHT, both between 100 and 1999"


class ServerRecordingDisabledError(OpenViduError):
    """Recording is disabled on the OpenVidu server."""

    default_message = "The recording module is disabled on the OpenVidu server"


class RecordingNotFoundError(OpenViduError):
    """The recording does not exist."""

    default_message = "Recording not found"


class RecordingStatusError(OpenViduError):
    """The recording is in a status that does not allow the operation.

    Raised when:
    - Stopping a recording that is still `starting`
    - Deleting a recording that is still `started`
    """

    default_message = "The recording status does not allow this operation"


class ConnectionNotFoundError(OpenViduError):
    """The connection does not exist in the session."""

    default_message = "Connection not found"


class StreamNotFoundError(OpenViduError):
    """The stream does not exist in the session."""

    default_message = "Stream not found"


class TokenCannotCreateError(OpenViduError):
    """The server rejected the token request."""

    default_message = "The token could not be created"
