"""HTTP transport for the OpenVidu REST API."""

import json
import logging
from dataclasses import dataclass
from typing import Any

import aiohttp

from ..config import ClientConfig
from ..exceptions import OpenViduConnectionError

logger = logging.getLogger(__name__)

JSON_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}


@dataclass(frozen=True, slots=True)
class ApiResponse:
    """Status code and decoded JSON body of a server response.

    `body` is None when the response has no body or the body is not JSON.
    """

    status: int
    body: Any = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


class HttpClient:
    """Sends authenticated JSON requests to the OpenVidu server.

    Never raises on HTTP status codes; callers map `ApiResponse.status` to
    errors themselves. Transport failures raise `OpenViduConnectionError`.
    """

    def __init__(self, config: ClientConfig) -> None:
        """Create an HttpClient.

        Args:
            config: Client configuration (credentials, base URL, TLS, debug).
        """
        self._base_url = config.base_url
        self._auth = aiohttp.BasicAuth(config.app, config.secret)
        self._verify_ssl = config.verify_ssl
        self._timeout = aiohttp.ClientTimeout(total=config.timeout_s)
        self._debug = config.debug

        self._http_session: aiohttp.ClientSession | None = None

    def _log(self, msg: str) -> None:
        """Log a debug message."""
        if self._debug:
            logger.debug(f"[Http] {msg}")

    def _error(self, msg: str) -> None:
        """Log an error message."""
        logger.error(f"[Http] {msg}")

    async def _get_http_session(self) -> aiohttp.ClientSession:
        """Get or create HTTP session."""
        if self._http_session is None or self._http_session.closed:
            self._http_session = aiohttp.ClientSession(
                auth=self._auth,
                headers=JSON_HEADERS,
                timeout=self._timeout,
            )
        return self._http_session

    async def request(self, method: str, path: str, payload: dict[str, Any] | None = None) -> ApiResponse:
        """Send a request and decode the response.

        Args:
            method: HTTP method.
            path: Absolute REST path, e.g. `/api/sessions`.
            payload: JSON body, or None for no body.

        Returns:
            ApiResponse with the status code and decoded JSON body.

        Raises:
            OpenViduConnectionError: If the server cannot be reached.
        """
        session = await self._get_http_session()
        url = f"{self._base_url}{path}"
        kwargs: dict[str, Any] = {}
        if payload is not None:
            kwargs["json"] = payload
        if not self._verify_ssl:
            kwargs["ssl"] = False

        self._log(f"{method} {url}")

        try:
            async with session.request(method, url, **kwargs) as response:
                text = await response.text()
                status = response.status
        except (aiohttp.ClientError, TimeoutError) as e:
            self._error(f"{method} {url} failed: {e}")
            raise OpenViduConnectionError(f"Failed to reach OpenVidu server: {e}") from e

        self._log(f"{method} {url} -> {status}")
        return ApiResponse(status=status, body=_decode(text))

    async def get(self, path: str) -> ApiResponse:
        return await self.request("GET", path)

    async def post(self, path: str, payload: dict[str, Any] | None = None) -> ApiResponse:
        return await self.request("POST", path, payload)

    async def delete(self, path: str) -> ApiResponse:
        return await self.request("DELETE", path)

    async def close(self) -> None:
        """Close HTTP session."""
        if self._http_session:
            await self._http_session.close()
            self._http_session = None


def _decode(text: str) -> Any:
    if not text.strip():
        return None
    try:
        return json.loads(text)
    except ValueError:
        return None
