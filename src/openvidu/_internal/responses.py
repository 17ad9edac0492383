"""Mapping of server responses to results and typed errors."""

from collections.abc import Callable, Collection, Mapping
from typing import Any, TypeAlias

from ..exceptions import OpenViduError
from .http import ApiResponse

ErrorFactory: TypeAlias = Callable[[], OpenViduError]


def fallback_error(response: ApiResponse) -> OpenViduError:
    """Build the error for a status code the operation does not enumerate.

    Uses the server-supplied `message` when the body carries one, otherwise a
    message naming the status code.
    """
    body = response.body
    if isinstance(body, dict) and body.get("message") is not None:
        return OpenViduError(str(body["message"]), response.status)
    return OpenViduError(f"Invalid response status code {response.status}", response.status)


def expect(
    response: ApiResponse,
    ok: Collection[int] = (200,),
    errors: Mapping[int, ErrorFactory] | None = None,
) -> Any:
    """Return the decoded body of an accepted response or raise.

    Args:
        response: Response to inspect.
        ok: Status codes that count as success.
        errors: Status codes with a dedicated error, mapped to a factory.

    Returns:
        The decoded JSON body (None for empty bodies).

    Raises:
        OpenViduError: The enumerated error for the status, or the fallback error.
    """
    if response.status in ok:
        return response.body
    if errors and response.status in errors:
        error = errors[response.status]()
        if error.status_code is None:
            error.status_code = response.status
        raise error
    raise fallback_error(response)
