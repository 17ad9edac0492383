"""Internal implementation modules for OpenVidu client."""

from .http import ApiResponse, HttpClient
from .responses import expect, fallback_error

__all__ = ["ApiResponse", "HttpClient", "expect", "fallback_error"]
