"""Configuration management for the OpenVidu client."""

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

# Defaults for a local OpenVidu deployment
DEFAULT_DOMAIN = "https://localhost"
DEFAULT_PORT = 4443
DEFAULT_APP = "OPENVIDUAPP"

_TRUTHY = {"1", "true", "yes", "on"}


def _parse_flag(value: str) -> bool:
    return value.strip().lower() in _TRUTHY


def _env_flag(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return _parse_flag(value)


def _get_default_domain() -> str:
    """Get server domain from environment or use default.

    Priority:
    1. OPENVIDU_DOMAIN environment variable
    2. Local default
    """
    return os.environ.get("OPENVIDU_DOMAIN", DEFAULT_DOMAIN)


def _get_default_port() -> int | None:
    value = os.environ.get("OPENVIDU_PORT")
    if value is None:
        return DEFAULT_PORT
    return int(value) if value else None


def _get_default_app() -> str:
    return os.environ.get("OPENVIDU_APP", DEFAULT_APP)


@dataclass(slots=True)
class ClientConfig:
    """Configuration for the OpenVidu client.

    Attributes:
        secret: Shared secret of the OpenVidu server (required).
        app: Basic auth user name, `OPENVIDUAPP` on stock deployments.
        domain: Server URL including scheme, without port.
        port: Server port, or None to use the scheme default.
        debug: Enable debug logging.
        verify_ssl: Verify the server TLS certificate.
        timeout_s: Total timeout for a single request in seconds.
    """

    secret: str
    """Shared secret of the OpenVidu server (required)."""

    app: str = field(default_factory=_get_default_app)
    """Basic auth user name (defaults to OPENVIDUAPP or OPENVIDU_APP env var)."""

    domain: str = field(default_factory=_get_default_domain)
    """Server URL (defaults to https://localhost or OPENVIDU_DOMAIN env var)."""

    port: int | None = field(default_factory=_get_default_port)
    """Server port (defaults to 4443 or OPENVIDU_PORT env var)."""

    debug: bool = False
    """Enable debug logging."""

    verify_ssl: bool = True
    """Verify the server TLS certificate (disable for self-signed certificates)."""

    timeout_s: float = 30.0
    """Total timeout for a single HTTP request in seconds."""

    def __post_init__(self) -> None:
        """Validate configuration."""
        if not self.secret:
            raise ValueError("secret is required")
        if not isinstance(self.secret, str):
            raise TypeError("secret must be a string")
        if self.secret.strip() == "":
            raise ValueError("secret cannot be empty")
        if not self.app:
            raise ValueError("app is required")
        if not self.domain:
            raise ValueError("domain is required")
        if not self.domain.startswith(("http://", "https://")):
            raise ValueError("domain must start with http:// or https://")
        if self.port is not None and not 0 < self.port < 65536:
            raise ValueError(f"port out of range: {self.port}")
        if self.timeout_s <= 0:
            raise ValueError("timeout_s must be positive")

    @property
    def base_url(self) -> str:
        """Server URL the REST paths are appended to."""
        domain = self.domain.rstrip("/")
        if self.port is None:
            return domain
        return f"{domain}:{self.port}"

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any]) -> "ClientConfig":
        """Build a configuration from an `app`/`secret`/`domain`/`port`/`debug` mapping.

        Missing keys fall back to the dataclass defaults. Unknown keys are ignored.
        """
        known = {name: config[name] for name in cls.__dataclass_fields__ if name in config}
        if "port" in known and known["port"] not in (None, ""):
            known["port"] = int(known["port"])
        elif "port" in known:
            known["port"] = None
        for flag in ("debug", "verify_ssl"):
            if isinstance(known.get(flag), str):
                known[flag] = _parse_flag(known[flag])
        return cls(**known)

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """Build a configuration from OPENVIDU_* environment variables."""
        return cls(
            secret=os.environ.get("OPENVIDU_SECRET", ""),
            debug=_env_flag("OPENVIDU_DEBUG", False),
            verify_ssl=_env_flag("OPENVIDU_VERIFY_SSL", True),
        )
