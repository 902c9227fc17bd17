"""Configuration Management for artlink

Runtime configuration is read from environment variables. The only value the
core workflow needs is the upstream base URL; timeouts and device selection
belong to the I/O shell around it.

Environment variables:
- ARTLINK_BASE_URL: storefront path proxying the certification service
- ARTLINK_FETCH_TIMEOUT: seconds allowed for a listing/detail request
- ARTLINK_WRITE_TIMEOUT: seconds allowed for a single tag write
- ARTLINK_SIMULATE_DEVICE: use the simulated NFC device ("1", "true", "yes")
- ARTLINK_DEVICE_PATH: nfcpy reader path (default "usb")
"""

import logging
import os
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlparse

from artlink.constants import (
    DEFAULT_BASE_URL,
    DEFAULT_DEVICE_PATH,
    DEFAULT_FETCH_TIMEOUT,
    DEFAULT_WRITE_TIMEOUT,
)

logger = logging.getLogger(__name__)

_TRUTHY = ("1", "true", "yes", "on")


def _parse_timeout(name: str, raw: Any) -> float:
    try:
        value = float(raw)
    except (TypeError, ValueError):
        raise ValueError(f"{name} must be a number of seconds, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")
    return value


def _parse_bool(raw: Any) -> bool:
    if isinstance(raw, bool):
        return raw
    return str(raw).strip().lower() in _TRUTHY


@dataclass
class ArtLinkConfig:
    """
    Configuration for a catalog/pairing session.

    Attributes:
        base_url: Base path used to build listing and detail request URLs
        fetch_timeout: Request timeout in seconds (maps to NetworkError)
        write_timeout: Tag write timeout in seconds (maps to DeviceError)
        simulate_device: Use the simulated NFC device instead of hardware
        device_path: nfcpy reader path
    """

    base_url: str = DEFAULT_BASE_URL
    fetch_timeout: float = DEFAULT_FETCH_TIMEOUT
    write_timeout: float = DEFAULT_WRITE_TIMEOUT
    simulate_device: bool = False
    device_path: str = DEFAULT_DEVICE_PATH

    def __post_init__(self) -> None:
        base_url = (self.base_url or "").strip()
        if not base_url:
            raise ValueError(
                "Base URL not provided. Set ARTLINK_BASE_URL environment variable "
                "or provide base_url parameter."
            )
        if urlparse(base_url).scheme not in ("http", "https"):
            raise ValueError(f"ARTLINK_BASE_URL must be an http(s) URL, got {base_url!r}")
        self.base_url = base_url.rstrip("/")
        self.fetch_timeout = _parse_timeout("ARTLINK_FETCH_TIMEOUT", self.fetch_timeout)
        self.write_timeout = _parse_timeout("ARTLINK_WRITE_TIMEOUT", self.write_timeout)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "base_url": self.base_url,
            "fetch_timeout": self.fetch_timeout,
            "write_timeout": self.write_timeout,
            "simulate_device": self.simulate_device,
            "device_path": self.device_path,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ArtLinkConfig":
        """Create ArtLinkConfig from dictionary."""
        return cls(
            base_url=data.get("base_url", DEFAULT_BASE_URL),
            fetch_timeout=data.get("fetch_timeout", DEFAULT_FETCH_TIMEOUT),
            write_timeout=data.get("write_timeout", DEFAULT_WRITE_TIMEOUT),
            simulate_device=_parse_bool(data.get("simulate_device", False)),
            device_path=data.get("device_path", DEFAULT_DEVICE_PATH),
        )

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> "ArtLinkConfig":
        """
        Build configuration from environment variables.

        Args:
            environ: Mapping to read instead of os.environ (tests)

        Raises:
            ValueError: If a variable is present but invalid
        """
        env = os.environ if environ is None else environ
        config = cls(
            base_url=env.get("ARTLINK_BASE_URL", DEFAULT_BASE_URL),
            fetch_timeout=env.get("ARTLINK_FETCH_TIMEOUT", DEFAULT_FETCH_TIMEOUT),
            write_timeout=env.get("ARTLINK_WRITE_TIMEOUT", DEFAULT_WRITE_TIMEOUT),
            simulate_device=_parse_bool(env.get("ARTLINK_SIMULATE_DEVICE", "0")),
            device_path=env.get("ARTLINK_DEVICE_PATH", DEFAULT_DEVICE_PATH),
        )
        logger.debug(f"Loaded configuration for base URL: {config.base_url}")
        return config
