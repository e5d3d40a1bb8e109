"""Telemetry context configuration module."""

from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_SESSION_RENEWAL_MS = 30 * 60 * 1000
DEFAULT_SESSION_EXPIRATION_MS = 24 * 60 * 60 * 1000

_TRUTHY = ("1", "true", "yes", "on")


@dataclass(frozen=True)
class TelemetryConfig:
    """Configuration for the telemetry context.

    ``disable_trace_parent`` supports an environment variable override:
    - APPINSIGHTS_DISABLE_TRACE_PARENT

    Args:
        disable_trace_parent: Skip trace-parent discovery at construction
        sdk_extension: Prefix prepended to the reported SDK version
        account_id: Default account id assigned to the user context
        session_renewal_ms: Inactivity interval after which a session rotates
        session_expiration_ms: Maximum age of a session before it rotates
    """

    disable_trace_parent: bool = False
    sdk_extension: str | None = None
    account_id: str | None = None
    session_renewal_ms: int = DEFAULT_SESSION_RENEWAL_MS
    session_expiration_ms: int = DEFAULT_SESSION_EXPIRATION_MS

    def __post_init__(self) -> None:
        """Resolve configuration from environment variables."""
        if env_disable := os.getenv("APPINSIGHTS_DISABLE_TRACE_PARENT"):
            object.__setattr__(
                self, "disable_trace_parent", env_disable.lower() in _TRUTHY
            )

        self._validate()

    def _validate(self) -> None:
        """Validate configuration values.

        Raises:
            ValueError: If configuration is invalid
        """
        if self.session_renewal_ms <= 0:
            raise ValueError(
                f"session_renewal_ms must be positive, got {self.session_renewal_ms}"
            )
        if self.session_expiration_ms <= 0:
            raise ValueError(
                "session_expiration_ms must be positive, "
                f"got {self.session_expiration_ms}"
            )
