"""Internal (SDK self-description) context provider."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .._version import __version__

if TYPE_CHECKING:
    from ..config import TelemetryConfig

SDK_LANGUAGE = "python"


class Internal:
    """Describes the SDK that produced the telemetry item."""

    def __init__(self, config: TelemetryConfig | None = None) -> None:
        """Initialize internal context.

        Args:
            config: Telemetry configuration; ``sdk_extension`` prefixes the
                reported SDK version
        """
        prefix = ""
        if config is not None and config.sdk_extension:
            prefix = f"{config.sdk_extension}_"

        self.sdk_version: Any = f"{prefix}{SDK_LANGUAGE}:{__version__}"
        self.agent_version: Any = None
        self.snippet_ver: Any = None
        self.sdk_src: Any = None
