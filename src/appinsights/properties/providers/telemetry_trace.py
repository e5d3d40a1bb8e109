"""Operation identity (trace) context provider."""

from __future__ import annotations

import logging
from typing import Any

from opentelemetry.sdk.trace.id_generator import RandomIdGenerator
from opentelemetry.trace import format_trace_id

MAX_NAME_LENGTH = 1024

_id_generator = RandomIdGenerator()

_module_logger = logging.getLogger(__name__)


def generate_trace_id() -> str:
    """Generate a random W3C trace id (32 lowercase hex characters)."""
    return format_trace_id(_id_generator.generate_trace_id())


def _sanitize_name(name: Any, logger: logging.Logger) -> Any:
    if not isinstance(name, str):
        return name
    name = name.strip()
    if len(name) > MAX_NAME_LENGTH:
        logger.warning(
            "Operation name is too long, it has been truncated to %d characters "
            "(original length %d)",
            MAX_NAME_LENGTH,
            len(name),
        )
        name = name[:MAX_NAME_LENGTH]
    return name


class TelemetryTrace:
    """Identity of the operation every telemetry item is correlated with.

    Attributes:
        trace_id: Trace id of the operation (generated when not supplied)
        parent_id: Span id of the inbound parent, if one was discovered
        name: Operation name
        trace_flags: W3C trace flags
    """

    def __init__(
        self,
        id: str | None = None,
        parent_id: str | None = None,
        name: str | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        """Initialize operation identity.

        Args:
            id: Trace id; a new random one is generated when omitted
            parent_id: Parent span id
            name: Operation name, truncated to MAX_NAME_LENGTH characters
            logger: Logger used to report sanitization issues
        """
        self.trace_id: Any = id or generate_trace_id()
        self.parent_id: Any = parent_id
        self.name: Any = _sanitize_name(name, logger or _module_logger)
        self.trace_flags: int | None = None
