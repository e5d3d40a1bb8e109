"""Application Insights properties - telemetry context enrichment.

Stamps session, device, user, application, location, operating-system, web
and operation (trace) context onto outgoing telemetry items, and discovers
the inbound trace parent of the current execution scope.

Quick Start:
    >>> from appinsights.properties import (
    ...     HostEnvironment,
    ...     TelemetryConfig,
    ...     TelemetryContext,
    ... )
    >>>
    >>> # Build once per execution scope, e.g. from the incoming request
    >>> environment = HostEnvironment.from_request(
    ...     {"traceparent": "00-4bf92f3577b34da6a3ce929d0e0e4736-00f067aa0ba902b7-01"}
    ... )
    >>> context = TelemetryContext(TelemetryConfig(), environment)
    >>> context.application.ver = "1.2.3"
    >>> context.user.set_authenticated_user_context("alice")
    True
    >>>
    >>> # Enrich each telemetry item before it is sent
    >>> item = {"baseType": "EventData"}
    >>> context.apply_all(item)
    >>> item["ext"]["trace"]["parentID"]
    '00f067aa0ba902b7'
    >>>
    >>> # Or stamp the same context onto OpenTelemetry spans
    >>> from opentelemetry.sdk.trace import TracerProvider
    >>> provider = TracerProvider()
    >>> provider.add_span_processor(TelemetryContextSpanProcessor(context))
"""

from ._version import __version__
from .attributes import Attr, DataType
from .config import TelemetryConfig
from .context import TelemetryContext, TelemetryItem
from .environment import (
    Document,
    HostEnvironment,
    MetaElement,
    NavigationTiming,
    Performance,
    ServerTiming,
    parse_server_timing_header,
)
from .processors import TelemetryContextSpanProcessor, flatten_item
from .providers import (
    Application,
    Device,
    Internal,
    Location,
    OperatingSystem,
    Session,
    SessionManager,
    TelemetryTrace,
    User,
    Web,
)
from .trace_parent import (
    TraceParent,
    create_trace_parent,
    discover_trace_parent,
    find_request_id,
    find_w3c_trace_parent,
    is_valid_span_id,
    is_valid_trace_id,
    parse_request_id,
)

__all__ = [
    # Core classes
    "TelemetryConfig",
    "TelemetryContext",
    "TelemetryItem",
    "TelemetryContextSpanProcessor",
    # Context providers
    "Application",
    "Device",
    "Internal",
    "Location",
    "OperatingSystem",
    "Session",
    "SessionManager",
    "TelemetryTrace",
    "User",
    "Web",
    # Trace parent
    "TraceParent",
    "create_trace_parent",
    "discover_trace_parent",
    "find_request_id",
    "find_w3c_trace_parent",
    "is_valid_span_id",
    "is_valid_trace_id",
    "parse_request_id",
    # Host environment
    "Document",
    "HostEnvironment",
    "MetaElement",
    "NavigationTiming",
    "Performance",
    "ServerTiming",
    "parse_server_timing_header",
    # Semantic conventions
    "Attr",
    "DataType",
    # Helpers
    "flatten_item",
    "__version__",
]
