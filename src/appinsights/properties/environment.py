"""Host environment capabilities.

The telemetry context never touches process-global state directly. Instead it
asks a :class:`HostEnvironment` for the capabilities it may use:

- whether an interactive UI host is present (``has_window``)
- a document-like structure exposing ``<meta>`` elements
- a performance-timing facility exposing navigation entries
- an inbound W3C trace-context carrier (HTTP-header-like mapping)

Every capability is optional. A missing capability is never an error.
"""

from __future__ import annotations

import os
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol

from bs4 import BeautifulSoup

NAVIGATION_ENTRY_TYPE = "navigation"
SERVER_TIMING_HEADER = "server-timing"


@dataclass
class MetaElement:
    """A ``<meta name=... content=...>`` element."""

    name: str | None = None
    content: str | None = None


@dataclass
class Document:
    """Minimal document exposing its metadata elements."""

    meta: list[MetaElement] = field(default_factory=list)

    def query_selector_all(self, selector: str) -> list[MetaElement]:
        """Return all elements matching a tag selector (only ``meta`` is held)."""
        if selector.strip().lower() == "meta":
            return list(self.meta)
        return []

    @classmethod
    def from_html(cls, markup: str) -> Document:
        """Build a document from HTML markup, keeping only ``<meta>`` elements.

        Examples:
            >>> doc = Document.from_html('<meta name="Request-Id" content="|a.b">')
            >>> doc.meta[0].content
            '|a.b'
        """
        soup = BeautifulSoup(markup, "html.parser")
        return cls(
            meta=[
                MetaElement(name=tag.get("name"), content=tag.get("content"))
                for tag in soup.select("meta")
            ]
        )


@dataclass
class ServerTiming:
    """One entry of a ``Server-Timing`` list."""

    name: str
    description: str = ""
    duration: float = 0.0


@dataclass
class NavigationTiming:
    """Navigation timing entry carrying the server-timing list."""

    server_timing: list[ServerTiming] = field(default_factory=list)
    entry_type: str = NAVIGATION_ENTRY_TYPE


@dataclass
class Performance:
    """Performance-timing facility holding already-resident timing entries."""

    entries: list[NavigationTiming] = field(default_factory=list)

    def get_entries_by_type(self, entry_type: str) -> list[NavigationTiming]:
        """Return entries whose ``entry_type`` matches."""
        return [entry for entry in self.entries if entry.entry_type == entry_type]


class DocumentLike(Protocol):
    def query_selector_all(self, selector: str) -> Sequence[Any]: ...


class PerformanceLike(Protocol):
    def get_entries_by_type(self, entry_type: str) -> Sequence[Any]: ...


def _split_unquoted(value: str, separator: str) -> list[str]:
    parts: list[str] = []
    current: list[str] = []
    quoted = False
    for char in value:
        if char == '"':
            quoted = not quoted
        if char == separator and not quoted:
            parts.append("".join(current))
            current = []
        else:
            current.append(char)
    parts.append("".join(current))
    return parts


def parse_server_timing_header(value: str | None) -> list[ServerTiming]:
    """Parse an HTTP ``Server-Timing`` header value.

    Malformed metrics are skipped.

    Examples:
        >>> timings = parse_server_timing_header('Request-Id;desc="|a.b", db;dur=2.5')
        >>> [(t.name, t.description, t.duration) for t in timings]
        [('Request-Id', '|a.b', 0.0), ('db', '', 2.5)]
    """
    if not value:
        return []

    timings: list[ServerTiming] = []
    for metric in _split_unquoted(value, ","):
        params = _split_unquoted(metric, ";")
        name = params[0].strip()
        if not name:
            continue
        timing = ServerTiming(name=name)
        for param in params[1:]:
            key, sep, raw = param.partition("=")
            if not sep:
                continue
            key = key.strip().lower()
            raw = raw.strip()
            if len(raw) >= 2 and raw[0] == raw[-1] == '"':
                raw = raw[1:-1]
            if key == "desc":
                timing.description = raw
            elif key == "dur":
                try:
                    timing.duration = float(raw)
                except ValueError:
                    continue
        timings.append(timing)
    return timings


@dataclass
class HostEnvironment:
    """Capabilities of the environment hosting the telemetry context.

    Args:
        has_window: True when an interactive UI host is present
        document: Document-like structure with ``query_selector_all``
        performance: Facility with ``get_entries_by_type``
        trace_carrier: Inbound W3C trace-context carrier
    """

    has_window: bool = False
    document: DocumentLike | None = None
    performance: PerformanceLike | None = None
    trace_carrier: Mapping[str, str] | None = None

    def get_document(self) -> DocumentLike | None:
        return self.document

    def get_performance(self) -> PerformanceLike | None:
        return self.performance

    def get_trace_carrier(self) -> Mapping[str, str] | None:
        return self.trace_carrier

    @classmethod
    def from_process(
        cls, environ: Mapping[str, str] | None = None
    ) -> HostEnvironment:
        """Build a non-interactive environment from process variables.

        ``TRACEPARENT`` and ``TRACESTATE`` become the inbound carrier. A
        TelemetryContext does not run discovery without a window, so workers
        pass this to :func:`discover_trace_parent` or
        :func:`find_w3c_trace_parent` directly.

        Args:
            environ: Variables to read (defaults to ``os.environ``)
        """
        env = os.environ if environ is None else environ
        carrier = {
            k.lower(): env[k] for k in ("TRACEPARENT", "TRACESTATE") if k in env
        }
        return cls(has_window=False, trace_carrier=carrier or None)

    @classmethod
    def from_request(
        cls,
        headers: Mapping[str, str],
        html: str | None = None,
    ) -> HostEnvironment:
        """Build an interactive environment from an incoming HTTP request.

        Args:
            headers: Request headers (any casing)
            html: Optional page markup whose ``<meta>`` elements are exposed
        """
        carrier = {key.lower(): value for key, value in headers.items()}

        performance = None
        if server_timing := carrier.get(SERVER_TIMING_HEADER):
            performance = Performance(
                entries=[
                    NavigationTiming(
                        server_timing=parse_server_timing_header(server_timing)
                    )
                ]
            )

        return cls(
            has_window=True,
            document=Document.from_html(html) if html is not None else None,
            performance=performance,
            trace_carrier=carrier,
        )
