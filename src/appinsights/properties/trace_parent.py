"""Trace-parent parsing and discovery.

Determines the trace id and parent span id of the current execution scope
from ambient signals. Sources are consulted in order, the first valid value
wins:

1. W3C ``traceparent`` (inbound carrier, then ``traceparent`` meta element,
   then ``traceparent`` server-timing entry)
2. ``Request-Id`` meta element on the document
3. ``Request-Id`` server-timing entry of the first navigation timing entry

Malformed values and missing capabilities yield None, nothing here raises.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping, Sequence
from typing import TYPE_CHECKING, Any, NamedTuple

from opentelemetry import trace
from opentelemetry.trace import format_span_id, format_trace_id
from opentelemetry.trace.propagation.tracecontext import (
    TraceContextTextMapPropagator,
)

from .attributes import REQUEST_ID_NAME, TRACE_PARENT_NAME
from .environment import NAVIGATION_ENTRY_TYPE

if TYPE_CHECKING:
    from .environment import HostEnvironment

logger = logging.getLogger(__name__)

_TRACE_ID_PATTERN = re.compile(r"^[0-9a-f]{32}$")
_SPAN_ID_PATTERN = re.compile(r"^[0-9a-f]{16}$")
_INVALID_TRACE_ID = "0" * 32
_INVALID_SPAN_ID = "0" * 16

_propagator = TraceContextTextMapPropagator()


class TraceParent(NamedTuple):
    """Decoded trace-correlation token."""

    trace_id: str
    span_id: str


def is_valid_trace_id(value: Any) -> bool:
    """Check for 32 lowercase hex characters that are not all zero."""
    return (
        isinstance(value, str)
        and _TRACE_ID_PATTERN.match(value) is not None
        and value != _INVALID_TRACE_ID
    )


def is_valid_span_id(value: Any) -> bool:
    """Check for 16 lowercase hex characters that are not all zero."""
    return (
        isinstance(value, str)
        and _SPAN_ID_PATTERN.match(value) is not None
        and value != _INVALID_SPAN_ID
    )


def create_trace_parent(trace_id: Any, span_id: Any) -> TraceParent | None:
    """Build a TraceParent only when both halves are valid."""
    if is_valid_trace_id(trace_id) and is_valid_span_id(span_id):
        return TraceParent(trace_id, span_id)
    return None


def parse_request_id(raw: str | Sequence[str] | None) -> TraceParent | None:
    """Decode a legacy ``|<traceId>.<spanId>[.]`` correlation token.

    Args:
        raw: Token, or a sequence of tokens of which only the first is used

    Returns:
        TraceParent if the token is well formed, None otherwise

    Examples:
        >>> parse_request_id("|4bf92f3577b34da6a3ce929d0e0e4736.00f067aa0ba902b7.").span_id
        '00f067aa0ba902b7'
        >>> parse_request_id(["not-a-token"]) is None
        True
    """
    value: Any = raw
    if isinstance(value, (list, tuple)):
        value = value[0] if value else None

    if not value or not isinstance(value, str):
        return None

    value = value.strip()
    if not value.startswith("|"):
        return None

    idx = value.find(".")
    if idx == -1:
        return None

    trace_id = value[1:idx]
    span_id = value[idx + 1 :]
    if span_id.endswith("."):
        span_id = span_id[:-1]

    return create_trace_parent(trace_id, span_id)


def _find_named(values: Iterable[Any] | None, name: str) -> Any | None:
    if not values:
        return None
    for value in values:
        if getattr(value, "name", None) == name:
            return value
    return None


def _first_navigation_server_timing(environment: HostEnvironment) -> Sequence[Any]:
    perf = environment.get_performance()
    if perf is None:
        return []
    nav_entries = perf.get_entries_by_type(NAVIGATION_ENTRY_TYPE) or []
    if not nav_entries:
        return []
    return getattr(nav_entries[0], "server_timing", None) or []


def _meta_content(environment: HostEnvironment, name: str) -> Any | None:
    doc = environment.get_document()
    if doc is None:
        return None
    element = _find_named(doc.query_selector_all("meta"), name)
    return getattr(element, "content", None)


def _server_timing_description(
    environment: HostEnvironment, name: str
) -> Any | None:
    entry = _find_named(_first_navigation_server_timing(environment), name)
    return getattr(entry, "description", None)


def _decode_traceparent(carrier: Mapping[str, Any]) -> TraceParent | None:
    ctx = _propagator.extract(carrier)
    span_context = trace.get_current_span(ctx).get_span_context()
    if not span_context.is_valid:
        return None
    return create_trace_parent(
        format_trace_id(span_context.trace_id),
        format_span_id(span_context.span_id),
    )


def find_w3c_trace_parent(environment: HostEnvironment) -> TraceParent | None:
    """Look for an already-propagated W3C ``traceparent`` value.

    Args:
        environment: Host environment to inspect

    Returns:
        TraceParent from the first structurally valid carrier, or None
    """
    carriers: list[Mapping[str, Any]] = []
    if inbound := environment.get_trace_carrier():
        carriers.append(inbound)
    for value in (
        _meta_content(environment, TRACE_PARENT_NAME),
        _server_timing_description(environment, TRACE_PARENT_NAME),
    ):
        if value and isinstance(value, str):
            carriers.append({TRACE_PARENT_NAME: value})

    for carrier in carriers:
        if traceparent := _decode_traceparent(carrier):
            return traceparent
    return None


def find_request_id(environment: HostEnvironment) -> TraceParent | None:
    """Look for a legacy ``Request-Id`` marker on the document or timing data."""
    traceparent = parse_request_id(_meta_content(environment, REQUEST_ID_NAME))
    if traceparent is None:
        traceparent = parse_request_id(
            _server_timing_description(environment, REQUEST_ID_NAME)
        )
    return traceparent


def discover_trace_parent(environment: HostEnvironment | None) -> TraceParent | None:
    """Find the trace parent of the current execution scope.

    Args:
        environment: Host environment to inspect (None means nothing available)

    Returns:
        First valid TraceParent found, or None
    """
    if environment is None:
        return None

    traceparent = find_w3c_trace_parent(environment)
    source = "traceparent"
    if traceparent is None:
        traceparent = find_request_id(environment)
        source = REQUEST_ID_NAME

    if traceparent is None:
        logger.debug("No trace parent found in host environment")
    else:
        logger.debug(
            "Trace parent discovered from %s: span_id=%s",
            source,
            traceparent.span_id,
        )
    return traceparent
