"""Shared pytest fixtures for all tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from opentelemetry.sdk.trace.export.in_memory_span_exporter import (
    InMemorySpanExporter,
)

from appinsights.properties import (
    Document,
    HostEnvironment,
    MetaElement,
    NavigationTiming,
    Performance,
    ServerTiming,
)

if TYPE_CHECKING:
    from _pytest.monkeypatch import MonkeyPatch

TRACE_ID = "4bf92f3577b34da6a3ce929d0e0e4736"
SPAN_ID = "00f067aa0ba902b7"
REQUEST_ID = f"|{TRACE_ID}.{SPAN_ID}."


@pytest.fixture(autouse=True)
def clear_config_env(monkeypatch: MonkeyPatch) -> None:
    """Keep configuration overrides from the outer environment out of tests."""
    monkeypatch.delenv("APPINSIGHTS_DISABLE_TRACE_PARENT", raising=False)


@pytest.fixture
def in_memory_exporter() -> InMemorySpanExporter:
    """Create in-memory exporter for capturing spans.

    Returns:
        InMemorySpanExporter instance for testing
    """
    return InMemorySpanExporter()


@pytest.fixture
def request_id_document() -> Document:
    """Document carrying a legacy Request-Id meta element."""
    return Document(
        meta=[
            MetaElement(name="viewport", content="width=device-width"),
            MetaElement(name="Request-Id", content=REQUEST_ID),
        ]
    )


@pytest.fixture
def request_id_performance() -> Performance:
    """Performance facility whose navigation entry carries a Request-Id."""
    return Performance(
        entries=[
            NavigationTiming(
                server_timing=[
                    ServerTiming(name="cache", duration=1.5),
                    ServerTiming(name="Request-Id", description=REQUEST_ID),
                ]
            )
        ]
    )


@pytest.fixture
def interactive_environment() -> HostEnvironment:
    """Interactive host without any trace-correlation signal."""
    return HostEnvironment(has_window=True)
