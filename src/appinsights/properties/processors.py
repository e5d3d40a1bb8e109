"""Span processor stamping telemetry context onto OpenTelemetry spans."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from opentelemetry.sdk.trace import ReadableSpan, Span, SpanProcessor

from .attributes import Attr

if TYPE_CHECKING:
    from opentelemetry import context as context_api

    from .context import TelemetryContext, TelemetryItem

_SCALAR_TYPES = (str, bool, int, float)


def flatten_item(item: TelemetryItem) -> dict[str, Any]:
    """Flatten an item's tags and extension buckets into span attributes.

    Tags keep their key; extension fields become ``ext.<bucket>.<field>``.
    Non-scalar values are skipped.

    Examples:
        >>> flatten_item({"tags": {"ai.location.ip": "10.0.0.1"},
        ...               "ext": {"device": {"localId": "browser"}}})
        {'ai.location.ip': '10.0.0.1', 'ext.device.localId': 'browser'}
    """
    attributes: dict[str, Any] = {}

    tags = item.get(Attr.Item.TAGS)
    if isinstance(tags, Mapping):
        for key, value in tags.items():
            if isinstance(value, _SCALAR_TYPES):
                attributes[key] = value

    ext = item.get(Attr.Item.EXT)
    if isinstance(ext, Mapping):
        for bucket, fields in ext.items():
            if not isinstance(fields, Mapping):
                continue
            for key, value in fields.items():
                if isinstance(value, _SCALAR_TYPES):
                    attributes[f"{Attr.Item.EXT}.{bucket}.{key}"] = value

    return attributes


class TelemetryContextSpanProcessor(SpanProcessor):
    """Span processor that applies a TelemetryContext to every started span."""

    def __init__(
        self,
        telemetry_context: TelemetryContext,
        base_type: str | None = None,
    ):
        """Initialize the processor.

        Args:
            telemetry_context: Context whose providers are stamped on spans
            base_type: Base type assigned to the item built for each span
        """
        self._telemetry_context = telemetry_context
        self._base_type = base_type

    def on_start(
        self, span: Span, parent_context: context_api.Context | None = None
    ) -> None:
        """Called when a span is started."""
        item: dict[str, Any] = {}
        if self._base_type:
            item[Attr.Item.BASE_TYPE] = self._base_type
        self._telemetry_context.apply_all(item)

        attributes = flatten_item(item)
        if attributes:
            span.set_attributes(attributes)

    def on_end(self, span: ReadableSpan) -> None:
        """Called when a span ends."""

    def shutdown(self) -> None:
        """Nothing to release."""

    def force_flush(self, timeout_millis: int = 30000) -> bool:
        """Nothing is buffered."""
        return True


__all__ = ["TelemetryContextSpanProcessor", "flatten_item"]
