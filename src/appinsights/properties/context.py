"""Telemetry context: stamps contextual metadata onto telemetry items.

A :class:`TelemetryContext` owns one instance of each context provider for
the lifetime of the execution scope. Each ``apply_*`` operation copies one
provider onto an item's ``tags`` / ``ext`` buckets, and :meth:`clean_up`
prunes the extension buckets that ended up empty.

Example:
    from appinsights.properties import HostEnvironment, TelemetryContext

    context = TelemetryContext(environment=HostEnvironment(has_window=True))
    context.application.ver = "1.2.3"

    item = {"baseType": "EventData"}
    context.apply_all(item)
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, MutableMapping
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel

from ._utils import get_set_value, is_string, remove_empty, set_value
from .attributes import Attr, DataType
from .config import TelemetryConfig
from .providers import (
    Application,
    Device,
    Internal,
    Location,
    Session,
    SessionManager,
    TelemetryTrace,
    User,
)
from .trace_parent import discover_trace_parent

if TYPE_CHECKING:
    from .environment import HostEnvironment
    from .providers import OperatingSystem, Web
    from .trace_parent import TraceParent

TelemetryItem = MutableMapping[str, Any]

_SNIPPET_BASE_TYPES = (DataType.MESSAGE.value, DataType.PAGE_VIEW.value)


def _as_record(value: Any) -> dict[str, Any] | None:
    if isinstance(value, BaseModel):
        return value.model_dump(by_alias=True, exclude_none=True)
    if isinstance(value, Mapping):
        return dict(value)
    return None


class TelemetryContext:
    """Context providers for the current execution scope.

    Providers that only make sense with an interactive UI host (session,
    device, location, user, operation identity) are None otherwise; every
    ``apply_*`` operation is a no-op for an unset provider.

    Attributes:
        application: Application version and build
        internal: SDK self-description
        device: Device details (interactive hosts only)
        location: Client location (interactive hosts only)
        user: User ids (interactive hosts only)
        session: Host-supplied session (interactive hosts only)
        session_manager: Automatic session (interactive hosts only)
        telemetry_trace: Operation identity (interactive hosts only)
        os: Operating-system record assigned by the host
        web: Web record assigned by the host
    """

    def __init__(
        self,
        config: TelemetryConfig | None = None,
        environment: HostEnvironment | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        """Initialize providers and discover the trace parent.

        Args:
            config: Telemetry configuration (defaults to TelemetryConfig())
            environment: Host environment capabilities (None means non-interactive)
            logger: Logger handed to the operation identity provider
        """
        config = config or TelemetryConfig()

        self.application: Application | None = Application()
        self.internal: Internal | None = Internal(config)
        self.device: Device | None = None
        self.location: Location | None = None
        self.user: User | None = None
        self.session: Session | None = None
        self.session_manager: SessionManager | None = None
        self.telemetry_trace: TelemetryTrace | None = None
        self.os: OperatingSystem | Mapping[str, Any] | None = None
        self.web: Web | Mapping[str, Any] | None = None

        self.discovered_trace_parent: TraceParent | None = None

        if environment is not None and environment.has_window:
            if not config.disable_trace_parent:
                self.discovered_trace_parent = discover_trace_parent(environment)

            self.session_manager = SessionManager(config)
            self.device = Device()
            self.location = Location()
            self.user = User(config)

            parent_id = None
            if self.discovered_trace_parent is not None:
                parent_id = self.discovered_trace_parent.span_id
            # Only the span id is carried over; the operation gets its own trace id.
            self.telemetry_trace = TelemetryTrace(None, parent_id, None, logger)
            self.session = Session()

    def get_session_id(self) -> str | None:
        """Return the explicit session id, else the automatic one, else None."""
        session = self.session
        if session is not None and is_string(session.id):
            return session.id

        auto_session = (
            self.session_manager.automatic_session if self.session_manager else None
        )
        if auto_session is not None and is_string(auto_session.id):
            return auto_session.id
        return None

    def apply_session_context(self, item: TelemetryItem, item_ctx: Any = None) -> None:
        session_id = self.get_session_id()
        if session_id is None:
            return
        ext_app = get_set_value(get_set_value(item, Attr.Item.EXT), Attr.Ext.APP)
        set_value(ext_app, Attr.Field.SESSION_ID, session_id, is_string)

    def apply_operating_system_context(
        self, item: TelemetryItem, item_ctx: Any = None
    ) -> None:
        record = _as_record(self.os)
        if record is not None:
            set_value(get_set_value(item, Attr.Item.EXT), Attr.Ext.OS, record)

    def apply_application_context(
        self, item: TelemetryItem, item_ctx: Any = None
    ) -> None:
        application = self.application
        if application is None:
            return
        tags = get_set_value(item, Attr.Item.TAGS)
        set_value(tags, Attr.Tag.APPLICATION_VERSION, application.ver, is_string)
        set_value(tags, Attr.Tag.APPLICATION_BUILD, application.build, is_string)

    def apply_device_context(self, item: TelemetryItem, item_ctx: Any = None) -> None:
        device = self.device
        if device is None:
            return
        ext_device = get_set_value(get_set_value(item, Attr.Item.EXT), Attr.Ext.DEVICE)
        set_value(ext_device, Attr.Field.DEVICE_LOCAL_ID, device.id, is_string)
        set_value(ext_device, Attr.Field.DEVICE_IP, device.ip, is_string)
        set_value(ext_device, Attr.Field.DEVICE_MODEL, device.model, is_string)
        set_value(ext_device, Attr.Field.DEVICE_CLASS, device.device_class, is_string)

    def apply_internal_context(
        self, item: TelemetryItem, item_ctx: Any = None
    ) -> None:
        internal = self.internal
        if internal is None:
            return
        tags = get_set_value(item, Attr.Item.TAGS)
        set_value(
            tags, Attr.Tag.INTERNAL_AGENT_VERSION, internal.agent_version, is_string
        )
        set_value(tags, Attr.Tag.INTERNAL_SDK_VERSION, internal.sdk_version, is_string)

        if item.get(Attr.Item.BASE_TYPE) in _SNIPPET_BASE_TYPES:
            set_value(tags, Attr.Tag.INTERNAL_SNIPPET, internal.snippet_ver, is_string)
            set_value(tags, Attr.Tag.INTERNAL_SDK_SRC, internal.sdk_src, is_string)

    def apply_location_context(
        self, item: TelemetryItem, item_ctx: Any = None
    ) -> None:
        location = self.location
        if location is None:
            return
        tags = get_set_value(item, Attr.Item.TAGS)
        set_value(tags, Attr.Tag.LOCATION_IP, location.ip, is_string)

    def apply_operation_context(
        self, item: TelemetryItem, item_ctx: Any = None
    ) -> None:
        telemetry_trace = self.telemetry_trace
        if telemetry_trace is None:
            return
        ext_trace = get_set_value(get_set_value(item, Attr.Item.EXT), Attr.Ext.TRACE)
        set_value(ext_trace, Attr.Field.TRACE_ID, telemetry_trace.trace_id, is_string)
        set_value(ext_trace, Attr.Field.TRACE_NAME, telemetry_trace.name, is_string)
        set_value(
            ext_trace, Attr.Field.TRACE_PARENT_ID, telemetry_trace.parent_id, is_string
        )

    def apply_web_context(self, item: TelemetryItem, item_ctx: Any = None) -> None:
        record = _as_record(self.web)
        if record is not None:
            set_value(get_set_value(item, Attr.Item.EXT), Attr.Ext.WEB, record)

    def apply_user_context(self, item: TelemetryItem, item_ctx: Any = None) -> None:
        user = self.user
        if user is None:
            return
        tags = get_set_value(item, Attr.Item.TAGS)
        set_value(tags, Attr.Tag.USER_ACCOUNT_ID, user.account_id, is_string)

        ext_user = get_set_value(get_set_value(item, Attr.Item.EXT), Attr.Ext.USER)
        set_value(ext_user, Attr.Field.USER_ID, user.id, is_string)
        set_value(ext_user, Attr.Field.USER_AUTH_ID, user.authenticated_id, is_string)

    def clean_up(self, item: TelemetryItem, item_ctx: Any = None) -> None:
        """Remove extension buckets that hold no fields."""
        ext = item.get(Attr.Item.EXT)
        if not isinstance(ext, MutableMapping):
            return
        for name in Attr.Ext.ALL:
            remove_empty(ext, name)

    def apply_all(self, item: TelemetryItem, item_ctx: Any = None) -> TelemetryItem:
        """Apply every context in the conventional order, then clean up.

        The automatic session is refreshed first so that a lapsed session
        rotates before its id is stamped.

        Args:
            item: Telemetry item to enrich in place
            item_ctx: Processing context forwarded to each operation

        Returns:
            The same item, for chaining
        """
        if self.session_manager is not None:
            self.session_manager.update()

        self.apply_application_context(item, item_ctx)
        self.apply_device_context(item, item_ctx)
        self.apply_internal_context(item, item_ctx)
        self.apply_location_context(item, item_ctx)
        self.apply_operation_context(item, item_ctx)
        self.apply_web_context(item, item_ctx)
        self.apply_user_context(item, item_ctx)
        self.apply_session_context(item, item_ctx)
        self.apply_operating_system_context(item, item_ctx)
        self.clean_up(item, item_ctx)
        return item
