"""Well-known keys written onto telemetry items.

This module provides the tag keys, extension bucket names and data types
shared by the context providers and the telemetry context.

Architecture:
    - Attr.Tag.*: Flat keys written into ``item["tags"]``
    - Attr.Ext.*: Extension bucket names inside ``item["ext"]``
    - Attr.Field.*: Field names used inside extension buckets
    - DataType.*: Base types of telemetry items

Usage:
    from appinsights.properties.attributes import Attr, DataType

    tags[Attr.Tag.APPLICATION_VERSION] = "1.2.3"
    item["ext"][Attr.Ext.DEVICE] = {Attr.Field.DEVICE_LOCAL_ID: "browser"}
"""

from __future__ import annotations

from enum import Enum


class Attr:
    """Root namespace for item keys."""

    class Item:
        """Top-level telemetry item fields."""

        TAGS = "tags"
        EXT = "ext"
        BASE_TYPE = "baseType"

    class Tag:
        """Context tag keys (flat, namespaced)."""

        APPLICATION_VERSION = "ai.application.ver"
        APPLICATION_BUILD = "ai.application.build"

        INTERNAL_AGENT_VERSION = "ai.internal.agentVersion"
        INTERNAL_SDK_VERSION = "ai.internal.sdkVersion"
        INTERNAL_SNIPPET = "ai.internal.snippet"
        INTERNAL_SDK_SRC = "ai.internal.sdkSrc"

        LOCATION_IP = "ai.location.ip"

        USER_ACCOUNT_ID = "ai.user.accountId"

    class Ext:
        """Extension bucket names."""

        APP = "app"
        DEVICE = "device"
        OS = "os"
        TRACE = "trace"
        USER = "user"
        WEB = "web"

        ALL = (DEVICE, USER, WEB, OS, APP, TRACE)

    class Field:
        """Field names inside extension buckets."""

        SESSION_ID = "sesId"

        DEVICE_LOCAL_ID = "localId"
        DEVICE_IP = "ip"
        DEVICE_MODEL = "model"
        DEVICE_CLASS = "deviceClass"

        TRACE_ID = "traceID"
        TRACE_NAME = "name"
        TRACE_PARENT_ID = "parentID"

        USER_ID = "id"
        USER_AUTH_ID = "authId"


class DataType(str, Enum):
    """Base types of telemetry items that receive extra internal tags."""

    MESSAGE = "MessageData"
    PAGE_VIEW = "PageviewData"


REQUEST_ID_NAME = "Request-Id"
TRACE_PARENT_NAME = "traceparent"
