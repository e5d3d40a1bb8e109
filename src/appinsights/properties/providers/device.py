"""Device context provider."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

DEFAULT_DEVICE_ID = "browser"
DEFAULT_DEVICE_CLASS = "Browser"


@dataclass
class Device:
    """The device the telemetry is collected on.

    Args:
        id: Device identifier, written as ``localId``
        device_class: Device class such as Browser, PC or Phone
        ip: Device IP address
        model: Device model
        resolution: Screen resolution
        locale: Device locale
        oem_name: Manufacturer name
    """

    id: Any = DEFAULT_DEVICE_ID
    device_class: Any = DEFAULT_DEVICE_CLASS
    ip: Any = None
    model: Any = None
    resolution: Any = None
    locale: Any = None
    oem_name: Any = None
