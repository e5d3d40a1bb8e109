"""Context providers stamped onto telemetry items.

Each provider is a plain attribute holder owned by the telemetry context.
"""

from .application import Application
from .device import Device
from .internal import Internal
from .location import Location
from .records import OperatingSystem, Web
from .session import Session, SessionManager
from .telemetry_trace import TelemetryTrace
from .user import User

__all__ = [
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
]
