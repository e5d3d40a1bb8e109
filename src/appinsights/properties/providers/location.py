"""Location context provider."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class Location:
    """Client location; only the IP address is reported."""

    ip: Any = None
