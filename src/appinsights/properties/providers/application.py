"""Application context provider."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class Application:
    """Version and build of the application emitting telemetry."""

    ver: Any = None
    build: Any = None
