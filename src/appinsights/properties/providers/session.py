"""Session context and the automatic session manager."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .._utils import new_id
from ..config import (
    DEFAULT_SESSION_EXPIRATION_MS,
    DEFAULT_SESSION_RENEWAL_MS,
)

if TYPE_CHECKING:
    from ..config import TelemetryConfig

logger = logging.getLogger(__name__)

# Minimum gap between two renewal-date refreshes of an active session.
SESSION_UPDATE_INTERVAL_MS = 60 * 1000


def _now_ms() -> float:
    return time.time() * 1000


@dataclass
class Session:
    """A user session.

    Args:
        id: Session identifier
        acquisition_date: Creation time in epoch milliseconds
        renewal_date: Last activity time in epoch milliseconds
    """

    id: Any = None
    acquisition_date: float | None = None
    renewal_date: float | None = None


class SessionManager:
    """Maintains the automatically generated session.

    The session rotates when it has been inactive for longer than the renewal
    interval or has existed for longer than the expiration interval.
    """

    def __init__(self, config: TelemetryConfig | None = None) -> None:
        """Initialize session manager.

        Args:
            config: Telemetry configuration providing the session intervals
        """
        self.renewal_ms = (
            config.session_renewal_ms if config else DEFAULT_SESSION_RENEWAL_MS
        )
        self.expiration_ms = (
            config.session_expiration_ms if config else DEFAULT_SESSION_EXPIRATION_MS
        )
        self.automatic_session = Session()

    def update(self, now: float | None = None) -> Session:
        """Refresh the automatic session, rotating it if it has lapsed.

        Args:
            now: Current time in epoch milliseconds (defaults to wall clock)

        Returns:
            The current automatic session
        """
        now = _now_ms() if now is None else now
        session = self.automatic_session

        if not session.id or self._has_lapsed(session, now):
            self._renew(now)
        elif now - (session.renewal_date or now) > SESSION_UPDATE_INTERVAL_MS:
            session.renewal_date = now

        return self.automatic_session

    def _has_lapsed(self, session: Session, now: float) -> bool:
        acquired = session.acquisition_date or 0
        renewed = session.renewal_date or 0
        return now - acquired > self.expiration_ms or now - renewed > self.renewal_ms

    def _renew(self, now: float) -> None:
        previous = self.automatic_session.id
        self.automatic_session = Session(
            id=new_id(), acquisition_date=now, renewal_date=now
        )
        logger.debug(
            "Session renewed: %s -> %s", previous, self.automatic_session.id
        )
