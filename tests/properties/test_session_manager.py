"""Tests for the automatic session manager."""

import pytest

from appinsights.properties import SessionManager, TelemetryConfig
from appinsights.properties.providers.session import SESSION_UPDATE_INTERVAL_MS

START = 1_700_000_000_000.0


@pytest.fixture
def manager() -> SessionManager:
    return SessionManager(
        TelemetryConfig(
            session_renewal_ms=30 * 60 * 1000,
            session_expiration_ms=24 * 60 * 60 * 1000,
        )
    )


class TestSessionManager:
    """Tests for SessionManager.update."""

    def test_no_session_before_update(self, manager: SessionManager) -> None:
        assert manager.automatic_session.id is None

    def test_first_update_starts_session(self, manager: SessionManager) -> None:
        session = manager.update(now=START)
        assert isinstance(session.id, str)
        assert session.acquisition_date == START
        assert session.renewal_date == START

    def test_activity_keeps_session(self, manager: SessionManager) -> None:
        first = manager.update(now=START).id
        assert manager.update(now=START + 10 * 60 * 1000).id == first

    def test_renewal_date_refreshed_after_interval(
        self, manager: SessionManager
    ) -> None:
        manager.update(now=START)
        later = START + SESSION_UPDATE_INTERVAL_MS + 1
        assert manager.update(now=later).renewal_date == later

    def test_renewal_date_not_refreshed_within_interval(
        self, manager: SessionManager
    ) -> None:
        manager.update(now=START)
        assert manager.update(now=START + 1000).renewal_date == START

    def test_inactivity_rotates_session(self, manager: SessionManager) -> None:
        first = manager.update(now=START).id
        rotated = manager.update(now=START + manager.renewal_ms + 1)
        assert rotated.id != first
        assert rotated.acquisition_date == START + manager.renewal_ms + 1

    def test_expiration_rotates_active_session(self, manager: SessionManager) -> None:
        first = manager.update(now=START).id
        manager.automatic_session.renewal_date = START + manager.expiration_ms
        rotated = manager.update(now=START + manager.expiration_ms + 1)
        assert rotated.id != first

    def test_defaults_without_config(self) -> None:
        manager = SessionManager()
        assert manager.renewal_ms == 30 * 60 * 1000
        assert manager.expiration_ms == 24 * 60 * 60 * 1000
