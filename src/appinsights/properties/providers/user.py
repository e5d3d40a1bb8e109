"""User context provider."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from .._utils import new_id

if TYPE_CHECKING:
    from ..config import TelemetryConfig

logger = logging.getLogger(__name__)

_INVALID_ID_CHARS = (",", ";", "=", "|")


def _validate_user_input(value: Any) -> bool:
    return (
        isinstance(value, str)
        and bool(value)
        and not any(char in value for char in _INVALID_ID_CHARS)
    )


class User:
    """The user the telemetry is attributed to.

    ``id`` is an anonymous identifier generated per context, while
    ``authenticated_id`` and ``account_id`` are supplied by the host.
    """

    def __init__(self, config: TelemetryConfig | None = None) -> None:
        """Initialize user context.

        Args:
            config: Telemetry configuration providing the default account id
        """
        self.id: Any = new_id()
        self.authenticated_id: Any = None
        self.account_id: Any = config.account_id if config else None

    def set_authenticated_user_context(
        self,
        authenticated_user_id: str,
        account_id: str | None = None,
    ) -> bool:
        """Attach an authenticated user (and optionally an account) id.

        Ids containing ``,``, ``;``, ``=`` or ``|`` are rejected.

        Args:
            authenticated_user_id: Host-defined authenticated user id
            account_id: Optional host-defined account id

        Returns:
            True if the ids were accepted
        """
        if not _validate_user_input(authenticated_user_id) or (
            account_id is not None and not _validate_user_input(account_id)
        ):
            logger.warning(
                "Setting auth user context failed. User auth/account id should be "
                "of type string, and not contain commas, semi-colons, equal signs "
                "or vertical-bars."
            )
            return False

        self.authenticated_id = authenticated_user_id
        if account_id is not None:
            self.account_id = account_id
        return True

    def clear_authenticated_user_context(self) -> None:
        """Forget the authenticated user and account ids."""
        self.authenticated_id = None
        self.account_id = None
