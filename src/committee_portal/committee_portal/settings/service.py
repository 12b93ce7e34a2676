from __future__ import annotations

import logging
from typing import Optional

from ..common.validators import require_non_empty
from ..core.constants import DEFAULT_MAINTENANCE_MESSAGE, MAINTENANCE_MESSAGE_KEY, MAINTENANCE_MODE_KEY
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, DomainError
from .model import MaintenanceStatus
from .repository import SettingsRepository

logger = logging.getLogger(__name__)

# Reachable for everyone while maintenance mode is on.
MAINTENANCE_EXEMPT_PATHS = frozenset(
    {
        "/api/auth/login",
        "/api/auth/logout",
        "/api/session/check",
        "/api/maintenance",
    }
)


class MaintenanceService:
    """Site-wide maintenance switch stored in site_settings."""

    def __init__(self, settings: SettingsRepository):
        self._settings = settings

    def get_status(self) -> MaintenanceStatus:
        try:
            mode = self._settings.get(MAINTENANCE_MODE_KEY)
            message = self._settings.get(MAINTENANCE_MESSAGE_KEY)
        except DomainError as e:
            # Missing table or unreachable store: treat the site as open.
            logger.warning("maintenance status unavailable, assuming off: %s", e)
            return MaintenanceStatus(enabled=False, message=DEFAULT_MAINTENANCE_MESSAGE)

        return MaintenanceStatus(
            enabled=bool(mode) and mode.value.strip().lower() == "true",
            message=(message.value if message and message.value else DEFAULT_MAINTENANCE_MESSAGE),
        )

    @staticmethod
    def _require_admin(current_role: Optional[Role]) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only administrators can change maintenance mode")

    def toggle(self, *, current_role: Optional[Role], user_id: int) -> MaintenanceStatus:
        self._require_admin(current_role)
        enabled = not self.get_status().enabled
        self._settings.put(MAINTENANCE_MODE_KEY, "true" if enabled else "false", updated_by=user_id)
        logger.warning("maintenance mode %s by user %s", "enabled" if enabled else "disabled", user_id)
        return self.get_status()

    def set_message(self, *, current_role: Optional[Role], user_id: int, message: str) -> MaintenanceStatus:
        self._require_admin(current_role)
        message = require_non_empty(message, "Message")
        self._settings.put(MAINTENANCE_MESSAGE_KEY, message, updated_by=user_id)
        logger.info("maintenance message updated by user %s", user_id)
        return self.get_status()

    def is_blocked(self, path: str, role: Optional[Role]) -> bool:
        if role == Role.ADMIN or path in MAINTENANCE_EXEMPT_PATHS:
            return False
        return self.get_status().enabled
