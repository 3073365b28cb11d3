from __future__ import annotations

import logging
from typing import Protocol

from .model import SecurityAlert

security_logger = logging.getLogger("project_tracker.security")


class SecurityAlertNotifier(Protocol):
    """Channel for denied-access alerts.

    Implementations raise NotificationError when delivery fails.
    """

    def notify(self, alert: SecurityAlert) -> None:
        raise NotImplementedError


class LoggingSecurityAlertNotifier(SecurityAlertNotifier):
    """Writes alerts to the security logger.

    Deployments that need email or chat delivery plug in their own notifier.
    """

    def __init__(self, logger: logging.Logger | None = None):
        self._logger = logger or security_logger

    def notify(self, alert: SecurityAlert) -> None:
        self._logger.warning(
            "SECURITY ALERT: access denied user_id=%s role=%s resource=%s at %s",
            alert.user_id,
            alert.user_role,
            alert.resource,
            alert.timestamp,
        )
