import logging
from typing import Any

from leave_management.repositories.base import LeaveRepository


class BaseService:
    """Shared plumbing for services: an injected repository and a per-class logger."""

    def __init__(self, repository: LeaveRepository):
        self.repository = repository
        self._logger = logging.getLogger(type(self).__module__)

    def log_info(self, message: str, **extra: Any) -> None:
        self._logger.info(message, extra=extra or None)

    def log_warning(self, message: str, **extra: Any) -> None:
        self._logger.warning(message, extra=extra or None)
