from __future__ import annotations

from abc import ABC, abstractmethod
from ..entities.error_log import ErrorLog


class ErrorMonitorPort(ABC):
    """Persists failed runs so they can be inspected after the player has closed the console."""

    @abstractmethod
    async def log_error(self, error: ErrorLog) -> None:
        raise NotImplementedError
