from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path


class TempCustodianPort(ABC):
    @abstractmethod
    def cleanup(self, directory: Path, base_name: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def rotate(self, directory: Path) -> None:
        raise NotImplementedError
