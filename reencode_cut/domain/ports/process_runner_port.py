from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence


class ProcessRunnerPort(ABC):
    @abstractmethod
    def run(self, command: str, args: Sequence[str]) -> None:
        raise NotImplementedError
