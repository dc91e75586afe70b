from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from ...jobs.models import CutOptions


class TranscoderPort(ABC):
    @abstractmethod
    def render(self, source: str, destination: Path, start: float, duration: float, options: CutOptions) -> Path:
        raise NotImplementedError

    @abstractmethod
    def merge(self, manifest_path: Path, destination: Path) -> Path:
        raise NotImplementedError
