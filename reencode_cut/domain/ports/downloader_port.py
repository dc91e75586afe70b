from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from ...jobs.paths import DownloadPaths


class StreamDownloaderPort(ABC):
    @abstractmethod
    def find_executable(self) -> str | None:
        raise NotImplementedError

    @abstractmethod
    def download(
        self,
        executable: str,
        url: str,
        paths: DownloadPaths,
        *,
        window: tuple[float, float] | None = None,
    ) -> Path:
        raise NotImplementedError
