from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from pydantic import BaseModel


class AcquiredSource(BaseModel):
    local_path: str
    is_local_file: bool
    needs_cleanup: bool
    temp_dir: Path | None = None
    base_name: str | None = None
    seek_offset: float = 0

    @property
    def owns_download(self) -> bool:
        return self.temp_dir is not None and self.base_name is not None


class SourceResolution(BaseModel):
    status: Literal["resolved", "fallback", "fatal"]
    source: AcquiredSource | None = None
    reason: str | None = None

    @classmethod
    def resolved(cls, source: AcquiredSource) -> SourceResolution:
        return cls(status="resolved", source=source)

    @classmethod
    def fallback(cls, source: AcquiredSource, reason: str) -> SourceResolution:
        return cls(status="fallback", source=source, reason=reason)

    @classmethod
    def fatal(cls, reason: str) -> SourceResolution:
        return cls(status="fatal", reason=reason)


@dataclass
class TempFileRecord:
    path: Path
    size_bytes: int
    modified_at_ms: float
