from __future__ import annotations

import os
import time
from pathlib import Path
from uuid import uuid4

from ..shared.fs__shared_util import format_hms

AUDIO_ONLY_EXT = ".mp3"


class JobPaths:
    def __init__(self, input_dir: Path, source_filename: str, *, output_dir: str = ".", audio_only: bool = False):
        self.input_dir = Path(os.path.abspath(input_dir))
        self.source_filename = source_filename
        self.output_dir = Path(os.path.abspath(self.input_dir / output_dir))
        self.audio_only = audio_only

        source = Path(source_filename)
        self.stem = source.stem
        self.source_ext = source.suffix

    @property
    def source_path(self) -> Path:
        return self.input_dir / self.source_filename

    @property
    def output_ext(self) -> str:
        return AUDIO_ONLY_EXT if self.audio_only else self.source_ext

    def cut_output_path(self, index: int, total: int, start: float, end: float) -> Path:
        label = "" if total == 1 else str(index)
        name = f"(cut{label}) {self.stem} ({format_hms(start)} - {format_hms(end)}){self.output_ext}"
        return self.output_dir / name

    def merged_output_path(self, count: int) -> Path:
        return self.output_dir / f"({count} merged cuts) {self.stem}{self.output_ext}"

    def new_manifest_path(self) -> Path:
        return self.output_dir / f".merging-{uuid4().hex[:8]}.txt"


class DownloadPaths:
    """One download per run, isolated in its own directory under the shared temp root."""

    def __init__(self, temp_root: Path, base_name: str | None = None):
        self.temp_root = Path(temp_root)
        self.base_name = base_name or f"stream_{int(time.time() * 1000)}_{uuid4().hex[:6]}"
        self.job_dir = self.temp_root / self.base_name

    @property
    def output_template(self) -> Path:
        return self.job_dir / f"{self.base_name}.%(ext)s"
