from __future__ import annotations

import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import TextIO

from ..domain.ports.logger_port import LoggerPort

_RED = "\x1b[31m"
_YELLOW = "\x1b[33m"
_PLAIN = "\x1b[0m"


class JobLogger(LoggerPort):
    """Console logger for a run, optionally mirrored to a timestamped log file."""

    def __init__(
        self,
        log_path: Path | None = None,
        *,
        out: TextIO | None = None,
        err: TextIO | None = None,
    ):
        self.log_path = log_path
        self.out = out if out is not None else sys.stdout
        self.err = err if err is not None else sys.stderr
        if self.log_path is not None:
            self.log_path.parent.mkdir(parents=True, exist_ok=True)

    def write(self, message: str) -> None:
        if self.log_path is None:
            return
        ts = datetime.now(timezone.utc).isoformat()
        line = f"[{ts}] {message}"
        with self.log_path.open("a", encoding="utf-8") as f:
            f.write(line + "\n")

    def _emit(self, stream: TextIO, marker: str, color: str, message: str) -> None:
        if marker:
            label = f"{color}{marker}{_PLAIN}" if stream.isatty() else marker
            print(f"{label} {message}", file=stream, flush=True)
        else:
            print(message, file=stream, flush=True)

    def info(self, message: str) -> None:
        self._emit(self.out, "", "", message)
        self.write(message)

    def warning(self, message: str) -> None:
        self._emit(self.err, "Warning:", _YELLOW, message)
        self.write(f"WARNING {message}")

    def error(self, message: str) -> None:
        self._emit(self.err, "Error:", _RED, message)
        self.write(f"ERROR {message}")
