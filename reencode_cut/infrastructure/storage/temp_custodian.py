from __future__ import annotations

import time
from pathlib import Path
from typing import Callable

from ...domain.entities.source import TempFileRecord
from ...domain.ports.logger_port import LoggerPort
from ...domain.ports.temp_custodian_port import TempCustodianPort

DEFAULT_MAX_AGE_HOURS = 24
DEFAULT_MAX_SIZE_BYTES = 10 * 1024 ** 3


class TempFileCustodian(TempCustodianPort):
    """Keeps the shared download directory bounded by file age and total size.

    Rotation covers every file below the directory, including files left by
    earlier runs, and removes empty per-download directories afterwards.
    Deletion failures are reported through the logger and never raised.
    """

    def __init__(
        self,
        *,
        max_age_hours: float = DEFAULT_MAX_AGE_HOURS,
        max_size_bytes: int = DEFAULT_MAX_SIZE_BYTES,
        logger: LoggerPort | None = None,
        clock: Callable[[], float] = time.time,
    ):
        self.max_age_ms = max_age_hours * 3600 * 1000
        self.max_size_bytes = max_size_bytes
        self.logger = logger
        self.clock = clock

    def scan(self, directory: Path) -> list[TempFileRecord]:
        records: list[TempFileRecord] = []
        if not directory.is_dir():
            return records
        for path in directory.rglob("*"):
            try:
                if not path.is_file():
                    continue
                st = path.stat()
            except OSError:
                continue
            records.append(TempFileRecord(path=path, size_bytes=st.st_size, modified_at_ms=st.st_mtime_ns / 1_000_000))
        return records

    def cleanup(self, directory: Path, base_name: str) -> None:
        if not directory.is_dir():
            return

        for path in directory.iterdir():
            if path.is_file() and path.name.startswith(base_name):
                self._delete(path)

        try:
            if not any(directory.iterdir()):
                directory.rmdir()
        except OSError as exc:
            self._report(f"Could not remove temp directory {directory}: {exc}")

    def rotate(self, directory: Path) -> None:
        if not directory.is_dir():
            return

        cutoff_ms = self.clock() * 1000 - self.max_age_ms
        for record in self.scan(directory):
            if record.modified_at_ms < cutoff_ms:
                self._delete(record.path)

        remaining = self.scan(directory)
        total = sum(r.size_bytes for r in remaining)
        if total > self.max_size_bytes:
            for record in sorted(remaining, key=lambda r: r.modified_at_ms):
                if total <= self.max_size_bytes:
                    break
                if self._delete(record.path):
                    total -= record.size_bytes

        self._prune_empty_dirs(directory)

    def _prune_empty_dirs(self, root: Path) -> None:
        subdirs = sorted((p for p in root.rglob("*") if p.is_dir()), key=lambda p: len(p.parts), reverse=True)
        for sub in subdirs:
            try:
                if not any(sub.iterdir()):
                    sub.rmdir()
            except OSError as exc:
                self._report(f"Could not remove temp directory {sub}: {exc}")

    def _delete(self, path: Path) -> bool:
        try:
            path.unlink(missing_ok=True)
            return True
        except OSError as exc:
            self._report(f"Failed to delete temp file {path}: {exc}")
            return False

    def _report(self, message: str) -> None:
        if self.logger is not None:
            self.logger.error(message)
