from __future__ import annotations

import os
import shutil
import subprocess
import time
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..domain.ports.logger_port import LoggerPort

PARTIAL_DOWNLOAD_MARKER = ".part"


def ensure_directory(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    return path


def is_subdirectory(parent: Path, child: Path) -> bool:
    parent_abs = Path(os.path.abspath(parent))
    child_abs = Path(os.path.abspath(parent_abs / child))
    try:
        relative = child_abs.relative_to(parent_abs)
    except ValueError:
        return False
    return relative != Path(".") and ".." not in relative.parts


def transfer_timestamps(
    source: Path | None,
    dest: Path,
    *,
    use_current_time: bool = False,
    logger: LoggerPort | None = None,
) -> None:
    try:
        if use_current_time:
            now = time.time()
            os.utime(dest, (now, now))
        elif source is not None and source.exists():
            st = source.stat()
            os.utime(dest, ns=(st.st_atime_ns, st.st_mtime_ns))
    except OSError as exc:
        if logger is not None:
            logger.error(f"Failed to set file timestamps on {dest}: {exc}")


def find_most_recent_file(directory: Path, prefix: str) -> Path | None:
    if not directory.is_dir():
        return None

    candidates = [
        p for p in directory.iterdir()
        if p.is_file() and p.name.startswith(prefix) and PARTIAL_DOWNLOAD_MARKER not in p.name
    ]
    if not candidates:
        return None

    candidates.sort(key=lambda p: p.stat().st_mtime_ns, reverse=True)
    return candidates[0]


def format_hms(seconds: float) -> str:
    """Human label for a cut boundary, e.g. ``1h2m3.5s``; whole seconds drop the decimal."""
    seconds = max(float(seconds), 0.0)
    hours = int(seconds // 3600)
    minutes = int((seconds % 3600) // 60)
    remainder = f"{seconds % 60:.1f}"
    if remainder.endswith(".0"):
        remainder = remainder[:-2]

    parts: list[str] = []
    if hours > 0:
        parts.append(f"{hours}h")
    if minutes > 0:
        parts.append(f"{minutes}m")
    if remainder != "0":
        parts.append(f"{remainder}s")
    return "".join(parts) or "0"


def format_seconds_arg(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def which(cmd: str) -> str | None:
    return shutil.which(cmd)


def run(cmd: list[str], *, check: bool = True, cwd: Path | None = None, timeout: float | None = None):
    return subprocess.run(cmd, cwd=str(cwd) if cwd else None, check=check, timeout=timeout)
