import os
import time
from pathlib import Path

from reencode_cut.shared.fs__shared_util import (
    ensure_directory,
    find_most_recent_file,
    format_hms,
    format_seconds_arg,
    is_subdirectory,
    transfer_timestamps,
)


def test_is_subdirectory_rejects_same_and_escaping_paths(tmp_path: Path):
    assert is_subdirectory(tmp_path, tmp_path) is False
    assert is_subdirectory(tmp_path, tmp_path / ".") is False
    assert is_subdirectory(tmp_path, tmp_path / ".." / "elsewhere") is False
    assert is_subdirectory(tmp_path, tmp_path / "cuts" / ".." / ".." / "x") is False
    assert is_subdirectory(tmp_path / "a", tmp_path / "b") is False


def test_is_subdirectory_accepts_descendants(tmp_path: Path):
    assert is_subdirectory(tmp_path, tmp_path / "cuts") is True
    assert is_subdirectory(tmp_path, tmp_path / "cuts" / "deep" / "er") is True
    assert is_subdirectory(tmp_path, Path("relative-child")) is True


def test_ensure_directory_is_idempotent(tmp_path: Path):
    target = tmp_path / "a" / "b"
    assert ensure_directory(target) == target
    assert ensure_directory(target) == target
    assert target.is_dir()


def test_find_most_recent_file_skips_partial_downloads(tmp_path: Path):
    old = tmp_path / "stream_1.webm"
    new = tmp_path / "stream_1.mp4"
    partial = tmp_path / "stream_1.mkv.part"
    other = tmp_path / "other.mp4"
    for p in (old, new, partial, other):
        p.write_bytes(b"x")

    now = time.time()
    os.utime(old, (now - 100, now - 100))
    os.utime(new, (now - 10, now - 10))
    os.utime(partial, (now, now))
    os.utime(other, (now, now))

    assert find_most_recent_file(tmp_path, "stream_1") == new
    assert find_most_recent_file(tmp_path, "missing") is None
    assert find_most_recent_file(tmp_path / "nope", "stream_1") is None


def test_transfer_timestamps_copies_source_times(tmp_path: Path):
    src = tmp_path / "src.mp4"
    dst = tmp_path / "dst.mp4"
    src.write_bytes(b"a")
    dst.write_bytes(b"b")
    os.utime(src, (1_000_000, 2_000_000))

    transfer_timestamps(src, dst)

    assert int(dst.stat().st_mtime) == 2_000_000
    assert int(dst.stat().st_atime) == 1_000_000


def test_transfer_timestamps_uses_now(tmp_path: Path):
    dst = tmp_path / "dst.mp4"
    dst.write_bytes(b"b")
    os.utime(dst, (1_000_000, 1_000_000))

    transfer_timestamps(None, dst, use_current_time=True)

    assert abs(dst.stat().st_mtime - time.time()) < 60


def test_transfer_timestamps_logs_instead_of_raising(tmp_path: Path, logger):
    transfer_timestamps(None, tmp_path / "missing.mp4", use_current_time=True, logger=logger)
    assert len(logger.messages("error")) == 1
    assert "missing.mp4" in logger.messages("error")[0]


def test_format_hms():
    assert format_hms(0) == "0"
    assert format_hms(10) == "10s"
    assert format_hms(2.5) == "2.5s"
    assert format_hms(60) == "1m"
    assert format_hms(3723.5) == "1h2m3.5s"


def test_format_seconds_arg():
    assert format_seconds_arg(10.0) == "10"
    assert format_seconds_arg(2.5) == "2.5"
    assert format_seconds_arg(0) == "0"
