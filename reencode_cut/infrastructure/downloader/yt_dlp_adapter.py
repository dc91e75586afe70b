from __future__ import annotations

from pathlib import Path
from typing import Sequence

from ...domain.errors import AcquisitionError, SubprocessFailure
from ...domain.ports.downloader_port import StreamDownloaderPort
from ...domain.ports.logger_port import LoggerPort
from ...domain.ports.process_runner_port import ProcessRunnerPort
from ...jobs.paths import DownloadPaths
from ...shared.fs__shared_util import ensure_directory, find_most_recent_file, format_seconds_arg, which

DEFAULT_DOWNLOADERS = ("yt-dlp", "youtube-dl")


def build_download_args(url: str, paths: DownloadPaths, *, window: tuple[float, float] | None = None) -> list[str]:
    args = ["--no-playlist"]
    if window is not None:
        start, end = window
        args += [
            "--external-downloader", "ffmpeg",
            "--external-downloader-args",
            f"ffmpeg_i:-ss {format_seconds_arg(start)} -to {format_seconds_arg(end)}",
        ]
    args += ["-o", str(paths.output_template), url]
    return args


class YtDlpDownloaderAdapter(StreamDownloaderPort):
    """Downloads remote media with yt-dlp, or youtube-dl when yt-dlp is not installed."""

    def __init__(
        self,
        runner: ProcessRunnerPort,
        *,
        candidates: Sequence[str] = DEFAULT_DOWNLOADERS,
        logger: LoggerPort | None = None,
    ):
        self.runner = runner
        self.candidates = tuple(candidates)
        self.logger = logger

    def find_executable(self) -> str | None:
        for name in self.candidates:
            found = which(name)
            if found:
                return found
        return None

    def download(
        self,
        executable: str,
        url: str,
        paths: DownloadPaths,
        *,
        window: tuple[float, float] | None = None,
    ) -> Path:
        ensure_directory(paths.job_dir)

        if self.logger is not None:
            self.logger.info(f"Downloading stream using {Path(executable).name}...")

        try:
            self.runner.run(executable, build_download_args(url, paths, window=window))
        except SubprocessFailure as exc:
            raise AcquisitionError(
                f"Failed to download stream: {exc}",
                ctx={"url": url, "exit_code": exc.exit_code},
            ) from exc

        media_path = find_most_recent_file(paths.job_dir, paths.base_name)
        if media_path is None:
            raise AcquisitionError(
                "No downloaded file found after download completed",
                ctx={"url": url, "dir": str(paths.job_dir)},
            )
        return media_path
