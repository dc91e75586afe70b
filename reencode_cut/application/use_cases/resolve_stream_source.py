from __future__ import annotations

import re
from pathlib import Path

from ...domain.entities.source import AcquiredSource, SourceResolution
from ...domain.errors import ConfigurationError
from ...domain.ports.downloader_port import StreamDownloaderPort
from ...domain.ports.logger_port import LoggerPort
from ...jobs.models import CutOptions, JobDescription, StreamInfo
from ...jobs.paths import DownloadPaths
from ...shared.fs__shared_util import format_seconds_arg

_HTTP_URL = re.compile(r"^https?://")

MISSING_DOWNLOADER_HINT = (
    "Neither yt-dlp nor youtube-dl found. Please install one of them "
    "(for example: pip install -U yt-dlp) and make sure it is on PATH."
)


class ResolveStreamSourceUseCase:
    """Turns a streaming job into something the transcoder can read.

    The order is: a playable direct URL when the player supplied one, else a
    download into a fresh directory under ``temp_root``, else the raw stream
    locator when the download fails. Only a missing downloader is fatal.
    """

    def __init__(
        self,
        downloader: StreamDownloaderPort,
        temp_root: str | Path,
        *,
        logger: LoggerPort,
        pad_seconds: float = 10,
        partial_download_enabled: bool = True,
    ):
        self.downloader = downloader
        self.temp_root = Path(temp_root)
        self.logger = logger
        self.pad_seconds = pad_seconds
        self.partial_download_enabled = partial_download_enabled

    @staticmethod
    def use_direct_url(info: StreamInfo, options: CutOptions) -> bool:
        return bool(
            not options.stream_prefer_full_download
            and info.direct_url
            and info.direct_url != info.path
            and _HTTP_URL.match(info.direct_url)
        )

    def download_window(self, job: JobDescription) -> tuple[float, float] | None:
        info = job.stream_info
        cuts = job.complete_cuts()
        if (
            info is None
            or not self.partial_download_enabled
            or job.options.stream_prefer_full_download
            or not cuts
            or info.duration <= 0
        ):
            return None

        start = max(0.0, min(c.start for c in cuts) - self.pad_seconds)
        end = min(float(info.duration), max(c.end for c in cuts) + self.pad_seconds)
        return start, end

    async def execute(self, job: JobDescription) -> SourceResolution:
        info = job.stream_info
        if info is None:
            raise ConfigurationError("Stream resolution requested for a job without stream info")
        options = job.options

        if self.use_direct_url(info, options):
            self.logger.info("Using direct media URL for streaming content")
            return SourceResolution.resolved(
                AcquiredSource(local_path=info.direct_url, is_local_file=False, needs_cleanup=False)
            )

        executable = self.downloader.find_executable()
        if not executable:
            return SourceResolution.fatal(MISSING_DOWNLOADER_HINT)

        paths = DownloadPaths(self.temp_root)
        window = self.download_window(job)
        if window is not None:
            self.logger.info(
                f"Attempting partial download from {format_seconds_arg(window[0])}s to {format_seconds_arg(window[1])}s"
            )
        elif options.stream_prefer_full_download:
            self.logger.info("Full download preferred in settings, downloading full stream")
        else:
            self.logger.info("Unable to determine segment boundaries, downloading full stream")

        try:
            media_path = self.downloader.download(executable, info.path, paths, window=window)
        except Exception as exc:
            self.logger.error(f"Failed to download stream: {exc}")
            self.logger.warning("Falling back to direct URL access")
            return SourceResolution.fallback(
                AcquiredSource(
                    local_path=info.path,
                    is_local_file=False,
                    needs_cleanup=False,
                    temp_dir=paths.job_dir,
                    base_name=paths.base_name,
                ),
                reason=str(exc),
            )

        return SourceResolution.resolved(
            AcquiredSource(
                local_path=str(media_path),
                is_local_file=True,
                needs_cleanup=not options.stream_keep_downloads,
                temp_dir=paths.job_dir,
                base_name=paths.base_name,
                seek_offset=window[0] if window is not None else 0,
            )
        )
