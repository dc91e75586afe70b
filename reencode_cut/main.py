from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any, Sequence

from pydantic import ValidationError

from .settings import settings
from .application.use_cases.render_cuts import RenderCutsUseCase
from .application.use_cases.resolve_stream_source import ResolveStreamSourceUseCase
from .domain.errors import ConfigurationError
from .domain.ports.transcoder_port import TranscoderPort
from .infrastructure.downloader.yt_dlp_adapter import YtDlpDownloaderAdapter
from .infrastructure.monitoring.json_monitor_adapter import JsonErrorMonitorAdapter
from .infrastructure.storage.temp_custodian import TempFileCustodian
from .infrastructure.tools.ffmpeg_command import FfmpegTranscoder
from .infrastructure.tools.handbrake_command import HandbrakeTranscoder
from .infrastructure.tools.process_runner import SubprocessRunner
from .jobs.logger import JobLogger
from .jobs.models import CutOptions, JobDescription


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="reencode-cut",
        description="Render the cuts selected in the player, optionally merging them into one file.",
    )
    parser.add_argument("input_dir", help="directory containing the input media")
    parser.add_argument("options", help="JSON object with encoding and output options")
    parser.add_argument("filename", help="input file name inside input_dir")
    parser.add_argument("cuts", help="JSON object mapping cut ids to {start, end}")
    parser.add_argument("stream_info", nargs="?", default=None, help="JSON stream info; switches to streaming mode")
    parser.add_argument("--temp-dir", default=None, help="shared download directory (default: REENCODE_CUT_TEMP_DIR)")
    parser.add_argument("--log-file", default=None, help="also append log lines to this file")
    parser.add_argument("--verbose", action="store_true", help="echo every external command line before running it")
    return parser


def _parse_json(raw: str | None, what: str) -> Any:
    if not raw:
        return None
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"Invalid {what} JSON: {exc}") from exc


def parse_job(args: argparse.Namespace) -> JobDescription:
    options = _parse_json(args.options, "options") or {}
    cuts = _parse_json(args.cuts, "cuts") or {}
    stream_info = _parse_json(args.stream_info, "stream info")

    try:
        return JobDescription(
            source_directory=Path(args.input_dir),
            source_filename=args.filename,
            cuts=cuts,
            options=CutOptions.model_validate(options),
            stream_info=stream_info,
        )
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid job description: {exc}") from exc


def build_transcoder(options: CutOptions, runner: SubprocessRunner) -> TranscoderPort:
    if options.transcoder == "handbrake":
        return HandbrakeTranscoder(
            runner,
            handbrake=settings.REENCODE_CUT_HANDBRAKE_BIN,
            ffmpeg=settings.REENCODE_CUT_FFMPEG_BIN,
        )
    return FfmpegTranscoder(runner, ffmpeg=settings.REENCODE_CUT_FFMPEG_BIN)


def build_use_case(job: JobDescription, logger: JobLogger, temp_root: Path, *, verbose: bool = False) -> RenderCutsUseCase:
    # Wiring
    runner = SubprocessRunner(logger=logger, timeout=settings.REENCODE_CUT_PROCESS_TIMEOUT, verbose=verbose)
    monitor = JsonErrorMonitorAdapter(str(Path(settings.REENCODE_CUT_LOGS_DIR) / "errors.json"))
    custodian = TempFileCustodian(
        max_age_hours=settings.REENCODE_CUT_TEMP_MAX_AGE_HOURS,
        max_size_bytes=settings.REENCODE_CUT_TEMP_MAX_SIZE_BYTES,
        logger=logger,
    )
    resolver = ResolveStreamSourceUseCase(
        YtDlpDownloaderAdapter(runner, candidates=settings.downloader_candidates, logger=logger),
        temp_root,
        logger=logger,
        pad_seconds=settings.REENCODE_CUT_DOWNLOAD_PAD_SECONDS,
        partial_download_enabled=settings.REENCODE_CUT_PARTIAL_DOWNLOAD_ENABLED,
    )
    return RenderCutsUseCase(
        build_transcoder(job.options, runner),
        custodian,
        monitor,
        resolver=resolver,
        temp_root=temp_root,
        logger=logger,
    )


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logger = JobLogger(Path(args.log_file) if args.log_file else None)
    temp_root = Path(args.temp_dir or settings.REENCODE_CUT_TEMP_DIR)

    try:
        job = parse_job(args)
    except ConfigurationError as e:
        logger.error(str(e))
        return 1

    use_case = build_use_case(job, logger, temp_root, verbose=args.verbose)
    try:
        asyncio.run(use_case.execute(job))
    except KeyboardInterrupt:
        logger.error("Interrupted")
        return 130
    except Exception:
        # already reported by the use case
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
