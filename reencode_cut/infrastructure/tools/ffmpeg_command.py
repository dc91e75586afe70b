from __future__ import annotations

from pathlib import Path
from typing import Iterable

from ...domain.errors import SubprocessFailure
from ...domain.ports.process_runner_port import ProcessRunnerPort
from ...domain.ports.transcoder_port import TranscoderPort
from ...jobs.models import CutOptions
from ...jobs.paths import AUDIO_ONLY_EXT
from ...shared.fs__shared_util import format_seconds_arg

BASE_ARGS = ["-nostdin", "-loglevel", "error", "-y"]

DEFAULT_AUDIO_CODEC = "aac"
DEFAULT_AUDIO_BITRATE = "160k"
DEFAULT_VIDEO_CODEC = "libx264"
DEFAULT_VIDEO_BITRATE = "4000k"
DEFAULT_VIDEO_FILTER = "scale=1920:1080"
DEFAULT_ASPECT_RATIO = "16:9"


def render_destination(destination: Path, options: CutOptions) -> Path:
    if options.audio_only:
        return destination.with_suffix(AUDIO_ONLY_EXT)
    return destination


def build_render_args(
    source: str,
    destination: Path,
    start: float,
    duration: float,
    options: CutOptions,
) -> list[str]:
    args = [
        *BASE_ARGS,
        "-ss", format_seconds_arg(start),
        "-t", format_seconds_arg(duration),
        "-i", str(source),
    ]

    if options.audio_only:
        args += [
            "-vn",
            "-c:a", options.audio_codec or DEFAULT_AUDIO_CODEC,
            "-b:a", options.audio_bitrate or DEFAULT_AUDIO_BITRATE,
            "-ac", "2",
        ]
        if options.audio_filters:
            args += ["-af", ",".join(options.audio_filters)]
    else:
        args += ["-c:v", options.video_codec or DEFAULT_VIDEO_CODEC]
        if options.video_preset:
            args += ["-preset", options.video_preset]
        args += ["-b:v", options.video_bitrate or DEFAULT_VIDEO_BITRATE]
        if options.video_framerate:
            args += ["-r", options.video_framerate]
        if options.video_crf:
            args += ["-crf", options.video_crf]
        args += [
            "-pix_fmt", "yuv420p",
            "-vf", ",".join(options.video_filters) if options.video_filters else DEFAULT_VIDEO_FILTER,
            "-aspect", options.video_aspect_ratio or DEFAULT_ASPECT_RATIO,
            "-c:a", "aac",
            "-b:a", "160k",
            "-ac", "2",
            "-ar", "48000",
        ]
        if options.audio_filters:
            args += ["-af", ",".join(options.audio_filters)]

    args += list(options.extra_args)
    args.append(str(render_destination(destination, options)))
    return args


def build_merge_args(manifest_path: Path, destination: Path) -> list[str]:
    return [
        *BASE_ARGS,
        "-f", "concat",
        "-safe", "0",
        "-i", str(manifest_path),
        "-c", "copy",
        str(destination),
    ]


def escape_concat_path(path: str) -> str:
    # concat demuxer: a quote cannot appear inside '...', so close, escape and reopen
    return path.replace("\\", "\\\\").replace("'", "'\\''")


def render_manifest(paths: Iterable[Path]) -> str:
    return "\n".join(f"file '{escape_concat_path(str(p.absolute()))}'" for p in paths) + "\n"


class FfmpegTranscoder(TranscoderPort):
    def __init__(self, runner: ProcessRunnerPort, *, ffmpeg: str = "ffmpeg"):
        self.runner = runner
        self.ffmpeg = ffmpeg

    def render(self, source: str, destination: Path, start: float, duration: float, options: CutOptions) -> Path:
        self.runner.run(self.ffmpeg, build_render_args(source, destination, start, duration, options))
        return require_output(render_destination(destination, options), self.ffmpeg)

    def merge(self, manifest_path: Path, destination: Path) -> Path:
        self.runner.run(self.ffmpeg, build_merge_args(manifest_path, destination))
        return require_output(destination, self.ffmpeg)


def require_output(path: Path, command: str) -> Path:
    if not path.exists():
        raise SubprocessFailure(
            f"{command} exited successfully but did not write {path}",
            command=command,
            exit_code=0,
        )
    return path
