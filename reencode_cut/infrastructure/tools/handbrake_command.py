from __future__ import annotations

from pathlib import Path

from ...domain.ports.process_runner_port import ProcessRunnerPort
from ...domain.ports.transcoder_port import TranscoderPort
from ...jobs.models import CutOptions
from ...shared.fs__shared_util import format_seconds_arg
from .ffmpeg_command import FfmpegTranscoder, require_output, render_destination

DEFAULT_PRESET = "Fast 1080p30"


def _kbps(bitrate: str) -> str:
    value = bitrate.strip()
    lowered = value.lower()
    if lowered.endswith("m"):
        return str(int(float(value[:-1]) * 1000))
    if lowered.endswith("k"):
        return value[:-1]
    return value


def build_handbrake_args(
    source: str,
    destination: Path,
    start: float,
    duration: float,
    options: CutOptions,
) -> list[str]:
    args = [
        "--input", str(source),
        "--output", str(render_destination(destination, options)),
        "--start-at", f"duration:{format_seconds_arg(start)}",
        # --stop-at counts from --start-at
        "--stop-at", f"duration:{format_seconds_arg(duration)}",
        "--preset", options.video_preset or DEFAULT_PRESET,
    ]

    if options.audio_only:
        args += ["--no-video", "--encoder", options.audio_codec or "ca_aac"]
        if options.audio_bitrate:
            args += ["--ab", _kbps(options.audio_bitrate)]
    else:
        args += ["--encoder", options.video_codec or "x264"]
        if options.video_bitrate:
            args += ["--vb", _kbps(options.video_bitrate)]
        args += ["--aencoder", "ca_aac", "--ab", "160"]

    args += list(options.extra_args)
    return args


class HandbrakeTranscoder(TranscoderPort):
    """Renders cuts with HandBrakeCLI; merging is stream copy, which HandBrake cannot do, so ffmpeg handles it."""

    def __init__(self, runner: ProcessRunnerPort, *, handbrake: str = "HandBrakeCLI", ffmpeg: str = "ffmpeg"):
        self.runner = runner
        self.handbrake = handbrake
        self.merger = FfmpegTranscoder(runner, ffmpeg=ffmpeg)

    def render(self, source: str, destination: Path, start: float, duration: float, options: CutOptions) -> Path:
        self.runner.run(self.handbrake, build_handbrake_args(source, destination, start, duration, options))
        return require_output(render_destination(destination, options), self.handbrake)

    def merge(self, manifest_path: Path, destination: Path) -> Path:
        return self.merger.merge(manifest_path, destination)
