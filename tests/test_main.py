import json
from pathlib import Path

import pytest

from reencode_cut import main as cli
from reencode_cut.infrastructure.downloader import yt_dlp_adapter

from conftest import FakeFfmpegRunner


@pytest.fixture
def runner(monkeypatch, tmp_path: Path):
    fake = FakeFfmpegRunner()
    fake.options = {}

    def build(**kwargs):
        fake.options = kwargs
        return fake

    monkeypatch.setattr(cli, "SubprocessRunner", build)
    monkeypatch.setattr(cli.settings, "REENCODE_CUT_LOGS_DIR", str(tmp_path / "logs"))
    return fake


@pytest.fixture
def media_dir(tmp_path: Path) -> Path:
    media = tmp_path / "media"
    media.mkdir()
    (media / "clip.mp4").write_bytes(b"source")
    return media


def _argv(media_dir: Path, tmp_path: Path, *, options=None, cuts=None, stream=None):
    argv = [
        str(media_dir),
        json.dumps(options or {"output_dir": "cuts"}),
        "clip.mp4",
        json.dumps(cuts or {"a": {"start": 10, "end": 20}, "b": {"start": 30, "end": 35}}),
    ]
    if stream is not None:
        argv.append(json.dumps(stream))
    return argv + ["--temp-dir", str(tmp_path / "tmp")]


def test_local_job_exits_zero(runner, media_dir: Path, tmp_path: Path, capsys):
    code = cli.main(_argv(media_dir, tmp_path, options={"output_dir": "cuts", "multi_cut_mode": "merge"}))

    assert code == 0
    assert [p.name for p in (media_dir / "cuts").iterdir()] == ["(2 merged cuts) clip.mp4"]
    assert "Done." in capsys.readouterr().out


def test_invalid_json_exits_one(runner, media_dir: Path, tmp_path: Path, capsys):
    code = cli.main([str(media_dir), "{not json", "clip.mp4", "{}"])

    assert code == 1
    assert runner.calls == []
    assert "Invalid options JSON" in capsys.readouterr().err


def test_invalid_option_value_exits_one(runner, media_dir: Path, tmp_path: Path, capsys):
    code = cli.main(_argv(media_dir, tmp_path, options={"multi_cut_mode": "sideways"}))

    assert code == 1
    assert runner.calls == []
    assert "Invalid job description" in capsys.readouterr().err


def test_streaming_without_downloader_fails_before_rendering(runner, monkeypatch, media_dir: Path, tmp_path: Path, capsys):
    monkeypatch.setattr(yt_dlp_adapter, "which", lambda name: None)

    code = cli.main(_argv(media_dir, tmp_path, stream={"path": "https://youtube.com/watch?v=x", "duration": 600}))

    assert code == 1
    assert runner.calls == []
    assert "yt-dlp" in capsys.readouterr().err

    errors = json.loads((tmp_path / "logs" / "errors.json").read_text(encoding="utf-8"))
    assert [e["code"] for e in errors] == ["TOOL_MISSING"]


def test_log_file_receives_lines(runner, media_dir: Path, tmp_path: Path):
    log_file = tmp_path / "run.log"

    code = cli.main(_argv(media_dir, tmp_path) + ["--log-file", str(log_file)])

    assert code == 0
    assert "Done." in log_file.read_text(encoding="utf-8")


def test_build_transcoder_picks_backend():
    fake = FakeFfmpegRunner()
    handbrake = cli.build_transcoder(cli.CutOptions(transcoder="handbrake"), fake)
    ffmpeg = cli.build_transcoder(cli.CutOptions(), fake)

    assert type(handbrake).__name__ == "HandbrakeTranscoder"
    assert type(ffmpeg).__name__ == "FfmpegTranscoder"


def test_verbose_flag_reaches_runner(runner, media_dir: Path, tmp_path: Path):
    assert cli.main(_argv(media_dir, tmp_path)) == 0
    assert runner.options["verbose"] is False

    assert cli.main(_argv(media_dir, tmp_path) + ["--verbose"]) == 0
    assert runner.options["verbose"] is True


def test_encoder_key_is_a_video_codec_not_a_backend():
    options = cli.CutOptions.model_validate({"encoder": "libx265"})
    assert options.video_codec == "libx265"
    assert type(cli.build_transcoder(options, FakeFfmpegRunner())).__name__ == "FfmpegTranscoder"

    options = cli.CutOptions.model_validate({"transcoder": "handbrake", "encoder": "x265"})
    assert options.video_codec == "x265"
    assert type(cli.build_transcoder(options, FakeFfmpegRunner())).__name__ == "HandbrakeTranscoder"


def test_interrupt_exits_130(runner, monkeypatch, media_dir: Path, tmp_path: Path):
    class Interrupted:
        def execute(self, job):
            raise KeyboardInterrupt

    monkeypatch.setattr(cli, "build_use_case", lambda *args, **kwargs: Interrupted())

    assert cli.main(_argv(media_dir, tmp_path)) == 130
