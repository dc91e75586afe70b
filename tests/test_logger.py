import io
from pathlib import Path

from reencode_cut.jobs.logger import JobLogger


def test_levels_go_to_matching_streams():
    out, err = io.StringIO(), io.StringIO()
    logger = JobLogger(out=out, err=err)

    logger.info("rendering")
    logger.warning("falling back")
    logger.error("ffmpeg failed")

    assert out.getvalue() == "rendering\n"
    assert err.getvalue().splitlines() == ["Warning: falling back", "Error: ffmpeg failed"]


def test_log_file_gets_timestamped_lines(tmp_path: Path):
    log_path = tmp_path / "logs" / "run.log"
    logger = JobLogger(log_path, out=io.StringIO(), err=io.StringIO())

    logger.info("first")
    logger.error("second")

    lines = log_path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
    assert lines[0].startswith("[") and lines[0].endswith("] first")
    assert lines[1].endswith("] ERROR second")
