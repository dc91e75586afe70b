import shlex
import sys

import pytest

from reencode_cut.domain.errors import ErrCode, SubprocessFailure
from reencode_cut.infrastructure.tools.process_runner import SubprocessRunner


def test_runner_verbose_echoes_command(logger):
    runner = SubprocessRunner(logger=logger, verbose=True)
    runner.run(sys.executable, ["-c", "pass"])
    assert logger.messages("info") == [shlex.join([sys.executable, "-c", "pass"])]


def test_runner_quiet_by_default(logger):
    SubprocessRunner(logger=logger).run(sys.executable, ["-c", "pass"])
    assert logger.messages("info") == []


def test_runner_non_zero_exit_carries_code():
    runner = SubprocessRunner()
    with pytest.raises(SubprocessFailure) as exc_info:
        runner.run(sys.executable, ["-c", "import sys; sys.exit(3)"])

    err = exc_info.value
    assert err.exit_code == 3
    assert err.spawn_error is None
    assert err.code == ErrCode.SUBPROCESS
    assert "exited with code 3" in str(err)


def test_runner_spawn_failure_carries_error():
    runner = SubprocessRunner()
    with pytest.raises(SubprocessFailure) as exc_info:
        runner.run("definitely-not-a-real-transcoder-binary", ["-version"])

    err = exc_info.value
    assert err.exit_code is None
    assert isinstance(err.spawn_error, OSError)


def test_runner_timeout_kills_child():
    runner = SubprocessRunner(timeout=0.5)
    with pytest.raises(SubprocessFailure) as exc_info:
        runner.run(sys.executable, ["-c", "import time; time.sleep(30)"])
    assert "was killed" in str(exc_info.value)
