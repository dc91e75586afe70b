from pathlib import Path

import pytest

from reencode_cut.domain.errors import SubprocessFailure
from reencode_cut.domain.ports.logger_port import LoggerPort
from reencode_cut.domain.ports.process_runner_port import ProcessRunnerPort


class DummyLogger(LoggerPort):
    def __init__(self):
        self.lines: list[tuple[str, str]] = []

    def info(self, message: str) -> None:
        self.lines.append(("info", message))

    def warning(self, message: str) -> None:
        self.lines.append(("warning", message))

    def error(self, message: str) -> None:
        self.lines.append(("error", message))

    def messages(self, level: str) -> list[str]:
        return [m for lvl, m in self.lines if lvl == level]


class FakeFfmpegRunner(ProcessRunnerPort):
    """Pretends to be ffmpeg: writes the destination (last argument) unless told to fail."""

    def __init__(self, *, fail_on_call: int | None = None, write_output: bool = True):
        self.calls: list[tuple[str, list[str]]] = []
        self.manifests: list[str] = []
        self.fail_on_call = fail_on_call
        self.write_output = write_output

    def run(self, command, args):
        args = list(args)
        self.calls.append((command, args))
        if "concat" in args:
            manifest = Path(args[args.index("-i") + 1])
            self.manifests.append(manifest.read_text(encoding="utf-8"))
        if self.fail_on_call is not None and len(self.calls) == self.fail_on_call:
            raise SubprocessFailure(f"{command} process exited with code 1", command=command, exit_code=1)
        if self.write_output:
            Path(args[-1]).write_bytes(b"media")


class DummyMonitor:
    def __init__(self):
        self.errors = []

    async def log_error(self, error):
        self.errors.append(error)


@pytest.fixture
def logger():
    return DummyLogger()
