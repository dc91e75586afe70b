from __future__ import annotations

import shlex
import subprocess
from typing import Sequence

from ...domain.errors import SubprocessFailure
from ...domain.ports.logger_port import LoggerPort
from ...domain.ports.process_runner_port import ProcessRunnerPort
from ...shared.fs__shared_util import run


class SubprocessRunner(ProcessRunnerPort):
    """Runs one external tool at a time with the terminal attached to its stdout/stderr.

    ``timeout`` is optional; when it expires the child is killed and the run
    fails like any other non-zero exit. Command lines are echoed to the logger
    only when ``verbose`` is set.
    """

    def __init__(self, *, logger: LoggerPort | None = None, timeout: float | None = None, verbose: bool = False):
        self.logger = logger
        self.timeout = timeout
        self.verbose = verbose

    def run(self, command: str, args: Sequence[str]) -> None:
        cmd = [command, *args]
        if self.verbose and self.logger is not None:
            self.logger.info(shlex.join(cmd))

        try:
            run(cmd, check=True, timeout=self.timeout)
        except subprocess.CalledProcessError as exc:
            raise SubprocessFailure(
                f"{command} process exited with code {exc.returncode}",
                command=command,
                exit_code=exc.returncode,
            ) from exc
        except subprocess.TimeoutExpired as exc:
            raise SubprocessFailure(
                f"{command} did not finish within {self.timeout}s and was killed",
                command=command,
                spawn_error=exc,
            ) from exc
        except OSError as exc:
            raise SubprocessFailure(
                f"Failed to start {command}: {exc}",
                command=command,
                spawn_error=exc,
            ) from exc
