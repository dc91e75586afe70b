from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any


class ErrCode(str, Enum):
    CONFIG = "CONFIG"
    TOOL_MISSING = "TOOL_MISSING"
    ACQUISITION = "ACQUISITION"
    SUBPROCESS = "SUBPROCESS"


class ReencodeCutError(RuntimeError):
    """Failure with a category code and structured context."""

    code = ErrCode.CONFIG

    def __init__(self, message: str, *, code: ErrCode | None = None, ctx: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if code is not None:
            self.code = code
        self.ctx: dict[str, Any] = dict(ctx or {})

    def with_context(self, extra: Mapping[str, Any]) -> ReencodeCutError:
        for k, v in extra.items():
            self.ctx.setdefault(k, v)
        return self


class ConfigurationError(ReencodeCutError):
    code = ErrCode.CONFIG


class ToolNotFoundError(ReencodeCutError):
    code = ErrCode.TOOL_MISSING


class AcquisitionError(ReencodeCutError):
    code = ErrCode.ACQUISITION


class SubprocessFailure(ReencodeCutError):
    code = ErrCode.SUBPROCESS

    def __init__(
        self,
        message: str,
        *,
        command: str,
        exit_code: int | None = None,
        spawn_error: BaseException | None = None,
        ctx: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(message, ctx=ctx)
        self.command = command
        self.exit_code = exit_code
        self.spawn_error = spawn_error
        self.ctx.setdefault("command", command)
        if exit_code is not None:
            self.ctx.setdefault("exit_code", exit_code)
