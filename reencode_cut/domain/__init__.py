from .entities import AcquiredSource, ErrorLog, RenderReport, SourceResolution, TempFileRecord
from .errors import (
    AcquisitionError,
    ConfigurationError,
    ErrCode,
    ReencodeCutError,
    SubprocessFailure,
    ToolNotFoundError,
)
from .ports import (
    ErrorMonitorPort,
    LoggerPort,
    ProcessRunnerPort,
    StreamDownloaderPort,
    TempCustodianPort,
    TranscoderPort,
)

__all__ = [
    "AcquiredSource",
    "ErrorLog",
    "RenderReport",
    "SourceResolution",
    "TempFileRecord",
    "AcquisitionError",
    "ConfigurationError",
    "ErrCode",
    "ReencodeCutError",
    "SubprocessFailure",
    "ToolNotFoundError",
    "ErrorMonitorPort",
    "LoggerPort",
    "ProcessRunnerPort",
    "StreamDownloaderPort",
    "TempCustodianPort",
    "TranscoderPort",
]
