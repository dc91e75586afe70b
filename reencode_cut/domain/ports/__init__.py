from .downloader_port import StreamDownloaderPort
from .error_monitor_port import ErrorMonitorPort
from .logger_port import LoggerPort
from .process_runner_port import ProcessRunnerPort
from .temp_custodian_port import TempCustodianPort
from .transcoder_port import TranscoderPort

__all__ = [
    "StreamDownloaderPort",
    "ErrorMonitorPort",
    "LoggerPort",
    "ProcessRunnerPort",
    "TempCustodianPort",
    "TranscoderPort",
]
