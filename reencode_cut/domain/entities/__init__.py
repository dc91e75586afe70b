from .error_log import ErrorLog
from .render import RenderReport
from .source import AcquiredSource, SourceResolution, TempFileRecord

__all__ = ["ErrorLog", "RenderReport", "AcquiredSource", "SourceResolution", "TempFileRecord"]
