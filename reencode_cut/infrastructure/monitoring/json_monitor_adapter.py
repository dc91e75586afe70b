from __future__ import annotations

import json
import sys
import aiofiles
import aiofiles.os
from pathlib import Path
from uuid import uuid4
from ...domain.ports.error_monitor_port import ErrorMonitorPort
from ...domain.entities.error_log import ErrorLog

DEFAULT_MAX_ENTRIES = 200


class JsonErrorMonitorAdapter(ErrorMonitorPort):
    """Keeps the most recent failures of every run in one JSON array.

    The array is rewritten through a sibling temp file, so a failed write
    leaves the previous history intact.
    """

    def __init__(self, log_path: str, *, max_entries: int = DEFAULT_MAX_ENTRIES):
        self.path = Path(log_path)
        self.max_entries = max_entries

    async def _load(self) -> list:
        if not self.path.exists():
            return []
        async with aiofiles.open(self.path, "r", encoding="utf-8") as f:
            content = await f.read()
        logs = json.loads(content) if content.strip() else []
        if not isinstance(logs, list):
            raise ValueError(f"{self.path} does not hold a JSON array")
        return logs

    async def log_error(self, error: ErrorLog) -> None:
        tmp_path = self.path.with_name(f".{self.path.name}.{uuid4().hex[:8]}.tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            logs = await self._load()
            logs.append(error.model_dump(mode="json"))
            # oldest first
            logs = logs[-self.max_entries:]
            async with aiofiles.open(tmp_path, "w", encoding="utf-8") as f:
                await f.write(json.dumps(logs, indent=2))
            await aiofiles.os.replace(tmp_path, self.path)
        except (OSError, ValueError) as e:
            print(f"Fallback Log Error: {e}", file=sys.stderr)
            tmp_path.unlink(missing_ok=True)
