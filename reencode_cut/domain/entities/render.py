from __future__ import annotations

from typing import List, Optional
from pydantic import BaseModel, Field

from .source import AcquiredSource


class RenderReport(BaseModel):
    outputs: List[str] = Field(default_factory=list)
    merged_path: Optional[str] = None
    source: Optional[AcquiredSource] = None

    def add_output(self, path: str) -> None:
        self.outputs.append(path)
