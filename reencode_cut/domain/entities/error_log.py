from __future__ import annotations

from datetime import datetime, timezone
from typing import Dict, Optional
from pydantic import BaseModel, Field
from uuid import uuid4


class ErrorLog(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid4()))
    timestamp_utc: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    code: Optional[str] = None
    message: str
    stack_trace: Optional[str] = None
    context_data: Dict = Field(default_factory=dict)
