"""Schemas untuk status sinkronisasi."""

from datetime import date, datetime
from typing import Dict, List, Optional
from pydantic import BaseModel, Field


class SyncStatusResponse(BaseModel):
    """Status snapshot dan hasil sinkronisasi terakhir."""

    loaded: bool
    published: Optional[bool] = Field(
        None, description="Whether the last refresh replaced the snapshot (None when no refresh ran)"
    )
    degraded: bool = False
    degraded_sources: List[str] = []
    errors: Dict[str, str] = {}
    refreshing: bool = False
    last_attempt_at: Optional[datetime] = None
    loaded_at: Optional[datetime] = None
    evaluated_on: Optional[date] = None
    employee_count: int = 0
    task_count: int = 0
    demo_mode: bool = False
