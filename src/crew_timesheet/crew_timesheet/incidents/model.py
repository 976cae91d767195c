from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import ExceptionStatus


@dataclass(frozen=True)
class TimeException:
    """A flagged anomaly on a time entry (e.g. excessive overtime)."""

    id: int
    time_entry_id: int
    flagged_by: str
    reason: str
    description: str
    status: ExceptionStatus
    created_at: datetime
    admin_notes: Optional[str] = None
    resolved_by: Optional[str] = None
    resolved_at: Optional[datetime] = None

    @property
    def is_pending(self) -> bool:
        return self.status.is_pending
