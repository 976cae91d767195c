from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import ExceptionStatus
from .model import TimeException


class ExceptionRepository(Protocol):
    def list_all(self) -> Sequence[TimeException]:
        """Newest first."""
        raise NotImplementedError

    def get_by_id(self, exception_id: int) -> Optional[TimeException]:
        raise NotImplementedError

    def create(self, *, time_entry_id: int, flagged_by: str, reason: str, description: str) -> int:
        raise NotImplementedError

    def update_status(
        self,
        *,
        exception_id: int,
        status: ExceptionStatus,
        admin_notes: Optional[str] = None,
        resolved_by: Optional[str] = None,
        resolved_at: Optional[datetime] = None,
    ) -> bool:
        raise NotImplementedError
