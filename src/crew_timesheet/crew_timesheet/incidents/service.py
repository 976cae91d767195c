from __future__ import annotations

from datetime import datetime
from typing import Callable, Sequence

from ..common.datetime_utils import now_local
from ..common.validators import require_non_empty
from ..core.enums import ExceptionStatus, Role
from ..core.exceptions import AuthorizationError, ValidationError
from ..timesheets.repository import TimeEntryRepository
from .model import TimeException
from .repository import ExceptionRepository


class ExceptionService:
    """Use cases: flag anomalous time entries and resolve them."""

    def __init__(
        self,
        exceptions: ExceptionRepository,
        entries: TimeEntryRepository,
        *,
        clock: Callable[[], datetime] = now_local,
    ):
        self._exceptions = exceptions
        self._entries = entries
        self._clock = clock

    def list_exceptions(self, *, pending_only: bool = False) -> Sequence[TimeException]:
        items = self._exceptions.list_all()
        if pending_only:
            return [e for e in items if e.is_pending]
        return items

    def get_exception(self, exception_id: int) -> TimeException:
        exc = self._exceptions.get_by_id(int(exception_id))
        if not exc:
            raise ValidationError("Exception not found")
        return exc

    def flag_entry(
        self,
        *,
        current_role: Role,
        flagged_by: str,
        time_entry_id: int,
        reason: str,
        description: str,
    ) -> TimeException:
        if not current_role.can_edit:
            raise AuthorizationError("You do not have permission to flag time entries")
        if not self._entries.get_by_id(int(time_entry_id)):
            raise ValidationError("Time entry not found")

        exception_id = self._exceptions.create(
            time_entry_id=int(time_entry_id),
            flagged_by=flagged_by,
            reason=require_non_empty(reason, "Reason"),
            description=require_non_empty(description, "Description"),
        )
        return self.get_exception(exception_id)

    def start_review(self, *, current_role: Role, exception_id: int) -> TimeException:
        if not current_role.can_edit:
            raise AuthorizationError("You do not have permission to review exceptions")
        exc = self.get_exception(exception_id)
        if exc.status != ExceptionStatus.SUBMITTED:
            raise ValidationError("Only newly submitted exceptions can be put under review")
        self._exceptions.update_status(exception_id=exc.id, status=ExceptionStatus.UNDER_REVIEW)
        return self.get_exception(exc.id)

    def resolve(
        self,
        *,
        current_role: Role,
        resolved_by: str,
        exception_id: int,
        accept: bool,
        admin_notes: str = "",
    ) -> TimeException:
        if not current_role.can_edit:
            raise AuthorizationError("You do not have permission to resolve exceptions")
        exc = self.get_exception(exception_id)
        if not exc.is_pending:
            raise ValidationError("Exception has already been resolved")

        ok = self._exceptions.update_status(
            exception_id=exc.id,
            status=ExceptionStatus.ACCEPTED if accept else ExceptionStatus.REJECTED,
            admin_notes=(admin_notes or "").strip() or None,
            resolved_by=resolved_by,
            resolved_at=self._clock(),
        )
        if not ok:
            raise ValidationError("Resolving the exception failed")
        return self.get_exception(exc.id)
