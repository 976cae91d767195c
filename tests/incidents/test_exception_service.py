from __future__ import annotations

import pytest

from src.crew_timesheet.crew_timesheet.core.enums import ExceptionStatus, Role
from src.crew_timesheet.crew_timesheet.core.exceptions import AuthorizationError, ValidationError
from src.crew_timesheet.crew_timesheet.incidents.service import ExceptionService

from tests.fakes import InMemoryExceptions, InMemoryTimeEntries, sample_entries, sample_exceptions


@pytest.fixture
def svc(fixed_now):
    return ExceptionService(
        InMemoryExceptions(sample_exceptions(), now=fixed_now),
        InMemoryTimeEntries(sample_entries()),
        clock=lambda: fixed_now,
    )


def test_pending_filter(svc):
    assert [x.id for x in svc.list_exceptions()] == [1, 2]
    assert [x.id for x in svc.list_exceptions(pending_only=True)] == [1]


def test_flag_entry(svc):
    exc = svc.flag_entry(
        current_role=Role.ADMIN,
        flagged_by="field_manager",
        time_entry_id=4,
        reason="Excessive hours",
        description="12h regular on a travel day",
    )
    assert exc.status == ExceptionStatus.SUBMITTED
    assert exc.is_pending


def test_flag_requires_reason_and_existing_entry(svc):
    with pytest.raises(ValidationError):
        svc.flag_entry(current_role=Role.ADMIN, flagged_by="x", time_entry_id=4, reason="", description="d")
    with pytest.raises(ValidationError):
        svc.flag_entry(current_role=Role.ADMIN, flagged_by="x", time_entry_id=99, reason="r", description="d")


def test_review_then_resolve(svc, fixed_now):
    assert svc.start_review(current_role=Role.ADMIN, exception_id=1).status == ExceptionStatus.UNDER_REVIEW

    exc = svc.resolve(current_role=Role.SUPER_ADMIN, resolved_by="admin", exception_id=1, accept=False, admin_notes=" Not justified ")
    assert exc.status == ExceptionStatus.REJECTED
    assert exc.admin_notes == "Not justified"
    assert exc.resolved_by == "admin"
    assert exc.resolved_at == fixed_now


def test_resolved_exception_cannot_be_resolved_again(svc):
    with pytest.raises(ValidationError):
        svc.resolve(current_role=Role.ADMIN, resolved_by="admin", exception_id=2, accept=True)
    with pytest.raises(ValidationError):
        svc.start_review(current_role=Role.ADMIN, exception_id=2)


def test_viewer_cannot_mutate(svc):
    with pytest.raises(AuthorizationError):
        svc.resolve(current_role=Role.VIEWER, resolved_by="viewer", exception_id=1, accept=True)
