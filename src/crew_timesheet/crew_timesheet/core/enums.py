from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles used for authorization."""

    SUPER_ADMIN = "SuperAdmin"
    ADMIN = "Admin"
    VIEWER = "Viewer"

    @property
    def can_edit(self) -> bool:
        return self in (Role.SUPER_ADMIN, Role.ADMIN)


class TimeEntryStatus(str, Enum):
    """Lifecycle of a submitted time entry as stored in the database."""

    DRAFT = "draft"
    SUBMITTED = "submitted"
    APPROVED = "approved"
    REJECTED = "rejected"


class ExceptionStatus(str, Enum):
    """Review workflow of a flagged time entry."""

    SUBMITTED = "submitted"
    UNDER_REVIEW = "under_review"
    ACCEPTED = "accepted"
    REJECTED = "rejected"

    @property
    def is_pending(self) -> bool:
        return self in (ExceptionStatus.SUBMITTED, ExceptionStatus.UNDER_REVIEW)


class CellStatus(str, Enum):
    """Status of one (member, date) cell in the weekly grid."""

    SUBMITTED = "submitted"
    APPROVED = "approved"
    PENDING = "pending"
    MISSING = "missing"


class ViewMode(str, Enum):
    ALL = "all"
    PENDING = "pending"
    MISSING = "missing"


class CrewStatusFilter(str, Enum):
    ALL = "all"
    ACTIVE = "active"
    INACTIVE = "inactive"
