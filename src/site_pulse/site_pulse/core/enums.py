from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Derived per-employee-per-date status. Never persisted."""

    PRESENT = "present"
    ABSENT = "absent"
    ON_LEAVE = "on_leave"
    PENDING_APPROVAL = "pending_approval"
    UNKNOWN = "unknown"


class ActivityStatus(str, Enum):
    """Status values an employee can self-report on an activity entry."""

    PRESENT = "present"
    ABSENT = "absent"
    LEAVE = "leave"


class LocationType(str, Enum):
    SITE = "site"
    OFFICE = "office"
    LEAVE = "leave"


class LeaveStatus(str, Enum):
    """States of the manager-approval workflow for a leave application."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    CANCELLED = "cancelled"


class AccessLevel(str, Enum):
    FULL = "full"
    RESTRICTED = "restricted"
