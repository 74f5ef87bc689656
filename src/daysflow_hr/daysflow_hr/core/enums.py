from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for authorization checks."""

    ADMIN = "admin"
    EMPLOYEE = "employee"


class AttendanceStatus(str, Enum):
    """Normalized attendance status stored in the database."""

    PRESENT = "present"
    ABSENT = "absent"
    ON_LEAVE = "on_leave"


class RequestStatus(str, Enum):
    """Approval workflow status of a leave request."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class LeaveType(str, Enum):
    CASUAL = "casual"
    SICK = "sick"
    PAID = "paid"
    UNPAID = "unpaid"


class PayrollStatus(str, Enum):
    DRAFT = "draft"
    PROCESSED = "processed"
    PAID = "paid"


class WageBasis(str, Enum):
    """How the configured gross wage is expressed."""

    MONTHLY = "monthly"
    YEARLY = "yearly"


class ReconcileMode(str, Enum):
    """How per-day attendance writes of a leave approval are grouped."""

    BEST_EFFORT = "best_effort"
    FAIL_FAST = "fail_fast"
    BATCH = "batch"
