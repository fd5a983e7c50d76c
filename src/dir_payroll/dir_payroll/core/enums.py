from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for authorization."""

    ADMIN = "admin"
    EMPLOYEE = "employee"


class EmployeePeriodStatus(str, Enum):
    """Where an employee stands in one pay period's payroll cycle."""

    PENDING = "pending"
    AWAITING_PAY = "awaiting_pay"
    READY_FOR_DIR = "ready_for_dir"


class TicketStatus(str, Enum):
    """Admin review state of a single ticket."""

    PENDING = "pending"
    IN_REVIEW = "in_review"
    APPROVED = "approved"
    REJECTED = "rejected"


class DocumentStatus(str, Enum):
    """Document handling state of a single ticket."""

    PENDING = "pending"
    PREVAILING_WAGE_ENTERED = "prevailing_wage_entered"
    AWAITING_PAY = "awaiting_pay"
    UPLOAD_TO_DIR = "upload_to_dir"
    COMPLETED = "completed"


STATUS_LABELS = {
    EmployeePeriodStatus.PENDING: "Pending",
    EmployeePeriodStatus.AWAITING_PAY: "Awaiting Pay",
    EmployeePeriodStatus.READY_FOR_DIR: "Ready for DIR",
}
