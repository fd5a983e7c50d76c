from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import DocumentStatus, TicketStatus


@dataclass(frozen=True)
class Ticket:
    """Domain entity: one employee's work entry for one date on one project."""

    ticket_id: int
    employee_id: int
    dir_number: str
    project_title: str
    date_worked: date
    hours_worked: Decimal
    status: TicketStatus = TicketStatus.PENDING
    document_status: DocumentStatus = DocumentStatus.PENDING
    document_url: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class TicketRow:
    """Read-model for payroll: a ticket joined with its employee's profile."""

    ticket_id: int
    employee_id: int
    full_name: Optional[str]
    email: str
    yearly_salary: Optional[Decimal]
    dir_number: str
    project_title: str
    date_worked: date
    hours_worked: Decimal
    status: TicketStatus = TicketStatus.PENDING
    document_status: DocumentStatus = DocumentStatus.PENDING
    document_url: Optional[str] = None

    @property
    def display_name(self) -> str:
        return self.full_name or self.email
