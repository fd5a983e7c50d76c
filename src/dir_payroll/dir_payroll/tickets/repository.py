from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from ..core.enums import DocumentStatus, TicketStatus
from .model import Ticket, TicketRow


class TicketRepository(Protocol):
    def get_by_id(self, ticket_id: int) -> Optional[Ticket]:
        raise NotImplementedError

    def get_row(self, ticket_id: int) -> Optional[TicketRow]:
        raise NotImplementedError

    def create_ticket(
        self,
        *,
        employee_id: int,
        dir_number: str,
        project_title: str,
        date_worked: date,
        hours_worked: Decimal,
    ) -> int:
        raise NotImplementedError

    def list_for_employee(self, employee_id: int, *, limit: int) -> Sequence[Ticket]:
        raise NotImplementedError

    def list_rows(
        self,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        employee_id: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> Sequence[TicketRow]:
        """Tickets joined with their employee, inclusive date range, newest first."""

        raise NotImplementedError

    def update_status(self, ticket_id: int, status: TicketStatus) -> bool:
        raise NotImplementedError

    def update_document_status(self, ticket_id: int, status: DocumentStatus) -> bool:
        raise NotImplementedError

    def set_document_url(self, ticket_id: int, document_url: str) -> bool:
        raise NotImplementedError
