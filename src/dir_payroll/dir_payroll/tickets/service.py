from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Optional, Sequence

from ..common.datetime_utils import parse_iso_date
from ..common.validators import require_non_empty, require_positive_decimal
from ..core.constants import DEFAULT_TICKET_LIMIT
from ..core.enums import DocumentStatus, Role, TicketStatus
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..core.workflow import DOCUMENT_WORKFLOW, TICKET_WORKFLOW
from .model import Ticket, TicketRow
from .repository import TicketRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NewTicket:
    dir_number: str
    project_title: str
    date_worked: date
    hours_worked: Decimal


def validate_new_ticket(*, dir_number: Any, project_title: Any, date_worked: Any, hours_worked: Any) -> NewTicket:
    if isinstance(date_worked, date):
        worked = date_worked
    else:
        worked = parse_iso_date(require_non_empty(date_worked, "Date worked"))
    if hours_worked is None or (isinstance(hours_worked, str) and not hours_worked.strip()):
        raise ValidationError("Hours worked is required")

    return NewTicket(
        dir_number=require_non_empty(dir_number, "DIR number"),
        project_title=require_non_empty(project_title, "Project title"),
        date_worked=worked,
        hours_worked=require_positive_decimal(hours_worked, "Hours worked"),
    )


def _parse_enum(enum_cls, value: Any, label: str):
    try:
        return enum_cls(str(value or "").strip())
    except ValueError:
        raise ValidationError(f"Unknown {label}: {value!r}")


class TicketService:
    def __init__(self, tickets: TicketRepository):
        self._tickets = tickets

    def create_ticket(
        self,
        *,
        employee_id: int,
        dir_number: Any,
        project_title: Any,
        date_worked: Any,
        hours_worked: Any,
    ) -> int:
        new = validate_new_ticket(
            dir_number=dir_number,
            project_title=project_title,
            date_worked=date_worked,
            hours_worked=hours_worked,
        )
        return self._tickets.create_ticket(
            employee_id=int(employee_id),
            dir_number=new.dir_number,
            project_title=new.project_title,
            date_worked=new.date_worked,
            hours_worked=new.hours_worked,
        )

    def list_for_employee(self, *, employee_id: int, limit: int = DEFAULT_TICKET_LIMIT) -> Sequence[Ticket]:
        return self._tickets.list_for_employee(int(employee_id), limit=limit)

    def list_admin_view(self, *, current_role: Role, limit: int = DEFAULT_TICKET_LIMIT) -> Sequence[TicketRow]:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Admin access required")
        return self._tickets.list_rows(limit=limit)

    def _require(self, ticket_id: int) -> Ticket:
        ticket = self._tickets.get_by_id(int(ticket_id))
        if not ticket:
            raise NotFoundError("Ticket not found")
        return ticket

    def update_status(self, *, current_role: Role, ticket_id: int, status: Any) -> TicketStatus:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Admin access required")

        target = _parse_enum(TicketStatus, status, "ticket status")
        ticket = self._require(ticket_id)
        TICKET_WORKFLOW.ensure_transition(ticket.status, target)
        if target != ticket.status:
            self._tickets.update_status(ticket.ticket_id, target)
            logger.info("Ticket %s: %s -> %s", ticket.ticket_id, ticket.status.value, target.value)
        return target

    def update_document_status(self, *, current_role: Role, ticket_id: int, status: Any) -> DocumentStatus:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Admin access required")

        target = _parse_enum(DocumentStatus, status, "document status")
        ticket = self._require(ticket_id)
        DOCUMENT_WORKFLOW.ensure_transition(ticket.document_status, target)
        if target != ticket.document_status:
            self._tickets.update_document_status(ticket.ticket_id, target)
            logger.info("Ticket %s document: %s -> %s", ticket.ticket_id, ticket.document_status.value, target.value)
        return target

    def attach_document(
        self,
        *,
        current_role: Role,
        current_employee_id: int,
        ticket_id: int,
        document_url: Optional[str],
    ) -> None:
        """Record where an uploaded document lives; storing the file is someone else's job."""
        url = require_non_empty(document_url, "Document URL")
        ticket = self._require(ticket_id)
        if current_role != Role.ADMIN and ticket.employee_id != int(current_employee_id):
            raise AuthorizationError("You can only attach documents to your own tickets")

        self._tickets.set_document_url(ticket.ticket_id, url)
