from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any, Dict, Optional, Sequence

from ..core.enums import DocumentStatus, TicketStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, to_decimal
from .model import Ticket, TicketRow
from .repository import TicketRepository

_ROW_SELECT = """
    SELECT t.ticket_id, t.employee_id, e.full_name, e.email, e.yearly_salary,
           t.dir_number, t.project_title, t.date_worked, t.hours_worked,
           t.status, t.document_status, t.document_url
    FROM tickets t
    JOIN employees e ON e.employee_id = t.employee_id
"""


def _to_ticket(r: Dict[str, Any]) -> Ticket:
    return Ticket(
        ticket_id=int(r["ticket_id"]),
        employee_id=int(r["employee_id"]),
        dir_number=r["dir_number"],
        project_title=r["project_title"],
        date_worked=r["date_worked"],
        hours_worked=to_decimal(r["hours_worked"]),
        status=TicketStatus(r["status"]),
        document_status=DocumentStatus(r["document_status"]),
        document_url=r.get("document_url"),
        created_at=r.get("created_at"),
    )


def _to_row(r: Dict[str, Any]) -> TicketRow:
    return TicketRow(
        ticket_id=int(r["ticket_id"]),
        employee_id=int(r["employee_id"]),
        full_name=r.get("full_name"),
        email=r["email"],
        yearly_salary=to_decimal(r.get("yearly_salary")),
        dir_number=r["dir_number"],
        project_title=r["project_title"],
        date_worked=r["date_worked"],
        hours_worked=to_decimal(r["hours_worked"]),
        status=TicketStatus(r["status"]),
        document_status=DocumentStatus(r["document_status"]),
        document_url=r.get("document_url"),
    )


class MySQLTicketRepository(TicketRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, ticket_id: int) -> Optional[Ticket]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT ticket_id, employee_id, dir_number, project_title, date_worked, hours_worked,
                       status, document_status, document_url, created_at
                FROM tickets
                WHERE ticket_id=%s
                """,
                (int(ticket_id),),
            )
            r = fetchone(cur)
            return _to_ticket(r) if r else None

    def get_row(self, ticket_id: int) -> Optional[TicketRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_ROW_SELECT + " WHERE t.ticket_id=%s", (int(ticket_id),))
            r = fetchone(cur)
            return _to_row(r) if r else None

    def create_ticket(
        self,
        *,
        employee_id: int,
        dir_number: str,
        project_title: str,
        date_worked: date,
        hours_worked: Decimal,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO tickets(employee_id, dir_number, project_title, date_worked, hours_worked, status)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (int(employee_id), dir_number, project_title, date_worked, hours_worked, TicketStatus.PENDING.value),
            )
            return int(cur.lastrowid)

    def list_for_employee(self, employee_id: int, *, limit: int) -> Sequence[Ticket]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT ticket_id, employee_id, dir_number, project_title, date_worked, hours_worked,
                       status, document_status, document_url, created_at
                FROM tickets
                WHERE employee_id=%s
                ORDER BY date_worked DESC, ticket_id DESC
                LIMIT %s
                """,
                (int(employee_id), int(limit)),
            )
            return [_to_ticket(r) for r in fetchall(cur)]

    def list_rows(
        self,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        employee_id: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> Sequence[TicketRow]:
        clauses = ["1=1"]
        params: list[object] = []

        if start_date is not None:
            clauses.append("t.date_worked >= %s")
            params.append(start_date)
        if end_date is not None:
            clauses.append("t.date_worked <= %s")
            params.append(end_date)
        if employee_id is not None:
            clauses.append("t.employee_id=%s")
            params.append(int(employee_id))

        sql = _ROW_SELECT + f" WHERE {' AND '.join(clauses)} ORDER BY t.date_worked DESC, t.ticket_id DESC"
        if limit is not None:
            sql += " LIMIT %s"
            params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_to_row(r) for r in fetchall(cur)]

    def update_status(self, ticket_id: int, status: TicketStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE tickets SET status=%s WHERE ticket_id=%s", (status.value, int(ticket_id)))
            return cur.rowcount > 0

    def update_document_status(self, ticket_id: int, status: DocumentStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE tickets SET document_status=%s WHERE ticket_id=%s", (status.value, int(ticket_id)))
            return cur.rowcount > 0

    def set_document_url(self, ticket_id: int, document_url: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE tickets SET document_url=%s WHERE ticket_id=%s", (document_url, int(ticket_id)))
            return cur.rowcount > 0
