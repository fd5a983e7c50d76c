from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, Optional, Sequence

from ..core.enums import EmployeePeriodStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, to_decimal
from .model import EmployeePeriod
from .repository import EmployeePeriodRepository

_COLUMNS = "employee_period_id, employee_id, year, month, period, status, hourly_wage, created_at, updated_at"


def _to_employee_period(r: Dict[str, Any]) -> EmployeePeriod:
    return EmployeePeriod(
        employee_period_id=int(r["employee_period_id"]),
        employee_id=int(r["employee_id"]),
        year=int(r["year"]),
        month=int(r["month"]),
        period=int(r["period"]),
        status=EmployeePeriodStatus(r["status"]),
        hourly_wage=to_decimal(r.get("hourly_wage")),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLEmployeePeriodRepository(EmployeePeriodRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, *, employee_id: int, year: int, month: int, period: int) -> Optional[EmployeePeriod]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM employee_periods
                WHERE employee_id=%s AND year=%s AND month=%s AND period=%s
                """,
                (int(employee_id), int(year), int(month), int(period)),
            )
            r = fetchone(cur)
            return _to_employee_period(r) if r else None

    def list_all(self, *, employee_id: Optional[int] = None) -> Sequence[EmployeePeriod]:
        sql = f"SELECT {_COLUMNS} FROM employee_periods"
        params: tuple = ()
        if employee_id is not None:
            sql += " WHERE employee_id=%s"
            params = (int(employee_id),)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, params)
            return [_to_employee_period(r) for r in fetchall(cur)]

    def upsert(
        self,
        *,
        employee_id: int,
        year: int,
        month: int,
        period: int,
        status: EmployeePeriodStatus,
        hourly_wage: Optional[Decimal] = None,
    ) -> EmployeePeriod:
        return self._upsert(
            (int(employee_id), int(year), int(month), int(period)),
            status,
            hourly_wage,
            wage_sql="COALESCE(VALUES(hourly_wage), hourly_wage)",
        )

    def upsert_snapshot(
        self,
        *,
        employee_id: int,
        year: int,
        month: int,
        period: int,
        status: EmployeePeriodStatus,
        hourly_wage: Optional[Decimal],
    ) -> EmployeePeriod:
        return self._upsert(
            (int(employee_id), int(year), int(month), int(period)),
            status,
            hourly_wage,
            wage_sql="VALUES(hourly_wage)",
        )

    def _upsert(self, key: tuple, status: EmployeePeriodStatus, hourly_wage, *, wage_sql: str) -> EmployeePeriod:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO employee_periods(employee_id, year, month, period, status, hourly_wage)
                VALUES(%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    status=VALUES(status),
                    hourly_wage={wage_sql},
                    updated_at=CURRENT_TIMESTAMP
                """,
                key + (status.value, hourly_wage),
            )
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM employee_periods
                WHERE employee_id=%s AND year=%s AND month=%s AND period=%s
                """,
                key,
            )
            return _to_employee_period(fetchone(cur))
