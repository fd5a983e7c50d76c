from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, to_decimal
from .model import Employee
from .repository import EmployeeRepository

_COLUMNS = "employee_id, email, full_name, role, yearly_salary, password_hash, created_at"


def _to_employee(row: Dict[str, Any]) -> Employee:
    return Employee(
        employee_id=int(row["employee_id"]),
        email=row["email"],
        full_name=row.get("full_name"),
        role=Role(row["role"]),
        yearly_salary=to_decimal(row.get("yearly_salary")),
        password_hash=row.get("password_hash"),
        created_at=row.get("created_at"),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE employee_id=%s", (int(employee_id),))
            row = fetchone(cur)
            return _to_employee(row) if row else None

    def get_by_email(self, email: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE email=%s", (email,))
            row = fetchone(cur)
            return _to_employee(row) if row else None

    def list_all(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees ORDER BY COALESCE(full_name, email) ASC")
            return [_to_employee(r) for r in fetchall(cur)]

    def create_employee(
        self,
        *,
        email: str,
        full_name: Optional[str],
        role: Role,
        yearly_salary: Optional[Decimal] = None,
        password_hash: Optional[str] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO employees(email, full_name, role, yearly_salary, password_hash)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (email, full_name, role.value, yearly_salary, password_hash),
            )
            return int(cur.lastrowid)

    def set_salary(self, employee_id: int, yearly_salary: Optional[Decimal]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE employees SET yearly_salary=%s WHERE employee_id=%s",
                (yearly_salary, int(employee_id)),
            )
            # MySQL reports 0 affected rows when the value is unchanged
            if cur.rowcount > 0:
                return True
            cur.execute("SELECT 1 AS found FROM employees WHERE employee_id=%s", (int(employee_id),))
            return fetchone(cur) is not None
