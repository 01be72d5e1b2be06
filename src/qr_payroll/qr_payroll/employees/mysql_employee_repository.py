from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, Optional, Sequence

from ..common.money import to_decimal
from ..core.enums import EmployeeType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Employee
from .repository import EmployeeRepository

_COLUMNS = "employee_id, full_name, dni, employee_type, monthly_salary, is_active, created_at"


def row_to_employee(r: Dict[str, Any]) -> Employee:
    return Employee(
        employee_id=int(r["employee_id"]),
        full_name=r["full_name"],
        dni=r["dni"],
        employee_type=EmployeeType(r["employee_type"]),
        monthly_salary=to_decimal(r.get("monthly_salary")),
        is_active=bool(r.get("is_active", True)),
        created_at=r.get("created_at"),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE employee_id=%s", (int(employee_id),))
            row = fetchone(cur)
            return row_to_employee(row) if row else None

    def list_active(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE is_active=1 ORDER BY full_name")
            return [row_to_employee(r) for r in fetchall(cur)]

    def find_active_by_dni(self, dni: str, *, exclude_id: Optional[int] = None) -> Optional[Employee]:
        sql = f"SELECT {_COLUMNS} FROM employees WHERE dni=%s AND is_active=1"
        params: list[object] = [dni]
        if exclude_id is not None:
            sql += " AND employee_id<>%s"
            params.append(int(exclude_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql + " LIMIT 1", tuple(params))
            row = fetchone(cur)
            return row_to_employee(row) if row else None

    def create(
        self,
        *,
        full_name: str,
        dni: str,
        employee_type: EmployeeType,
        monthly_salary: Decimal,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO employees(full_name, dni, employee_type, monthly_salary, is_active)
                VALUES(%s,%s,%s,%s,1)
                """,
                (full_name, dni, employee_type.value, monthly_salary),
            )
            return int(cur.lastrowid)

    def update(
        self,
        *,
        employee_id: int,
        full_name: str,
        dni: str,
        employee_type: EmployeeType,
        monthly_salary: Decimal,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE employees
                SET full_name=%s, dni=%s, employee_type=%s, monthly_salary=%s
                WHERE employee_id=%s AND is_active=1
                """,
                (full_name, dni, employee_type.value, monthly_salary, int(employee_id)),
            )
            return cur.rowcount > 0

    def set_active(self, employee_id: int, *, is_active: bool) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE employees SET is_active=%s WHERE employee_id=%s",
                (1 if is_active else 0, int(employee_id)),
            )
            return cur.rowcount > 0

    def count_active(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM employees WHERE is_active=1")
            row = fetchone(cur)
            return int(row["n"]) if row else 0
