from __future__ import annotations

from datetime import date, time
from typing import Any, Dict, Optional, Sequence

from ..common.money import to_decimal
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time, unique_violation_as_conflict
from ..employees.mysql_employee_repository import row_to_employee
from ..payroll.model import DayAmounts, RawWorkInputs
from .model import AttendanceRecord, AttendanceReportRow
from .repository import AttendanceRepository

_RECORD_COLUMNS = """
    ar.attendance_id, ar.employee_id, ar.work_date, ar.entry_time, ar.exit_time,
    ar.despalillo_qty, ar.escogida_qty, ar.monado_qty, ar.overtime_hours,
    ar.amount_despalillo, ar.amount_escogida, ar.amount_monado,
    ar.saturday_proportion, ar.seventh_day_pay, ar.overtime_pay
"""

_EMPLOYEE_COLUMNS = """
    e.employee_id AS emp_id, e.full_name, e.dni, e.employee_type, e.monthly_salary,
    e.is_active, e.created_at
"""


def row_to_record(r: Dict[str, Any]) -> AttendanceRecord:
    """The single translation point from a DB row to AttendanceRecord."""
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        employee_id=int(r["employee_id"]),
        work_date=r["work_date"],
        entry_time=normalize_mysql_time(r.get("entry_time")),
        exit_time=normalize_mysql_time(r.get("exit_time")),
        despalillo_qty=to_decimal(r.get("despalillo_qty")),
        escogida_qty=to_decimal(r.get("escogida_qty")),
        monado_qty=to_decimal(r.get("monado_qty")),
        overtime_hours=to_decimal(r.get("overtime_hours")),
        amount_despalillo=to_decimal(r.get("amount_despalillo")),
        amount_escogida=to_decimal(r.get("amount_escogida")),
        amount_monado=to_decimal(r.get("amount_monado")),
        saturday_proportion=to_decimal(r.get("saturday_proportion")),
        seventh_day_pay=to_decimal(r.get("seventh_day_pay")),
        overtime_pay=to_decimal(r.get("overtime_pay")),
    )


def _row_to_report_row(r: Dict[str, Any]) -> AttendanceReportRow:
    employee = row_to_employee({**r, "employee_id": r["emp_id"]})
    record = row_to_record(r) if r.get("attendance_id") is not None else None
    return AttendanceReportRow(employee=employee, record=record)


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_RECORD_COLUMNS}
                FROM attendance_records ar
                WHERE ar.employee_id=%s AND ar.work_date=%s
                """,
                (int(employee_id), work_date),
            )
            r = fetchone(cur)
            return row_to_record(r) if r else None

    def create_entry(self, *, employee_id: int, work_date: date, entry_time: time) -> AttendanceRecord:
        with unique_violation_as_conflict(), db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records(employee_id, work_date, entry_time)
                VALUES(%s,%s,%s)
                """,
                (int(employee_id), work_date, entry_time),
            )
            attendance_id = int(cur.lastrowid)
            cur.execute(
                f"SELECT {_RECORD_COLUMNS} FROM attendance_records ar WHERE ar.attendance_id=%s",
                (attendance_id,),
            )
            return row_to_record(fetchone(cur))

    def complete_exit(
        self,
        *,
        attendance_id: int,
        exit_time: time,
        inputs: RawWorkInputs,
        amounts: DayAmounts,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET exit_time=%s,
                    despalillo_qty=%s, escogida_qty=%s, monado_qty=%s, overtime_hours=%s,
                    amount_despalillo=%s, amount_escogida=%s, amount_monado=%s,
                    saturday_proportion=%s, seventh_day_pay=%s, overtime_pay=%s
                WHERE attendance_id=%s AND exit_time IS NULL
                """,
                (
                    exit_time,
                    inputs.despalillo,
                    inputs.escogida,
                    inputs.monado,
                    inputs.overtime_hours,
                    amounts.amount_despalillo,
                    amounts.amount_escogida,
                    amounts.amount_monado,
                    amounts.saturday_proportion,
                    amounts.seventh_day_pay,
                    amounts.overtime_pay,
                    int(attendance_id),
                ),
            )
            return cur.rowcount > 0

    def list_for_date(self, work_date: date) -> Sequence[AttendanceReportRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_RECORD_COLUMNS}, {_EMPLOYEE_COLUMNS}
                FROM attendance_records ar
                JOIN employees e ON e.employee_id = ar.employee_id
                WHERE ar.work_date=%s
                ORDER BY ar.entry_time DESC
                """,
                (work_date,),
            )
            return [_row_to_report_row(r) for r in fetchall(cur)]

    def daily_report(self, work_date: date) -> Sequence[AttendanceReportRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_RECORD_COLUMNS}, {_EMPLOYEE_COLUMNS}
                FROM employees e
                LEFT JOIN attendance_records ar
                    ON ar.employee_id = e.employee_id AND ar.work_date=%s
                WHERE e.is_active=1
                ORDER BY e.employee_type, e.full_name
                """,
                (work_date,),
            )
            return [_row_to_report_row(r) for r in fetchall(cur)]

    def list_completed_in_range(
        self,
        *,
        start_date: date,
        end_date: date,
        employee_id: Optional[int] = None,
    ) -> Sequence[AttendanceReportRow]:
        clauses = ["ar.work_date BETWEEN %s AND %s", "ar.exit_time IS NOT NULL", "e.is_active=1"]
        params: list[object] = [start_date, end_date]

        if employee_id is not None:
            clauses.append("e.employee_id=%s")
            params.append(int(employee_id))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_RECORD_COLUMNS}, {_EMPLOYEE_COLUMNS}
                FROM attendance_records ar
                JOIN employees e ON e.employee_id = ar.employee_id
                WHERE {where}
                ORDER BY e.full_name ASC, e.employee_id ASC, ar.work_date ASC
                """,
                tuple(params),
            )
            return [_row_to_report_row(r) for r in fetchall(cur)]
