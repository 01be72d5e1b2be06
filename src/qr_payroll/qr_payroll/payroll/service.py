from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from ..attendance.model import AttendanceRecord, AttendanceReportRow
from ..attendance.repository import AttendanceRepository
from ..common.clock import Clock
from ..common.datetime_utils import month_bounds
from ..common.money import ZERO, round_money
from ..core.enums import EmployeeType
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from .calculator.factory import PayrollCalculatorFactory
from .model import AlDiaPayrollLine, EmployeeStats, PeriodReport, PeriodSummary, ProductionPayrollLine

log = logging.getLogger(__name__)


def _group_by_employee(rows: Sequence[AttendanceReportRow]) -> list[tuple[Employee, list[AttendanceRecord]]]:
    groups: dict[int, tuple[Employee, list[AttendanceRecord]]] = {}
    for row in rows:
        if row.record is None or not row.record.is_completed:
            continue
        entry = groups.setdefault(row.employee.employee_id, (row.employee, []))
        entry[1].append(row.record)
    return list(groups.values())


class PayrollReportService:
    """Period aggregation: per-employee payroll lines grouped by employee class."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        *,
        clock: Clock,
        calculators: Optional[PayrollCalculatorFactory] = None,
    ):
        self._attendance = attendance
        self._employees = employees
        self._clock = clock
        self._calculators = calculators or PayrollCalculatorFactory()

    def build_period_report(self, *, start: date, end: date) -> PeriodReport:
        if start > end:
            raise ValidationError("La fecha de inicio no puede ser posterior a la fecha fin")

        rows = self._attendance.list_completed_in_range(start_date=start, end_date=end)

        production: list[ProductionPayrollLine] = []
        al_dia: list[AlDiaPayrollLine] = []
        # Employees with no completed record in range never reach this loop.
        for employee, records in _group_by_employee(rows):
            line = self._calculators.for_type(employee.employee_type).summarize_period(employee, records)
            if employee.employee_type == EmployeeType.PRODUCTION:
                production.append(line)
            else:
                al_dia.append(line)

        production.sort(key=lambda x: (x.full_name, x.employee_id))
        al_dia.sort(key=lambda x: (x.full_name, x.employee_id))

        summary = PeriodSummary(
            start_date=start,
            end_date=end,
            total_production_employees=len(production),
            total_aldia_employees=len(al_dia),
            total_production_payroll=round_money(sum((x.net_pay for x in production), ZERO)),
            total_aldia_payroll=round_money(sum((x.net_pay for x in al_dia), ZERO)),
        )
        log.info(
            "Period report %s..%s: %s production, %s al dia, total=%s",
            start,
            end,
            summary.total_production_employees,
            summary.total_aldia_employees,
            summary.total_payroll,
        )
        return PeriodReport(production=production, al_dia=al_dia, summary=summary)

    def get_employee_stats(self, employee_id: int, *, year: Optional[int] = None, month: Optional[int] = None) -> EmployeeStats:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee or not employee.is_active:
            raise NotFoundError("Empleado no encontrado")

        today = self._clock.now().date()
        year = int(year or today.year)
        month = int(month or today.month)
        start, end = month_bounds(year, month)

        rows = self._attendance.list_completed_in_range(start_date=start, end_date=end, employee_id=employee.employee_id)
        records = [r.record for r in rows if r.record is not None]

        line = self._calculators.for_type(employee.employee_type).summarize_period(employee, records)
        kind = "production" if employee.employee_type == EmployeeType.PRODUCTION else "al_dia"
        return EmployeeStats(year=year, month=month, employee_type=kind, line=line)

    @staticmethod
    def csv_rows(report: PeriodReport) -> list[dict]:
        """Flatten a report for CSV export (one row per employee line)."""
        out: list[dict] = []
        for line in report.production:
            out.append(
                {
                    "type": EmployeeType.PRODUCTION.value,
                    "employee_id": line.employee_id,
                    "name": line.full_name,
                    "dni": line.dni,
                    "days_worked": line.days_worked,
                    "task_amount": f"{line.subtotal:.2f}",
                    "overtime_pay": "0.00",
                    "saturday": f"{line.saturday_total:.2f}",
                    "seventh_day": f"{line.seventh_day_total:.2f}",
                    "net_pay": f"{line.net_pay:.2f}",
                }
            )
        for line in report.al_dia:
            out.append(
                {
                    "type": EmployeeType.AL_DIA.value,
                    "employee_id": line.employee_id,
                    "name": line.full_name,
                    "dni": line.dni,
                    "days_worked": line.days_worked,
                    "task_amount": f"{line.base_pay:.2f}",
                    "overtime_pay": f"{line.overtime_pay_total:.2f}",
                    "saturday": f"{line.saturday_total:.2f}",
                    "seventh_day": f"{line.seventh_day_total:.2f}",
                    "net_pay": f"{line.net_pay:.2f}",
                }
            )
        return out
