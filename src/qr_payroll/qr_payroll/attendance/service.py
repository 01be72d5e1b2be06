from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Mapping, Optional, Sequence, Union

from ..common.clock import Clock
from ..common.datetime_utils import truncate_time
from ..common.validators import require_id
from ..core.enums import AttendanceState, ScanAction
from ..core.exceptions import NotFoundError, StorageConflict, ValidationError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..payroll.calculator.factory import PayrollCalculatorFactory
from ..payroll.model import RawWorkInputs
from ..qr.codec import parse_employee_payload
from .model import AttendanceRecord, AttendanceReportRow, ScanResult
from .repository import AttendanceRepository
from .scan_cache import RecentScanCache
from .state import MSG_COMPLETED, conflict_for, next_state, state_of

log = logging.getLogger(__name__)


class AttendanceService:
    """Use case: entry/exit/scan transitions for one employee on the business "today"."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        *,
        clock: Clock,
        calculators: PayrollCalculatorFactory | None = None,
        scan_cache: RecentScanCache | None = None,
    ):
        self._attendance = attendance
        self._employees = employees
        self._clock = clock
        self._calculators = calculators or PayrollCalculatorFactory()
        self._scan_cache = scan_cache or RecentScanCache(0)

    def _require_active(self, employee_id: Any) -> Employee:
        employee_id = require_id(employee_id, "employee_id")
        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise NotFoundError("Empleado no encontrado")
        if not employee.is_active:
            raise NotFoundError("Empleado inactivo")
        return employee

    def current_state(self, employee_id: int, work_date: date) -> AttendanceState:
        return state_of(self._attendance.get_for_employee_and_date(int(employee_id), work_date))

    def record_entry(self, employee_id: Any, *, now: datetime | None = None) -> AttendanceRecord:
        now = now or self._clock.now()
        today = now.date()

        employee = self._require_active(employee_id)
        existing = self._attendance.get_for_employee_and_date(employee.employee_id, today)
        next_state(state_of(existing), ScanAction.ENTRY)

        try:
            record = self._attendance.create_entry(
                employee_id=employee.employee_id,
                work_date=today,
                entry_time=truncate_time(now),
            )
        except StorageConflict:
            # Lost a race with a concurrent entry: report what is stored now.
            log.warning("Concurrent entry for employee %s on %s", employee.employee_id, today)
            current = self._attendance.get_for_employee_and_date(employee.employee_id, today)
            raise conflict_for(current, ScanAction.ENTRY)

        log.info("Entry recorded: employee=%s date=%s time=%s", employee.employee_id, today, record.entry_time)
        return record

    def record_exit(
        self,
        employee_id: Any,
        inputs: Union[RawWorkInputs, Mapping[str, Any], None] = None,
        *,
        now: datetime | None = None,
    ) -> AttendanceRecord:
        now = now or self._clock.now()
        today = now.date()

        employee = self._require_active(employee_id)
        if not isinstance(inputs, RawWorkInputs):
            inputs = RawWorkInputs.from_mapping(inputs)

        record = self._attendance.get_for_employee_and_date(employee.employee_id, today)
        next_state(state_of(record), ScanAction.EXIT)

        exit_time = truncate_time(now)
        if record.entry_time is not None and exit_time < record.entry_time:
            raise ValidationError("La hora de salida no puede ser anterior a la hora de entrada")

        calculator = self._calculators.for_type(employee.employee_type)
        amounts = calculator.compute_day(inputs, monthly_salary=employee.monthly_salary)

        if not self._attendance.complete_exit(
            attendance_id=record.attendance_id,
            exit_time=exit_time,
            inputs=inputs,
            amounts=amounts,
        ):
            log.warning("Concurrent exit for employee %s on %s", employee.employee_id, today)
            current = self._attendance.get_for_employee_and_date(employee.employee_id, today)
            raise conflict_for(current, ScanAction.EXIT)

        completed = record.with_exit(exit_time, inputs, amounts)
        log.info(
            "Exit recorded: employee=%s date=%s time=%s subtotal=%s overtime_pay=%s",
            employee.employee_id,
            today,
            exit_time,
            amounts.subtotal,
            amounts.overtime_pay,
        )
        return completed

    def record_scan(self, payload: Any, *, now: datetime | None = None) -> ScanResult:
        """Dispatch a scanned code to entry or exit based on today's state.

        Scan-exit records zero quantities; real quantities need the manual exit.
        """
        employee_id = parse_employee_payload(payload)
        now = now or self._clock.now()

        employee = self._require_active(employee_id)

        cached = self._scan_cache.recent(employee.employee_id, now)
        if cached is not None:
            return ScanResult(ScanAction.NOOP, cached, "Escaneo repetido, ignorado", employee)

        record = self._attendance.get_for_employee_and_date(employee.employee_id, now.date())
        state = state_of(record)

        if state == AttendanceState.NONE:
            record = self.record_entry(employee.employee_id, now=now)
            result = ScanResult(ScanAction.ENTRY, record, "Entrada registrada", employee)
        elif state == AttendanceState.ENTRY_OPEN:
            record = self.record_exit(employee.employee_id, RawWorkInputs(), now=now)
            result = ScanResult(ScanAction.EXIT, record, "Salida registrada", employee)
        else:
            return ScanResult(ScanAction.NOOP, record, MSG_COMPLETED, employee)

        self._scan_cache.remember(employee.employee_id, record, now)
        return result

    def today(self) -> date:
        return self._clock.now().date()

    def get_today_records(self) -> Sequence[AttendanceReportRow]:
        return self._attendance.list_for_date(self.today())

    def get_daily_report(self, work_date: Optional[date] = None) -> Sequence[AttendanceReportRow]:
        return self._attendance.daily_report(work_date or self.today())
