from __future__ import annotations

from datetime import date, time
from typing import Optional, Protocol, Sequence

from ..payroll.model import DayAmounts, RawWorkInputs
from .model import AttendanceRecord, AttendanceReportRow


class AttendanceRepository(Protocol):
    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def create_entry(self, *, employee_id: int, work_date: date, entry_time: time) -> AttendanceRecord:
        """Insert the day's record in ENTRY_OPEN state.

        Raises StorageConflict when (employee_id, work_date) already exists.
        """

        raise NotImplementedError

    def complete_exit(
        self,
        *,
        attendance_id: int,
        exit_time: time,
        inputs: RawWorkInputs,
        amounts: DayAmounts,
    ) -> bool:
        """Write exit time, raw inputs and computed fields in one statement.

        Only applies while the record is still open; returns False otherwise.
        """

        raise NotImplementedError

    def list_for_date(self, work_date: date) -> Sequence[AttendanceReportRow]:
        """Records of the date joined with their employee, latest entry first."""

        raise NotImplementedError

    def daily_report(self, work_date: date) -> Sequence[AttendanceReportRow]:
        """Every active employee, with that date's record when one exists."""

        raise NotImplementedError

    def list_completed_in_range(
        self,
        *,
        start_date: date,
        end_date: date,
        employee_id: Optional[int] = None,
    ) -> Sequence[AttendanceReportRow]:
        """Completed records of active employees within [start_date, end_date]."""

        raise NotImplementedError
