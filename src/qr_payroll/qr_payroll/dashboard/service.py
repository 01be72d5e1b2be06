from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta

from ..attendance.model import AttendanceReportRow
from ..attendance.repository import AttendanceRepository
from ..common.clock import Clock
from ..common.datetime_utils import hours_between
from ..core.constants import DASHBOARD_RECENT_LIMIT, DASHBOARD_WINDOW_DAYS
from ..core.enums import AttendanceState
from ..employees.repository import EmployeeRepository


@dataclass(frozen=True)
class DashboardStats:
    total_employees: int
    today_attendance: int
    open_entries: int
    weekly_employees: int
    weekly_hours: float
    recent: list[AttendanceReportRow] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "totalEmployees": self.total_employees,
            "todayAttendance": self.today_attendance,
            "openEntries": self.open_entries,
            "weeklyStats": {
                "uniqueEmployees": self.weekly_employees,
                "totalHours": round(self.weekly_hours, 2),
            },
            "recentActivity": [row.to_dict() for row in self.recent],
        }


class DashboardService:
    def __init__(self, attendance: AttendanceRepository, employees: EmployeeRepository, *, clock: Clock):
        self._attendance = attendance
        self._employees = employees
        self._clock = clock

    def get_stats(self) -> DashboardStats:
        today = self._clock.now().date()

        today_rows = list(self._attendance.list_for_date(today))
        open_entries = sum(1 for row in today_rows if row.state == AttendanceState.ENTRY_OPEN)

        # Trailing window including today.
        week_start = today - timedelta(days=DASHBOARD_WINDOW_DAYS - 1)
        week_rows = self._attendance.list_completed_in_range(start_date=week_start, end_date=today)
        weekly_hours = sum(hours_between(r.record.entry_time, r.record.exit_time) for r in week_rows if r.record)

        return DashboardStats(
            total_employees=self._employees.count_active(),
            today_attendance=len(today_rows),
            open_entries=open_entries,
            weekly_employees=len({row.employee.employee_id for row in week_rows}),
            weekly_hours=weekly_hours,
            recent=today_rows[:DASHBOARD_RECENT_LIMIT],
        )
