from __future__ import annotations

from dataclasses import dataclass
from functools import partial
from typing import Any, Mapping

from .admin.service import AdminService
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.scan_cache import RecentScanCache
from .attendance.service import AttendanceService
from .common.clock import BusinessClock, Clock
from .core.constants import DEFAULT_BUSINESS_TIMEZONE, DEFAULT_SCAN_DEBOUNCE_SECONDS
from .dashboard.service import DashboardService
from .database.bootstrap import reset_attendance_data
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.service import EmployeeService
from .payroll.calculator.factory import PayrollCalculatorFactory
from .payroll.service import PayrollReportService
from .users.mysql_user_repository import MySQLUserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    clock: Clock

    auth_service: AuthService
    user_service: UserService
    employee_service: EmployeeService
    attendance_service: AttendanceService
    payroll_report_service: PayrollReportService
    dashboard_service: DashboardService
    admin_service: AdminService


def build_services(
    *,
    users_repo: Any,
    employees_repo: Any,
    attendance_repo: Any,
    clock: Clock,
    scan_cache: RecentScanCache,
    reset_data,
) -> Container:
    """Wire services over any repository implementation (MySQL or in-memory)."""
    calculators = PayrollCalculatorFactory()

    return Container(
        clock=clock,
        auth_service=AuthService(users_repo),
        user_service=UserService(users_repo),
        employee_service=EmployeeService(employees_repo),
        attendance_service=AttendanceService(
            attendance_repo,
            employees_repo,
            clock=clock,
            calculators=calculators,
            scan_cache=scan_cache,
        ),
        payroll_report_service=PayrollReportService(attendance_repo, employees_repo, clock=clock, calculators=calculators),
        dashboard_service=DashboardService(attendance_repo, employees_repo, clock=clock),
        admin_service=AdminService(reset_data, scan_cache=scan_cache),
    )


def build_container(*, db_config: Mapping[str, Any], settings: Any = None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))

    tz_name = str(getattr(settings, "BUSINESS_TIMEZONE", DEFAULT_BUSINESS_TIMEZONE))
    debounce = float(getattr(settings, "SCAN_DEBOUNCE_SECONDS", DEFAULT_SCAN_DEBOUNCE_SECONDS))

    return build_services(
        users_repo=MySQLUserRepository(conn),
        employees_repo=MySQLEmployeeRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        clock=BusinessClock(tz_name),
        scan_cache=RecentScanCache(debounce),
        reset_data=partial(reset_attendance_data, conn),
    )
