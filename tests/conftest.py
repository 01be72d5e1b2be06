from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, time
from decimal import Decimal
from typing import Optional
from zoneinfo import ZoneInfo

import pytest
from werkzeug.security import generate_password_hash

from src.qr_payroll.qr_payroll.attendance.model import AttendanceRecord, AttendanceReportRow
from src.qr_payroll.qr_payroll.attendance.scan_cache import RecentScanCache
from src.qr_payroll.qr_payroll.common.clock import FixedClock
from src.qr_payroll.qr_payroll.common.money import ZERO
from src.qr_payroll.qr_payroll.container import build_services
from src.qr_payroll.qr_payroll.core.enums import EmployeeType, Role
from src.qr_payroll.qr_payroll.core.exceptions import StorageConflict
from src.qr_payroll.qr_payroll.employees.model import Employee
from src.qr_payroll.qr_payroll.users.model import User

TZ = ZoneInfo("America/Tegucigalpa")


class FakeEmployeeRepo:
    def __init__(self, employees=()):
        self.by_id: dict[int, Employee] = {e.employee_id: e for e in employees}
        self._next_id = max(self.by_id, default=0) + 1

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        return self.by_id.get(int(employee_id))

    def list_active(self):
        return sorted((e for e in self.by_id.values() if e.is_active), key=lambda e: e.full_name)

    def find_active_by_dni(self, dni: str, *, exclude_id=None):
        for e in self.by_id.values():
            if e.is_active and e.dni == dni and e.employee_id != exclude_id:
                return e
        return None

    def create(self, *, full_name, dni, employee_type, monthly_salary) -> int:
        employee_id = self._next_id
        self._next_id += 1
        self.by_id[employee_id] = Employee(employee_id, full_name, dni, employee_type, monthly_salary)
        return employee_id

    def update(self, *, employee_id, full_name, dni, employee_type, monthly_salary) -> bool:
        current = self.by_id.get(int(employee_id))
        if not current:
            return False
        self.by_id[current.employee_id] = replace(
            current, full_name=full_name, dni=dni, employee_type=employee_type, monthly_salary=monthly_salary
        )
        return True

    def set_active(self, employee_id: int, *, is_active: bool) -> bool:
        current = self.by_id.get(int(employee_id))
        if not current:
            return False
        self.by_id[current.employee_id] = replace(current, is_active=is_active)
        return True

    def count_active(self) -> int:
        return sum(1 for e in self.by_id.values() if e.is_active)


class FakeAttendanceRepo:
    """Keeps the (employee_id, work_date) uniqueness and the open-exit guard of the real table."""

    def __init__(self, employees: FakeEmployeeRepo):
        self._employees = employees
        self.records: dict[int, AttendanceRecord] = {}
        self._next_id = 1

    def add(self, record: AttendanceRecord) -> AttendanceRecord:
        self.records[record.attendance_id] = record
        self._next_id = max(self._next_id, record.attendance_id + 1)
        return record

    def get_for_employee_and_date(self, employee_id: int, work_date: date):
        for r in self.records.values():
            if r.employee_id == int(employee_id) and r.work_date == work_date:
                return r
        return None

    def create_entry(self, *, employee_id: int, work_date: date, entry_time: time) -> AttendanceRecord:
        if self.get_for_employee_and_date(employee_id, work_date):
            raise StorageConflict("duplicate (employee_id, work_date)")
        record = AttendanceRecord(self._next_id, int(employee_id), work_date, entry_time)
        return self.add(record)

    def complete_exit(self, *, attendance_id, exit_time, inputs, amounts) -> bool:
        current = self.records.get(int(attendance_id))
        if not current or current.exit_time is not None:
            return False
        self.records[current.attendance_id] = current.with_exit(exit_time, inputs, amounts)
        return True

    def _row(self, record: AttendanceRecord) -> AttendanceReportRow:
        return AttendanceReportRow(employee=self._employees.get_by_id(record.employee_id), record=record)

    def list_for_date(self, work_date: date):
        rows = [self._row(r) for r in self.records.values() if r.work_date == work_date]
        return sorted(rows, key=lambda x: x.record.entry_time, reverse=True)

    def daily_report(self, work_date: date):
        rows = [
            AttendanceReportRow(employee=e, record=self.get_for_employee_and_date(e.employee_id, work_date))
            for e in self._employees.by_id.values()
            if e.is_active
        ]
        order = {EmployeeType.PRODUCTION: 0, EmployeeType.AL_DIA: 1}
        return sorted(rows, key=lambda x: (order[x.employee.employee_type], x.employee.full_name))

    def list_completed_in_range(self, *, start_date, end_date, employee_id=None):
        rows = []
        for r in self.records.values():
            employee = self._employees.get_by_id(r.employee_id)
            if not (start_date <= r.work_date <= end_date) or r.exit_time is None or not employee.is_active:
                continue
            if employee_id is not None and r.employee_id != int(employee_id):
                continue
            rows.append(AttendanceReportRow(employee=employee, record=r))
        return sorted(rows, key=lambda x: (x.employee.full_name, x.employee.employee_id, x.record.work_date))


class FakeUserRepo:
    def __init__(self, users=()):
        self.by_id: dict[int, User] = {u.user_id: u for u in users}
        self._next_id = max(self.by_id, default=0) + 1

    def get_by_id(self, user_id: int):
        return self.by_id.get(int(user_id))

    def get_by_username(self, username: str):
        for u in self.by_id.values():
            if u.username == username:
                return u
        return None

    def create_user(self, *, username, password_hash, role) -> int:
        user_id = self._next_id
        self._next_id += 1
        self.by_id[user_id] = User(user_id, username, password_hash, role)
        return user_id

    def update_user(self, user_id, *, username=None, password_hash=None, role=None) -> bool:
        current = self.by_id.get(int(user_id))
        if not current:
            return False
        self.by_id[current.user_id] = replace(
            current,
            username=username or current.username,
            password_hash=password_hash or current.password_hash,
            role=role or current.role,
        )
        return True

    def set_active(self, user_id, *, is_active) -> bool:
        current = self.by_id.get(int(user_id))
        if not current:
            return False
        self.by_id[current.user_id] = replace(current, is_active=is_active)
        return True

    def list_active(self):
        return [u for u in self.by_id.values() if u.is_active]

    def count_active_with_role(self, role) -> int:
        return sum(1 for u in self.by_id.values() if u.is_active and u.role == role)


def production(employee_id=1, name="Ana Lopez", dni="0801199012345") -> Employee:
    return Employee(employee_id, name, dni, EmployeeType.PRODUCTION, ZERO)


def al_dia(employee_id=2, name="Bruno Diaz", dni="0801199054321", salary="9000") -> Employee:
    return Employee(employee_id, name, dni, EmployeeType.AL_DIA, Decimal(salary))


@pytest.fixture
def clock():
    # A Monday morning in the business timezone.
    return FixedClock(datetime(2025, 3, 3, 7, 30, tzinfo=TZ))


@pytest.fixture
def employees_repo():
    return FakeEmployeeRepo([production(), al_dia()])


@pytest.fixture
def attendance_repo(employees_repo):
    return FakeAttendanceRepo(employees_repo)


@pytest.fixture
def users_repo():
    return FakeUserRepo(
        [
            User(1, "admin", generate_password_hash("admin123"), Role.SUPER_ADMIN),
            User(2, "scanner", generate_password_hash("scanner123"), Role.SCANNER),
            User(3, "viewer", generate_password_hash("viewer123"), Role.VIEWER),
        ]
    )


@pytest.fixture
def reset_calls():
    return []


@pytest.fixture
def container(users_repo, employees_repo, attendance_repo, clock, reset_calls):
    def reset_data():
        reset_calls.append(True)
        deleted = {"attendance": len(attendance_repo.records), "employees": len(employees_repo.by_id)}
        attendance_repo.records.clear()
        employees_repo.by_id.clear()
        return deleted

    return build_services(
        users_repo=users_repo,
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        clock=clock,
        scan_cache=RecentScanCache(0),
        reset_data=reset_data,
    )


@pytest.fixture
def app(container, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    from src.qr_payroll.qr_payroll.main import create_app

    return create_app(container)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login(client):
    def _login(username="admin", password="admin123"):
        return client.post("/api/auth/login", json={"username": username, "password": password})

    return _login
