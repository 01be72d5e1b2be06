from datetime import date, time
from decimal import Decimal

import pytest

from src.qr_payroll.qr_payroll.attendance.scan_cache import RecentScanCache
from src.qr_payroll.qr_payroll.attendance.service import AttendanceService
from src.qr_payroll.qr_payroll.attendance.state import MSG_COMPLETED, MSG_ENTRY_OPEN
from src.qr_payroll.qr_payroll.core.enums import AttendanceState, ScanAction
from src.qr_payroll.qr_payroll.core.exceptions import (
    ConflictError,
    InvalidCodeError,
    NotFoundError,
    PreconditionError,
    ValidationError,
)
from src.qr_payroll.qr_payroll.payroll.model import RawWorkInputs


@pytest.fixture
def service(container):
    return container.attendance_service


def test_entry_then_exit_for_production(service, attendance_repo, clock):
    record = service.record_entry(1)
    assert record.state == AttendanceState.ENTRY_OPEN
    assert record.work_date == date(2025, 3, 3)
    assert record.entry_time == time(7, 30)

    clock.advance(hours=8, minutes=15)
    done = service.record_exit(1, {"despalillo": 2, "escogida": 3, "monado": 10})

    assert done.state == AttendanceState.COMPLETED
    assert done.exit_time == time(15, 45)
    assert done.amounts.subtotal == Decimal("380.00")
    assert done.saturday_proportion == Decimal("34.55")
    assert done.seventh_day_pay == Decimal("69.09")

    stored = attendance_repo.get_for_employee_and_date(1, date(2025, 3, 3))
    assert stored == done


def test_exit_for_al_dia_stores_overtime_only(service, clock):
    service.record_entry(2)
    clock.advance(hours=9)

    done = service.record_exit(2, {"despalillo": 7, "hours_extra": 4})

    assert done.overtime_pay == Decimal("187.50")
    assert done.amounts.subtotal == 0
    assert done.overtime_hours == Decimal("4")


def test_second_entry_same_day_conflicts(service):
    service.record_entry(1)

    with pytest.raises(ConflictError, match=MSG_ENTRY_OPEN):
        service.record_entry(1)


def test_exit_without_entry_is_precondition_error(service):
    with pytest.raises(PreconditionError):
        service.record_exit(1, {})


def test_completed_day_is_immutable(service, attendance_repo, clock):
    service.record_entry(1)
    clock.advance(hours=1)
    done = service.record_exit(1, {"despalillo": 1})

    with pytest.raises(ConflictError, match=MSG_COMPLETED):
        service.record_entry(1)
    with pytest.raises(ConflictError, match=MSG_COMPLETED):
        service.record_exit(1, {"despalillo": 9})

    assert attendance_repo.get_for_employee_and_date(1, done.work_date) == done


def test_new_day_starts_fresh(service, clock):
    service.record_entry(1)
    clock.advance(hours=1)
    service.record_exit(1, {})

    clock.advance(days=1)
    record = service.record_entry(1)

    assert record.work_date == date(2025, 3, 4)


def test_exit_before_entry_is_rejected(service, clock):
    service.record_entry(1)
    clock.advance(minutes=-5)

    with pytest.raises(ValidationError):
        service.record_exit(1, {})


def test_unknown_and_inactive_employee(service, employees_repo):
    with pytest.raises(NotFoundError):
        service.record_entry(99)

    employees_repo.set_active(1, is_active=False)
    with pytest.raises(NotFoundError):
        service.record_entry(1)


@pytest.mark.parametrize("bad", [None, "", "abc", 0, -4])
def test_invalid_employee_id(service, bad):
    with pytest.raises(ValidationError):
        service.record_entry(bad)


def test_lost_entry_race_maps_to_conflict(service, attendance_repo, monkeypatch):
    # Another request inserted between our read and our insert.
    service.record_entry(1)
    real_get = attendance_repo.get_for_employee_and_date
    calls = {"n": 0}

    def stale_first_read(employee_id, work_date):
        calls["n"] += 1
        return None if calls["n"] == 1 else real_get(employee_id, work_date)

    monkeypatch.setattr(attendance_repo, "get_for_employee_and_date", stale_first_read)

    with pytest.raises(ConflictError, match=MSG_ENTRY_OPEN):
        service.record_entry(1)
    assert len(attendance_repo.records) == 1


def test_lost_exit_race_keeps_first_exit(service, attendance_repo, clock, monkeypatch):
    record = service.record_entry(1)
    clock.advance(hours=2)
    real_complete = attendance_repo.complete_exit

    def other_writer_wins(**kwargs):
        first = dict(kwargs, inputs=RawWorkInputs(), exit_time=time(8, 0))
        real_complete(**first)
        return real_complete(**kwargs)

    monkeypatch.setattr(attendance_repo, "complete_exit", other_writer_wins)

    with pytest.raises(ConflictError, match=MSG_COMPLETED):
        service.record_exit(1, {"despalillo": 3})
    stored = attendance_repo.records[record.attendance_id]
    assert stored.exit_time == time(8, 0)


def test_scan_dispatches_entry_then_exit_then_noop(service, clock):
    first = service.record_scan("employee:1")
    assert first.action == ScanAction.ENTRY
    assert first.record.state == AttendanceState.ENTRY_OPEN

    clock.advance(hours=8)
    second = service.record_scan("EMPLOYEE: 1")
    assert second.action == ScanAction.EXIT
    assert second.record.state == AttendanceState.COMPLETED
    # Scan exits carry no quantities.
    assert second.record.amounts.subtotal == 0

    clock.advance(minutes=1)
    third = service.record_scan("employee 1")
    assert third.action == ScanAction.NOOP
    assert third.message == MSG_COMPLETED
    assert third.record == second.record


def test_scan_accepts_json_payload(service):
    result = service.record_scan('{"employee_id": 2}')

    assert result.action == ScanAction.ENTRY
    assert result.employee.employee_id == 2


@pytest.mark.parametrize("payload", ["", None, "hello", "employee:", "user:1", "employee:0", '{"id": 1}'])
def test_scan_rejects_malformed_payloads(service, payload):
    with pytest.raises(InvalidCodeError):
        service.record_scan(payload)


def test_scan_unknown_employee(service):
    with pytest.raises(NotFoundError):
        service.record_scan("employee:42")


def test_double_scan_within_debounce_is_noop(attendance_repo, employees_repo, clock):
    service = AttendanceService(attendance_repo, employees_repo, clock=clock, scan_cache=RecentScanCache(3))

    entry = service.record_scan("employee:1")
    clock.advance(seconds=1)
    repeat = service.record_scan("employee:1")

    assert repeat.action == ScanAction.NOOP
    assert repeat.record == entry.record
    assert attendance_repo.get_for_employee_and_date(1, date(2025, 3, 3)).state == AttendanceState.ENTRY_OPEN

    clock.advance(seconds=5)
    assert service.record_scan("employee:1").action == ScanAction.EXIT


def test_deactivated_employee_within_debounce_is_not_found(attendance_repo, employees_repo, clock):
    service = AttendanceService(attendance_repo, employees_repo, clock=clock, scan_cache=RecentScanCache(3))
    service.record_scan("employee:1")

    employees_repo.set_active(1, is_active=False)
    clock.advance(seconds=1)

    with pytest.raises(NotFoundError):
        service.record_scan("employee:1")


def test_exit_with_oversized_quantities_stores_capped_values(service, attendance_repo, clock):
    service.record_entry(1)
    clock.advance(hours=8)

    done = service.record_exit(1, {"despalillo": "1e30", "escogida": "0.005"})

    stored = attendance_repo.get_for_employee_and_date(1, date(2025, 3, 3))
    assert stored.despalillo_qty == Decimal("999999.99")
    assert stored.escogida_qty == Decimal("0.01")
    assert stored.amount_escogida == Decimal("0.70")
    assert stored == done


def test_daily_report_lists_every_active_employee(service, clock):
    service.record_entry(2)

    rows = service.get_daily_report()

    assert [row.employee.employee_id for row in rows] == [1, 2]
    assert [row.state for row in rows] == [AttendanceState.NONE, AttendanceState.ENTRY_OPEN]
    assert rows[0].to_dict()["state"] == "NONE"
    assert rows[1].to_dict()["entry_time"] == "07:30:00"


def test_today_records(service):
    service.record_entry(1)

    rows = service.get_today_records()

    assert len(rows) == 1
    assert rows[0].employee.full_name == "Ana Lopez"
