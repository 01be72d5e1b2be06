from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, time
from decimal import Decimal
from typing import Optional

from ..common.datetime_utils import format_time
from ..common.money import ZERO
from ..core.enums import AttendanceState, ScanAction
from ..employees.model import Employee
from ..payroll.model import DayAmounts, RawWorkInputs


@dataclass(frozen=True)
class AttendanceRecord:
    """Entidad de dominio: registro de asistencia (un empleado, un día).

    This is the one canonical shape every repository returns, whatever the driver.
    """

    attendance_id: int
    employee_id: int
    work_date: date
    entry_time: Optional[time]
    exit_time: Optional[time] = None
    despalillo_qty: Decimal = ZERO
    escogida_qty: Decimal = ZERO
    monado_qty: Decimal = ZERO
    overtime_hours: Decimal = ZERO
    amount_despalillo: Decimal = ZERO
    amount_escogida: Decimal = ZERO
    amount_monado: Decimal = ZERO
    saturday_proportion: Decimal = ZERO
    seventh_day_pay: Decimal = ZERO
    overtime_pay: Decimal = ZERO

    @property
    def state(self) -> AttendanceState:
        if self.exit_time is not None:
            return AttendanceState.COMPLETED
        if self.entry_time is not None:
            return AttendanceState.ENTRY_OPEN
        return AttendanceState.NONE

    @property
    def is_completed(self) -> bool:
        return self.exit_time is not None

    @property
    def raw_inputs(self) -> RawWorkInputs:
        return RawWorkInputs(
            despalillo=self.despalillo_qty,
            escogida=self.escogida_qty,
            monado=self.monado_qty,
            overtime_hours=self.overtime_hours,
        )

    @property
    def amounts(self) -> DayAmounts:
        return DayAmounts(
            amount_despalillo=self.amount_despalillo,
            amount_escogida=self.amount_escogida,
            amount_monado=self.amount_monado,
            saturday_proportion=self.saturday_proportion,
            seventh_day_pay=self.seventh_day_pay,
            overtime_pay=self.overtime_pay,
        )

    def with_exit(self, exit_time: time, inputs: RawWorkInputs, amounts: DayAmounts) -> "AttendanceRecord":
        return replace(
            self,
            exit_time=exit_time,
            despalillo_qty=inputs.despalillo,
            escogida_qty=inputs.escogida,
            monado_qty=inputs.monado,
            overtime_hours=inputs.overtime_hours,
            amount_despalillo=amounts.amount_despalillo,
            amount_escogida=amounts.amount_escogida,
            amount_monado=amounts.amount_monado,
            saturday_proportion=amounts.saturday_proportion,
            seventh_day_pay=amounts.seventh_day_pay,
            overtime_pay=amounts.overtime_pay,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.attendance_id,
            "employee_id": self.employee_id,
            "date": self.work_date.isoformat(),
            "entry_time": format_time(self.entry_time),
            "exit_time": format_time(self.exit_time),
            "state": self.state.value,
            "despalillo": float(self.despalillo_qty),
            "escogida": float(self.escogida_qty),
            "monado": float(self.monado_qty),
            "hours_extra": float(self.overtime_hours),
            **self.amounts.to_dict(),
        }


@dataclass(frozen=True)
class AttendanceReportRow:
    """Read-model for reports: an employee with (optionally) that day's record."""

    employee: Employee
    record: Optional[AttendanceRecord] = None

    @property
    def state(self) -> AttendanceState:
        return self.record.state if self.record else AttendanceState.NONE

    def to_dict(self) -> dict:
        out = {
            "employee_id": self.employee.employee_id,
            "employee_name": self.employee.full_name,
            "employee_dni": self.employee.dni,
            "employee_type": self.employee.employee_type.value,
            "state": self.state.value,
        }
        if self.record:
            record = self.record.to_dict()
            record.pop("employee_id")
            record.pop("state")
            out.update(record)
        return out


@dataclass(frozen=True)
class ScanResult:
    action: ScanAction
    record: Optional[AttendanceRecord]
    message: str
    employee: Optional[Employee] = None

    def to_dict(self) -> dict:
        return {
            "action": self.action.value,
            "message": self.message,
            "record": self.record.to_dict() if self.record else None,
            "employee": self.employee.to_dict() if self.employee else None,
        }
