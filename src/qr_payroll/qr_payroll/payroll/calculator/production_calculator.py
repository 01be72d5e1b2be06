from __future__ import annotations

from decimal import Decimal
from typing import Sequence

from ...attendance.model import AttendanceRecord
from ...common.money import ZERO, round_money
from ...core.constants import (
    RATE_DESPALILLO,
    RATE_ESCOGIDA,
    RATE_MONADO,
    SATURDAY_FACTOR,
    SEVENTH_DAY_FACTOR,
)
from ...core.enums import EmployeeType
from ...employees.model import Employee
from ..model import DayAmounts, ProductionPayrollLine, RawWorkInputs
from .base import PayrollCalculator


class ProductionPayrollCalculator(PayrollCalculator):
    """Piece rate per task plus Saturday/seventh-day proportions on every worked day."""

    employee_type = EmployeeType.PRODUCTION

    def compute_day(self, inputs: RawWorkInputs, *, monthly_salary: Decimal = ZERO) -> DayAmounts:
        despalillo = round_money(inputs.despalillo * RATE_DESPALILLO)
        escogida = round_money(inputs.escogida * RATE_ESCOGIDA)
        monado = round_money(inputs.monado * RATE_MONADO)
        subtotal = despalillo + escogida + monado

        return DayAmounts(
            amount_despalillo=despalillo,
            amount_escogida=escogida,
            amount_monado=monado,
            saturday_proportion=round_money(subtotal * SATURDAY_FACTOR),
            seventh_day_pay=round_money(subtotal * SEVENTH_DAY_FACTOR),
        )

    def summarize_period(self, employee: Employee, records: Sequence[AttendanceRecord]) -> ProductionPayrollLine:
        done = self.completed(records)

        amount_despalillo = sum((r.amount_despalillo for r in done), ZERO)
        amount_escogida = sum((r.amount_escogida for r in done), ZERO)
        amount_monado = sum((r.amount_monado for r in done), ZERO)
        subtotal = amount_despalillo + amount_escogida + amount_monado
        saturday = sum((r.saturday_proportion for r in done), ZERO)
        seventh = sum((r.seventh_day_pay for r in done), ZERO)

        return ProductionPayrollLine(
            employee_id=employee.employee_id,
            full_name=employee.full_name,
            dni=employee.dni,
            days_worked=len(done),
            total_despalillo=sum((r.despalillo_qty for r in done), ZERO),
            total_escogida=sum((r.escogida_qty for r in done), ZERO),
            total_monado=sum((r.monado_qty for r in done), ZERO),
            amount_despalillo=round_money(amount_despalillo),
            amount_escogida=round_money(amount_escogida),
            amount_monado=round_money(amount_monado),
            subtotal=round_money(subtotal),
            saturday_total=round_money(saturday),
            seventh_day_total=round_money(seventh),
            net_pay=round_money(subtotal + saturday + seventh),
        )
