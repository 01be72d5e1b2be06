from __future__ import annotations

from decimal import Decimal
from typing import Sequence

from ...attendance.model import AttendanceRecord
from ...common.money import ZERO, round_money
from ...core.constants import DAYS_PER_MONTH, HOURS_PER_DAY, OVERTIME_MULTIPLIER, SEVENTH_DAY_MIN_DAYS
from ...core.enums import EmployeeType
from ...employees.model import Employee
from ..model import AlDiaPayrollLine, DayAmounts, RawWorkInputs, SalaryRates
from .base import PayrollCalculator


def salary_rates(monthly_salary: Decimal) -> SalaryRates:
    daily = (monthly_salary or ZERO) / DAYS_PER_MONTH
    hourly = daily / HOURS_PER_DAY
    return SalaryRates(daily_rate=daily, hourly_rate=hourly, overtime_hourly_rate=hourly * OVERTIME_MULTIPLIER)


class AlDiaPayrollCalculator(PayrollCalculator):
    """Salaried class: per record only overtime is paid.

    Saturday/seventh-day pay depends on how many days were worked in the whole
    period, so it only exists at aggregation time.
    """

    employee_type = EmployeeType.AL_DIA

    def compute_day(self, inputs: RawWorkInputs, *, monthly_salary: Decimal) -> DayAmounts:
        rates = salary_rates(monthly_salary)
        return DayAmounts(overtime_pay=round_money(rates.overtime_hourly_rate * inputs.overtime_hours))

    def summarize_period(self, employee: Employee, records: Sequence[AttendanceRecord]) -> AlDiaPayrollLine:
        done = self.completed(records)
        rates = salary_rates(employee.monthly_salary)

        days = len(done)
        overtime_hours = sum((r.overtime_hours for r in done), ZERO)
        overtime_total = overtime_hours * rates.overtime_hourly_rate
        saturday = sum((r.saturday_proportion for r in done), ZERO)
        # Eligibility is evaluated once for the whole period.
        seventh = rates.daily_rate if days >= SEVENTH_DAY_MIN_DAYS else ZERO
        base_pay = days * rates.daily_rate

        return AlDiaPayrollLine(
            employee_id=employee.employee_id,
            full_name=employee.full_name,
            dni=employee.dni,
            days_worked=days,
            monthly_salary=round_money(employee.monthly_salary),
            overtime_hours=overtime_hours,
            daily_rate=round_money(rates.daily_rate),
            hourly_rate=round_money(rates.hourly_rate),
            base_pay=round_money(base_pay),
            overtime_pay_total=round_money(overtime_total),
            saturday_total=round_money(saturday),
            seventh_day_total=round_money(seventh),
            net_pay=round_money(base_pay + overtime_total + saturday + seventh),
        )
