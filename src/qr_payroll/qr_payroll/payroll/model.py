from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any, Mapping, Optional

from ..common.money import ZERO, coerce_quantity
from ..core.constants import MAX_OVERTIME_HOURS


def _money(value: Decimal) -> float:
    return float(value)


@dataclass(frozen=True)
class RawWorkInputs:
    """Raw per-day work inputs captured at exit time.

    Already coerced: never negative, bounded and at cent scale, so the stored
    values recompute to exactly the stored amounts.
    """

    despalillo: Decimal = ZERO
    escogida: Decimal = ZERO
    monado: Decimal = ZERO
    overtime_hours: Decimal = ZERO

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "RawWorkInputs":
        data = data or {}
        hours = data.get("hours_extra", data.get("overtime_hours"))
        return cls(
            despalillo=coerce_quantity(data.get("despalillo")),
            escogida=coerce_quantity(data.get("escogida")),
            monado=coerce_quantity(data.get("monado")),
            overtime_hours=coerce_quantity(hours, maximum=MAX_OVERTIME_HOURS),
        )

    @classmethod
    def of(cls, *, despalillo: Any = None, escogida: Any = None, monado: Any = None, overtime_hours: Any = None) -> "RawWorkInputs":
        return cls(
            despalillo=coerce_quantity(despalillo),
            escogida=coerce_quantity(escogida),
            monado=coerce_quantity(monado),
            overtime_hours=coerce_quantity(overtime_hours, maximum=MAX_OVERTIME_HOURS),
        )


@dataclass(frozen=True)
class DayAmounts:
    """Monetary fields computed for a single attendance record (rounded to cents)."""

    amount_despalillo: Decimal = ZERO
    amount_escogida: Decimal = ZERO
    amount_monado: Decimal = ZERO
    saturday_proportion: Decimal = ZERO
    seventh_day_pay: Decimal = ZERO
    overtime_pay: Decimal = ZERO

    @property
    def subtotal(self) -> Decimal:
        return self.amount_despalillo + self.amount_escogida + self.amount_monado

    def to_dict(self) -> dict:
        out = {k: _money(v) for k, v in asdict(self).items()}
        out["subtotal"] = _money(self.subtotal)
        return out


@dataclass(frozen=True)
class SalaryRates:
    """Al Dia rates derived from a monthly salary, full precision."""

    daily_rate: Decimal
    hourly_rate: Decimal
    overtime_hourly_rate: Decimal


@dataclass(frozen=True)
class PayrollLine:
    employee_id: int
    full_name: str
    dni: str
    days_worked: int
    saturday_total: Decimal
    seventh_day_total: Decimal
    net_pay: Decimal

    def to_dict(self) -> dict:
        out: dict[str, Any] = {}
        for key, value in asdict(self).items():
            out[key] = _money(value) if isinstance(value, Decimal) else value
        return out


@dataclass(frozen=True)
class ProductionPayrollLine(PayrollLine):
    total_despalillo: Decimal = ZERO
    total_escogida: Decimal = ZERO
    total_monado: Decimal = ZERO
    amount_despalillo: Decimal = ZERO
    amount_escogida: Decimal = ZERO
    amount_monado: Decimal = ZERO
    subtotal: Decimal = ZERO


@dataclass(frozen=True)
class AlDiaPayrollLine(PayrollLine):
    monthly_salary: Decimal = ZERO
    overtime_hours: Decimal = ZERO
    daily_rate: Decimal = ZERO
    hourly_rate: Decimal = ZERO
    base_pay: Decimal = ZERO
    overtime_pay_total: Decimal = ZERO


@dataclass(frozen=True)
class PeriodSummary:
    start_date: date
    end_date: date
    total_production_employees: int
    total_aldia_employees: int
    total_production_payroll: Decimal
    total_aldia_payroll: Decimal

    @property
    def total_employees(self) -> int:
        return self.total_production_employees + self.total_aldia_employees

    @property
    def total_payroll(self) -> Decimal:
        return self.total_production_payroll + self.total_aldia_payroll

    def to_dict(self) -> dict:
        return {
            "total_employees": self.total_employees,
            "total_production_employees": self.total_production_employees,
            "total_aldia_employees": self.total_aldia_employees,
            "total_payroll": _money(self.total_payroll),
            "total_production_payroll": _money(self.total_production_payroll),
            "total_aldia_payroll": _money(self.total_aldia_payroll),
            "period": {"start_date": self.start_date.isoformat(), "end_date": self.end_date.isoformat()},
        }


@dataclass(frozen=True)
class PeriodReport:
    production: list[ProductionPayrollLine] = field(default_factory=list)
    al_dia: list[AlDiaPayrollLine] = field(default_factory=list)
    summary: Optional[PeriodSummary] = None

    def to_dict(self) -> dict:
        return {
            "production": [line.to_dict() for line in self.production],
            "alDia": [line.to_dict() for line in self.al_dia],
            "summary": self.summary.to_dict() if self.summary else None,
        }


@dataclass(frozen=True)
class EmployeeStats:
    year: int
    month: int
    employee_type: str
    line: PayrollLine

    def to_dict(self) -> dict:
        out = self.line.to_dict()
        out.update({"year": self.year, "month": self.month, "type": self.employee_type})
        return out
