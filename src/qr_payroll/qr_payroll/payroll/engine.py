"""Payroll formula engine: per-record monetary fields from raw inputs.

Pure and deterministic. Bad numeric input is coerced to 0 upstream
(``RawWorkInputs``); only an unrecognized employee class raises.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Optional

from ..common.money import ZERO, to_decimal
from .calculator.factory import PayrollCalculatorFactory
from .model import DayAmounts, RawWorkInputs

_factory = PayrollCalculatorFactory()


def compute_day_amounts(
    employee_type: Any,
    inputs: RawWorkInputs,
    *,
    monthly_salary: Optional[Decimal] = None,
    factory: Optional[PayrollCalculatorFactory] = None,
) -> DayAmounts:
    calculator = (factory or _factory).for_type(employee_type)
    salary = to_decimal(monthly_salary) if monthly_salary is not None else ZERO
    return calculator.compute_day(inputs, monthly_salary=salary)
