from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ...core.enums import EmployeeType
from ...core.exceptions import UnknownEmployeeTypeError
from .al_dia_calculator import AlDiaPayrollCalculator
from .base import PayrollCalculator
from .production_calculator import ProductionPayrollCalculator


@dataclass
class PayrollCalculatorFactory:
    """Factory Pattern: choose the payroll strategy for an employee class."""

    _calculators: dict = field(
        default_factory=lambda: {
            EmployeeType.PRODUCTION: ProductionPayrollCalculator(),
            EmployeeType.AL_DIA: AlDiaPayrollCalculator(),
        }
    )

    def for_type(self, employee_type: Any) -> PayrollCalculator:
        try:
            return self._calculators[EmployeeType(employee_type)]
        except (KeyError, ValueError):
            raise UnknownEmployeeTypeError(f"Tipo de empleado no reconocido: {employee_type!r}")
