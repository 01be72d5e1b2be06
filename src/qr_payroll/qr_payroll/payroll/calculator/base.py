from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Sequence

from ...attendance.model import AttendanceRecord
from ...core.enums import EmployeeType
from ...employees.model import Employee
from ..model import DayAmounts, PayrollLine, RawWorkInputs


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern: one strategy per employee class)."""

    employee_type: EmployeeType

    @abstractmethod
    def compute_day(self, inputs: RawWorkInputs, *, monthly_salary: Decimal) -> DayAmounts:
        """Monetary fields for one worked day. Pure; never fails on numeric input."""
        raise NotImplementedError

    @abstractmethod
    def summarize_period(self, employee: Employee, records: Sequence[AttendanceRecord]) -> PayrollLine:
        """Roll completed records of one employee into a period payroll line."""
        raise NotImplementedError

    @staticmethod
    def completed(records: Sequence[AttendanceRecord]) -> list[AttendanceRecord]:
        return [r for r in records if r.is_completed]
