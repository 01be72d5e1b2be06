from __future__ import annotations

from decimal import Decimal
from typing import Optional, Protocol, Sequence

from ..core.enums import EmployeeType
from .model import Employee


class EmployeeRepository(Protocol):
    """Repository interface for Employee.

    Note (DIP): services depend on this interface, never on a concrete DB.
    """

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def list_active(self) -> Sequence[Employee]:
        raise NotImplementedError

    def find_active_by_dni(self, dni: str, *, exclude_id: Optional[int] = None) -> Optional[Employee]:
        raise NotImplementedError

    def create(
        self,
        *,
        full_name: str,
        dni: str,
        employee_type: EmployeeType,
        monthly_salary: Decimal,
    ) -> int:
        raise NotImplementedError

    def update(
        self,
        *,
        employee_id: int,
        full_name: str,
        dni: str,
        employee_type: EmployeeType,
        monthly_salary: Decimal,
    ) -> bool:
        raise NotImplementedError

    def set_active(self, employee_id: int, *, is_active: bool) -> bool:
        raise NotImplementedError

    def count_active(self) -> int:
        raise NotImplementedError
