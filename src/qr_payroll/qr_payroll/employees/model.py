from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import EmployeeType


@dataclass(frozen=True)
class Employee:
    """Entidad de dominio: Empleado.

    Nota: objeto de datos puro, sin acceso a la base de datos.
    """

    employee_id: int
    full_name: str
    dni: str
    employee_type: EmployeeType
    monthly_salary: Decimal
    is_active: bool = True
    created_at: Optional[datetime] = None

    @property
    def is_production(self) -> bool:
        return self.employee_type == EmployeeType.PRODUCTION

    def to_dict(self) -> dict:
        return {
            "id": self.employee_id,
            "name": self.full_name,
            "dni": self.dni,
            "type": self.employee_type.value,
            "monthly_salary": float(self.monthly_salary),
            "is_active": self.is_active,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
