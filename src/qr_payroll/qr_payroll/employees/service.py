from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Sequence

from ..common.money import ZERO, to_decimal
from ..common.validators import require_national_id, require_non_empty
from ..core.enums import EmployeeType
from ..core.exceptions import NotFoundError, ValidationError
from .model import Employee
from .repository import EmployeeRepository

log = logging.getLogger(__name__)

_TYPE_ALIASES = {
    "producción": EmployeeType.PRODUCTION,
    "produccion": EmployeeType.PRODUCTION,
    "production": EmployeeType.PRODUCTION,
    "al dia": EmployeeType.AL_DIA,
    "al día": EmployeeType.AL_DIA,
    "al_dia": EmployeeType.AL_DIA,
    "aldia": EmployeeType.AL_DIA,
}


def parse_employee_type(value: Any) -> EmployeeType:
    if isinstance(value, EmployeeType):
        return value
    key = str(value or "").strip().lower()
    if not key:
        raise ValidationError("El tipo de empleado es requerido")
    try:
        return _TYPE_ALIASES[key]
    except KeyError:
        raise ValidationError(f"Tipo de empleado inválido: {value!r}")


def _parse_salary(value: Any, employee_type: EmployeeType) -> Decimal:
    if employee_type == EmployeeType.PRODUCTION:
        return ZERO

    try:
        salary = to_decimal(value) if value not in (None, "") else ZERO
    except (InvalidOperation, ValueError, TypeError):
        salary = ZERO
    if not salary.is_finite() or salary <= 0:
        raise ValidationError('Los empleados tipo "Al Dia" requieren un salario mensual válido')
    return salary


class EmployeeService:
    """Use case: manage employees (admin/scanner)."""

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def list_active(self) -> Sequence[Employee]:
        return self._employees.list_active()

    def get_active(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee or not employee.is_active:
            raise NotFoundError("Empleado no encontrado")
        return employee

    def create(self, *, full_name: str, dni: str, employee_type: Any, monthly_salary: Any = None) -> Employee:
        full_name = require_non_empty(full_name, "Nombre")
        dni = require_national_id(dni)
        etype = parse_employee_type(employee_type)
        salary = _parse_salary(monthly_salary, etype)

        if self._employees.find_active_by_dni(dni):
            raise ValidationError("Ya existe un empleado con este DNI")

        employee_id = self._employees.create(
            full_name=full_name,
            dni=dni,
            employee_type=etype,
            monthly_salary=salary,
        )
        log.info("Employee %s created (%s)", employee_id, etype.value)
        return self.get_active(employee_id)

    def update(
        self,
        employee_id: int,
        *,
        full_name: str,
        dni: str,
        employee_type: Any,
        monthly_salary: Any = None,
    ) -> Employee:
        self.get_active(employee_id)

        full_name = require_non_empty(full_name, "Nombre")
        dni = require_national_id(dni)
        etype = parse_employee_type(employee_type)
        salary = _parse_salary(monthly_salary, etype)

        if self._employees.find_active_by_dni(dni, exclude_id=int(employee_id)):
            raise ValidationError("Ya existe otro empleado con este DNI")

        if not self._employees.update(
            employee_id=int(employee_id),
            full_name=full_name,
            dni=dni,
            employee_type=etype,
            monthly_salary=salary,
        ):
            raise NotFoundError("Empleado no encontrado")
        return self.get_active(employee_id)

    def deactivate(self, employee_id: int) -> None:
        self.get_active(employee_id)
        if not self._employees.set_active(int(employee_id), is_active=False):
            raise NotFoundError("Empleado no encontrado")
        log.info("Employee %s deactivated", employee_id)
