from decimal import Decimal

import pytest

from src.qr_payroll.qr_payroll.core.enums import EmployeeType
from src.qr_payroll.qr_payroll.core.exceptions import NotFoundError, ValidationError
from src.qr_payroll.qr_payroll.employees.service import parse_employee_type


@pytest.fixture
def service(container):
    return container.employee_service


def test_create_production_forces_zero_salary(service):
    employee = service.create(full_name="  Carla Ruiz ", dni="0801199500011", employee_type="Producción", monthly_salary="5000")

    assert employee.full_name == "Carla Ruiz"
    assert employee.employee_type == EmployeeType.PRODUCTION
    assert employee.monthly_salary == 0


def test_create_al_dia_requires_positive_salary(service):
    with pytest.raises(ValidationError):
        service.create(full_name="Dario", dni="0801199500012", employee_type="Al Dia", monthly_salary=None)
    with pytest.raises(ValidationError):
        service.create(full_name="Dario", dni="0801199500012", employee_type="Al Dia", monthly_salary="0")

    employee = service.create(full_name="Dario", dni="0801199500012", employee_type="Al Dia", monthly_salary="12000.50")
    assert employee.monthly_salary == Decimal("12000.50")


@pytest.mark.parametrize("dni", ["", "123", "08011995000111", "08011995000AB"])
def test_dni_must_have_13_digits(service, dni):
    with pytest.raises(ValidationError):
        service.create(full_name="Eva", dni=dni, employee_type="Producción")


def test_required_fields(service):
    with pytest.raises(ValidationError):
        service.create(full_name="", dni="0801199500013", employee_type="Producción")
    with pytest.raises(ValidationError):
        service.create(full_name="Eva", dni="0801199500013", employee_type="Temporal")


def test_dni_unique_among_active(service):
    with pytest.raises(ValidationError):
        service.create(full_name="Otra Ana", dni="0801199012345", employee_type="Producción")

    service.deactivate(1)
    employee = service.create(full_name="Otra Ana", dni="0801199012345", employee_type="Producción")
    assert employee.is_active


def test_update_changes_type_and_checks_duplicates(service):
    updated = service.update(1, full_name="Ana L.", dni="0801199012345", employee_type="al_dia", monthly_salary=6000)

    assert updated.employee_type == EmployeeType.AL_DIA
    assert updated.monthly_salary == Decimal("6000")

    with pytest.raises(ValidationError):
        service.update(1, full_name="Ana L.", dni="0801199054321", employee_type="Producción")


def test_deactivate_hides_employee(service):
    service.deactivate(2)

    assert [e.employee_id for e in service.list_active()] == [1]
    with pytest.raises(NotFoundError):
        service.get_active(2)
    with pytest.raises(NotFoundError):
        service.deactivate(2)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("Producción", EmployeeType.PRODUCTION),
        ("produccion", EmployeeType.PRODUCTION),
        ("Al Dia", EmployeeType.AL_DIA),
        ("al día", EmployeeType.AL_DIA),
        ("ALDIA", EmployeeType.AL_DIA),
    ],
)
def test_parse_employee_type_aliases(raw, expected):
    assert parse_employee_type(raw) == expected
