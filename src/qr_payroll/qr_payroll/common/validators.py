from __future__ import annotations

from typing import Any

from ..core.constants import NATIONAL_ID_LENGTH
from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} es requerido")
    return str(value).strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} debe tener al menos {min_len} caracteres")
    return value


def require_national_id(value: str) -> str:
    dni = require_non_empty(value, "DNI")
    if len(dni) != NATIONAL_ID_LENGTH or not dni.isdigit():
        raise ValidationError(f"El DNI debe tener exactamente {NATIONAL_ID_LENGTH} dígitos")
    return dni


def require_id(value: Any, field_name: str) -> int:
    if value is None or value == "" or isinstance(value, bool):
        raise ValidationError(f"Falta {field_name}")
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} inválido")
    if number <= 0:
        raise ValidationError(f"{field_name} inválido")
    return number
