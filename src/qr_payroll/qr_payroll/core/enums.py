from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles used for authorization."""

    SUPER_ADMIN = "super_admin"
    SCANNER = "scanner"
    VIEWER = "viewer"


class EmployeeType(str, Enum):
    """Employee pay class, stored verbatim in the database."""

    PRODUCTION = "Producción"
    AL_DIA = "Al Dia"


class AttendanceState(str, Enum):
    """Lifecycle of one (employee, date) attendance record."""

    NONE = "NONE"
    ENTRY_OPEN = "ENTRY_OPEN"
    COMPLETED = "COMPLETED"


class ScanAction(str, Enum):
    ENTRY = "entry"
    EXIT = "exit"
    NOOP = "noop"
