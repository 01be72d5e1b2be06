"""Per (employee, date) lifecycle: NONE -> ENTRY_OPEN -> COMPLETED.

No transition leaves COMPLETED on the same date.
"""

from __future__ import annotations

from typing import Optional

from ..core.enums import AttendanceState, ScanAction
from ..core.exceptions import ConflictError, PreconditionError
from .model import AttendanceRecord

MSG_ENTRY_OPEN = "El empleado ya tiene una entrada abierta hoy"
MSG_COMPLETED = "El empleado ya completó su jornada hoy"
MSG_NO_ENTRY = "No hay una entrada abierta hoy para este empleado"

_TRANSITIONS = {
    (AttendanceState.NONE, ScanAction.ENTRY): AttendanceState.ENTRY_OPEN,
    (AttendanceState.ENTRY_OPEN, ScanAction.EXIT): AttendanceState.COMPLETED,
}


def state_of(record: Optional[AttendanceRecord]) -> AttendanceState:
    return record.state if record else AttendanceState.NONE


def next_state(state: AttendanceState, action: ScanAction) -> AttendanceState:
    """Return the target state or raise the domain error for a forbidden move."""
    target = _TRANSITIONS.get((state, action))
    if target is not None:
        return target

    if state == AttendanceState.COMPLETED:
        raise ConflictError(MSG_COMPLETED)
    if action == ScanAction.ENTRY:
        raise ConflictError(MSG_ENTRY_OPEN)
    if action == ScanAction.EXIT:
        raise PreconditionError(MSG_NO_ENTRY)
    raise ConflictError(f"Acción no válida: {action.value}")


def conflict_for(record: Optional[AttendanceRecord], action: ScanAction) -> ConflictError:
    """Error describing why ``action`` cannot apply to the record as it is now."""
    try:
        next_state(state_of(record), action)
    except ConflictError as e:
        return e
    return ConflictError("Registro de asistencia modificado concurrentemente; intente de nuevo")
