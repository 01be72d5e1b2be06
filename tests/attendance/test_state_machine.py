from datetime import date, time

import pytest

from src.qr_payroll.qr_payroll.attendance.model import AttendanceRecord
from src.qr_payroll.qr_payroll.attendance.state import (
    MSG_COMPLETED,
    MSG_ENTRY_OPEN,
    MSG_NO_ENTRY,
    conflict_for,
    next_state,
    state_of,
)
from src.qr_payroll.qr_payroll.core.enums import AttendanceState, ScanAction
from src.qr_payroll.qr_payroll.core.exceptions import ConflictError, PreconditionError

NONE = AttendanceState.NONE
OPEN = AttendanceState.ENTRY_OPEN
DONE = AttendanceState.COMPLETED


@pytest.mark.parametrize(
    "state, action, expected",
    [
        (NONE, ScanAction.ENTRY, OPEN),
        (NONE, ScanAction.EXIT, PreconditionError),
        (OPEN, ScanAction.ENTRY, ConflictError),
        (OPEN, ScanAction.EXIT, DONE),
        (DONE, ScanAction.ENTRY, ConflictError),
        (DONE, ScanAction.EXIT, ConflictError),
    ],
)
def test_transition_table(state, action, expected):
    if isinstance(expected, AttendanceState):
        assert next_state(state, action) == expected
    else:
        with pytest.raises(expected):
            next_state(state, action)


def test_completed_is_terminal_with_explicit_message():
    for action in (ScanAction.ENTRY, ScanAction.EXIT):
        with pytest.raises(ConflictError, match=MSG_COMPLETED):
            next_state(DONE, action)


def test_precondition_is_a_conflict():
    # Callers that only care about "cannot apply now" catch ConflictError.
    with pytest.raises(ConflictError, match=MSG_NO_ENTRY):
        next_state(NONE, ScanAction.EXIT)


def test_state_of_record():
    open_record = AttendanceRecord(1, 1, date(2025, 3, 3), time(7, 0))
    done_record = AttendanceRecord(1, 1, date(2025, 3, 3), time(7, 0), exit_time=time(16, 0))

    assert state_of(None) == NONE
    assert state_of(open_record) == OPEN
    assert state_of(done_record) == DONE


def test_conflict_for_reports_current_state():
    open_record = AttendanceRecord(1, 1, date(2025, 3, 3), time(7, 0))

    err = conflict_for(open_record, ScanAction.ENTRY)

    assert isinstance(err, ConflictError)
    assert str(err) == MSG_ENTRY_OPEN
