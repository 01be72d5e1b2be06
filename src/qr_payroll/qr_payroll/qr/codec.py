from __future__ import annotations

import json
import re
from typing import Any

from ..core.exceptions import InvalidCodeError

# "employee:5", "EMPLOYEE:5", "employee: 5", "employee 5"
_PAYLOAD_RE = re.compile(r"^employee[:\s]*([0-9]+)$", re.IGNORECASE)


def employee_payload(employee_id: int) -> str:
    """Canonical QR content for an employee badge."""
    return f"employee:{int(employee_id)}"


def parse_employee_payload(payload: Any) -> int:
    """Resolve a scanned payload to an employee id.

    Accepts the canonical ``employee:<id>`` text or a JSON object carrying
    ``employee_id``.
    """
    text = str(payload or "").strip()
    if not text:
        raise InvalidCodeError("Falta QR")

    match = _PAYLOAD_RE.match(text)
    if match:
        employee_id = int(match.group(1))
    elif text.startswith("{"):
        employee_id = _from_json(text)
    else:
        raise InvalidCodeError("QR inválido")

    if employee_id <= 0:
        raise InvalidCodeError("QR inválido")
    return employee_id


def _from_json(text: str) -> int:
    try:
        data = json.loads(text)
        return int(data["employee_id"])
    except (ValueError, TypeError, KeyError):
        raise InvalidCodeError("QR inválido")
