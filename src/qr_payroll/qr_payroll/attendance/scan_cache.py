from __future__ import annotations

import threading
from datetime import datetime, timedelta
from typing import Optional

from .model import AttendanceRecord


class RecentScanCache:
    """Per-process memory of the last successful scan per employee.

    Only smooths over a double scan at the reader (entry immediately followed by
    an unintended exit). It is not authoritative: state always comes from the
    database, and its unique (employee, date) key is what prevents duplicates.
    """

    def __init__(self, ttl_seconds: float):
        self._ttl = timedelta(seconds=max(float(ttl_seconds), 0.0))
        self._entries: dict[int, tuple[datetime, AttendanceRecord]] = {}
        self._lock = threading.Lock()

    @property
    def enabled(self) -> bool:
        return self._ttl > timedelta(0)

    def recent(self, employee_id: int, now: datetime) -> Optional[AttendanceRecord]:
        if not self.enabled:
            return None
        with self._lock:
            hit = self._entries.get(int(employee_id))
        if hit and timedelta(0) <= now - hit[0] < self._ttl:
            return hit[1]
        return None

    def remember(self, employee_id: int, record: AttendanceRecord, now: datetime) -> None:
        if not self.enabled:
            return
        with self._lock:
            self._entries = {k: v for k, v in self._entries.items() if now - v[0] < self._ttl}
            self._entries[int(employee_id)] = (now, record)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
