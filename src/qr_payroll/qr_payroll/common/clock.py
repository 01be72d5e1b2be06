from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Protocol
from zoneinfo import ZoneInfo


class Clock(Protocol):
    """Source of "now" in the business timezone.

    Callers read it once per operation and derive both the civil date and the
    time-of-day from that single reading.
    """

    def now(self) -> datetime:
        raise NotImplementedError


class BusinessClock:
    def __init__(self, tz_name: str):
        self._tz = ZoneInfo(tz_name)

    @property
    def tz_name(self) -> str:
        return self._tz.key

    def now(self) -> datetime:
        return datetime.now(self._tz)


@dataclass
class FixedClock:
    """Clock frozen at a given moment (tests, scripts)."""

    moment: datetime

    def now(self) -> datetime:
        return self.moment

    def advance(self, **delta) -> None:
        self.moment = self.moment + timedelta(**delta)
