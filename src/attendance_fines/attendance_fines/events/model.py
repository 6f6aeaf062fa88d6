from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time
from decimal import Decimal
from typing import Mapping, Optional

from ..core.constants import NOON_HOUR
from ..core.enums import AttendanceMode, Direction, Session, SessionConfig
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class TimeWindow:
    """Closed time-of-day interval [start, stop] during which a scan is on time."""

    start: time
    stop: time

    def __post_init__(self) -> None:
        if self.start > self.stop:
            raise ValidationError(f"Window start {self.start} is after stop {self.stop}")

    def contains(self, value: time) -> bool:
        return self.start <= value <= self.stop

    def __str__(self) -> str:
        return f"{self.start:%H:%M}-{self.stop:%H:%M}"


@dataclass(frozen=True)
class LegacyTimes:
    """Bare reference times of events created before attendance windows existed."""

    am_time_in: Optional[time] = None
    am_time_out: Optional[time] = None
    pm_time_in: Optional[time] = None
    pm_time_out: Optional[time] = None

    def is_empty(self) -> bool:
        return not any((self.am_time_in, self.am_time_out, self.pm_time_in, self.pm_time_out))

    def relevant_time_in(self, scanned_at: datetime | time) -> Optional[time]:
        """AM reference for scans before noon, PM reference at or after noon."""
        if scanned_at.hour < NOON_HOUR:
            return self.am_time_in
        return self.pm_time_in

    def last_time_out(self) -> Optional[time]:
        outs = [t for t in (self.am_time_out, self.pm_time_out) if t is not None]
        return max(outs) if outs else None


@dataclass(frozen=True)
class Event:
    """Domain entity: a school event where attendance is checked."""

    event_id: str
    event_name: str
    event_date: date
    semester: Optional[int] = None
    school_year: Optional[str] = None
    attendance_mode: AttendanceMode = AttendanceMode.WINDOW
    session_config: SessionConfig = SessionConfig.BOTH
    windows: Mapping[tuple[Session, Direction], TimeWindow] = field(default_factory=dict)
    legacy: LegacyTimes = field(default_factory=LegacyTimes)
    fine_amount_absent: Optional[Decimal] = None
    fine_amount_late: Optional[Decimal] = None

    def __post_init__(self) -> None:
        offered = self.session_config.sessions
        for session, _direction in self.windows:
            if session not in offered:
                raise ValidationError(
                    f"Event {self.event_id} runs {self.session_config.value} but defines a {session.value} window"
                )
        for name in ("fine_amount_absent", "fine_amount_late"):
            value = getattr(self, name)
            if value is not None and value < 0:
                raise ValidationError(f"{name} cannot be negative")

    def offers(self, session: Session) -> bool:
        return session in self.session_config.sessions

    def window_for(self, session: Session, direction: Direction) -> Optional[TimeWindow]:
        return self.windows.get((session, direction))

    def is_configured(self) -> bool:
        if self.attendance_mode is AttendanceMode.WINDOW:
            return bool(self.windows)
        return not self.legacy.is_empty()
