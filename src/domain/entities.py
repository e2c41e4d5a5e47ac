"""
Domain Entities Module

Core domain entities using dataclasses for the sewa attendance system.
These entities represent the core business concepts independent of infrastructure.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional


class Period(Enum):
    """Half of the day for 12-hour time input."""
    AM = "AM"
    PM = "PM"


@dataclass(frozen=True)
class Sewadar:
    """
    Represents a volunteer on the roster.

    Attributes:
        id: Unique roster identifier
        name: Display name
    """
    id: str
    name: str


@dataclass
class TimeParts:
    """
    12-hour time as held by a picker.

    Hour and minute are kept as the raw field strings so partially typed
    values survive until the field is committed.
    """
    hour: str = "09"
    minute: str = "00"
    period: Period = Period.AM


@dataclass
class AttendanceRecord:
    """
    Represents a single shift at a counter.

    Attributes:
        id: Unique record identifier, never reused
        sewadar_id: Roster id of the sewadar
        sewadar_name: Name copied from the roster at creation time
        date: ISO date string (YYYY-MM-DD) the shift belongs to
        counter: Work location label (free text)
        start_time: Canonical HH:MM check-in time
        end_time: Canonical HH:MM check-out time, None while on duty
    """
    id: str
    sewadar_id: str
    sewadar_name: str
    date: str
    counter: str
    start_time: str
    end_time: Optional[str] = None

    @property
    def is_active(self) -> bool:
        """True while the sewadar is still on duty."""
        return self.end_time is None


@dataclass
class DailySummary:
    """
    Aggregated view of one date.

    Attributes:
        date: ISO date string
        total: Number of records on the date
        active: Records without an end time
        completed: Records with an end time
        by_counter: Record count per counter, in order of first appearance
    """
    date: str
    total: int = 0
    active: int = 0
    completed: int = 0
    by_counter: Dict[str, int] = field(default_factory=dict)
