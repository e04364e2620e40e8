"""Data models for schedule snapshots and derived dashboard views."""
from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple


@dataclass(frozen=True)
class ScheduleItem:
    """One scheduled lane entry. Instants are epoch milliseconds."""
    id: str
    title: str
    start_ms: int
    end_ms: int
    type: str
    product: Optional[str] = None
    games: Optional[int] = None
    people: Optional[int] = None
    channel: Optional[str] = None


@dataclass(frozen=True)
class Occupancy(ScheduleItem):
    """Walk-in or in-house usage of a lane."""


@dataclass(frozen=True)
class Reservation(ScheduleItem):
    """Booked visit carrying a party size and an inbound channel."""


@dataclass(frozen=True)
class Snapshot:
    """One fetched batch of items plus the worker's fetch metadata."""
    items: Tuple[ScheduleItem, ...]
    tz: str = ''
    day: str = ''
    range: Any = None
    fetched_at_ms: Optional[int] = None
    ttl_ms: int = 0
    refreshed: bool = False
    version: Any = None
    summary: Any = None
    
    def age_ms(self, now_ms: int) -> Optional[int]:
        """Milliseconds since the worker fetched this snapshot, if known."""
        if not self.fetched_at_ms:
            return None
        return now_ms - self.fetched_at_ms


@dataclass(frozen=True)
class Badge:
    """Status label for an item relative to the current instant."""
    label: str
    urgency: str = ''


@dataclass(frozen=True)
class DerivedView:
    """Indicators recomputed from (snapshot, now) on every render tick."""
    active: List[Occupancy] = field(default_factory=list)
    earliest_end_ms: Optional[int] = None
    next_visit: Optional[Reservation] = None
    timeline: List[Reservation] = field(default_factory=list)
