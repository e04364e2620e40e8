"""Time-relative selection over a snapshot's items.

Every function here is pure: results depend only on the items passed in and
the reference instant ``now_ms``. Item windows are half-open ``[start, end)``.
"""
from typing import Iterable, List, Optional, Tuple

from dashboard.classifier import split_items
from dashboard.models import (
    Badge, DerivedView, Occupancy, Reservation, ScheduleItem, Snapshot
)

MINUTE_MS = 60000

BADGE_ENDED = '끝남'
BADGE_UPCOMING = '예정'
BADGE_MINUTES_LEFT = '{minutes}분 남음'


def minutes_left(end_ms: int, now_ms: int) -> int:
    """Whole minutes until ``end_ms``, rounded up. Zero or negative once ended."""
    return -((now_ms - end_ms) // MINUTE_MS)


def is_active(item: ScheduleItem, now_ms: int) -> bool:
    return item.start_ms <= now_ms < item.end_ms


def active_occupancy(
    items: Iterable[ScheduleItem],
    now_ms: int
) -> Tuple[List[Occupancy], Optional[int]]:
    """
    Occupancy items in progress at ``now_ms``, soonest to finish first.
    
    Args:
        items: All snapshot items; reservations are ignored
        now_ms: Reference instant
        
    Returns:
        Tuple of (active items sorted by end, earliest end or None)
    """
    active = sorted(
        (
            x for x in items
            if not isinstance(x, Reservation) and is_active(x, now_ms)
        ),
        key=lambda x: x.end_ms
    )
    earliest_end = active[0].end_ms if active else None
    return active, earliest_end


def next_visit(
    reservations: Iterable[Reservation],
    now_ms: int
) -> Optional[Reservation]:
    """
    Pick the reservation to announce as the next visit.
    
    Prefers the earliest reservation that has not started yet. When none is
    left, falls back to the earliest one still running so the indicator keeps
    showing the party currently on the lane.
    """
    ordered = sorted(reservations, key=lambda x: x.start_ms)
    for x in ordered:
        if x.start_ms > now_ms:
            return x
    for x in ordered:
        if x.end_ms > now_ms:
            return x
    return None


def upcoming_reservations(
    items: Iterable[ScheduleItem],
    now_ms: int
) -> List[Reservation]:
    """Reservations not yet finished, ordered by start."""
    return sorted(
        (
            x for x in items
            if isinstance(x, Reservation) and x.end_ms > now_ms
        ),
        key=lambda x: x.start_ms
    )


def badge_for(item: ScheduleItem, now_ms: int) -> Badge:
    if item.end_ms <= now_ms:
        return Badge(label=BADGE_ENDED, urgency='')
    if item.start_ms > now_ms:
        return Badge(label=BADGE_UPCOMING, urgency='warn')
    left = minutes_left(item.end_ms, now_ms)
    return Badge(label=BADGE_MINUTES_LEFT.format(minutes=left), urgency='good')


def derive_view(snapshot: Optional[Snapshot], now_ms: int) -> DerivedView:
    """
    Recompute every live indicator for one render tick.
    
    Args:
        snapshot: Current snapshot, or None before the first fetch
        now_ms: Reference instant
        
    Returns:
        DerivedView for (snapshot, now_ms)
    """
    if snapshot is None:
        return DerivedView()
    
    reservations, occupancy = split_items(snapshot.items)
    active, earliest_end = active_occupancy(occupancy, now_ms)
    return DerivedView(
        active=active,
        earliest_end_ms=earliest_end,
        next_visit=next_visit(reservations, now_ms),
        timeline=upcoming_reservations(reservations, now_ms)
    )
