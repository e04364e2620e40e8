"""Label formatting for the dashboard.

Turns snapshot metadata and a DerivedView into display strings. Instants are
only converted to civil time here, in the dashboard's display zone.
"""
from datetime import datetime, timezone
from typing import Optional, Tuple
from zoneinfo import ZoneInfo

from dashboard.models import DerivedView, ScheduleItem, Snapshot
from dashboard.palette import DEFAULT_TZ

PLACEHOLDER = '-'
NO_TITLE = '(no title)'

STATE_LABELS = {
    'refreshed': '갱신됨',
    'cached': '캐시',
    'loading': '로딩',
    'error': '오류',
}


def format_clock(instant_ms: int, tz: str = DEFAULT_TZ, seconds: bool = False) -> str:
    """24-hour ``HH:MM`` (or ``HH:MM:SS``) of ``instant_ms`` in zone ``tz``."""
    local = datetime.fromtimestamp(
        instant_ms / 1000, tz=timezone.utc
    ).astimezone(ZoneInfo(tz))
    return local.strftime('%H:%M:%S' if seconds else '%H:%M')


def format_optional_clock(instant_ms: Optional[int], tz: str = DEFAULT_TZ) -> str:
    return format_clock(instant_ms, tz) if instant_ms else PLACEHOLDER


def format_freshness(age_ms: Optional[int]) -> str:
    """Whole seconds since the fetch, floored and never negative."""
    if age_ms is None:
        return PLACEHOLDER
    return f'{max(0, age_ms // 1000)}초 전'


def format_ttl(ttl_ms: int) -> str:
    return f'TTL {ttl_ms // 1000}초'


def format_meta_line(snapshot: Optional[Snapshot], now_ms: int) -> str:
    if snapshot is None or not snapshot.fetched_at_ms:
        return PLACEHOLDER
    freshness = format_freshness(snapshot.age_ms(now_ms))
    return f'데이터: {freshness} 업데이트 · {format_ttl(snapshot.ttl_ms)}'


def format_subtitle(snapshot: Snapshot) -> str:
    return f'오늘 {snapshot.day} · {snapshot.tz}'


def format_state_pill(state: str) -> str:
    """
    Label for the status pill.
    
    Args:
        state: One of refreshed, cached, loading, error
        
    Returns:
        Display label, or the state itself if unknown
    """
    return STATE_LABELS.get(state, state)


def format_active_count(view: DerivedView) -> str:
    return f'{len(view.active)}명'


def format_next_visit(view: DerivedView, tz: str = DEFAULT_TZ) -> Tuple[str, str]:
    """Party size and start time of the next visit, as (people, time)."""
    visit = view.next_visit
    if visit is None:
        return PLACEHOLDER, PLACEHOLDER
    people = f'{visit.people}명' if visit.people is not None else PLACEHOLDER
    return people, format_clock(visit.start_ms, tz)


def format_next_end(view: DerivedView, tz: str = DEFAULT_TZ) -> str:
    return format_optional_clock(view.earliest_end_ms, tz)


def format_active_hint(view: DerivedView, tz: str = DEFAULT_TZ) -> str:
    if not view.active:
        return '진행 중 없음'
    return f'가장 빠른 종료: {format_clock(view.active[0].end_ms, tz)}'


def format_time_range(item: ScheduleItem, tz: str = DEFAULT_TZ) -> str:
    return f'{format_clock(item.start_ms, tz)} ~ {format_clock(item.end_ms, tz)}'


def format_item_title(item: ScheduleItem) -> str:
    return item.title or NO_TITLE


def format_item_meta(item: ScheduleItem, tz: str = DEFAULT_TZ) -> str:
    """Time range, type/product and game count of an occupancy card."""
    kind = item.type
    if item.product:
        kind = f'{kind}/{item.product}'
    line = f'{format_time_range(item, tz)} · {kind}'
    if item.games:
        line += f' · {item.games}게임'
    return line


def format_reservation_title(item: ScheduleItem) -> str:
    if item.people is not None:
        return f'{item.people}명 방문 예정'
    return format_item_title(item)


def format_reservation_meta(item: ScheduleItem) -> str:
    return f'via {item.channel}' if item.channel else ''
