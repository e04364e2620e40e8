"""Split schedule items into reservations and occupancy."""
import logging
from typing import Any, Iterable, List, Mapping, Tuple

from dashboard.models import Occupancy, Reservation, ScheduleItem

logger = logging.getLogger(__name__)

# Instants datetime can convert in any zone (0001-01-02 .. 9999-12-30 UTC)
MIN_INSTANT_MS = -62135510400000
MAX_INSTANT_MS = 253402214399999


def _field(item: Any, name: str) -> Any:
    if isinstance(item, Mapping):
        return item.get(name)
    return getattr(item, name, None)


def is_reservation(item: Any) -> bool:
    """
    Structural reservation test.
    
    Only reservations arrive with both a party size and a booking channel,
    so an item is a reservation iff ``people`` is present and ``channel``
    is a non-empty string.
    
    Args:
        item: Raw JSON item (mapping) or ScheduleItem
        
    Returns:
        True for reservations, False for everything else
    """
    if item is None:
        return False
    return _field(item, 'people') is not None and bool(_field(item, 'channel'))


def _instant(raw: Mapping[str, Any], key: str) -> int:
    try:
        value = int(raw[key])
    except OverflowError as e:
        raise ValueError(f"{key} is not finite: {raw[key]!r}") from e
    if not MIN_INSTANT_MS <= value <= MAX_INSTANT_MS:
        raise ValueError(f"{key} out of range: {value}")
    return value


def classify(raw: Mapping[str, Any]) -> ScheduleItem:
    """
    Build the tagged item variant from a raw worker item.
    
    Args:
        raw: Item mapping with startMs/endMs keys
        
    Returns:
        Reservation or Occupancy instance
        
    Raises:
        KeyError: If startMs or endMs is missing
        ValueError: If the time window is out of range or not start < end
    """
    start_ms = _instant(raw, 'startMs')
    end_ms = _instant(raw, 'endMs')
    if start_ms >= end_ms:
        raise ValueError(f"start {start_ms} is not before end {end_ms}")
    
    variant = Reservation if is_reservation(raw) else Occupancy
    return variant(
        id=str(raw.get('id', '')),
        title=raw.get('title') or '',
        start_ms=start_ms,
        end_ms=end_ms,
        type=raw.get('type') or '',
        product=raw.get('product') or None,
        games=raw.get('games'),
        people=raw.get('people'),
        channel=raw.get('channel') or None
    )


def split_items(
    items: Iterable[ScheduleItem]
) -> Tuple[List[Reservation], List[Occupancy]]:
    """Partition items into (reservations, occupancy), keeping order."""
    items = list(items)
    reservations = [x for x in items if isinstance(x, Reservation)]
    occupancy = [x for x in items if not isinstance(x, Reservation)]
    return reservations, occupancy
