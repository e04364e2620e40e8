"""Hour-of-day color mapping for reservation rows.

Nearby start times get similar colors; the color drifts toward the next
hour's palette entry as the minutes advance, wrapping from 23:00 to 00:00.
"""
import math
from datetime import datetime, timezone
from typing import Dict, Tuple
from zoneinfo import ZoneInfo

DEFAULT_TZ = 'Asia/Seoul'

HOUR_PALETTE = (
    '#6aa9ff', '#5fb6ff', '#53c3ff', '#45d0ff',
    '#38dcff', '#2ee6f0', '#32efdb', '#43f6c1',
    '#5efaa4', '#7efc86', '#a1fb6a', '#c6f651',
    '#e7ec46', '#ffd24b', '#ffb45a', '#ff966b',
    '#ff7c7c', '#ff6b9a', '#ff63b8', '#e06bff',
    '#b07bff', '#8d8cff', '#779bff', '#6aa9ff',
)


def hex_to_rgb(hex_color: str) -> Tuple[int, int, int]:
    """Parse ``#rgb`` or ``#rrggbb`` into an (r, g, b) tuple."""
    digits = hex_color.replace('#', '').strip()
    if len(digits) == 3:
        digits = ''.join(c + c for c in digits)
    value = int(digits, 16)
    return (value >> 16) & 255, (value >> 8) & 255, value & 255


def rgb_to_hex(rgb: Tuple[int, int, int]) -> str:
    return '#' + ''.join(f'{channel:02x}' for channel in rgb)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def lerp_color(a_hex: str, b_hex: str, t: float) -> str:
    """Linear RGB interpolation between two hex colors at fraction ``t``."""
    a = hex_to_rgb(a_hex)
    b = hex_to_rgb(b_hex)
    return rgb_to_hex(tuple(
        min(255, max(0, _round_half_up(x + (y - x) * t)))
        for x, y in zip(a, b)
    ))


def fractional_hour(instant_ms: int, tz: str = DEFAULT_TZ) -> float:
    """Civil hour plus minutes/60 of ``instant_ms`` in zone ``tz``."""
    local = datetime.fromtimestamp(
        instant_ms / 1000, tz=timezone.utc
    ).astimezone(ZoneInfo(tz))
    return local.hour + local.minute / 60


def color_for_hour(hour: float) -> str:
    """Palette color for a fractional hour of day."""
    base = math.floor(hour)
    i = base % 24
    t = hour - base
    return lerp_color(HOUR_PALETTE[i], HOUR_PALETTE[(i + 1) % 24], t)


def color_for_instant(instant_ms: int, tz: str = DEFAULT_TZ) -> str:
    """
    Map an instant to its time-of-day color in zone ``tz``.
    
    Args:
        instant_ms: Epoch milliseconds
        tz: IANA zone the dashboard displays, independent of the host zone
        
    Returns:
        Color as ``#rrggbb``
    """
    return color_for_hour(fractional_hour(instant_ms, tz))


def row_style(start_ms: int, tz: str = DEFAULT_TZ) -> Dict[str, str]:
    """Border and glow colors for a reservation row starting at ``start_ms``."""
    color = color_for_instant(start_ms, tz)
    return {
        'border_color': color,
        'box_shadow': f'0 0 0 1px {color} inset, 0 0 18px {color}33',
    }
