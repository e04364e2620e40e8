"""Unit tests for the hour-of-day color mapping."""
import pytest

from dashboard.palette import (
    HOUR_PALETTE, color_for_hour, color_for_instant, hex_to_rgb, lerp_color,
    rgb_to_hex, row_style
)

HOUR_MS = 3_600_000


class TestColorHelpers:
    """Test cases for hex conversion and interpolation."""
    
    def test_hex_round_trip(self):
        assert hex_to_rgb('#6aa9ff') == (106, 169, 255)
        assert rgb_to_hex((106, 169, 255)) == '#6aa9ff'
    
    def test_short_hex(self):
        """Test three-digit hex expands each digit."""
        assert hex_to_rgb('#fa0') == (255, 170, 0)
    
    def test_lerp_rounds_half_up(self):
        """Test channel rounding at exact halves."""
        # (106 + 95) / 2 = 100.5, (169 + 182) / 2 = 175.5
        assert lerp_color('#6aa9ff', '#5fb6ff', 0.5) == '#65b0ff'
    
    def test_palette_has_24_hours(self):
        assert len(HOUR_PALETTE) == 24


class TestColorForHour:
    """Test cases for continuity of the hourly palette."""
    
    @pytest.mark.parametrize('hour', range(24))
    def test_whole_hours_hit_palette(self, hour):
        """Test fraction zero equals the palette entry."""
        assert color_for_hour(float(hour)) == HOUR_PALETTE[hour]
    
    def test_approaches_next_entry(self):
        """Test 22:59 is within rounding of the 23:00 entry."""
        assert color_for_hour(22 + 59 / 60) == HOUR_PALETTE[23]
    
    def test_midpoint(self):
        assert color_for_hour(22.5) == '#71a2ff'
    
    def test_wraps_at_midnight(self):
        """Test hour 23 interpolates toward hour 0 and 24 wraps to 0."""
        assert color_for_hour(23.5) == lerp_color(
            HOUR_PALETTE[23], HOUR_PALETTE[0], 0.5
        )
        assert color_for_hour(24.0) == HOUR_PALETTE[0]


class TestColorForInstant:
    """Test cases for zone-aware color lookup."""
    
    def test_uses_display_zone(self):
        """Test the epoch maps to 09:00 in Seoul, 00:00 in UTC."""
        assert color_for_instant(0, 'Asia/Seoul') == HOUR_PALETTE[9]
        assert color_for_instant(0, 'UTC') == HOUR_PALETTE[0]
    
    def test_ignores_seconds(self):
        """Test only hour and minute contribute."""
        half_past = HOUR_MS // 2
        assert color_for_instant(half_past, 'UTC') == '#65b0ff'
        assert color_for_instant(half_past + 59_000, 'UTC') == '#65b0ff'
    
    def test_deterministic(self):
        assert color_for_instant(1_700_000_000_000) == color_for_instant(
            1_700_000_000_000
        )
    
    def test_row_style(self):
        """Test reservation row border and glow."""
        style = row_style(0, 'UTC')
        
        assert style['border_color'] == '#6aa9ff'
        assert style['box_shadow'] == '0 0 0 1px #6aa9ff inset, 0 0 18px #6aa9ff33'
