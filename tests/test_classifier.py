"""Unit tests for item classification."""
import pytest

from dashboard.classifier import (
    MAX_INSTANT_MS, MIN_INSTANT_MS, classify, is_reservation, split_items
)
from dashboard.models import Occupancy, Reservation
from factories import NOW, MINUTE, make_occupancy, make_reservation


class TestIsReservation:
    """Test cases for the reservation predicate."""
    
    @pytest.mark.parametrize('item, expected', [
        ({'people': 2, 'channel': 'Naver'}, True),
        ({'people': 0, 'channel': 'Call'}, True),
        ({'people': 2, 'channel': ''}, False),
        ({'people': 2, 'channel': None}, False),
        ({'people': 2}, False),
        ({'people': None, 'channel': 'Naver'}, False),
        ({'channel': 'Naver'}, False),
        ({}, False),
        (None, False),
    ])
    def test_mapping_items(self, item, expected):
        """Test predicate over raw worker items."""
        assert is_reservation(item) is expected
    
    def test_schedule_items(self):
        """Test predicate over built items."""
        assert is_reservation(make_reservation(0, 10)) is True
        assert is_reservation(make_occupancy(0, 10)) is False


class TestClassify:
    """Test cases for building tagged items."""
    
    def test_reservation_variant(self):
        """Test that people + channel yields a Reservation."""
        item = classify({
            'id': 7, 'title': 'x', 'startMs': NOW, 'endMs': NOW + MINUTE,
            'type': 'reservation', 'people': 4, 'channel': 'Call'
        })
        
        assert isinstance(item, Reservation)
        assert item.id == '7'
        assert item.people == 4
        assert item.channel == 'Call'
    
    def test_empty_channel_is_occupancy(self):
        """Test that an empty channel is not a reservation."""
        item = classify({
            'id': 'x', 'startMs': NOW, 'endMs': NOW + MINUTE,
            'type': 'game', 'people': 3, 'channel': ''
        })
        
        assert isinstance(item, Occupancy)
        assert item.title == ''
        assert item.channel is None
    
    def test_missing_window_raises(self):
        """Test that items without times are rejected."""
        with pytest.raises(KeyError):
            classify({'id': 'x', 'startMs': NOW})
    
    def test_inverted_window_raises(self):
        """Test that start must precede end."""
        with pytest.raises(ValueError):
            classify({'id': 'x', 'startMs': NOW, 'endMs': NOW})
    
    def test_instant_bounds(self):
        """Test instants at the range limits are accepted, beyond are not."""
        item = classify({'startMs': MIN_INSTANT_MS, 'endMs': MAX_INSTANT_MS})
        
        assert (item.start_ms, item.end_ms) == (MIN_INSTANT_MS, MAX_INSTANT_MS)
        with pytest.raises(ValueError):
            classify({'startMs': NOW, 'endMs': MAX_INSTANT_MS + 1})
        with pytest.raises(ValueError):
            classify({'startMs': float('inf'), 'endMs': float('inf')})
    
    def test_split_items_is_total(self):
        """Test that every item lands in exactly one group."""
        items = [
            make_occupancy(0, 10, id='o1'),
            make_reservation(5, 15, id='r1'),
            make_occupancy(-20, -10, id='o2'),
        ]
        
        reservations, occupancy = split_items(items)
        
        assert [x.id for x in reservations] == ['r1']
        assert [x.id for x in occupancy] == ['o1', 'o2']
