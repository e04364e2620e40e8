"""Shared fixtures for dashboard tests."""
import pytest

from factories import NOW, MINUTE


@pytest.fixture
def sample_payload():
    """Worker payload with one active occupancy and one future reservation."""
    return {
        'v': 2,
        'tz': 'Asia/Seoul',
        'day': '2023-11-15',
        'range': {'from': '00:00', 'to': '24:00'},
        'fetchedAt': NOW - 12_500,
        'ttlMs': 30_000,
        'refreshed': True,
        'summary': {'total': 2},
        'items': [
            {
                'id': 'a',
                'title': 'Lane 3',
                'startMs': NOW - 5 * MINUTE,
                'endMs': NOW + 10 * MINUTE,
                'type': 'game',
                'product': 'basic',
                'games': 2
            },
            {
                'id': 'b',
                'title': '2 via Naver',
                'startMs': NOW + 30 * MINUTE,
                'endMs': NOW + 60 * MINUTE,
                'type': 'reservation',
                'people': 2,
                'channel': 'Naver'
            }
        ]
    }
