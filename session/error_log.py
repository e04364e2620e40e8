"""Bounded rolling log of fetch errors shown to the viewer."""
import time
from collections import deque
from typing import Callable, List, Optional

from dashboard.formatter import format_clock
from dashboard.palette import DEFAULT_TZ


class ErrorLog:
    """Keeps the newest ``capacity`` error lines, newest first."""
    
    CAPACITY = 5
    
    def __init__(
        self,
        capacity: int = CAPACITY,
        tz: str = DEFAULT_TZ,
        clock: Optional[Callable[[], int]] = None
    ):
        self.tz = tz
        self._clock = clock or (lambda: int(time.time() * 1000))
        self._lines = deque(maxlen=capacity)
    
    def append(self, message: str) -> str:
        line = f"[{format_clock(self._clock(), self.tz, seconds=True)}] {message}"
        self._lines.appendleft(line)
        return line
    
    def lines(self) -> List[str]:
        return list(self._lines)
    
    def text(self) -> str:
        return '\n'.join(self._lines)
    
    def __len__(self) -> int:
        return len(self._lines)
