"""Error hierarchy for snapshot fetch failures.

Both errors are reported to the viewer and never stop the dashboard; the
previously ingested snapshot stays on screen until the next successful fetch.
"""
from typing import Optional


class DashboardError(Exception):
    """Base exception for all dashboard fetch errors."""

    pass


class FetchError(DashboardError):
    """Transport failure or non-2xx response from the schedule worker."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ParseError(DashboardError):
    """Response body is not valid JSON or not a JSON object."""

    pass
