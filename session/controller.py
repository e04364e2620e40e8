"""Fetch-and-render cycle shared by the poll timer and the manual triggers."""
import logging
import threading
import time
from typing import Callable, Optional

from dashboard.models import DerivedView
from dashboard.selector import derive_view
from fetcher.errors import DashboardError
from fetcher.worker_client import WorkerClient
from session.error_log import ErrorLog
from session.snapshot_session import SnapshotSession

logger = logging.getLogger(__name__)

STATE_IDLE = 'idle'
STATE_LOADING = 'loading'
STATE_ERROR = 'error'
STATE_REFRESHED = 'refreshed'
STATE_CACHED = 'cached'


def now_ms() -> int:
    return int(time.time() * 1000)


class DashboardController:
    """
    Runs refreshes against the worker and derives views for rendering.
    
    Triggers are never coalesced or cancelled: whichever fetch completes
    last overwrites the session snapshot.
    """
    
    def __init__(
        self,
        client: WorkerClient,
        session: Optional[SnapshotSession] = None,
        error_log: Optional[ErrorLog] = None,
        clock: Callable[[], int] = now_ms,
        on_loading: Optional[Callable[['DashboardController'], None]] = None
    ):
        self.client = client
        self.session = session or SnapshotSession()
        self.error_log = error_log or ErrorLog(clock=clock)
        self.clock = clock
        self.state = STATE_IDLE
        self.on_loading = on_loading
    
    def refresh(self, force: bool = False) -> bool:
        """
        Fetch a new snapshot and make it current.
        
        Args:
            force: Bypass the worker's cache
            
        Returns:
            True if a snapshot was ingested, False if the fetch failed
        """
        self.state = STATE_LOADING
        # Loading is only observable while the fetch below is in flight
        if self.on_loading is not None:
            self.on_loading(self)
        try:
            payload = self.client.fetch_snapshot(force=force)
            snapshot = self.session.ingest(payload)
        except DashboardError as e:
            self.error_log.append(str(e))
            self.state = STATE_ERROR
            logger.error(
                f"Refresh failed, keeping previous snapshot: {e}",
                extra={'error_type': type(e).__name__, 'force': force}
            )
            return False
        
        self.state = STATE_REFRESHED if snapshot.refreshed else STATE_CACHED
        return True
    
    def force_refresh(self) -> bool:
        return self.refresh(force=True)
    
    def view(self, at_ms: Optional[int] = None) -> DerivedView:
        """Derived view of the current snapshot at ``at_ms`` (default: now)."""
        reference = self.clock() if at_ms is None else at_ms
        return derive_view(self.session.current, reference)
    
    def teardown(self) -> None:
        self.session.clear()
        self.state = STATE_IDLE


def run_polling(
    controller: DashboardController,
    interval: float,
    stop_event: threading.Event,
    render: Callable[[DashboardController], None],
    force_first: bool = False
) -> None:
    """
    Refresh and render immediately, then once per ``interval`` seconds.
    
    Timer ticks always respect the worker cache. Returns once ``stop_event``
    is set.
    
    Args:
        controller: Dashboard controller to drive
        interval: Poll period in seconds
        stop_event: Set to stop polling
        render: Called after every refresh attempt
        force_first: Force the initial refresh
    """
    logger.info(f"Polling every {interval} seconds")
    controller.refresh(force=force_first)
    render(controller)
    
    while not stop_event.wait(interval):
        controller.refresh(force=False)
        render(controller)
    
    logger.info("Polling stopped")
