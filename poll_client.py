"""Terminal poll client for the lane schedule dashboard."""
import argparse
import json
import logging
import os
import sys
import threading
from dataclasses import dataclass
from typing import List, Optional, TextIO

from dashboard import formatter
from dashboard.palette import DEFAULT_TZ, row_style
from dashboard.selector import badge_for
from fetcher.worker_client import WorkerClient
from session.controller import DashboardController, run_polling
from session.error_log import ErrorLog


# Configure JSON logging
class JsonFormatter(logging.Formatter):
    """Custom JSON formatter for structured logging."""
    
    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data = {
            'timestamp': self.formatTime(record),
            'level': record.levelname,
            'message': record.getMessage(),
            'logger': record.name
        }
        
        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)
        
        return json.dumps(log_data, ensure_ascii=False)


def setup_logging(log_level: str = 'INFO') -> None:
    """
    Configure logging with JSON formatter on stderr.
    
    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    root_logger = logging.getLogger()
    
    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JsonFormatter())
    root_logger.addHandler(handler)
    
    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))


@dataclass
class DashboardConfig:
    """Runtime settings read from the environment."""
    worker_url: str = WorkerClient.DEFAULT_URL
    poll_seconds: float = 15.0
    timeout_seconds: int = 10
    display_tz: str = DEFAULT_TZ
    log_level: str = 'INFO'


def load_config() -> DashboardConfig:
    """Read configuration from environment variables."""
    return DashboardConfig(
        worker_url=os.environ.get('WORKER_URL', WorkerClient.DEFAULT_URL),
        poll_seconds=float(os.environ.get('POLL_SECONDS', '15')),
        timeout_seconds=int(os.environ.get('TIMEOUT_SECONDS', '10')),
        display_tz=os.environ.get('DISPLAY_TZ', DEFAULT_TZ),
        log_level=os.environ.get('LOG_LEVEL', 'INFO')
    )


def render_lines(controller: DashboardController, tz: str = DEFAULT_TZ) -> List[str]:
    """
    Render the dashboard as plain text lines.
    
    Args:
        controller: Controller holding the session and error log
        tz: Display zone for clock strings and row colors
        
    Returns:
        Lines ready to print
    """
    now = controller.clock()
    snapshot = controller.session.current
    view = controller.view(now)
    
    lines = []
    if snapshot is not None:
        lines.append(formatter.format_subtitle(snapshot))
    lines.append(f"[{formatter.format_state_pill(controller.state)}]")
    
    people, visit_time = formatter.format_next_visit(view, tz)
    lines.append(
        f"진행 중 {formatter.format_active_count(view)} · "
        f"방문 예정 {people} {visit_time} · "
        f"다음 종료 {formatter.format_next_end(view, tz)}"
    )
    lines.append(formatter.format_meta_line(snapshot, now))
    
    lines.append('')
    lines.append(formatter.format_active_hint(view, tz))
    if not view.active:
        lines.append('  진행 중 이벤트가 없습니다.')
    for item in view.active:
        badge = badge_for(item, now)
        lines.append(f"  {formatter.format_item_title(item)} [{badge.label}]")
        lines.append(f"    {formatter.format_item_meta(item, tz)}")
    
    lines.append('')
    if not view.timeline:
        lines.append('  표시할 예약이 없습니다.')
    for item in view.timeline:
        badge = badge_for(item, now)
        color = row_style(item.start_ms, tz)['border_color']
        meta = formatter.format_reservation_meta(item)
        lines.append(
            f"  {color} {formatter.format_time_range(item, tz)} "
            f"{formatter.format_reservation_title(item)}"
            f"{' · ' + meta if meta else ''} [{badge.label}]"
        )
    
    if len(controller.error_log):
        lines.append('')
        lines.extend(controller.error_log.lines())
    
    return lines


def build_controller(config: DashboardConfig) -> DashboardController:
    client = WorkerClient(url=config.worker_url, timeout=config.timeout_seconds)
    return DashboardController(
        client=client,
        error_log=ErrorLog(tz=config.display_tz)
    )


def main(argv: Optional[List[str]] = None, out: TextIO = sys.stdout) -> int:
    """
    CLI entry point.
    
    Args:
        argv: Command-line arguments (default: sys.argv)
        out: Stream the dashboard is printed to
        
    Returns:
        Process exit code
    """
    parser = argparse.ArgumentParser(description='Lane schedule dashboard')
    parser.add_argument('--once', action='store_true',
                        help='refresh and render once, then exit')
    parser.add_argument('--force', action='store_true',
                        help='bypass the worker cache on the first refresh')
    parser.add_argument('--interval', type=float, default=None,
                        help='poll period in seconds (default: POLL_SECONDS)')
    args = parser.parse_args(argv)
    
    config = load_config()
    setup_logging(config.log_level)
    logger = logging.getLogger(__name__)
    
    controller = build_controller(config)
    
    def render(ctrl: DashboardController) -> None:
        out.write('\n'.join(render_lines(ctrl, config.display_tz)) + '\n\n')
        out.flush()
    
    def show_loading(ctrl: DashboardController) -> None:
        out.write(f"[{formatter.format_state_pill(ctrl.state)}]\n")
        out.flush()
    
    controller.on_loading = show_loading
    
    if args.once:
        ok = controller.refresh(force=args.force)
        render(controller)
        return 0 if ok else 1
    
    interval = args.interval if args.interval is not None else config.poll_seconds
    stop_event = threading.Event()
    try:
        run_polling(controller, interval, stop_event, render, force_first=args.force)
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")
        stop_event.set()
    finally:
        controller.teardown()
    return 0


if __name__ == '__main__':
    sys.exit(main())
