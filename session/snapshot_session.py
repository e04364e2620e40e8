"""Holder for the most recently received schedule snapshot."""
import logging
from typing import Any, Mapping, Optional, Tuple

from dashboard.classifier import classify
from dashboard.models import ScheduleItem, Snapshot
from fetcher.errors import ParseError

logger = logging.getLogger(__name__)


class SnapshotSession:
    """
    Owns the current Snapshot.
    
    Each successful fetch replaces the snapshot wholesale; nothing is merged
    with the previous one. A failed fetch never reaches ``ingest`` so the
    last good snapshot, and its growing age, stays visible.
    """
    
    def __init__(self):
        self._snapshot: Optional[Snapshot] = None
    
    @property
    def current(self) -> Optional[Snapshot]:
        return self._snapshot
    
    def ingest(self, payload: Mapping[str, Any]) -> Snapshot:
        """
        Normalize a raw worker payload and make it the current snapshot.
        
        Args:
            payload: Decoded worker JSON
            
        Returns:
            The newly held Snapshot
            
        Raises:
            ParseError: If the payload is not a JSON object
        """
        if not isinstance(payload, Mapping):
            raise ParseError(
                f"Expected JSON object, got {type(payload).__name__}"
            )
        
        snapshot = Snapshot(
            items=self._normalize_items(payload.get('items')),
            tz=payload.get('tz') or '',
            day=payload.get('day') or '',
            range=payload.get('range'),
            fetched_at_ms=self._optional_int(payload.get('fetchedAt')),
            ttl_ms=self._optional_int(payload.get('ttlMs')) or 0,
            refreshed=bool(payload.get('refreshed')),
            version=payload.get('v'),
            summary=payload.get('summary')
        )
        
        # Single assignment: readers see either the old or the new snapshot
        self._snapshot = snapshot
        logger.info(
            f"Ingested snapshot with {len(snapshot.items)} items",
            extra={'day': snapshot.day, 'refreshed': snapshot.refreshed}
        )
        return snapshot
    
    def clear(self) -> None:
        """Drop the held snapshot (session teardown)."""
        self._snapshot = None
    
    def _normalize_items(self, raw_items: Any) -> Tuple[ScheduleItem, ...]:
        if not isinstance(raw_items, list):
            if raw_items is not None:
                logger.warning(
                    f"Ignoring non-list items field: {type(raw_items).__name__}"
                )
            return ()
        
        items = []
        for raw in raw_items:
            if not isinstance(raw, Mapping):
                logger.warning(f"Skipping non-object item: {raw!r}")
                continue
            try:
                items.append(classify(raw))
            except (KeyError, TypeError, ValueError, OverflowError) as e:
                logger.warning(f"Skipping malformed item {raw.get('id')!r}: {e}")
                continue
        
        return tuple(items)
    
    @staticmethod
    def _optional_int(value: Any) -> Optional[int]:
        if value is None:
            return None
        try:
            return int(value)
        except (TypeError, ValueError, OverflowError):
            logger.warning(f"Ignoring non-numeric value: {value!r}")
            return None
