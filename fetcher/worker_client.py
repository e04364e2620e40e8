"""HTTP client for the schedule worker endpoint."""
import logging
from typing import Any, Dict

import requests

from fetcher.errors import FetchError, ParseError

logger = logging.getLogger(__name__)


class WorkerClient:
    """Client for the worker that serves today's schedule snapshot."""
    
    DEFAULT_URL = "https://lts.foalcozm2.workers.dev"
    
    def __init__(self, url: str = DEFAULT_URL, timeout: int = 10):
        """
        Initialize the worker client.
        
        Args:
            url: Worker endpoint URL
            timeout: HTTP request timeout in seconds (default: 10)
        """
        self.url = url
        self.timeout = timeout
    
    def fetch_snapshot(self, force: bool = False) -> Dict[str, Any]:
        """
        Fetch the raw snapshot payload from the worker.
        
        Args:
            force: Ask the worker to bypass its cache (sends force=1)
            
        Returns:
            Decoded JSON payload
            
        Raises:
            FetchError: On transport failure or non-2xx status
            ParseError: If the body is not a JSON object
        """
        params = {'force': '1'} if force else None
        
        logger.info(f"Fetching snapshot (force={force})")
        try:
            response = requests.get(
                self.url,
                params=params,
                timeout=self.timeout
            )
        except requests.RequestException as e:
            raise FetchError(f"Request failed: {e}") from e
        
        if not response.ok:
            raise FetchError(
                f"HTTP {response.status_code}",
                status_code=response.status_code
            )
        
        try:
            payload = response.json()
        except ValueError as e:
            raise ParseError(f"Invalid JSON in worker response: {e}") from e
        
        if not isinstance(payload, dict):
            raise ParseError(
                f"Expected JSON object, got {type(payload).__name__}"
            )
        
        logger.info(
            f"Fetched snapshot with {len(payload.get('items') or [])} items"
        )
        return payload
