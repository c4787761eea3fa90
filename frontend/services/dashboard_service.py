# frontend/services/dashboard_service.py
"""
Dashboard polling.

Dashboards do not receive pushes; they refetch stats, the provider board and
unread counts every `interval` seconds (30 by default).
"""

import logging
import threading
import time
from typing import Any, Callable, Dict, Optional

from .api_client import ApiError, MarketplaceClient

logger = logging.getLogger(__name__)

DEFAULT_POLL_SECONDS = 30


class DashboardPoller:
    def __init__(
        self,
        client: MarketplaceClient,
        interval: float = DEFAULT_POLL_SECONDS,
        on_update: Optional[Callable[[Dict[str, Any]], None]] = None,
        on_error: Optional[Callable[[str], None]] = None,
        provider: bool = False,
    ):
        self.client = client
        self.interval = interval
        self.on_update = on_update
        self.on_error = on_error
        self.provider = provider
        self.last: Optional[Dict[str, Any]] = None
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def refresh(self) -> Dict[str, Any]:
        """Fetch everything the dashboard shows, once."""
        snapshot = {
            "stats": self.client.dashboard_stats(),
            "notifications": self.client.notification_counts(),
        }
        if self.provider:
            board = self.client.provider_dashboard()
            snapshot["provider"] = board
            # the server may tune the cadence
            self.interval = board.get("poll_interval_seconds") or self.interval
        self.last = snapshot
        if self.on_update:
            self.on_update(snapshot)
        return snapshot

    def poll_once(self) -> Optional[Dict[str, Any]]:
        try:
            return self.refresh()
        except (ApiError, OSError) as e:
            logger.warning(f"Dashboard refresh failed: {e}")
            if self.on_error:
                self.on_error(str(e))
            return None
        except Exception as e:
            # the loop keeps running; a bad payload or callback must not end it
            logger.exception("Unexpected error while refreshing the dashboard")
            if self.on_error:
                self.on_error(str(e))
            return None

    def _run(self):
        while not self._stop.is_set():
            self.poll_once()
            self._stop.wait(self.interval)

    def start(self) -> None:
        if self._thread and self._thread.is_alive():
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="dashboard-poller", daemon=True)
        self._thread.start()

    def stop(self, timeout: Optional[float] = None) -> None:
        self._stop.set()
        if self._thread:
            self._thread.join(timeout)
            self._thread = None

    def seconds_until_next(self, last_poll_at: float, now: Optional[float] = None) -> float:
        now = time.monotonic() if now is None else now
        return max(0.0, self.interval - (now - last_poll_at))
