"""
Simulated live bus tracking.

Runs a background thread that nudges a bus position on a fixed interval so the
presentation layer has something moving to show. State is local to the
tracker and never persisted.
"""

import logging
import random
import threading
from datetime import datetime, timezone
from typing import Callable, Dict, Optional

from models import BusLocation

logger = logging.getLogger(__name__)

DEFAULT_START = {'lat': 9.0192, 'lng': 38.7525, 'speed': 45}
COORDINATE_JITTER = 0.001
MIN_SPEED = 40.0
SPEED_RANGE = 20.0


class BusTracker:
    """Periodically refreshes a simulated bus location."""

    def __init__(self, start: Optional[Dict] = None, interval: float = 5.0,
                 on_update: Optional[Callable[[Dict], None]] = None,
                 rng: Optional[random.Random] = None):
        """
        Initialize the tracker.

        Args:
            start: Initial location fields (lat, lng, speed, ...)
            interval: Seconds between updates
            on_update: Called with the new snapshot after every update
            rng: Random source, injectable for deterministic tests
        """
        fields = dict(DEFAULT_START)
        fields.update(start or {})
        fields.pop('lastUpdated', None)
        fields.pop('last_updated', None)
        self._location = BusLocation(last_updated=datetime.now(timezone.utc), **fields)
        self.interval = interval
        self.on_update = on_update
        self.rng = rng or random.Random()
        self.updates = 0
        self._lock = threading.Lock()
        self._stop_event = threading.Event()
        self.thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self.thread is not None and self.thread.is_alive()

    def snapshot(self) -> Dict:
        with self._lock:
            return self._location.model_dump(mode='json', by_alias=True)

    def tick(self) -> Dict:
        """Apply one simulated movement step and return the new snapshot."""
        with self._lock:
            loc = self._location
            self._location = loc.model_copy(update={
                'lat': loc.lat + (self.rng.random() - 0.5) * COORDINATE_JITTER,
                'lng': loc.lng + (self.rng.random() - 0.5) * COORDINATE_JITTER,
                'speed': MIN_SPEED + self.rng.random() * SPEED_RANGE,
                'last_updated': datetime.now(timezone.utc),
            })
            self.updates += 1
        snapshot = self.snapshot()
        if self.on_update is not None:
            self.on_update(snapshot)
        return snapshot

    def start(self):
        """Start updating in a background thread."""
        if self.running:
            logger.warning("Bus tracker is already running")
            return

        self._stop_event.clear()
        self.thread = threading.Thread(target=self._run, daemon=True, name="BusTracker")
        self.thread.start()
        logger.info(f"Bus tracker started (interval={self.interval}s)")

    def stop(self):
        self._stop_event.set()
        if self.thread:
            self.thread.join(timeout=5)
        self.thread = None
        logger.info("Bus tracker stopped")

    def _run(self):
        while not self._stop_event.wait(self.interval):
            try:
                self.tick()
            except Exception as e:
                logger.error(f"Error updating bus location: {e}", exc_info=True)
